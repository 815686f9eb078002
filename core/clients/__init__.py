"""Client modules for external services."""

from core.clients.base import BaseAPIClient
from core.clients.astrology_api import AstrologyAPIClient
from core.clients.kit import KitClient

__all__ = [
    "BaseAPIClient",
    "AstrologyAPIClient",
    "KitClient",
]
