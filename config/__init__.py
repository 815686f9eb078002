"""Configuration module for the placements service."""

from config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
