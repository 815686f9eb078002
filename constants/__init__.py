"""Constants module for the application."""

from constants.messages import ErrorMessages
from constants.zodiac import SIGNS, TRACKED_BODIES, NORTH_NODE, SOUTH_NODE

__all__ = [
    "ErrorMessages",
    "SIGNS",
    "TRACKED_BODIES",
    "NORTH_NODE",
    "SOUTH_NODE",
]
