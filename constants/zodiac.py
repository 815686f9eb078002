"""
Zodiac and chart constants.

Sign order, the bodies tracked in a placement list, and the aliases
ephemeris providers use for the lunar nodes.
"""

SIGNS: tuple[str, ...] = (
    "Aries",
    "Taurus",
    "Gemini",
    "Cancer",
    "Leo",
    "Virgo",
    "Libra",
    "Scorpio",
    "Sagittarius",
    "Capricorn",
    "Aquarius",
    "Pisces",
)

DEGREES_PER_SIGN = 30.0
FULL_CIRCLE = 360.0
HOUSE_COUNT = 12

NORTH_NODE = "North Node"
SOUTH_NODE = "South Node"

TRACKED_BODIES: tuple[str, ...] = (
    "Sun",
    "Moon",
    "Mercury",
    "Venus",
    "Mars",
    "Jupiter",
    "Saturn",
    "Uranus",
    "Neptune",
    "Pluto",
    "Chiron",
    NORTH_NODE,
)

# Alternate provider names, matched case-insensitively
BODY_ALIASES: dict[str, tuple[str, ...]] = {
    NORTH_NODE: ("north node", "node", "true node", "mean node", "rahu"),
}

# Tag key prefixes for the mailing list, e.g. "SUN_Gemini"
TAG_PREFIXES: dict[str, str] = {
    "sun": "SUN",
    "moon": "MOON",
    "rising": "RISING",
}
