"""
Zodiac Math Services
Degree normalization, sign lookup, house assignment and antipodes
"""

import logging
import math
from typing import Iterable, List, NamedTuple, Optional

from constants.messages import ErrorMessages
from constants.zodiac import DEGREES_PER_SIGN, FULL_CIRCLE, HOUSE_COUNT, SIGNS
from core.exceptions import InvalidArgumentError
from models.astrology import HouseCusp

logger = logging.getLogger(__name__)


class HouseAssignment(NamedTuple):
    house: int
    degraded: bool


def normalize_degree(degree: float) -> float:
    """
    Map any finite degree onto [0, 360).

    The result is never exactly 360.0, even when float rounding of a tiny
    negative input would otherwise produce it.

    Raises:
        InvalidArgumentError: If the degree is not a finite number
    """
    try:
        value = float(degree)
    except (TypeError, ValueError):
        raise InvalidArgumentError(ErrorMessages.NON_FINITE_DEGREE.format(value=degree))
    if not math.isfinite(value):
        raise InvalidArgumentError(ErrorMessages.NON_FINITE_DEGREE.format(value=degree))

    value = math.fmod(value, FULL_CIRCLE)
    while value < 0.0:
        value += FULL_CIRCLE
    while value >= FULL_CIRCLE:
        value -= FULL_CIRCLE
    # fmod keeps the sign of zero
    return value + 0.0


def sign_of(degree: float) -> str:
    """Zodiac sign containing the degree; 0 is Aries, 30 is Taurus."""
    index = int(normalize_degree(degree) // DEGREES_PER_SIGN)
    return SIGNS[min(index, len(SIGNS) - 1)]


def normalize_sign_name(sign: Optional[str]) -> Optional[str]:
    """Title-case a provider sign string ("GEMINI" -> "Gemini")."""
    if not sign or not isinstance(sign, str) or not sign.strip():
        return None
    text = sign.strip()
    return text[0].upper() + text[1:].lower()


def antipode(degree: float) -> float:
    """Diametrically opposite degree, e.g. South Node from North Node."""
    return normalize_degree(normalize_degree(degree) + 180.0)


def _ordered_cusp_degrees(cusps: Iterable[HouseCusp]) -> List[float]:
    ordered = sorted(cusps, key=lambda cusp: cusp.house)
    houses = [cusp.house for cusp in ordered]
    if houses != list(range(1, HOUSE_COUNT + 1)):
        raise InvalidArgumentError(ErrorMessages.INVALID_CUSP_SET.format(houses=houses))
    return [normalize_degree(cusp.degree) for cusp in ordered]


def is_complete_cusp_set(cusps: Iterable[HouseCusp]) -> bool:
    return sorted(cusp.house for cusp in cusps) == list(range(1, HOUSE_COUNT + 1))


def locate_house(degree: float, cusps: Iterable[HouseCusp]) -> HouseAssignment:
    """
    Find the house whose cusp segment contains the degree.

    House i spans [cusp i, cusp i+1) walking forward through the zodiac;
    a segment that crosses 0 degrees matches points at or after its start
    or before its end. Houses are checked in ascending order and the first
    match wins.

    Args:
        degree: Ecliptic degree of the point
        cusps: Exactly 12 cusps numbered 1-12

    Returns:
        HouseAssignment; degraded=True means no segment matched and
        house 1 was returned as a fallback

    Raises:
        InvalidArgumentError: If the cusp set is not houses 1-12
    """
    target = normalize_degree(degree)
    starts = _ordered_cusp_degrees(cusps)

    for index, start in enumerate(starts):
        end = starts[(index + 1) % HOUSE_COUNT]
        if start <= end:
            if start <= target < end:
                return HouseAssignment(index + 1, False)
        elif target >= start or target < end:
            return HouseAssignment(index + 1, False)

    logger.warning(
        f"No house segment contains {target:.4f} (cusps: {starts}); falling back to house 1"
    )
    return HouseAssignment(1, True)


def house_of(degree: float, cusps: Iterable[HouseCusp]) -> int:
    """House number (1-12) containing the degree."""
    return locate_house(degree, cusps).house
