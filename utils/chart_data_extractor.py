"""
Chart Data Extractor Utility
Turns raw ephemeris API payloads into body readings and house cusps
"""

import logging
import math
from typing import Any, Dict, List, Optional

from models.astrology import BodyReading, HouseCusp

logger = logging.getLogger(__name__)

# Keys providers use for the absolute ecliptic longitude, in preference order
DEGREE_KEYS = ["fullDegree", "full_degree", "abs_pos", "degree", "longitude"]


def _to_float(value: Any) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _to_house(value: Any) -> Optional[int]:
    number = _to_float(value)
    if number is None or not number.is_integer():
        return None
    house = int(number)
    return house if 1 <= house <= 12 else None


def _first_degree(entry: Dict[str, Any]) -> Optional[float]:
    for key in DEGREE_KEYS:
        if key in entry:
            degree = _to_float(entry.get(key))
            if degree is not None:
                return degree
    return None


def extract_body_readings(payload: Any) -> List[BodyReading]:
    """
    Extract body readings from a planets payload.

    Accepts either a bare list of planet objects or a dict wrapping them
    under "planets". Entries without a name are ignored.

    Args:
        payload: Decoded JSON from the planets endpoint

    Returns:
        List of BodyReading in provider order
    """
    entries = payload.get("planets", []) if isinstance(payload, dict) else payload
    readings: List[BodyReading] = []

    for entry in entries or []:
        if not isinstance(entry, dict):
            continue
        name = entry.get("name")
        if not name or not isinstance(name, str):
            continue
        sign = entry.get("sign")
        readings.append(
            BodyReading(
                name=name.strip(),
                degree=_first_degree(entry),
                sign=sign if isinstance(sign, str) and sign.strip() else None,
                house=_to_house(entry.get("house")),
            )
        )

    return readings


def extract_house_cusps(payload: Any) -> List[HouseCusp]:
    """
    Extract house cusps from a house-cusps payload.

    Args:
        payload: Decoded JSON with cusps under "houses" (or a bare list)

    Returns:
        Cusps with a valid house number and finite degree, ordered by house
    """
    entries = payload.get("houses", []) if isinstance(payload, dict) else payload
    cusps: List[HouseCusp] = []

    for entry in entries or []:
        if not isinstance(entry, dict):
            continue
        house = _to_house(entry.get("house"))
        degree = _first_degree(entry)
        if house is None or degree is None:
            logger.warning(f"Skipping malformed house cusp: {entry}")
            continue
        sign = entry.get("sign")
        cusps.append(
            HouseCusp(
                house=house,
                degree=degree,
                sign=sign if isinstance(sign, str) and sign.strip() else None,
            )
        )

    return sorted(cusps, key=lambda cusp: cusp.house)
