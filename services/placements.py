"""
Placement Assembly Service
Builds the placement list and Big Three from an ephemeris response
"""

import logging
from typing import Dict, List, Optional

from constants.messages import ErrorMessages
from constants.zodiac import BODY_ALIASES, NORTH_NODE, SOUTH_NODE, TRACKED_BODIES
from core.exceptions import IncompleteEphemerisDataError, IncompletePlacementsError
from models.astrology import (
    BigThree,
    BirthEvent,
    BodyReading,
    CelestialPoint,
    ChartMeta,
    EphemerisResponse,
    GeoCoordinate,
    HouseCusp,
    PlacementResult,
)
from services.zodiac import (
    antipode,
    is_complete_cusp_set,
    locate_house,
    normalize_degree,
    normalize_sign_name,
    sign_of,
)

logger = logging.getLogger(__name__)


def find_reading(bodies: List[BodyReading], name: str) -> Optional[BodyReading]:
    """Case-insensitive lookup of a body, including provider aliases."""
    wanted = {name.lower(), *BODY_ALIASES.get(name, ())}
    for reading in bodies:
        if reading.name.strip().lower() in wanted:
            return reading
    return None


def _point_from_degree(name: str, degree: float, cusps: List[HouseCusp], cusps_ok: bool) -> CelestialPoint:
    degree = normalize_degree(degree)
    house = None
    degraded = False
    if cusps_ok:
        house, degraded = locate_house(degree, cusps)
    else:
        logger.warning(f"Incomplete house cusps; {name} left without a house")
    return CelestialPoint(
        name=name,
        degree=degree,
        sign=sign_of(degree),
        house=house,
        house_degraded=degraded,
    )


def build_point(name: str, reading: BodyReading, cusps: List[HouseCusp], cusps_ok: bool) -> Optional[CelestialPoint]:
    """
    Turn a provider reading into a placement.

    Provider sign and house are used when present; otherwise they are
    derived from the reading's degree.
    """
    sign = normalize_sign_name(reading.sign)
    degree = normalize_degree(reading.degree) if reading.degree is not None else None

    if sign is None and degree is None:
        logger.warning(f"{name} reported without degree or sign; skipping")
        return None

    if sign is None:
        sign = sign_of(degree)

    house = reading.house
    degraded = False
    if house is None and degree is not None:
        if cusps_ok:
            house, degraded = locate_house(degree, cusps)
        else:
            logger.warning(f"Incomplete house cusps; {name} left without a house")

    return CelestialPoint(
        name=name,
        degree=degree,
        sign=sign,
        house=house,
        house_degraded=degraded,
    )


def rising_sign(cusps: List[HouseCusp]) -> Optional[str]:
    """Sign on the first house cusp."""
    for cusp in cusps:
        if cusp.house == 1:
            return normalize_sign_name(cusp.sign) or sign_of(cusp.degree)
    return None


def assemble_placements(
    birth: BirthEvent,
    coordinate: GeoCoordinate,
    utc_offset: float,
    ephemeris: EphemerisResponse,
    house_system: str = "placidus",
    resolved_query: Optional[str] = None,
) -> PlacementResult:
    """
    Assemble the chart's placements and Big Three.

    Bodies missing from the ephemeris are left out. South Node is derived
    from North Node's degree and gets its own sign and house.

    Args:
        birth: The birth event the ephemeris was computed for
        coordinate: Resolved birthplace coordinates
        utc_offset: UTC offset (hours) used for the computation
        ephemeris: Provider readings and house cusps
        house_system: House system the cusps were computed with
        resolved_query: Candidate query that located the birthplace

    Returns:
        PlacementResult

    Raises:
        IncompleteEphemerisDataError: If North Node has no degree
        IncompletePlacementsError: If Sun, Moon or Rising is missing
    """
    logger.debug(
        f"Assembling placements for {birth.birth_date} {birth.hour:02d}:{birth.minute:02d} "
        f"({len(ephemeris.bodies)} bodies, {len(ephemeris.house_cusps)} cusps)"
    )
    cusps = list(ephemeris.house_cusps)
    cusps_ok = is_complete_cusp_set(cusps)
    if not cusps_ok:
        logger.warning(
            f"Expected 12 house cusps, got houses {[cusp.house for cusp in cusps]}"
        )

    placements: List[CelestialPoint] = []
    by_name: Dict[str, CelestialPoint] = {}

    for name in TRACKED_BODIES:
        reading = find_reading(ephemeris.bodies, name)
        if reading is None:
            logger.debug(f"{name} not in ephemeris response")
            continue
        point = build_point(name, reading, cusps, cusps_ok)
        if point is not None:
            placements.append(point)
            by_name[name] = point

    north_node = by_name.get(NORTH_NODE)
    if north_node is None or north_node.degree is None:
        raise IncompleteEphemerisDataError(
            ErrorMessages.NORTH_NODE_DEGREE_MISSING,
            details={"bodies": [reading.name for reading in ephemeris.bodies]},
        )
    placements.append(_point_from_degree(SOUTH_NODE, antipode(north_node.degree), cusps, cusps_ok))

    sun = by_name.get("Sun")
    moon = by_name.get("Moon")
    rising = rising_sign(cusps)

    missing = [
        label
        for label, value in (("Sun", sun), ("Moon", moon), ("Rising", rising))
        if not value
    ]
    if missing:
        raise IncompletePlacementsError(
            ErrorMessages.PLACEMENTS_INCOMPLETE.format(missing="/".join(missing)),
            details={"missing": missing},
        )

    return PlacementResult(
        big_three=BigThree(sun=sun.sign, moon=moon.sign, rising=rising),
        placements=placements,
        meta=ChartMeta(
            house_system=house_system,
            latitude=coordinate.latitude,
            longitude=coordinate.longitude,
            utc_offset=utc_offset,
            resolved_query=resolved_query,
        ),
        raw=dict(ephemeris.raw),
    )
