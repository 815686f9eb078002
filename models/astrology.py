"""
Pydantic models for birth events, ephemeris readings and placement results
"""

import math
from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.exceptions import InvalidArgumentError


def _is_finite_number(value: Any) -> bool:
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


class BirthEvent(BaseModel):
    """Local civil date/time of birth and the free-text birthplace"""

    model_config = ConfigDict(frozen=True)

    year: int = Field(..., description="Birth year")
    month: int = Field(..., description="Birth month (1-12)")
    day: int = Field(..., description="Birth day (1-31)")
    hour: int = Field(..., description="Birth hour (0-23)")
    minute: int = Field(..., description="Birth minute (0-59)")
    birthplace: str = Field(..., description="Free-text birthplace, e.g. 'Melbourne, Australia'")

    @model_validator(mode="after")
    def _check_calendar(self) -> "BirthEvent":
        if not 1 <= self.month <= 12:
            raise InvalidArgumentError(f"Month must be between 1 and 12, got: {self.month}")
        if not 1 <= self.day <= 31:
            raise InvalidArgumentError(f"Day must be between 1 and 31, got: {self.day}")
        if not 0 <= self.hour <= 23:
            raise InvalidArgumentError(f"Hour must be between 0 and 23, got: {self.hour}")
        if not 0 <= self.minute <= 59:
            raise InvalidArgumentError(f"Minute must be between 0 and 59, got: {self.minute}")
        try:
            date(self.year, self.month, self.day)
        except ValueError as e:
            raise InvalidArgumentError(f"Invalid date: {str(e)}")
        if not self.birthplace.strip():
            raise InvalidArgumentError("birthplace must not be empty")
        return self

    @property
    def birth_date(self) -> date:
        return date(self.year, self.month, self.day)


class GeoCoordinate(BaseModel):
    """Latitude/longitude in degrees, as returned by a location provider"""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., description="Latitude (-90..90)")
    longitude: float = Field(..., description="Longitude (-180..180)")
    display_name: Optional[str] = Field(None, description="Provider's name for the place")

    @model_validator(mode="after")
    def _check_bounds(self) -> "GeoCoordinate":
        if not is_valid_coordinate(self.latitude, self.longitude):
            raise InvalidArgumentError(
                f"Coordinates out of range: ({self.latitude}, {self.longitude})"
            )
        return self


def is_valid_coordinate(latitude: Any, longitude: Any) -> bool:
    """True when both values are finite and inside geographic bounds."""
    if not (_is_finite_number(latitude) and _is_finite_number(longitude)):
        return False
    return -90.0 <= float(latitude) <= 90.0 and -180.0 <= float(longitude) <= 180.0


class BodyReading(BaseModel):
    """One celestial body as reported by the ephemeris provider"""

    model_config = ConfigDict(frozen=True)

    name: str
    degree: Optional[float] = Field(None, description="Ecliptic longitude in degrees")
    sign: Optional[str] = None
    house: Optional[int] = None


class HouseCusp(BaseModel):
    """Starting degree of one house"""

    model_config = ConfigDict(frozen=True)

    house: int = Field(..., description="House number (1-12)")
    degree: float = Field(..., description="Ecliptic degree of the cusp")
    sign: Optional[str] = Field(None, description="Sign on the cusp, if the provider supplied it")


class EphemerisResponse(BaseModel):
    """Body readings and house cusps for one birth moment"""

    model_config = ConfigDict(frozen=True)

    bodies: List[BodyReading] = Field(default_factory=list)
    house_cusps: List[HouseCusp] = Field(default_factory=list)
    raw: Dict[str, Any] = Field(default_factory=dict, description="Upstream payloads, keyed by endpoint")


class CelestialPoint(BaseModel):
    """A body's placement in the chart"""

    model_config = ConfigDict(frozen=True)

    name: str
    degree: Optional[float] = None
    sign: str
    house: Optional[int] = None
    house_degraded: bool = Field(
        False, description="House fell back to 1 because no cusp segment matched"
    )


class BigThree(BaseModel):
    """Sun, Moon and Rising sign names"""

    model_config = ConfigDict(frozen=True)

    sun: str
    moon: str
    rising: str


class ChartMeta(BaseModel):
    """How the chart was computed"""

    model_config = ConfigDict(frozen=True)

    house_system: str
    latitude: float
    longitude: float
    utc_offset: float
    resolved_query: Optional[str] = None


class PlacementResult(BaseModel):
    """Big Three summary plus the full placement list"""

    model_config = ConfigDict(frozen=True)

    big_three: BigThree
    placements: List[CelestialPoint]
    meta: Optional[ChartMeta] = None
    raw: Dict[str, Any] = Field(default_factory=dict, description="Upstream ephemeris payloads, keyed by endpoint")

    def placement(self, name: str) -> Optional[CelestialPoint]:
        for point in self.placements:
            if point.name.lower() == name.lower():
                return point
        return None


class Subscriber(BaseModel):
    """Mailing list contact that receives the placements"""

    model_config = ConfigDict(frozen=True)

    email: str
    first_name: str = ""


class NotificationReport(BaseModel):
    """Outcome of tagging one subscriber"""

    contact_id: str
    applied: List[str] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list)
    failed: List[str] = Field(default_factory=list)
