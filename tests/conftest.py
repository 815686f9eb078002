"""Shared fakes and fixtures for the placement pipeline tests."""

from datetime import date, time
from typing import Dict, List, Optional

import pytest

from core.exceptions import ExternalServiceError
from models.astrology import (
    BirthEvent,
    BodyReading,
    EphemerisResponse,
    GeoCoordinate,
    HouseCusp,
)


def make_cusps(first: float = 0.0, step: float = 30.0) -> List[HouseCusp]:
    """Twelve evenly spaced cusps starting at ``first``."""
    return [
        HouseCusp(house=index + 1, degree=(first + index * step) % 360.0)
        for index in range(12)
    ]


class FakeLocationProvider:
    def __init__(self, results: Optional[Dict[str, List[GeoCoordinate]]] = None, failing: tuple = ()):
        self.results = results or {}
        self.failing = set(failing)
        self.queries: List[str] = []

    async def search(self, query: str) -> List[GeoCoordinate]:
        self.queries.append(query)
        if query in self.failing:
            raise ExternalServiceError(f"lookup failed for {query}")
        return self.results.get(query, [])


class FakeTimezoneProvider:
    def __init__(self, offset: Optional[float] = 2.0):
        self.offset = offset
        self.calls: List[tuple] = []

    async def offset_for(self, latitude: float, longitude: float, on: date, at: Optional[time] = None):
        self.calls.append((latitude, longitude, on, at))
        return self.offset


class FakeEphemerisProvider:
    def __init__(self, response: EphemerisResponse, error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls: List[dict] = []

    async def compute(self, birth, latitude, longitude, utc_offset, house_system="placidus"):
        self.calls.append(
            {
                "birth": birth,
                "latitude": latitude,
                "longitude": longitude,
                "utc_offset": utc_offset,
                "house_system": house_system,
            }
        )
        if self.error is not None:
            raise self.error
        return self.response


class FakeContactService:
    def __init__(self, contact_id: str = "sub-1", create_error: Optional[Exception] = None, failing_tags: tuple = ()):
        self.contact_id = contact_id
        self.create_error = create_error
        self.failing_tags = set(failing_tags)
        self.created: List[tuple] = []
        self.tagged: List[tuple] = []

    async def create_or_identify(self, email: str, first_name: str = "") -> str:
        self.created.append((email, first_name))
        if self.create_error is not None:
            raise self.create_error
        return self.contact_id

    async def apply_tag(self, contact_id: str, tag_id: str) -> None:
        self.tagged.append((contact_id, tag_id))
        if tag_id in self.failing_tags:
            raise ExternalServiceError(f"tag {tag_id} rejected")


@pytest.fixture
def paris_birth() -> BirthEvent:
    return BirthEvent(year=1990, month=6, day=15, hour=14, minute=30, birthplace="Paris, France")


@pytest.fixture
def paris() -> GeoCoordinate:
    return GeoCoordinate(latitude=48.8534, longitude=2.3488, display_name="Paris")


@pytest.fixture
def cusps() -> List[HouseCusp]:
    cusp_list = make_cusps(first=285.0)
    # Provider reports the sign on the Ascendant
    cusp_list[0] = HouseCusp(house=1, degree=285.0, sign="Capricorn")
    return cusp_list


@pytest.fixture
def ephemeris(cusps) -> EphemerisResponse:
    return EphemerisResponse(
        bodies=[
            BodyReading(name="Sun", degree=75.0),
            BodyReading(name="Moon", degree=200.0, sign="Scorpio"),
            BodyReading(name="Mercury", degree=60.5, sign="GEMINI", house=5),
            BodyReading(name="Venus", degree=48.0),
            BodyReading(name="Node", degree=10.0),
        ],
        house_cusps=cusps,
    )


@pytest.fixture
def tag_map() -> Dict[str, str]:
    return {
        "SUN_Gemini": "101",
        "MOON_Scorpio": "202",
        "RISING_Capricorn": "303",
    }
