"""
Provider capabilities consumed by the placement pipeline.

Concrete adapters live in core.clients; the pipeline only depends on these
protocols so the geocoding, timezone and ephemeris sources can be swapped
through configuration.
"""

from datetime import date, time
from typing import List, Optional, Protocol

from models.astrology import BirthEvent, EphemerisResponse, GeoCoordinate


class LocationProvider(Protocol):
    async def search(self, query: str) -> List[GeoCoordinate]:
        """Coordinates matching a place query, best match first (may be empty)."""
        ...


class TimezoneProvider(Protocol):
    async def offset_for(
        self,
        latitude: float,
        longitude: float,
        on: date,
        at: Optional[time] = None,
    ) -> Optional[float]:
        """UTC offset in hours in effect at that place on that date (DST-aware)."""
        ...


class EphemerisProvider(Protocol):
    async def compute(
        self,
        birth: BirthEvent,
        latitude: float,
        longitude: float,
        utc_offset: float,
        house_system: str = "placidus",
    ) -> EphemerisResponse:
        """Body positions and house cusps for the birth moment."""
        ...


class ContactService(Protocol):
    async def create_or_identify(self, email: str, first_name: str = "") -> str:
        """Create the contact (or find the existing one) and return its id."""
        ...

    async def apply_tag(self, contact_id: str, tag_id: str) -> None:
        """Attach a tag to a contact; raises on failure."""
        ...
