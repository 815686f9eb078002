"""
Local geocoding and timezone providers.

Nominatim (via geopy) for place lookups and timezonefinder + zoneinfo for
historical UTC offsets. Both libraries are blocking, so calls run in a
worker thread.
"""

import asyncio
import logging
from datetime import date, datetime, time
from functools import lru_cache
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from geopy.exc import GeopyError
from geopy.geocoders import Nominatim
from timezonefinder import TimezoneFinder

from core.exceptions import ExternalServiceError
from models.astrology import GeoCoordinate, is_valid_coordinate

logger = logging.getLogger(__name__)


class NominatimLocationProvider:
    """LocationProvider backed by OpenStreetMap Nominatim."""

    def __init__(self, user_agent: str, timeout: float = 10.0, max_rows: int = 1):
        self.geolocator = Nominatim(user_agent=user_agent)
        self.timeout = timeout
        self.max_rows = max_rows

    def _geocode(self, query: str) -> List[GeoCoordinate]:
        try:
            locations = self.geolocator.geocode(
                query, exactly_one=False, limit=self.max_rows, timeout=self.timeout
            )
        except GeopyError as e:
            logger.error(f"Nominatim lookup failed for {query!r}: {str(e)}")
            raise ExternalServiceError(
                message=f"Geocoding failed: {str(e)}",
                details={"query": query, "error": str(e)},
            )

        results: List[GeoCoordinate] = []
        for location in locations or []:
            if not is_valid_coordinate(location.latitude, location.longitude):
                continue
            results.append(
                GeoCoordinate(
                    latitude=location.latitude,
                    longitude=location.longitude,
                    display_name=location.address,
                )
            )
        return results

    async def search(self, query: str) -> List[GeoCoordinate]:
        return await asyncio.to_thread(self._geocode, query)


@lru_cache
def _timezone_finder() -> TimezoneFinder:
    return TimezoneFinder()


class TimezoneFinderProvider:
    """TimezoneProvider using the IANA zone at the coordinates."""

    def __init__(self, finder: Optional[TimezoneFinder] = None):
        self.finder = finder

    def _offset(self, latitude: float, longitude: float, on: date, at: Optional[time]) -> Optional[float]:
        finder = self.finder or _timezone_finder()
        zone_name = finder.timezone_at(lat=latitude, lng=longitude)
        if not zone_name:
            logger.warning(f"No timezone found at ({latitude}, {longitude})")
            return None

        try:
            zone = ZoneInfo(zone_name)
        except ZoneInfoNotFoundError:
            logger.warning(f"Unknown timezone {zone_name!r} at ({latitude}, {longitude})")
            return None

        # Noon when the time is unknown, away from most DST transitions
        local = datetime.combine(on, at or time(12, 0), tzinfo=zone)
        offset = local.utcoffset()
        if offset is None:
            return None
        return offset.total_seconds() / 3600.0

    async def offset_for(
        self,
        latitude: float,
        longitude: float,
        on: date,
        at: Optional[time] = None,
    ) -> Optional[float]:
        return await asyncio.to_thread(self._offset, latitude, longitude, on, at)
