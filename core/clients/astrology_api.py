"""
AstrologyAPI client for geocoding, timezone and ephemeris lookups.

Provides the location, timezone and ephemeris capabilities used by the
placement pipeline, backed by the json.astrologyapi.com v1 endpoints.
"""

import base64
import logging
import math
from datetime import date, time
from typing import Any, Dict, List, Optional, Type

import httpx

from constants.messages import ErrorMessages
from core.clients.base import BaseAPIClient
from core.exceptions import (
    AppException,
    EphemerisProviderError,
    ExternalServiceError,
    TimezoneUnresolvedError,
)
from models.astrology import BirthEvent, EphemerisResponse, GeoCoordinate, is_valid_coordinate
from utils.chart_data_extractor import extract_body_readings, extract_house_cusps

logger = logging.getLogger(__name__)

PLANETS_ENDPOINT = "planets/tropical"
HOUSE_CUSPS_ENDPOINT = "house_cusps/tropical"


def basic_auth(user_id: str, api_key: str) -> str:
    token = base64.b64encode(f"{user_id}:{api_key}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


class AstrologyAPIClient(BaseAPIClient):
    """
    Client for AstrologyAPI endpoints.

    Implements LocationProvider, TimezoneProvider and EphemerisProvider.
    Uses the base client's error handling for consistent behavior, and
    keeps the raw upstream error text in every raised exception.
    """

    def __init__(
        self,
        user_id: str,
        api_key: str,
        base_url: str = "https://json.astrologyapi.com/v1",
        timeout: float = 30.0,
        max_rows: int = 1,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize AstrologyAPI client with Basic auth credentials."""
        super().__init__(
            base_url=base_url,
            timeout=timeout,
            headers={
                "Authorization": basic_auth(user_id, api_key),
                "Content-Type": "application/json",
                "Accept-Language": "en",
            },
            transport=transport,
        )
        self.max_rows = max_rows

    async def _astro(
        self,
        endpoint: str,
        payload: Dict[str, Any],
        error_class: Type[AppException] = ExternalServiceError,
    ) -> Any:
        """
        POST to an AstrologyAPI endpoint.

        Raises:
            error_class: On any failure, with the upstream body in the message
        """
        try:
            return await self.post(f"/{endpoint}", json=payload, error_class=error_class)
        except AppException as e:
            body = e.message
            if isinstance(e.details, dict) and e.details.get("body"):
                body = e.details["body"]
            raise error_class(
                message=ErrorMessages.EPHEMERIS_ERROR.format(endpoint=endpoint, body=body),
                details=e.details,
            ) from e

    async def search(self, query: str) -> List[GeoCoordinate]:
        """
        Look up a place by name via geo_details.

        Args:
            query: Free-text place name

        Returns:
            Coordinates for every geoname with usable latitude/longitude
        """
        data = await self._astro("geo_details", {"place": query, "maxRows": self.max_rows})
        geonames = data.get("geonames") if isinstance(data, dict) else None

        results: List[GeoCoordinate] = []
        for entry in geonames or []:
            if not isinstance(entry, dict):
                continue
            latitude = entry.get("latitude")
            longitude = entry.get("longitude")
            if not is_valid_coordinate(latitude, longitude):
                logger.debug(f"Ignoring geoname without usable coordinates: {entry}")
                continue
            results.append(
                GeoCoordinate(
                    latitude=float(latitude),
                    longitude=float(longitude),
                    display_name=entry.get("place_name"),
                )
            )
        return results

    async def offset_for(
        self,
        latitude: float,
        longitude: float,
        on: date,
        at: Optional[time] = None,
    ) -> Optional[float]:
        """
        UTC offset (hours) in effect at the coordinates on the given date.

        timezone_with_dst only takes a date, so ``at`` is ignored.

        Raises:
            TimezoneUnresolvedError: If the endpoint call fails
        """
        data = await self._astro(
            "timezone_with_dst",
            {
                "latitude": latitude,
                "longitude": longitude,
                "date": on.strftime("%m-%d-%Y"),
            },
            error_class=TimezoneUnresolvedError,
        )
        if not isinstance(data, dict):
            return None
        try:
            offset = float(data.get("timezone"))
        except (TypeError, ValueError):
            return None
        return offset if math.isfinite(offset) else None

    async def compute(
        self,
        birth: BirthEvent,
        latitude: float,
        longitude: float,
        utc_offset: float,
        house_system: str = "placidus",
    ) -> EphemerisResponse:
        """
        Planet positions and house cusps for the birth moment.

        Returns:
            EphemerisResponse with the raw payloads kept under "planets"
            and "house_cusps"

        Raises:
            EphemerisProviderError: If either endpoint fails
        """
        payload = {
            "day": birth.day,
            "month": birth.month,
            "year": birth.year,
            "hour": birth.hour,
            "min": birth.minute,
            "lat": latitude,
            "lon": longitude,
            "tzone": utc_offset,
            "house_type": house_system,
        }

        planets = await self._astro(PLANETS_ENDPOINT, payload, error_class=EphemerisProviderError)
        house_cusps = await self._astro(HOUSE_CUSPS_ENDPOINT, payload, error_class=EphemerisProviderError)

        return EphemerisResponse(
            bodies=extract_body_readings(planets),
            house_cusps=extract_house_cusps(house_cusps),
            raw={"planets": planets, "house_cusps": house_cusps},
        )
