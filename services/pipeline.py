"""
Placement Pipeline
Birthplace -> coordinates -> UTC offset -> ephemeris -> placements -> mailing list
"""

import logging
import math
from datetime import time
from typing import Mapping, Optional

from config.settings import Settings
from constants.messages import ErrorMessages
from core.clients.astrology_api import AstrologyAPIClient
from core.clients.geo import NominatimLocationProvider, TimezoneFinderProvider
from core.clients.kit import KitClient
from core.exceptions import AppException, EphemerisProviderError, TimezoneUnresolvedError
from models.astrology import BirthEvent, PlacementResult, Subscriber
from services.location_resolver import LocationResolver
from services.notifier import SubscriberNotifier
from services.placements import assemble_placements
from services.providers import ContactService, EphemerisProvider, LocationProvider, TimezoneProvider

logger = logging.getLogger(__name__)

# Real-world offsets run from UTC-12 to UTC+14
MIN_UTC_OFFSET = -14.0
MAX_UTC_OFFSET = 14.0


class PlacementPipeline:
    """
    Computes placements for a birth event and tags the requester.

    Every stage runs in order since each needs the previous stage's output.
    All providers and the tag map are injected; nothing reads the
    environment here.
    """

    def __init__(
        self,
        location_provider: LocationProvider,
        timezone_provider: TimezoneProvider,
        ephemeris_provider: EphemerisProvider,
        contact_service: ContactService,
        tag_map: Optional[Mapping[str, str]] = None,
        default_country: str = "Australia",
        house_system: str = "placidus",
    ):
        self.location_resolver = LocationResolver(location_provider, default_country)
        self.timezone_provider = timezone_provider
        self.ephemeris_provider = ephemeris_provider
        self.notifier = SubscriberNotifier(contact_service, tag_map or {})
        self.house_system = house_system

    async def _utc_offset(self, birth: BirthEvent, latitude: float, longitude: float) -> float:
        offset = await self.timezone_provider.offset_for(
            latitude,
            longitude,
            birth.birth_date,
            time(birth.hour, birth.minute),
        )
        if offset is None or not math.isfinite(offset) or not MIN_UTC_OFFSET <= offset <= MAX_UTC_OFFSET:
            raise TimezoneUnresolvedError(
                ErrorMessages.TIMEZONE_UNRESOLVED,
                details={"latitude": latitude, "longitude": longitude, "offset": offset},
            )
        return float(offset)

    async def compute_placements(
        self,
        birth: BirthEvent,
        subscriber: Optional[Subscriber] = None,
    ) -> PlacementResult:
        """
        Run the full pipeline for one birth event.

        Args:
            birth: Validated birth event
            subscriber: Contact to tag with the result; tagging is skipped
                when None

        Returns:
            PlacementResult

        Raises:
            PlaceNotFoundError: Birthplace could not be located
            TimezoneUnresolvedError: No usable UTC offset
            EphemerisProviderError: Ephemeris computation failed
            IncompleteEphemerisDataError: North Node degree missing
            IncompletePlacementsError: Sun, Moon or Rising missing
            NotificationServiceError: Contact could not be created
        """
        query, coordinate = await self.location_resolver.resolve_with_query(birth.birthplace)
        utc_offset = await self._utc_offset(birth, coordinate.latitude, coordinate.longitude)
        logger.info(
            f"Computing chart for ({coordinate.latitude}, {coordinate.longitude}) at UTC{utc_offset:+g}"
        )

        try:
            ephemeris = await self.ephemeris_provider.compute(
                birth,
                coordinate.latitude,
                coordinate.longitude,
                utc_offset,
                house_system=self.house_system,
            )
        except EphemerisProviderError:
            raise
        except AppException as e:
            raise EphemerisProviderError(message=e.message, details=e.details) from e

        result = assemble_placements(
            birth,
            coordinate,
            utc_offset,
            ephemeris,
            house_system=self.house_system,
            resolved_query=query,
        )
        big_three = result.big_three
        logger.info(f"Big Three: sun={big_three.sun} moon={big_three.moon} rising={big_three.rising}")

        if subscriber is None:
            logger.info("No subscriber supplied; skipping mailing list tagging")
            return result

        report = await self.notifier.notify(subscriber, big_three)
        if report.failed:
            logger.warning(f"Tagging incomplete for contact {report.contact_id}: {report.failed}")
        return result


def build_pipeline(settings: Settings) -> PlacementPipeline:
    """
    Wire concrete providers from settings.

    Args:
        settings: Validated application settings

    Returns:
        PlacementPipeline
    """
    astrology_api = AstrologyAPIClient(
        user_id=settings.astrology_api_user_id,
        api_key=settings.astrology_api_key,
        base_url=settings.astrology_api_base_url,
        timeout=settings.request_timeout_seconds,
    )

    location_provider: LocationProvider = astrology_api
    if settings.location_provider == "nominatim":
        location_provider = NominatimLocationProvider(
            user_agent=settings.geocoder_user_agent,
            timeout=min(settings.request_timeout_seconds, 10.0),
        )

    timezone_provider: TimezoneProvider = astrology_api
    if settings.timezone_provider == "timezonefinder":
        timezone_provider = TimezoneFinderProvider()

    return PlacementPipeline(
        location_provider=location_provider,
        timezone_provider=timezone_provider,
        ephemeris_provider=astrology_api,
        contact_service=KitClient(
            api_key=settings.kit_api_key,
            base_url=settings.kit_base_url,
            timeout=settings.request_timeout_seconds,
        ),
        tag_map=settings.tag_ids,
        default_country=settings.default_country,
        house_system=settings.house_system,
    )
