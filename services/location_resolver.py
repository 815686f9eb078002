"""
Location Resolution Service
Resolves a free-text birthplace to coordinates, falling back through
progressively looser queries until one returns a result
"""

import logging
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple, TypeVar

import httpx

from constants.messages import ErrorMessages
from core.exceptions import AppException, InvalidArgumentError, PlaceNotFoundError
from models.astrology import GeoCoordinate
from services.providers import LocationProvider

logger = logging.getLogger(__name__)

T = TypeVar("T")

CandidateStrategy = Callable[[str, str], Optional[str]]


def verbatim(place: str, default_country: str) -> Optional[str]:
    return place.strip()


def city_only(place: str, default_country: str) -> Optional[str]:
    return place.split(",")[0].strip()


def city_with_default_country(place: str, default_country: str) -> Optional[str]:
    city = city_only(place, default_country)
    if not city or not default_country:
        return None
    return f"{city}, {default_country}"


CANDIDATE_STRATEGIES: Tuple[CandidateStrategy, ...] = (
    verbatim,
    city_only,
    city_with_default_country,
)


def build_candidates(
    place: str,
    default_country: str,
    strategies: Sequence[CandidateStrategy] = CANDIDATE_STRATEGIES,
) -> List[str]:
    """
    Candidate queries for a birthplace, in the order they should be tried.

    Empty candidates are dropped; duplicates keep their first position.

    Example:
        >>> build_candidates("Melbourne, Australia", "Australia")
        ['Melbourne, Australia', 'Melbourne']
    """
    candidates: List[str] = []
    for strategy in strategies:
        candidate = strategy(place, default_country)
        if candidate and candidate not in candidates:
            candidates.append(candidate)
    return candidates


async def first_success(
    candidates: Sequence[str],
    attempt: Callable[[str], Awaitable[Optional[T]]],
) -> Tuple[str, T]:
    """
    Try candidates one at a time; the first non-empty result wins.

    Provider errors and empty results are logged and skipped. Candidates are
    never raced: later ones only matter when earlier ones fail.

    Returns:
        (candidate, result) for the first success

    Raises:
        PlaceNotFoundError: Listing every attempted candidate
    """
    last_error: Optional[str] = None

    for candidate in candidates:
        try:
            result = await attempt(candidate)
        except (AppException, httpx.HTTPError) as e:
            last_error = getattr(e, "message", None) or str(e)
            logger.warning(f"Location lookup failed for {candidate!r}: {last_error}")
            continue

        if result:
            return candidate, result
        logger.info(f"No location results for {candidate!r}")

    attempted = " → ".join(candidates)
    message = ErrorMessages.PLACE_NOT_FOUND.format(attempted=attempted)
    if last_error:
        message += f" | {last_error}"
    raise PlaceNotFoundError(
        message=message,
        details={"attempted": list(candidates), "last_error": last_error},
    )


class LocationResolver:
    """Resolves birthplaces against a LocationProvider."""

    def __init__(self, provider: LocationProvider, default_country: str = "Australia"):
        self.provider = provider
        self.default_country = default_country

    async def _lookup(self, query: str) -> Optional[GeoCoordinate]:
        results = await self.provider.search(query)
        return results[0] if results else None

    async def resolve_with_query(self, place: str) -> Tuple[str, GeoCoordinate]:
        """
        Resolve a birthplace and report which candidate query matched.

        Raises:
            InvalidArgumentError: If the birthplace is blank
            PlaceNotFoundError: If every candidate comes back empty
        """
        if not place or not place.strip():
            raise InvalidArgumentError(ErrorMessages.MISSING_BIRTHPLACE)

        candidates = build_candidates(place, self.default_country)
        query, coordinate = await first_success(candidates, self._lookup)
        logger.info(
            f"Resolved {place!r} via {query!r} to ({coordinate.latitude}, {coordinate.longitude})"
        )
        return query, coordinate

    async def resolve(self, place: str) -> GeoCoordinate:
        """Resolve a birthplace to coordinates."""
        _, coordinate = await self.resolve_with_query(place)
        return coordinate
