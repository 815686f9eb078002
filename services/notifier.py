"""
Subscriber Notification Service
Subscribes the requester to the mailing list and tags them with their
Sun, Moon and Rising signs
"""

import asyncio
import logging
from typing import Dict, List, Mapping, Tuple

from constants.zodiac import TAG_PREFIXES
from core.exceptions import AppException, NotificationServiceError
from models.astrology import BigThree, NotificationReport, Subscriber
from services.providers import ContactService

logger = logging.getLogger(__name__)


def tag_keys(big_three: BigThree) -> List[str]:
    """Tag map keys for a Big Three, e.g. ["SUN_Gemini", "MOON_Scorpio", "RISING_Capricorn"]."""
    return [
        f"{TAG_PREFIXES['sun']}_{big_three.sun}",
        f"{TAG_PREFIXES['moon']}_{big_three.moon}",
        f"{TAG_PREFIXES['rising']}_{big_three.rising}",
    ]


class SubscriberNotifier:
    """
    Tags a contact with their placements.

    Creating the contact must succeed; tagging is best effort. A failed tag
    is logged and reported but never raised.
    """

    def __init__(self, contact_service: ContactService, tag_map: Mapping[str, str]):
        self.contact_service = contact_service
        self.tag_map: Dict[str, str] = {key: str(value) for key, value in tag_map.items()}

    async def _apply(self, contact_id: str, key: str, tag_id: str) -> Tuple[str, bool]:
        try:
            await self.contact_service.apply_tag(contact_id, tag_id)
        except (AppException, asyncio.TimeoutError) as e:
            logger.warning(f"Kit tag failed for {key} ({tag_id}): {getattr(e, 'message', str(e))}")
            return key, False
        return key, True

    async def notify(self, subscriber: Subscriber, big_three: BigThree) -> NotificationReport:
        """
        Create or identify the contact, then apply every mapped tag.

        Tags are applied concurrently; each one is attempted even if
        another fails or is cancelled.

        Returns:
            NotificationReport listing applied, skipped and failed tag keys

        Raises:
            NotificationServiceError: If the contact cannot be created
        """
        try:
            contact_id = await self.contact_service.create_or_identify(
                subscriber.email, subscriber.first_name
            )
        except NotificationServiceError:
            raise
        except AppException as e:
            raise NotificationServiceError(message=e.message, details=e.details) from e

        report = NotificationReport(contact_id=contact_id)
        pending = []
        for key in tag_keys(big_three):
            tag_id = self.tag_map.get(key)
            if not tag_id:
                logger.debug(f"No tag configured for {key}")
                report.skipped.append(key)
                continue
            pending.append((key, tag_id))

        outcomes = await asyncio.gather(
            *(self._apply(contact_id, key, tag_id) for key, tag_id in pending),
            return_exceptions=True,
        )

        for (key, tag_id), outcome in zip(pending, outcomes):
            if isinstance(outcome, BaseException):
                logger.warning(f"Kit tag failed for {key} ({tag_id}): {outcome!r}")
                report.failed.append(key)
            elif outcome[1]:
                report.applied.append(key)
            else:
                report.failed.append(key)

        return report
