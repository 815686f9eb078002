"""
Kit (formerly ConvertKit) client for subscriber creation and tagging.
"""

import logging
from typing import Optional

import httpx

from constants.messages import ErrorMessages
from core.clients.base import BaseAPIClient
from core.exceptions import AppException, NotificationServiceError

logger = logging.getLogger(__name__)


class KitClient(BaseAPIClient):
    """
    Client for the Kit v4 API.

    Implements the ContactService capability: subscribe (or re-identify)
    an email address, then attach tags to the subscriber.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.kit.com",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(
            base_url=base_url,
            timeout=timeout,
            headers={
                "X-Kit-Api-Key": api_key,
                "Accept": "application/json",
            },
            transport=transport,
        )

    async def create_or_identify(self, email: str, first_name: str = "") -> str:
        """
        Create an active subscriber, or get the existing one for the email.

        Kit answers 201 for a new subscriber and 200 for an existing one.

        Returns:
            Subscriber id as a string

        Raises:
            NotificationServiceError: If the call fails or no id comes back
        """
        try:
            data = await self.post(
                "/v4/subscribers",
                json={
                    "email_address": email,
                    "first_name": first_name or "",
                    "state": "active",
                },
                expected_status=(200, 201, 202),
                error_class=NotificationServiceError,
            )
        except NotificationServiceError:
            raise
        except AppException as e:
            raise NotificationServiceError(
                message=ErrorMessages.CONTACT_CREATE_FAILED.format(body=e.message),
                details=e.details,
            ) from e

        subscriber = data.get("subscriber") if isinstance(data, dict) else None
        subscriber_id = subscriber.get("id") if isinstance(subscriber, dict) else None
        if subscriber_id is None or subscriber_id == "":
            raise NotificationServiceError(
                message=ErrorMessages.CONTACT_ID_MISSING.format(body=data),
                details={"response": data},
            )

        logger.info(f"Kit subscriber ready: {subscriber_id}")
        return str(subscriber_id)

    async def apply_tag(self, contact_id: str, tag_id: str) -> None:
        """
        Tag a subscriber.

        Raises:
            ExternalServiceError: If Kit rejects the request
            TimeoutError: If the request times out
        """
        await self.post(
            f"/v4/tags/{tag_id}/subscribers/{contact_id}",
            expected_status=(200, 201, 202, 204),
        )
