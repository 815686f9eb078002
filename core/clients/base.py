"""
Base API client for external HTTP services.

Provides a reusable pattern for making HTTP requests with
consistent error handling, timeouts, and logging.
"""

import logging
from abc import ABC
from typing import Any, Dict, Optional, Tuple, Type

import httpx

from core.exceptions import AppException, ExternalServiceError, TimeoutError

logger = logging.getLogger(__name__)


class BaseAPIClient(ABC):
    """
    Abstract base class for external API clients.

    Provides consistent HTTP request handling with error handling,
    timeouts, and logging. Subclasses should implement specific
    API methods using the _request helper.

    Usage:
        class MyAPIClient(BaseAPIClient):
            def __init__(self):
                super().__init__(
                    base_url="https://api.example.com",
                    headers={"Authorization": "Bearer token"}
                )

            async def get_resource(self, id: str) -> dict:
                return await self._request("GET", f"/resources/{id}")
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Base URL for all requests (e.g., "https://api.example.com")
            timeout: Request timeout in seconds (default: 30)
            headers: Default headers to include in all requests
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.default_headers = headers or {}
        self.transport = transport

    async def _request(
        self,
        method: str,
        endpoint: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        expected_status: Tuple[int, ...] = (200,),
        error_class: Type[AppException] = ExternalServiceError,
    ) -> Any:
        """
        Make an HTTP request with standard error handling.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE, etc.)
            endpoint: API endpoint (e.g., "/users/123")
            json: JSON body for POST/PUT requests
            params: Query parameters
            headers: Additional headers (merged with defaults)
            expected_status: Status codes treated as success (default: 200)
            error_class: Exception raised for a non-success status

        Returns:
            Parsed JSON response (None for an empty body)

        Raises:
            error_class: If the API returns an unexpected status; the raw
                response body is kept in the message and details
            ExternalServiceError: If the request fails
            TimeoutError: If the request times out
        """
        url = f"{self.base_url}{endpoint}"
        request_headers = {**self.default_headers, **(headers or {})}

        logger.debug(f"API Request: {method} {url}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.request(
                    method=method,
                    url=url,
                    json=json,
                    params=params,
                    headers=request_headers,
                )

                if response.status_code not in expected_status:
                    logger.error(
                        f"API error: {method} {url} returned {response.status_code}: {response.text}"
                    )
                    raise error_class(
                        message=f"External API returned status {response.status_code}: {response.text}",
                        details={
                            "status_code": response.status_code,
                            "url": url,
                            "method": method,
                            "body": response.text,
                        }
                    )

                if not response.content:
                    return None
                return response.json()

        except httpx.TimeoutException:
            logger.error(f"API timeout: {method} {url}")
            raise TimeoutError(
                message="External API request timed out",
                details={"url": url, "method": method, "timeout": self.timeout}
            )
        except httpx.RequestError as e:
            logger.error(f"API request failed: {method} {url} - {str(e)}")
            raise ExternalServiceError(
                message=f"API request failed: {str(e)}",
                details={"url": url, "method": method, "error": str(e)}
            )
        except AppException:
            raise
        except ValueError as e:
            logger.error(f"Invalid JSON from {method} {url} - {str(e)}")
            raise error_class(
                message="External API returned invalid JSON",
                details={"url": url, "method": method, "error": str(e)}
            )

    async def post(
        self,
        endpoint: str,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        expected_status: Tuple[int, ...] = (200,),
        error_class: Type[AppException] = ExternalServiceError,
    ) -> Any:
        """Make a POST request."""
        return await self._request(
            "POST",
            endpoint,
            json=json,
            headers=headers,
            expected_status=expected_status,
            error_class=error_class,
        )
