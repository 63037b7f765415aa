"""
app/services/providers/base.py

Purpose: SMS provider interface

- SMSProvider: the send(to, message) contract every backend implements
- HTTPSMSProvider: shared POST / timeout / error handling for network backends
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from app.core.exceptions import DeliveryError
from app.core.logging import get_logger
from app.schemas.sms import DeliveryResult
from utils.constants import DEFAULT_SMS_REQUEST_TIMEOUT, SMSProviderName
from utils.phone_utils import mask_phone_number

logger = get_logger(__name__)


class SMSProvider(ABC):
    """Interface all SMS providers must implement."""

    name: SMSProviderName

    @abstractmethod
    async def send(self, to: str, message: str) -> DeliveryResult:
        """
        Send the message to an already-normalized number.

        Raises:
            DeliveryError: If the provider call fails
        """
        raise NotImplementedError


class HTTPSMSProvider(SMSProvider):
    """
    Base for providers reached over HTTP.

    Uses the injected AsyncClient when given (the application shares one),
    otherwise opens a short-lived client per request.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: float = DEFAULT_SMS_REQUEST_TIMEOUT):
        self._client = client
        self._timeout = timeout

    async def _request(self, url: str, **kwargs: Any) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(url, timeout=self._timeout, **kwargs)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.post(url, **kwargs)

    async def _post(self, url: str, to: str, **kwargs: Any) -> Any:
        """
        POSTs to the provider and returns the decoded response payload.

        Raises:
            DeliveryError: On timeout, transport error or non-2xx status
        """
        masked = mask_phone_number(to)
        logger.info(
            f"📤 Sending SMS via {self.name.value} to {masked}",
            extra={"provider": self.name.value, "to": masked}
        )

        try:
            # httpx timeouts are per phase; wait_for bounds the whole call
            response = await asyncio.wait_for(self._request(url, **kwargs), self._timeout)
            response.raise_for_status()

        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.error(
                f"{self.name.value} API timeout after {self._timeout}s",
                extra={"provider": self.name.value, "to": masked}
            )
            raise DeliveryError(
                f"{self.name.value} request timed out after {self._timeout}s",
                provider=self.name.value,
            ) from e

        except httpx.HTTPStatusError as e:
            payload = _decode_payload(e.response)
            logger.error(
                f"❌ {self.name.value} API error: {e.response.status_code}",
                extra={"provider": self.name.value, "to": masked, "status_code": e.response.status_code}
            )
            if payload:
                logger.error(f"SMS provider response: {payload}")
            raise DeliveryError(
                f"{self.name.value} API error: {e.response.status_code}",
                provider=self.name.value,
                provider_response=payload,
            ) from e

        except httpx.HTTPError as e:
            logger.error(
                f"Error sending SMS via {self.name.value}: {e}",
                extra={"provider": self.name.value, "to": masked}
            )
            raise DeliveryError(
                f"{self.name.value} request failed: {e}",
                provider=self.name.value,
            ) from e

        logger.info(
            f"✅ SMS sent via {self.name.value} to {masked}",
            extra={"provider": self.name.value, "to": masked, "status_code": response.status_code}
        )
        return _decode_payload(response)


def _decode_payload(response: httpx.Response) -> Any:
    """JSON body when there is one, raw text otherwise."""
    try:
        return response.json()
    except ValueError:
        return response.text or None
