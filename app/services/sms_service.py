"""
app/services/sms_service.py

Purpose: SMS dispatch

- Normalizes destinations before every send
- Delegates delivery to the provider selected at startup
- Fans one message out to many recipients, isolating failures per recipient
"""

import asyncio
from typing import List, Sequence

from app.core.exceptions import DeliveryError
from app.core.logging import get_logger
from app.schemas.sms import BulkSendEntry, DeliveryResult
from app.services.providers import SMSProvider
from utils.constants import DEFAULT_SMS_BULK_CONCURRENCY
from utils.phone_utils import normalize_phone_number

logger = get_logger(__name__)


class SMSService:
    """
    Sends SMS through a single provider fixed at construction time.
    """

    def __init__(self, provider: SMSProvider, bulk_concurrency: int = DEFAULT_SMS_BULK_CONCURRENCY):
        self.provider = provider
        self.bulk_concurrency = max(1, bulk_concurrency)

    async def send(self, phone_number: str, message: str) -> DeliveryResult:
        """
        Sends one SMS.

        Args:
            phone_number: Destination in any format normalize_phone_number accepts
            message: Message text

        Returns:
            DeliveryResult from the provider

        Raises:
            DeliveryError: If the provider call fails
        """
        to = normalize_phone_number(phone_number)
        return await self.provider.send(to, message)

    async def send_bulk(self, phone_numbers: Sequence[str], message: str) -> List[BulkSendEntry]:
        """
        Sends the same message to every number.

        Up to bulk_concurrency sends run at once. One entry is returned per
        input number, in input order. A failed send is recorded in its entry
        and never stops the others.
        """
        semaphore = asyncio.Semaphore(self.bulk_concurrency)

        async def _send_one(phone_number: str) -> BulkSendEntry:
            async with semaphore:
                try:
                    result = await self.send(phone_number, message)
                except DeliveryError as e:
                    logger.warning(f"Bulk SMS entry failed: {e}", extra={"provider": self.provider.name.value})
                    return BulkSendEntry.from_error(phone_number, e)
                except Exception as e:
                    logger.error(f"Unexpected error in bulk SMS entry: {e}", exc_info=True)
                    return BulkSendEntry.from_error(phone_number, e)
                return BulkSendEntry.from_result(phone_number, result)

        entries = list(await asyncio.gather(*(_send_one(number) for number in phone_numbers)))

        sent = sum(1 for entry in entries if entry.success)
        logger.info(
            f"Bulk SMS finished: {sent} sent, {len(entries) - sent} failed",
            extra={"provider": self.provider.name.value, "batch_size": len(entries)}
        )
        return entries
