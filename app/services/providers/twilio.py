"""
app/services/providers/twilio.py

Purpose: Twilio SMS sending

- Form-encoded POST to the Twilio Messages API
- Basic auth with account SID / auth token
"""

from typing import Optional

import httpx

from app.core.config import TwilioCredentials
from app.schemas.sms import DeliveryResult
from app.services.providers.base import HTTPSMSProvider
from utils.constants import DEFAULT_SMS_REQUEST_TIMEOUT, SMSProviderName, TWILIO_API_BASE_URL


class TwilioSMSProvider(HTTPSMSProvider):
    """Primary carrier: Twilio Programmable Messaging"""

    name = SMSProviderName.TWILIO

    def __init__(
        self,
        credentials: TwilioCredentials,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_SMS_REQUEST_TIMEOUT,
    ):
        super().__init__(client=client, timeout=timeout)
        self.account_sid = credentials.account_sid
        self.auth_token = credentials.auth_token
        self.phone_number = credentials.phone_number
        self.url = f"{TWILIO_API_BASE_URL}/{self.account_sid}/Messages.json"

    async def send(self, to: str, message: str) -> DeliveryResult:
        data = {
            "To": to,
            "From": self.phone_number,
            "Body": message
        }

        payload = await self._post(
            self.url,
            to,
            data=data,
            auth=(self.account_sid, self.auth_token),
        )

        return DeliveryResult(provider=self.name, to=to, response=payload)
