"""
app/services/providers/gateway.py

Purpose: Generic SMS gateway sending

- JSON POST {apiKey, to, message} to SMS_API_URL
"""

from typing import Optional

import httpx

from app.core.config import GatewayCredentials
from app.schemas.sms import DeliveryResult
from app.services.providers.base import HTTPSMSProvider
from utils.constants import DEFAULT_SMS_REQUEST_TIMEOUT, SMSProviderName


class GatewaySMSProvider(HTTPSMSProvider):
    """API-key authenticated HTTP gateway"""

    name = SMSProviderName.GATEWAY

    def __init__(
        self,
        credentials: GatewayCredentials,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_SMS_REQUEST_TIMEOUT,
    ):
        super().__init__(client=client, timeout=timeout)
        self.api_key = credentials.api_key
        self.api_url = credentials.api_url

    async def send(self, to: str, message: str) -> DeliveryResult:
        payload = await self._post(
            self.api_url,
            to,
            json={
                "apiKey": self.api_key,
                "to": to,
                "message": message
            },
        )

        return DeliveryResult(provider=self.name, to=to, response=payload)
