"""
app/services/providers

Purpose: SMS delivery backends and startup-time selection
"""

from typing import Optional

import httpx

from app.core.config import ProviderConfig
from app.core.logging import get_logger
from app.services.providers.base import SMSProvider, HTTPSMSProvider
from app.services.providers.gateway import GatewaySMSProvider
from app.services.providers.simulated import SimulatedSMSProvider
from app.services.providers.twilio import TwilioSMSProvider

logger = get_logger(__name__)

__all__ = [
    "SMSProvider",
    "HTTPSMSProvider",
    "TwilioSMSProvider",
    "GatewaySMSProvider",
    "SimulatedSMSProvider",
    "select_provider",
]


def select_provider(config: ProviderConfig, client: Optional[httpx.AsyncClient] = None) -> SMSProvider:
    """
    Picks the one backend this process will use.

    Priority: Twilio (all three credentials), then the generic gateway (API
    key), then simulation. Called once at startup; a delivery failure never
    switches providers.
    """
    if config.twilio is not None:
        provider = TwilioSMSProvider(config.twilio, client=client, timeout=config.request_timeout)
    elif config.gateway is not None:
        provider = GatewaySMSProvider(config.gateway, client=client, timeout=config.request_timeout)
    else:
        provider = SimulatedSMSProvider()

    logger.info(f"SMS provider selected: {provider.name.value}", extra={"provider": provider.name.value})
    return provider
