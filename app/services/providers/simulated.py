"""
app/services/providers/simulated.py

Purpose: No-op delivery for environments without provider credentials
"""

from app.core.logging import get_logger
from app.schemas.sms import DeliveryResult
from app.services.providers.base import SMSProvider
from utils.constants import SMSProviderName
from utils.phone_utils import mask_phone_number

logger = get_logger(__name__)


class SimulatedSMSProvider(SMSProvider):
    """Logs the message instead of sending it. Always succeeds."""

    name = SMSProviderName.SIMULATED

    async def send(self, to: str, message: str) -> DeliveryResult:
        masked = mask_phone_number(to)
        logger.warning("SMS service not configured, simulating SMS send")
        logger.info(
            f"[SIMULATED SMS] To: {masked}, Message: {message}",
            extra={"provider": self.name.value, "to": masked}
        )
        return DeliveryResult(provider=self.name, to=to, simulated=True)
