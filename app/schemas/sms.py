"""
app/schemas/sms.py

Purpose: SMS request and result models

- Request bodies for single and bulk sends
- DeliveryResult returned by every provider
- Per-recipient entries for bulk dispatch
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional

from utils.constants import SMSProviderName


class SendSMSRequest(BaseModel):
    """Single-recipient send."""
    phone_number: str = Field(..., description="Destination in any local or international format")
    message: str = Field(..., min_length=1, description="Message text")


class BulkSMSRequest(BaseModel):
    """One message fanned out to many recipients."""
    phone_numbers: List[str] = Field(..., min_length=1, description="Destinations, in send order")
    message: str = Field(..., min_length=1, description="Message text")


class DeliveryResult(BaseModel):
    """
    Outcome of one successful provider call.

    Failed calls raise DeliveryError instead of returning success=False.
    """
    model_config = ConfigDict(frozen=True)

    success: bool = True
    provider: SMSProviderName
    to: str
    simulated: bool = False
    response: Optional[Any] = None


class BulkSendEntry(BaseModel):
    """Outcome for one recipient of a bulk send."""
    model_config = ConfigDict(frozen=True)

    phone_number: str
    success: bool
    provider: Optional[SMSProviderName] = None
    to: Optional[str] = None
    simulated: bool = False
    response: Optional[Any] = None
    error: Optional[str] = None

    @classmethod
    def from_result(cls, phone_number: str, result: DeliveryResult) -> "BulkSendEntry":
        return cls(
            phone_number=phone_number,
            success=result.success,
            provider=result.provider,
            to=result.to,
            simulated=result.simulated,
            response=result.response,
        )

    @classmethod
    def from_error(cls, phone_number: str, error: Exception) -> "BulkSendEntry":
        return cls(
            phone_number=phone_number,
            success=False,
            provider=getattr(error, "provider", None),
            error=str(error),
        )


class BulkSendResponse(BaseModel):
    total: int
    sent: int
    failed: int
    results: List[BulkSendEntry]

    @classmethod
    def from_entries(cls, entries: List[BulkSendEntry]) -> "BulkSendResponse":
        sent = sum(1 for entry in entries if entry.success)
        return cls(total=len(entries), sent=sent, failed=len(entries) - sent, results=entries)


class ProviderInfo(BaseModel):
    provider: SMSProviderName
