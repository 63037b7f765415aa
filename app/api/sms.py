"""
app/api/sms.py

Purpose: SMS HTTP endpoints

- Single send: DeliveryError surfaces as a 502 error envelope
- Bulk send: always 200, per-recipient outcomes in the body
- Reports which provider the process is running on
"""

from fastapi import APIRouter, Depends, Request

from app.core.logging import get_logger
from app.schemas.sms import (
    BulkSendResponse,
    BulkSMSRequest,
    DeliveryResult,
    ProviderInfo,
    SendSMSRequest,
)
from app.services.sms_service import SMSService
from utils.phone_utils import mask_phone_number

logger = get_logger(__name__)
router = APIRouter(prefix="/sms")


def get_sms_service(request: Request) -> SMSService:
    """SMSService built during application startup."""
    return request.app.state.sms_service


@router.post("/send", response_model=DeliveryResult)
async def send_sms(payload: SendSMSRequest, sms_service: SMSService = Depends(get_sms_service)):
    logger.info(f"📱 SMS send requested for {mask_phone_number(payload.phone_number)}")
    return await sms_service.send(payload.phone_number, payload.message)


@router.post("/bulk", response_model=BulkSendResponse)
async def send_bulk_sms(payload: BulkSMSRequest, sms_service: SMSService = Depends(get_sms_service)):
    logger.info(f"📱 Bulk SMS requested for {len(payload.phone_numbers)} recipients")
    entries = await sms_service.send_bulk(payload.phone_numbers, payload.message)
    return BulkSendResponse.from_entries(entries)


@router.get("/provider", response_model=ProviderInfo)
async def active_provider(sms_service: SMSService = Depends(get_sms_service)):
    return ProviderInfo(provider=sms_service.provider.name)
