import asyncio
import base64
import json
import logging
import time
from urllib.parse import parse_qs

import httpx
import pytest
import respx

from app.core.config import GatewayCredentials, ProviderConfig, TwilioCredentials
from app.core.exceptions import DeliveryError
from app.services.providers import (
    GatewaySMSProvider,
    SimulatedSMSProvider,
    TwilioSMSProvider,
    select_provider,
)
from utils.constants import DEFAULT_SMS_API_URL, SMSProviderName

TWILIO = TwilioCredentials(account_sid="AC123", auth_token="secret", phone_number="+15005550006")
GATEWAY = GatewayCredentials(api_key="key-1", api_url="https://sms.example.com/send")
TWILIO_URL = "https://api.twilio.com/2010-04-01/Accounts/AC123/Messages.json"


# ============================================================
# Selection
# ============================================================

def test_select_simulated_without_credentials():
    provider = select_provider(ProviderConfig())
    assert isinstance(provider, SimulatedSMSProvider)


def test_select_gateway_with_only_api_key():
    provider = select_provider(ProviderConfig(gateway=GATEWAY))
    assert isinstance(provider, GatewaySMSProvider)
    assert provider.name == SMSProviderName.GATEWAY


def test_select_twilio_takes_priority_over_gateway():
    provider = select_provider(ProviderConfig(twilio=TWILIO, gateway=GATEWAY))
    assert isinstance(provider, TwilioSMSProvider)


def test_selected_provider_gets_configured_timeout():
    provider = select_provider(ProviderConfig(gateway=GATEWAY, request_timeout=3.5))
    assert provider._timeout == 3.5


def test_gateway_defaults_to_public_endpoint():
    provider = GatewaySMSProvider(GatewayCredentials(api_key="key-1"))
    assert provider.api_url == DEFAULT_SMS_API_URL


# ============================================================
# Simulated
# ============================================================

@pytest.mark.asyncio
async def test_simulated_always_succeeds_without_network():
    with respx.mock(assert_all_called=False) as respx_mock:
        result = await SimulatedSMSProvider().send("+255712345678", "hello")

    assert respx_mock.calls.call_count == 0
    assert result.success is True
    assert result.simulated is True
    assert result.provider == SMSProviderName.SIMULATED
    assert result.to == "+255712345678"
    assert result.response is None


@pytest.mark.asyncio
async def test_simulated_logs_masked_number(caplog):
    with caplog.at_level(logging.INFO, logger="smsdispatch"):
        await SimulatedSMSProvider().send("+255712345678", "hello")

    assert "[SIMULATED SMS] To: ****5678, Message: hello" in caplog.text
    assert "+255712345678" not in caplog.text
    assert all(getattr(record, "to", "****5678") == "****5678" for record in caplog.records)


# ============================================================
# Twilio
# ============================================================

@pytest.mark.asyncio
@respx.mock
async def test_twilio_posts_form_with_basic_auth():
    route = respx.post(TWILIO_URL).mock(
        return_value=httpx.Response(201, json={"sid": "SM1", "status": "queued"})
    )

    result = await TwilioSMSProvider(TWILIO).send("+255712345678", "Match starts at 18:00")

    assert route.called
    request = route.calls.last.request
    form = parse_qs(request.content.decode())
    assert form == {"To": ["+255712345678"], "From": ["+15005550006"], "Body": ["Match starts at 18:00"]}
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    expected_auth = base64.b64encode(b"AC123:secret").decode()
    assert request.headers["Authorization"] == f"Basic {expected_auth}"

    assert result.success is True
    assert result.simulated is False
    assert result.provider == SMSProviderName.TWILIO
    assert result.response == {"sid": "SM1", "status": "queued"}


@pytest.mark.asyncio
@respx.mock
async def test_twilio_error_carries_provider_payload():
    respx.post(TWILIO_URL).mock(
        return_value=httpx.Response(400, json={"code": 21211, "message": "Invalid 'To' Phone Number"})
    )

    with pytest.raises(DeliveryError) as exc_info:
        await TwilioSMSProvider(TWILIO).send("+255", "hi")

    error = exc_info.value
    assert error.provider == "twilio"
    assert error.status_code == 502
    assert error.code == "DELIVERY_FAILED"
    assert error.provider_response == {"code": 21211, "message": "Invalid 'To' Phone Number"}
    assert "400" in error.message


# ============================================================
# Gateway
# ============================================================

@pytest.mark.asyncio
@respx.mock
async def test_gateway_posts_json_through_shared_client():
    route = respx.post(GATEWAY.api_url).mock(return_value=httpx.Response(200, json={"status": "ok"}))

    async with httpx.AsyncClient() as client:
        result = await GatewaySMSProvider(GATEWAY, client=client).send("+255712345678", "hello")

    assert json.loads(route.calls.last.request.content) == {
        "apiKey": "key-1", "to": "+255712345678", "message": "hello"
    }
    assert result.provider == SMSProviderName.GATEWAY
    assert result.response == {"status": "ok"}


@pytest.mark.asyncio
@respx.mock
async def test_gateway_non_json_error_body_is_kept_as_text():
    respx.post(GATEWAY.api_url).mock(return_value=httpx.Response(503, text="upstream down"))

    with pytest.raises(DeliveryError) as exc_info:
        await GatewaySMSProvider(GATEWAY).send("+255712345678", "hello")

    assert exc_info.value.provider_response == "upstream down"


@pytest.mark.asyncio
@respx.mock
async def test_timeout_becomes_delivery_error():
    respx.post(GATEWAY.api_url).mock(side_effect=httpx.ReadTimeout("timed out"))

    with pytest.raises(DeliveryError, match="timed out") as exc_info:
        await GatewaySMSProvider(GATEWAY, timeout=10.0).send("+255712345678", "hello")

    assert exc_info.value.provider == "gateway"
    assert exc_info.value.provider_response is None


@pytest.mark.asyncio
@respx.mock
async def test_connection_error_becomes_delivery_error():
    respx.post(TWILIO_URL).mock(side_effect=httpx.ConnectError("connection refused"))

    with pytest.raises(DeliveryError, match="request failed"):
        await TwilioSMSProvider(TWILIO).send("+255712345678", "hello")


class SlowBody(httpx.AsyncByteStream):
    """Response body that trickles out one byte at a time."""

    def __init__(self, body: bytes, delay: float):
        self.body = body
        self.delay = delay

    async def __aiter__(self):
        for byte in self.body:
            await asyncio.sleep(self.delay)
            yield bytes([byte])


class SlowTransport(httpx.AsyncBaseTransport):
    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, headers={"Content-Type": "application/json"}, stream=SlowBody(b'{"ok":1}', 0.3))


@pytest.mark.asyncio
async def test_slow_response_is_cut_off_at_total_timeout():
    # Every byte arrives well within the timeout, the whole body does not
    async with httpx.AsyncClient(transport=SlowTransport()) as client:
        provider = GatewaySMSProvider(GATEWAY, client=client, timeout=0.5)

        started = time.monotonic()
        with pytest.raises(DeliveryError, match="timed out") as exc_info:
            await provider.send("+255712345678", "hello")
        elapsed = time.monotonic() - started

    assert elapsed < 1.5
    assert exc_info.value.provider == "gateway"
