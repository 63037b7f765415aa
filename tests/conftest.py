"""Shared fixtures: a FastAPI TestClient whose SMSService can be swapped per test."""
import pytest
from fastapi.testclient import TestClient

from app.api.sms import get_sms_service
from app.main import app
from app.services.providers import SMSProvider, SimulatedSMSProvider
from app.services.sms_service import SMSService
from tests.fakes import FakeProvider


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def use_provider():
    """Route API requests through an SMSService wrapping the given provider."""
    def _use(provider: SMSProvider) -> SMSService:
        service = SMSService(provider)
        app.dependency_overrides[get_sms_service] = lambda: service
        return service
    return _use


@pytest.fixture
def simulated_service(use_provider):
    return use_provider(SimulatedSMSProvider())
