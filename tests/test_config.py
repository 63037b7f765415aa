import pytest
from pydantic import ValidationError

from app.core.config import Settings, ProviderConfig, validate_settings
from utils.constants import DEFAULT_SMS_API_URL


def make_settings(**overrides):
    values = {
        "TWILIO_ACCOUNT_SID": None,
        "TWILIO_AUTH_TOKEN": None,
        "TWILIO_PHONE_NUMBER": None,
        "SMS_API_KEY": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_no_credentials_gives_empty_provider_config():
    config = ProviderConfig.from_settings(make_settings())
    assert config.twilio is None
    assert config.gateway is None
    assert config.request_timeout == 10.0


def test_partial_twilio_credentials_are_ignored():
    config = ProviderConfig.from_settings(make_settings(TWILIO_ACCOUNT_SID="AC123", TWILIO_AUTH_TOKEN="secret"))
    assert config.twilio is None


def test_empty_strings_count_as_absent():
    config = ProviderConfig.from_settings(make_settings(SMS_API_KEY="", TWILIO_ACCOUNT_SID=""))
    assert config.twilio is None
    assert config.gateway is None


def test_full_credentials_resolve_both_providers():
    config = ProviderConfig.from_settings(make_settings(
        TWILIO_ACCOUNT_SID="AC123",
        TWILIO_AUTH_TOKEN="secret",
        TWILIO_PHONE_NUMBER="+15005550006",
        SMS_API_KEY="key-1",
        SMS_API_URL="https://sms.example.com/send",
    ))
    assert config.twilio.account_sid == "AC123"
    assert config.twilio.phone_number == "+15005550006"
    assert config.gateway.api_key == "key-1"
    assert config.gateway.api_url == "https://sms.example.com/send"


def test_blank_api_url_uses_default():
    settings = make_settings(SMS_API_URL="  ")
    assert settings.SMS_API_URL == DEFAULT_SMS_API_URL


def test_provider_config_is_immutable():
    config = ProviderConfig()
    with pytest.raises(ValidationError):
        config.request_timeout = 1.0


def test_validate_settings_accepts_defaults():
    assert validate_settings(make_settings()) is True


@pytest.mark.parametrize("overrides, expected", [
    ({"SMS_API_URL": "ftp://sms.example.com"}, "SMS_API_URL"),
    ({"SMS_REQUEST_TIMEOUT": 0}, "SMS_REQUEST_TIMEOUT"),
    ({"SMS_BULK_CONCURRENCY": 0}, "SMS_BULK_CONCURRENCY"),
    ({"ENVIRONMENT": "production"}, "SMS provider is required"),
])
def test_validate_settings_rejects_bad_values(overrides, expected):
    with pytest.raises(ValueError, match=expected):
        validate_settings(make_settings(**overrides))


def test_production_with_gateway_key_is_valid():
    assert validate_settings(make_settings(ENVIRONMENT="production", SMS_API_KEY="key-1")) is True
