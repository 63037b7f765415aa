"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes provider credentials and dispatch limits
- Validates configuration on startup
- Freezes provider credentials into an immutable ProviderConfig
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings
from typing import Optional, Literal

from utils.constants import (
    DEFAULT_SMS_API_URL,
    DEFAULT_SMS_BULK_CONCURRENCY,
    DEFAULT_SMS_REQUEST_TIMEOUT,
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Validates all required configs on startup.
    """

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # Twilio (primary carrier)
    TWILIO_ACCOUNT_SID: Optional[str] = Field(
        default=None,
        description="Twilio account SID"
    )
    TWILIO_AUTH_TOKEN: Optional[str] = Field(
        default=None,
        description="Twilio auth token"
    )
    TWILIO_PHONE_NUMBER: Optional[str] = Field(
        default=None,
        description="Sender number registered with Twilio"
    )

    # Generic SMS gateway
    SMS_API_KEY: Optional[str] = Field(
        default=None,
        description="API key for the generic SMS gateway"
    )
    SMS_API_URL: str = Field(
        default=DEFAULT_SMS_API_URL,
        description="Generic SMS gateway send endpoint"
    )

    # Dispatch
    SMS_REQUEST_TIMEOUT: float = Field(
        default=DEFAULT_SMS_REQUEST_TIMEOUT,
        description="Per-request timeout in seconds for provider calls"
    )
    SMS_BULK_CONCURRENCY: int = Field(
        default=DEFAULT_SMS_BULK_CONCURRENCY,
        description="Maximum in-flight sends during a bulk dispatch"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    API_PREFIX: str = Field(
        default="/api/v1",
        description="API route prefix"
    )
    CORS_ORIGINS: list = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    @field_validator("SMS_API_URL", mode="before")
    @classmethod
    def default_blank_api_url(cls, v):
        """An empty SMS_API_URL falls back to the default gateway."""
        if v is None or not str(v).strip():
            return DEFAULT_SMS_API_URL
        return str(v).strip()

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    class Config:
        env_file = ".env"
        case_sensitive = True
        env_file_encoding = "utf-8"
        extra = "ignore"


class TwilioCredentials(BaseModel):
    model_config = ConfigDict(frozen=True)

    account_sid: str
    auth_token: str
    phone_number: str


class GatewayCredentials(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_key: str
    api_url: str = DEFAULT_SMS_API_URL


class ProviderConfig(BaseModel):
    """
    Provider credentials resolved once at startup.

    Read-only for the lifetime of the process. Build it with from_settings()
    in the application, or construct it directly in tests.
    """
    model_config = ConfigDict(frozen=True)

    twilio: Optional[TwilioCredentials] = None
    gateway: Optional[GatewayCredentials] = None
    request_timeout: float = DEFAULT_SMS_REQUEST_TIMEOUT

    @classmethod
    def from_settings(cls, source: Settings) -> "ProviderConfig":
        twilio = None
        if source.TWILIO_ACCOUNT_SID and source.TWILIO_AUTH_TOKEN and source.TWILIO_PHONE_NUMBER:
            twilio = TwilioCredentials(
                account_sid=source.TWILIO_ACCOUNT_SID,
                auth_token=source.TWILIO_AUTH_TOKEN,
                phone_number=source.TWILIO_PHONE_NUMBER,
            )

        gateway = None
        if source.SMS_API_KEY:
            gateway = GatewayCredentials(
                api_key=source.SMS_API_KEY,
                api_url=source.SMS_API_URL,
            )

        return cls(
            twilio=twilio,
            gateway=gateway,
            request_timeout=source.SMS_REQUEST_TIMEOUT,
        )


# Global settings instance
settings = Settings()


def validate_settings(source: Optional[Settings] = None):
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    source = source or settings
    errors = []

    if not source.SMS_API_URL.startswith(("http://", "https://")):
        errors.append("SMS_API_URL must be an http(s) URL")

    if source.SMS_REQUEST_TIMEOUT <= 0:
        errors.append("SMS_REQUEST_TIMEOUT must be positive")

    if source.SMS_BULK_CONCURRENCY < 1:
        errors.append("SMS_BULK_CONCURRENCY must be at least 1")

    # Production must not silently simulate deliveries
    if source.is_production:
        provider_config = ProviderConfig.from_settings(source)
        if provider_config.twilio is None and provider_config.gateway is None:
            errors.append(
                "An SMS provider is required in production "
                "(TWILIO_ACCOUNT_SID/TWILIO_AUTH_TOKEN/TWILIO_PHONE_NUMBER or SMS_API_KEY)"
            )

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
