from typing import Optional, Any

class SMSDispatchError(Exception):
    """
    Base exception for the SMS dispatcher.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

class ExternalServiceError(SMSDispatchError):
    """
    Raised when an external service (e.g., an SMS provider) fails.
    """
    def __init__(self, message: str = "External service error", code: str = "EXTERNAL_SERVICE_ERROR", details: Optional[Any] = None):
        super().__init__(message, code=code, status_code=502, details=details)

class DeliveryError(ExternalServiceError):
    """
    Raised when a provider call errors, times out or returns a non-2xx status.

    provider_response holds whatever payload the provider sent back, if any.
    """
    def __init__(self, message: str = "SMS delivery failed", provider: Optional[str] = None, provider_response: Optional[Any] = None):
        self.provider = provider
        self.provider_response = provider_response
        super().__init__(
            message,
            code="DELIVERY_FAILED",
            details={"provider": provider, "provider_response": provider_response},
        )
