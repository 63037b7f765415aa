from pydantic import BaseModel
from typing import Optional, Any

class ErrorResponse(BaseModel):
    """
    Standard error response structure.

    For DELIVERY_FAILED, details carries the provider name and its response payload.
    """
    error: str
    code: str
    details: Optional[Any] = None
