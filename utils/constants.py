"""
utils/constants.py

Purpose: Centralized static values

- Phone numbering rules for the target country
- Provider endpoints and defaults
- Reusable enums

(Prevents hardcoding across the codebase)
"""

from enum import Enum


# ============================================================
# PHONE NUMBERING (Tanzania)
# ============================================================

COUNTRY_CODE = "255"
TRUNK_PREFIX = "0"
MOBILE_PREFIX = "7"


# ============================================================
# PROVIDERS
# ============================================================

class SMSProviderName(str, Enum):
    """Delivery backends a process can run on."""
    TWILIO = "twilio"
    GATEWAY = "gateway"
    SIMULATED = "simulated"


TWILIO_API_BASE_URL = "https://api.twilio.com/2010-04-01/Accounts"
DEFAULT_SMS_API_URL = "https://api.smsgateway.tz/v1/send"

# Seconds
DEFAULT_SMS_REQUEST_TIMEOUT = 10.0

DEFAULT_SMS_BULK_CONCURRENCY = 5
