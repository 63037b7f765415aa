"""
utils/phone_utils.py

Purpose: Phone number handling

- Normalizes free-form numbers into +255XXXXXXXXX form
- Masks numbers for log output
"""

import re
from typing import Optional

from utils.constants import COUNTRY_CODE, TRUNK_PREFIX, MOBILE_PREFIX


def normalize_phone_number(phone: Optional[str]) -> str:
    """
    Converts a phone number into canonical international form.

    Examples:
        "0712345678"       -> "+255712345678"
        "712345678"        -> "+255712345678"
        "+255 712 345 678" -> "+255712345678"

    Numbers with no recognized prefix keep their digits as-is. This never
    raises; malformed input just yields a malformed "+digits" string and the
    provider is left to reject it.

    Args:
        phone: Raw phone number as typed by a user or stored upstream

    Returns:
        "+" followed by digits only
    """
    digits = re.sub(r"\D", "", phone or "")

    if not digits.startswith(COUNTRY_CODE):
        if digits.startswith(TRUNK_PREFIX):
            digits = COUNTRY_CODE + digits[len(TRUNK_PREFIX):]
        elif digits.startswith(MOBILE_PREFIX):
            digits = COUNTRY_CODE + digits

    return f"+{digits}"


def mask_phone_number(phone: Optional[str]) -> str:
    """Keeps only the last four digits, e.g. "+255712345678" -> "****5678"."""
    if not phone or len(phone) < 4:
        return "****"
    return f"****{phone[-4:]}"
