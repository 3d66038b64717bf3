"""Format checks for phone numbers and email addresses."""

from __future__ import annotations

import re

# E.164: '+', a non-zero leading digit, then 1-14 more digits
PHONE_PATTERN = re.compile(r"\+[1-9]\d{1,14}", re.ASCII)
EMAIL_PATTERN = re.compile(r"[\w.-]+@([\w-]+\.)+[\w-]{2,4}")


def is_valid_phone_number(phone_number: str | None) -> bool:
    if phone_number is None or not phone_number.strip():
        return False
    return PHONE_PATTERN.fullmatch(phone_number) is not None


def is_valid_email_address(address: str | None) -> bool:
    if address is None or not address.strip():
        return False
    return EMAIL_PATTERN.fullmatch(address) is not None
