"""Shared validation utilities"""

import re
from typing import Optional

from .dates import is_valid_timezone

CLIENT_SOURCES = ("booksy", "instagram", "referral", "walk-in")
PAYMENT_METHODS = ("cash", "blik", "card")


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate and normalize a phone number.

    Accepts local and international formats (spaces, dashes, dots and
    parentheses are dropped, a leading + is kept).

    Returns:
        Normalized phone number or None for blank input

    Raises:
        ValueError: If the number has too few or too many digits
    """
    if not phone or not phone.strip():
        return None

    phone = phone.strip()
    prefix = "+" if phone.startswith("+") else ""
    digits = re.sub(r"\D", "", phone)

    if len(digits) < 6 or len(digits) > 15:
        raise ValueError("Phone number must contain between 6 and 15 digits")

    return f"{prefix}{digits}"


def validate_client_source(source: Optional[str]) -> Optional[str]:
    if source is None or source == "":
        return None
    source = source.strip().lower()
    if source not in CLIENT_SOURCES:
        raise ValueError(f"Source must be one of: {', '.join(CLIENT_SOURCES)}")
    return source


def validate_payment_method(method: str) -> str:
    method = (method or "").strip().lower()
    if method not in PAYMENT_METHODS:
        raise ValueError(f"Payment method must be one of: {', '.join(PAYMENT_METHODS)}")
    return method


def validate_timezone(tz_name: str) -> str:
    tz_name = (tz_name or "").strip()
    if not tz_name or not is_valid_timezone(tz_name):
        raise ValueError("Unknown timezone")
    return tz_name


def validate_category(category: Optional[str]) -> Optional[str]:
    """Categories are free text; trimmed and lower-cased so duplicates collapse"""
    if category is None:
        return None
    category = category.strip().lower()
    return category or None


def reject_null_fields(model, fields: tuple[str, ...]):
    """Partial updates may clear optional fields, but never the required ones"""
    for name in fields:
        if name in model.model_fields_set and getattr(model, name) is None:
            raise ValueError(f"{name} cannot be null")
    return model
