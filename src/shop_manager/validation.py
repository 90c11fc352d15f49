"""Field checks and parsers used by the add/modify prompts.

Parsers take the raw (already stripped) line typed by the operator and either
return the converted value or raise ValidationError carrying the message the
prompt shows before asking again.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from .errors import ValidationError

PHONE_RE = re.compile(r"^\d+$", re.ASCII)
EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

# SQLite INTEGER is a signed 64-bit value
INT_MIN = -(2**63)
INT_MAX = 2**63 - 1


def is_valid_phone(phone: str) -> bool:
    return bool(PHONE_RE.match(phone or ""))


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email or ""))


def round_price(value: float, places: int = 2) -> float:
    """Round half away from zero (19.995 -> 20.0), unlike Python's round()."""
    quantum = Decimal(1).scaleb(-places)
    # str() keeps the decimal literal the operator typed instead of the binary float
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def non_empty(label: str):
    def _parse(raw: str) -> str:
        if not raw:
            raise ValidationError(f"{label} cannot be empty. Please enter a valid {label.lower()}.")
        return raw

    return _parse


def parse_price(raw: str) -> float:
    try:
        value = Decimal(raw)
    except (InvalidOperation, ValueError):
        raise ValidationError("Invalid price. Please enter a valid number.") from None
    if not value.is_finite() or value < 0:
        raise ValidationError("Invalid price. Please enter a non-negative number.")
    # float() overflows to inf and quantize() runs out of precision for huge amounts
    if not math.isfinite(float(value)):
        raise ValidationError("Invalid price. The amount is too large.")
    try:
        return round_price(float(value))
    except InvalidOperation:
        raise ValidationError("Invalid price. The amount is too large.") from None


def parse_int(label: str, *, minimum: int | None = None):
    def _parse(raw: str) -> int:
        if not raw:
            raise ValidationError(f"{label} cannot be empty. Please enter a valid {label.lower()}.")
        try:
            value = int(raw)
        except ValueError:
            raise ValidationError(f"Invalid {label.lower()}. Please enter a valid integer.") from None
        if not INT_MIN <= value <= INT_MAX:
            raise ValidationError(f"Invalid {label.lower()}. The number is too large.")
        if minimum is not None and value < minimum:
            raise ValidationError(f"Invalid {label.lower()}. It must be at least {minimum}.")
        return value

    return _parse


def parse_phone(raw: str) -> str:
    if not is_valid_phone(raw):
        raise ValidationError("Phone number must contain only digits. Please enter a valid phone number.")
    return raw


def parse_email(raw: str) -> str:
    if not raw or not is_valid_email(raw):
        raise ValidationError("Invalid email format or empty email. Please try again.")
    return raw
