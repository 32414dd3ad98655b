from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import ValidationError
from .datetime_utils import is_valid_time_format, parse_iso_date


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_time_of_day(value: Optional[str], field_name: str) -> Optional[str]:
    """Accept ``None``/empty (meaning "clear") or a valid ``H:mm`` string."""
    if value is None or value == "":
        return None
    if not isinstance(value, str) or not is_valid_time_format(value.strip()):
        raise ValidationError(f"{field_name} must be in HH:mm format")
    return value.strip()


def require_iso_date(value: Optional[str], field_name: str) -> date:
    raw = require_non_empty(value, field_name)
    try:
        return parse_iso_date(raw[:10])
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid date") from None


def require_positive_number(value, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None
    if number <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return number
