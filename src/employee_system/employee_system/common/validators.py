from __future__ import annotations

from typing import Any, Mapping, Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def text_field(value: Any, field_name: str) -> str:
    """Stripped text from a JSON value; ``None`` reads as empty, other non-strings are rejected."""

    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    return value.strip()


def require_fields(payload: Mapping[str, Any], *names: str, message: Optional[str] = None) -> None:
    """All-or-nothing presence check, mirroring the API's 'please provide ...' errors."""

    missing = [n for n in names if payload.get(n) in (None, "")]
    if missing:
        raise ValidationError(message or f"Please provide all required fields: {', '.join(names)}")


def parse_date_field(value: str, field_name: str):
    try:
        return parse_iso_date(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def parse_optional_int(value: Any, field_name: str) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
