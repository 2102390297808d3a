from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required.")
    return str(value).strip()


def require_id(value: Any, field_name: str) -> int:
    """Accept a positive integer id given as int or numeric string."""
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} is invalid.")
    raw = require_non_empty(value, field_name)
    try:
        parsed = int(raw)
    except ValueError:
        raise ValidationError(f"{field_name} is invalid.") from None
    if parsed <= 0:
        raise ValidationError(f"{field_name} is invalid.")
    return parsed


def require_positive_int(value: Any, field_name: str) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number.") from None
    if parsed <= 0:
        raise ValidationError(f"{field_name} must be greater than zero.")
    return parsed
