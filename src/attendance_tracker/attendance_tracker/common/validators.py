from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def parse_id(value: Any, field_name: str) -> int:
    """Parse a well-formed entity id (positive integer, or its decimal string)."""

    if isinstance(value, bool):
        raise ValidationError(f"{field_name} is not a valid id")
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        # isdigit alone lets through superscripts and non-ASCII digits
        parsed = int(value.strip())
    else:
        raise ValidationError(f"{field_name} is not a valid id")
    if parsed <= 0:
        raise ValidationError(f"{field_name} is not a valid id")
    return parsed


def require_id(value: Any, field_name: str) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field_name} is required")
    return parse_id(value, field_name)


def optional_id(value: Any, field_name: str) -> Optional[int]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_id(value, field_name)
