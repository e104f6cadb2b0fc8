from __future__ import annotations

from enum import Enum
from typing import Any, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def _require_text(value: Any, field_name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text", field=field_name)
    return value.strip()


def require_non_empty(value: Any, field_name: str) -> str:
    v = _require_text(value, field_name)
    if not v:
        raise ValidationError(f"{field_name} is required", field=field_name)
    return v


def require_length(value: Any, field_name: str, min_len: int, max_len: int) -> str:
    v = _require_text(value, field_name)
    if len(v) < min_len or len(v) > max_len:
        raise ValidationError(
            f"{field_name} must be {min_len}-{max_len} characters", field=field_name
        )
    return v


def require_choice(value: Any, enum_cls: Type[E], field_name: str) -> E:
    """Accept an enum member or its value (case-insensitive for strings)."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        for member in enum_cls:
            if member.value.lower() == value.strip().lower():
                return member
    raise ValidationError(f"Invalid {field_name}", field=field_name)
