from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_in_range(value: int, field_name: str, low: int, high: int) -> int:
    if value is None or not (low <= int(value) <= high):
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return int(value)


def require_positive(value: int, field_name: str) -> int:
    if value is None or int(value) <= 0:
        raise ValidationError(f"{field_name} must be a positive number")
    return int(value)


def require_date(value, field_name: str) -> date:
    """Accept a calendar date; a datetime is cut down to its date."""
    if isinstance(value, datetime):
        return value.date()
    if not isinstance(value, date):
        raise ValidationError(f"{field_name} must be a date")
    return value


def parse_enum(enum_cls: Type[E], value, field_name: str) -> E:
    """Coerce a raw value into ``enum_cls`` or raise ValidationError.

    Strings are matched as given, then upper-cased, then lower-cased.
    """
    if isinstance(value, enum_cls):
        return value

    candidates = [value]
    if isinstance(value, str):
        stripped = value.strip()
        candidates += [stripped, stripped.upper(), stripped.lower()]

    for candidate in candidates:
        try:
            return enum_cls(candidate)
        except ValueError:
            continue

    allowed = ", ".join(m.value for m in enum_cls)
    raise ValidationError(f"{field_name} must be one of: {allowed}")
