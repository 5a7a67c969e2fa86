from __future__ import annotations

import math
from numbers import Integral, Real
from typing import Any, Optional

from ..core.exceptions import OutOfRangeError, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def optional_text(value: Optional[str]) -> Optional[str]:
    return (value or "").strip() or None


def to_int(value: Any, field_name: str) -> int:
    """Strictly read an integer from form/JSON input.

    Integral strings ("7", " 7 ") and integral floats (7.0) are accepted.
    Booleans, fractions, NaN and non-numeric text raise ValidationError.
    """

    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name} must be a whole number")
    if isinstance(value, Integral):
        return int(value)
    if isinstance(value, Real):
        if math.isnan(value) or math.isinf(value) or int(value) != value:
            raise ValidationError(f"{field_name} must be a whole number")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            raise ValidationError(f"{field_name} must be a whole number")
    raise ValidationError(f"{field_name} must be a whole number")


def to_float(value: Any, field_name: str) -> float:
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if math.isnan(number) or math.isinf(number):
        raise ValidationError(f"{field_name} must be a number")
    return number


def require_int_in_range(value: Any, field_name: str, low: int, high: int) -> int:
    number = to_int(value, field_name)
    if number < low or number > high:
        raise OutOfRangeError(f"{field_name} must be between {low} and {high}")
    return number


def optional_int_in_range(value: Any, field_name: str, low: int, high: int) -> Optional[int]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return require_int_in_range(value, field_name, low, high)


def require_float_in_range(value: Any, field_name: str, low: float, high: float) -> float:
    number = to_float(value, field_name)
    if number < low or number > high:
        raise OutOfRangeError(f"{field_name} must be between {low:g} and {high:g}")
    return number
