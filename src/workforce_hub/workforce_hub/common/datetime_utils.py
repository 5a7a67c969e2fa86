from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Any, Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_month(value: str) -> tuple[int, int]:
    """Parse a YYYY-MM month key into (year, month)."""
    try:
        parsed = datetime.strptime((value or "").strip(), "%Y-%m")
    except ValueError:
        raise ValidationError("Invalid month (YYYY-MM)")
    return parsed.year, parsed.month


def normalize_month(value: Optional[str]) -> Optional[str]:
    """Canonical YYYY-MM key for a month filter, or None when blank.

    "2024-1" and "2024-01" name the same month.
    """
    if not (value or "").strip():
        return None
    year, month = parse_month(value)
    return f"{year:04d}-{month:02d}"


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a calendar month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def coerce_date(value: Any) -> Optional[date]:
    """Best-effort conversion of a store value to a date.

    Accepts date, datetime and ISO strings (date or timestamp). Returns None
    for anything that cannot be read as a date.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            pass
        try:
            return parse_iso_date(text[:10])
        except ValueError:
            return None
    return None


def now_local() -> datetime:
    """Naive local time; services take an explicit `now` and fall back to this."""
    return datetime.now()
