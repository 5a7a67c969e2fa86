"""Date-window helpers for activity notifications.

Everything here is a pure function of its inputs; "now" is always passed in.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import coerce_date
from .model import Activity


def _today(now: datetime | date) -> date:
    return now.date() if isinstance(now, datetime) else now


def upcoming_within_days(activities: Iterable[Activity], days: int, now: datetime | date) -> list[Activity]:
    """Activities dated from today up to today + days (inclusive), earliest first.

    Time of day is ignored on both sides. Activities whose date cannot be read
    are left out.
    """

    today = _today(now)
    last_day = today + timedelta(days=int(days))

    dated: list[tuple[date, Activity]] = []
    for activity in activities:
        activity_date = coerce_date(activity.activity_date)
        if activity_date is None:
            continue
        if today <= activity_date <= last_day:
            dated.append((activity_date, activity))

    dated.sort(key=lambda pair: pair[0])
    return [activity for _, activity in dated]


def available_for_check_in(activities: Iterable[Activity], now: datetime | date) -> list[Activity]:
    """Activities dated today or later (the scan screen's pick list)."""

    today = _today(now)
    out = []
    for activity in activities:
        activity_date = coerce_date(activity.activity_date)
        if activity_date is not None and activity_date >= today:
            out.append(activity)
    return out


def days_until(activity_date, now: datetime | date) -> Optional[int]:
    target = coerce_date(activity_date)
    if target is None:
        return None
    return (target - _today(now)).days


def days_until_label(activity_date, now: datetime | date) -> str:
    diff = days_until(activity_date, now)
    if diff is None:
        return "-"
    if diff == 0:
        return "today"
    if diff == 1:
        return "tomorrow"
    if diff < 0:
        return f"{-diff} days ago"
    return f"in {diff} days"


def search_activities(activities: Sequence[Activity], term: str) -> list[Activity]:
    needle = (term or "").strip().lower()
    if not needle:
        return list(activities)
    return [a for a in activities if needle in a.name.lower() or needle in (a.location or "").lower()]
