from __future__ import annotations

from datetime import date, datetime

from src.workforce_hub.workforce_hub.activities.model import Activity
from src.workforce_hub.workforce_hub.activities.window import (
    available_for_check_in,
    days_until_label,
    search_activities,
    upcoming_within_days,
)


def _act(activity_id: int, when, name: str = "Activity") -> Activity:
    return Activity(activity_id=activity_id, name=name, activity_date=when)


def test_window_is_inclusive_on_both_ends_and_ignores_time_of_day():
    now = datetime(2024, 6, 1, 23, 59)
    activities = [
        _act(1, date(2024, 6, 8)),
        _act(2, date(2024, 6, 9)),
        _act(3, date(2024, 5, 31)),
        _act(4, date(2024, 6, 1)),
    ]

    out = upcoming_within_days(activities, 7, now)

    assert [a.activity_id for a in out] == [4, 1]


def test_window_sorts_ascending_and_keeps_order_for_same_day():
    now = datetime(2024, 6, 1, 8, 0)
    activities = [
        _act(1, date(2024, 6, 5)),
        _act(2, date(2024, 6, 2)),
        _act(3, date(2024, 6, 5)),
    ]

    assert [a.activity_id for a in upcoming_within_days(activities, 7, now)] == [2, 1, 3]


def test_window_skips_unreadable_dates_without_raising():
    now = datetime(2024, 6, 1)
    activities = [_act(1, "not a date"), _act(2, None), _act(3, "2024-06-04"), _act(4, "")]

    assert [a.activity_id for a in upcoming_within_days(activities, 7, now)] == [3]


def test_window_accepts_iso_timestamps():
    now = datetime(2024, 6, 1)
    out = upcoming_within_days([_act(1, "2024-06-03T10:00:00Z")], 7, now)
    assert [a.activity_id for a in out] == [1]


def test_available_for_check_in_keeps_today_and_later(fixed_now):
    activities = [_act(1, date(2024, 5, 31)), _act(2, date(2024, 6, 1)), _act(3, date(2024, 12, 1))]
    assert [a.activity_id for a in available_for_check_in(activities, fixed_now)] == [2, 3]


def test_days_until_label(fixed_now):
    assert days_until_label(date(2024, 6, 1), fixed_now) == "today"
    assert days_until_label(date(2024, 6, 2), fixed_now) == "tomorrow"
    assert days_until_label(date(2024, 6, 5), fixed_now) == "in 4 days"
    assert days_until_label(date(2024, 5, 30), fixed_now) == "2 days ago"
    assert days_until_label("garbage", fixed_now) == "-"


def test_search_matches_name_or_location():
    activities = [
        Activity(activity_id=1, name="Safety Day", activity_date=date(2024, 6, 3), location="Hall A"),
        Activity(activity_id=2, name="Sports Day", activity_date=date(2024, 6, 4), location="Field"),
    ]
    assert [a.activity_id for a in search_activities(activities, "hall")] == [1]
    assert [a.activity_id for a in search_activities(activities, " DAY ")] == [1, 2]
    assert len(search_activities(activities, "")) == 2
