from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional, Union

from ..core.enums import CheckInMethod


@dataclass(frozen=True)
class Activity:
    """Domain entity: company activity employees check in to.

    activity_date is whatever the record store hands back (normally a date);
    unreadable values are tolerated by the window helpers.
    """

    activity_id: int
    name: str
    activity_date: Union[date, str, None]
    location: str = ""
    description: Optional[str] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    attendee_count: int = 0


@dataclass(frozen=True)
class ActivityInput:
    name: str
    description: Optional[str]
    activity_date: date
    start_time: Optional[time]
    end_time: Optional[time]
    location: str


@dataclass(frozen=True)
class ActivityAttendance:
    """One check-in; unique per (activity_id, employee_id) in the store."""

    attendance_id: int
    activity_id: int
    employee_id: int
    check_in_method: CheckInMethod
    check_in_time: datetime
    employee_code: str = ""
    employee_name: str = ""
    dept_name: Optional[str] = None
