from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import CheckInMethod
from .model import Activity, ActivityAttendance, ActivityInput


class ActivityRepository(Protocol):
    def list_all(self) -> Sequence[Activity]:
        """All activities, newest date first, with attendee counts."""

        raise NotImplementedError

    def get_by_id(self, activity_id: int) -> Optional[Activity]:
        raise NotImplementedError

    def create(self, data: ActivityInput) -> int:
        raise NotImplementedError

    def update(self, activity_id: int, data: ActivityInput) -> bool:
        raise NotImplementedError

    def delete(self, activity_id: int) -> bool:
        raise NotImplementedError


class AttendanceRepository(Protocol):
    def create(self, *, activity_id: int, employee_id: int, method: CheckInMethod) -> int:
        """Insert a check-in.

        Raises DuplicateRecordError when (activity_id, employee_id) already exists.
        """

        raise NotImplementedError

    def exists(self, *, activity_id: int, employee_id: int) -> bool:
        raise NotImplementedError

    def list_for_activity(self, activity_id: int) -> Sequence[ActivityAttendance]:
        """Check-ins of one activity, latest first."""

        raise NotImplementedError

    def count_on(self, day: date) -> int:
        raise NotImplementedError

    def count_all(self) -> int:
        raise NotImplementedError
