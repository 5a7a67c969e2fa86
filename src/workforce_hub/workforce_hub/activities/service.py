from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.events import ChangeFeed
from ..common.validators import optional_text, require_non_empty, to_int
from ..core.constants import DEFAULT_UPCOMING_DAYS
from ..core.enums import CheckInMethod, Collection
from ..core.exceptions import DuplicateAttendanceError, DuplicateRecordError, NotFoundError, ValidationError
from ..masterdata.model import Employee
from ..masterdata.repository import EmployeeRepository
from .model import Activity, ActivityAttendance, ActivityInput
from .repository import ActivityRepository, AttendanceRepository
from .window import available_for_check_in, days_until_label, search_activities, upcoming_within_days

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckInResult:
    attendance_id: int
    activity: Activity
    employee: Employee
    method: CheckInMethod
    checked_in_at: datetime


class ActivityService:
    def __init__(
        self,
        activities: ActivityRepository,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        feed: Optional[ChangeFeed] = None,
        upcoming_days: int = DEFAULT_UPCOMING_DAYS,
    ):
        self._activities = activities
        self._attendance = attendance
        self._employees = employees
        self._feed = feed or ChangeFeed()
        self._upcoming_days = int(upcoming_days)

    @staticmethod
    def _parse_time(value: Any, field_name: str):
        v = (value or "").strip() if isinstance(value, str) else value
        if not v:
            return None
        if hasattr(v, "hour"):
            return v
        for fmt in ("%H:%M", "%H:%M:%S"):
            try:
                return datetime.strptime(v, fmt).time()
            except ValueError:
                continue
        raise ValidationError(f"{field_name} is not a valid time (HH:MM)")

    def _clean(self, payload: dict) -> ActivityInput:
        name = require_non_empty(payload.get("name", ""), "Activity name")

        raw_date = payload.get("activity_date") or payload.get("date")
        if isinstance(raw_date, date):
            activity_date = raw_date
        else:
            try:
                activity_date = parse_iso_date((raw_date or "").strip())
            except ValueError:
                raise ValidationError("Activity date is not valid (YYYY-MM-DD)")

        start_time = self._parse_time(payload.get("start_time"), "Start time")
        end_time = self._parse_time(payload.get("end_time"), "End time")
        if start_time and end_time and end_time <= start_time:
            raise ValidationError("End time must be after start time")

        return ActivityInput(
            name=name,
            description=optional_text(payload.get("description")),
            activity_date=activity_date,
            start_time=start_time,
            end_time=end_time,
            location=(payload.get("location") or "").strip(),
        )

    # ----- activities -----

    def list_activities(self, *, search: str = "") -> list[Activity]:
        return search_activities(self._activities.list_all(), search)

    def get_activity(self, activity_id: int) -> Activity:
        activity = self._activities.get_by_id(int(activity_id))
        if not activity:
            raise NotFoundError("Activity not found")
        return activity

    def create_activity(self, payload: dict) -> int:
        data = self._clean(payload)
        activity_id = self._activities.create(data)
        logger.info("Created activity %s (%s)", activity_id, data.name)
        self._feed.publish(Collection.ACTIVITIES)
        return activity_id

    def update_activity(self, activity_id: int, payload: dict) -> None:
        data = self._clean(payload)
        if not self._activities.update(int(activity_id), data):
            raise NotFoundError("Activity not found")
        self._feed.publish(Collection.ACTIVITIES)

    def delete_activity(self, activity_id: int) -> None:
        if not self._activities.delete(int(activity_id)):
            raise NotFoundError("Activity not found")
        logger.info("Deleted activity %s", activity_id)
        self._feed.publish(Collection.ACTIVITIES)

    def upcoming(self, *, now: Optional[datetime] = None, days: Optional[int] = None) -> list[dict]:
        """Notification feed: activities in the next N days with a countdown label."""

        now = now or now_local()
        window = self._upcoming_days if days is None else int(days)
        if window < 0:
            raise ValidationError("Days must be 0 or more")
        return [
            {"activity": a, "when": days_until_label(a.activity_date, now)}
            for a in upcoming_within_days(self._activities.list_all(), window, now)
        ]

    def open_for_check_in(self, *, now: Optional[datetime] = None) -> list[Activity]:
        return available_for_check_in(self._activities.list_all(), now or now_local())

    # ----- attendance -----

    def _resolve_employee(self, *, employee_code: Optional[str], employee_id: Any) -> Employee:
        if employee_code is not None and str(employee_code).strip():
            code = str(employee_code).strip()
            employee = self._employees.get_by_code(code)
            if not employee:
                raise NotFoundError(f"Employee not found: {code}")
            return employee

        if employee_id in (None, ""):
            raise ValidationError("Employee code or employee is required")
        employee = self._employees.get_by_id(to_int(employee_id, "Employee"))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def check_in(
        self,
        activity_id: int,
        *,
        employee_code: Optional[str] = None,
        employee_id: Any = None,
        method: CheckInMethod = CheckInMethod.QR,
        now: Optional[datetime] = None,
    ) -> CheckInResult:
        activity = self.get_activity(activity_id)
        employee = self._resolve_employee(employee_code=employee_code, employee_id=employee_id)

        try:
            attendance_id = self._attendance.create(
                activity_id=activity.activity_id,
                employee_id=employee.employee_id,
                method=method,
            )
        except DuplicateRecordError:
            logger.info("Duplicate check-in: activity=%s employee=%s", activity.activity_id, employee.employee_id)
            raise DuplicateAttendanceError(employee.full_name)

        logger.info(
            "Checked in employee %s to activity %s via %s", employee.employee_id, activity.activity_id, method.value
        )
        self._feed.publish(Collection.ACTIVITY_ATTENDANCE)
        return CheckInResult(
            attendance_id=attendance_id,
            activity=activity,
            employee=employee,
            method=method,
            checked_in_at=now or now_local(),
        )

    def has_attended(self, activity_id: int, employee_id: int) -> bool:
        return self._attendance.exists(activity_id=int(activity_id), employee_id=int(employee_id))

    def attendees(self, activity_id: int) -> Sequence[ActivityAttendance]:
        self.get_activity(activity_id)
        return self._attendance.list_for_activity(int(activity_id))

    def attendance_counts(self, *, today: Optional[date] = None) -> dict:
        today = today or now_local().date()
        return {"today": self._attendance.count_on(today), "total": self._attendance.count_all()}
