from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    STAFF = "staff"


class CheckInMethod(str, Enum):
    """How an employee was checked in to an activity."""

    QR = "QR"
    MANUAL = "Manual"


class RankBand(str, Enum):
    """Display band of a department in the 5S ranking."""

    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


class InspectionGrade(str, Enum):
    """Grade derived from a 5S inspection total (0-30)."""

    EXCELLENT = "excellent"
    GOOD = "good"
    AVERAGE = "average"
    NEEDS_IMPROVEMENT = "needs improvement"


class BloodPressureStatus(str, Enum):
    NORMAL = "normal"
    ELEVATED = "elevated"
    HIGH = "high"


class Collection(str, Enum):
    """Record collections that publish change notifications."""

    BRANCHES = "branches"
    DEPARTMENTS = "departments"
    POSITIONS = "positions"
    EMPLOYEES = "employees"
    ACTIVITIES = "activities"
    ACTIVITY_ATTENDANCE = "activity_attendance"
    HEALTH_RECORDS = "health_records"
    INSPECTIONS = "five_s_inspections"
    USERS = "users"
