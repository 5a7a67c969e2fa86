from __future__ import annotations

from datetime import date, timedelta
from typing import Optional, Sequence

from ..core.enums import CheckInMethod
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import Activity, ActivityAttendance, ActivityInput
from .repository import ActivityRepository, AttendanceRepository


def _row_to_activity(r: dict) -> Activity:
    return Activity(
        activity_id=int(r["activity_id"]),
        name=r["name"],
        description=r.get("description"),
        activity_date=r.get("activity_date"),
        start_time=normalize_mysql_time(r.get("start_time")),
        end_time=normalize_mysql_time(r.get("end_time")),
        location=r.get("location") or "",
        attendee_count=int(r.get("attendee_count") or 0),
    )


class MySQLActivityRepository(ActivityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    _SELECT = """
        SELECT a.activity_id, a.name, a.description, a.activity_date, a.start_time, a.end_time, a.location,
               (SELECT COUNT(*) FROM activity_attendance t WHERE t.activity_id = a.activity_id) AS attendee_count
        FROM activities a
    """

    def list_all(self) -> Sequence[Activity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(self._SELECT + " ORDER BY a.activity_date DESC, a.activity_id DESC")
            return [_row_to_activity(r) for r in fetchall(cur)]

    def get_by_id(self, activity_id: int) -> Optional[Activity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(self._SELECT + " WHERE a.activity_id=%s", (activity_id,))
            r = fetchone(cur)
            return _row_to_activity(r) if r else None

    def create(self, data: ActivityInput) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO activities(name, description, activity_date, start_time, end_time, location)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (data.name, data.description, data.activity_date, data.start_time, data.end_time, data.location),
            )
            return int(cur.lastrowid)

    def update(self, activity_id: int, data: ActivityInput) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE activities
                SET name=%s, description=%s, activity_date=%s, start_time=%s, end_time=%s, location=%s
                WHERE activity_id=%s
                """,
                (
                    data.name,
                    data.description,
                    data.activity_date,
                    data.start_time,
                    data.end_time,
                    data.location,
                    activity_id,
                ),
            )
            return cur.rowcount > 0

    def delete(self, activity_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM activities WHERE activity_id=%s", (activity_id,))
            return cur.rowcount > 0


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, activity_id: int, employee_id: int, method: CheckInMethod) -> int:
        # uq_attendance_activity_employee turns a second check-in into DuplicateRecordError
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO activity_attendance(activity_id, employee_id, check_in_method)
                VALUES(%s,%s,%s)
                """,
                (activity_id, employee_id, method.value),
            )
            return int(cur.lastrowid)

    def exists(self, *, activity_id: int, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS found FROM activity_attendance WHERE activity_id=%s AND employee_id=%s",
                (activity_id, employee_id),
            )
            return fetchone(cur) is not None

    def list_for_activity(self, activity_id: int) -> Sequence[ActivityAttendance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT t.attendance_id, t.activity_id, t.employee_id, t.check_in_method, t.check_in_time,
                       e.employee_code, e.first_name, e.last_name, d.name AS dept_name
                FROM activity_attendance t
                JOIN employees e ON e.employee_id = t.employee_id
                LEFT JOIN departments d ON d.dept_id = e.dept_id
                WHERE t.activity_id=%s
                ORDER BY t.check_in_time DESC
                """,
                (activity_id,),
            )
            return [
                ActivityAttendance(
                    attendance_id=int(r["attendance_id"]),
                    activity_id=int(r["activity_id"]),
                    employee_id=int(r["employee_id"]),
                    check_in_method=CheckInMethod(r["check_in_method"]),
                    check_in_time=r["check_in_time"],
                    employee_code=r["employee_code"],
                    employee_name=f"{r['first_name']} {r['last_name']}",
                    dept_name=r.get("dept_name"),
                )
                for r in fetchall(cur)
            ]

    def count_on(self, day: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM activity_attendance WHERE check_in_time >= %s AND check_in_time < %s",
                (day, day + timedelta(days=1)),
            )
            return int(fetchone(cur)["n"])

    def count_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM activity_attendance")
            return int(fetchone(cur)["n"])
