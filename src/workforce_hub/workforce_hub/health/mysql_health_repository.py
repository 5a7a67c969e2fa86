from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_int
from .model import HealthRecord, HealthRecordInput
from .repository import HealthRecordRepository


def _row_to_record(r: dict) -> HealthRecord:
    first = r.get("first_name") or ""
    last = r.get("last_name") or ""
    return HealthRecord(
        record_id=int(r["record_id"]),
        employee_id=int(r["employee_id"]),
        systolic=int(r["blood_pressure_systolic"]),
        diastolic=int(r["blood_pressure_diastolic"]),
        heart_rate=optional_int(r.get("heart_rate")),
        blood_sugar=optional_int(r.get("blood_sugar")),
        weight=float(r["weight"]),
        height=float(r["height"]),
        recorded_at=r["recorded_at"],
        notes=r.get("notes"),
        employee_name=f"{first} {last}".strip(),
        employee_code=r.get("employee_code") or "",
        dept_id=optional_int(r.get("dept_id")),
        dept_name=r.get("dept_name"),
    )


class MySQLHealthRecordRepository(HealthRecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    _SELECT = """
        SELECT h.record_id, h.employee_id, h.blood_pressure_systolic, h.blood_pressure_diastolic,
               h.heart_rate, h.blood_sugar, h.weight, h.height, h.notes, h.recorded_at,
               e.employee_code, e.first_name, e.last_name, e.dept_id, d.name AS dept_name
        FROM health_records h
        JOIN employees e ON e.employee_id = h.employee_id
        LEFT JOIN departments d ON d.dept_id = e.dept_id
    """

    def list_all(self) -> Sequence[HealthRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(self._SELECT + " ORDER BY h.recorded_at DESC, h.record_id DESC")
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_since(self, since: datetime) -> Sequence[HealthRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(self._SELECT + " WHERE h.recorded_at >= %s ORDER BY h.recorded_at ASC, h.record_id ASC", (since,))
            return [_row_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, record_id: int) -> Optional[HealthRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(self._SELECT + " WHERE h.record_id=%s", (record_id,))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    @staticmethod
    def _params(data: HealthRecordInput) -> tuple:
        return (
            data.employee_id,
            data.systolic,
            data.diastolic,
            data.heart_rate,
            data.blood_sugar,
            data.weight,
            data.height,
            data.notes,
            data.recorded_at,
        )

    def create(self, data: HealthRecordInput) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO health_records(
                    employee_id, blood_pressure_systolic, blood_pressure_diastolic, heart_rate,
                    blood_sugar, weight, height, notes, recorded_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                self._params(data),
            )
            return int(cur.lastrowid)

    def update(self, record_id: int, data: HealthRecordInput) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE health_records
                SET employee_id=%s, blood_pressure_systolic=%s, blood_pressure_diastolic=%s, heart_rate=%s,
                    blood_sugar=%s, weight=%s, height=%s, notes=%s, recorded_at=%s
                WHERE record_id=%s
                """,
                self._params(data) + (record_id,),
            )
            return cur.rowcount > 0

    def delete(self, record_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM health_records WHERE record_id=%s", (record_id,))
            return cur.rowcount > 0
