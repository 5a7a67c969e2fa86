from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import InspectionInput, InspectionRecord
from .repository import InspectionRepository


def _iso(value) -> str:
    if value is None:
        return ""
    return value.isoformat() if hasattr(value, "isoformat") else str(value)


def _row_to_inspection(r: dict) -> InspectionRecord:
    return InspectionRecord(
        inspection_id=int(r["inspection_id"]),
        department_id=int(r["department_id"]),
        department_name=r.get("department_name") or "",
        inspector_name=r["inspector_name"],
        inspection_date=_iso(r.get("inspection_date")),
        score_improvement=int(r["score_improvement"]),
        score_cleanliness=int(r["score_cleanliness"]),
        score_innovation=int(r["score_innovation"]),
        total_score=int(r["total_score"]),
        notes=r.get("notes"),
    )


class MySQLInspectionRepository(InspectionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    _SELECT = """
        SELECT i.inspection_id, i.department_id, d.name AS department_name, i.inspector_name,
               i.inspection_date, i.score_improvement, i.score_cleanliness, i.score_innovation,
               i.total_score, i.notes
        FROM five_s_inspections i
        JOIN departments d ON d.dept_id = i.department_id
    """

    def list_all(self) -> Sequence[InspectionRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(self._SELECT + " ORDER BY i.inspection_date DESC, i.inspection_id DESC")
            return [_row_to_inspection(r) for r in fetchall(cur)]

    def list_between(self, first: date, last: date) -> Sequence[InspectionRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                self._SELECT + " WHERE i.inspection_date BETWEEN %s AND %s ORDER BY i.inspection_date, i.inspection_id",
                (first, last),
            )
            return [_row_to_inspection(r) for r in fetchall(cur)]

    def get_by_id(self, inspection_id: int) -> Optional[InspectionRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(self._SELECT + " WHERE i.inspection_id=%s", (inspection_id,))
            r = fetchone(cur)
            return _row_to_inspection(r) if r else None

    @staticmethod
    def _params(data: InspectionInput) -> tuple:
        s = data.scores
        return (
            data.department_id,
            data.inspector_name,
            data.inspection_date,
            s.improvement,
            s.cleanliness,
            s.innovation,
            s.total,
            data.notes,
        )

    def create(self, data: InspectionInput) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO five_s_inspections(
                    department_id, inspector_name, inspection_date,
                    score_improvement, score_cleanliness, score_innovation, total_score, notes
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                self._params(data),
            )
            return int(cur.lastrowid)

    def update(self, inspection_id: int, data: InspectionInput) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE five_s_inspections
                SET department_id=%s, inspector_name=%s, inspection_date=%s,
                    score_improvement=%s, score_cleanliness=%s, score_innovation=%s, total_score=%s, notes=%s
                WHERE inspection_id=%s
                """,
                self._params(data) + (inspection_id,),
            )
            return cur.rowcount > 0

    def delete(self, inspection_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM five_s_inspections WHERE inspection_id=%s", (inspection_id,))
            return cur.rowcount > 0
