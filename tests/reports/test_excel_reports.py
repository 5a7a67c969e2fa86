from __future__ import annotations

import io
from datetime import date, datetime

import openpyxl

from src.workforce_hub.workforce_hub.activities.model import Activity, ActivityAttendance
from src.workforce_hub.workforce_hub.core.enums import CheckInMethod
from src.workforce_hub.workforce_hub.fives.model import InspectionRecord
from src.workforce_hub.workforce_hub.fives.scoring import aggregate_by_department
from src.workforce_hub.workforce_hub.health.model import HealthRecord
from src.workforce_hub.workforce_hub.health.risk import rank_at_risk
from src.workforce_hub.workforce_hub.reports.excel import (
    at_risk_workbook,
    attendees_workbook,
    health_records_workbook,
    ranking_workbook,
)


def _rows(content: bytes) -> list[tuple]:
    wb = openpyxl.load_workbook(io.BytesIO(content))
    return list(wb.active.iter_rows(values_only=True))


def _health(record_id: int, systolic: int) -> HealthRecord:
    return HealthRecord(
        record_id=record_id,
        employee_id=record_id,
        systolic=systolic,
        diastolic=80,
        heart_rate=75,
        weight=60.0,
        height=160.0,
        recorded_at=datetime(2024, 6, 1, 8, 0),
        employee_name=f"Employee {record_id}",
        employee_code=f"EMP{record_id:03d}",
    )


def test_attendees_workbook():
    activity = Activity(activity_id=1, name="Safety Day / 2024", activity_date=date(2024, 6, 3))
    attendees = [
        ActivityAttendance(
            attendance_id=1,
            activity_id=1,
            employee_id=1,
            check_in_method=CheckInMethod.QR,
            check_in_time=datetime(2024, 6, 3, 8, 15),
            employee_code="EMP001",
            employee_name="Anan Srisuk",
        )
    ]

    rows = _rows(attendees_workbook(activity, attendees))

    assert rows[0][:3] == ("No.", "Activity", "Employee code")
    assert rows[1][1] == "Safety Day / 2024"
    assert rows[1][5] == "QR"


def test_health_and_at_risk_workbooks():
    records = [_health(1, 120), _health(2, 185)]

    health_rows = _rows(health_records_workbook(records))
    assert len(health_rows) == 3
    assert health_rows[2][11] == "high"

    risk_rows = _rows(at_risk_workbook(rank_at_risk(records)))
    assert len(risk_rows) == 2
    assert risk_rows[1][1] == "EMP002"
    assert risk_rows[1][5] == 50


def test_ranking_workbook():
    records = [
        InspectionRecord(
            inspection_id=1,
            department_id=1,
            department_name="Production",
            inspector_name="A",
            inspection_date="2024-06-10",
            score_improvement=9,
            score_cleanliness=8,
            score_innovation=7,
            total_score=24,
        )
    ]

    rows = _rows(ranking_workbook(aggregate_by_department(records), "2024-06"))

    assert rows[1][:2] == (1, "Production")
    assert rows[1][-1] == "top"


def test_empty_exports_still_have_headers():
    assert _rows(at_risk_workbook([]))[0][0] == "No."
