from __future__ import annotations

import io
from typing import Iterable, Optional

import pandas as pd

from ..activities.model import Activity, ActivityAttendance
from ..fives.model import DepartmentRanking
from ..health.model import HealthRecord, RankedRecord
from ..health.risk import blood_pressure_status, bmi


def _to_xlsx(df: pd.DataFrame, sheet_name: str) -> bytes:
    # Excel writes in memory; nothing touches the disk.
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
    return output.getvalue()


def _frame(rows: list, columns: list) -> pd.DataFrame:
    return pd.DataFrame(rows, columns=columns)


def attendees_workbook(activity: Activity, attendees: Iterable[ActivityAttendance]) -> bytes:
    columns = ["No.", "Employee code", "Name", "Department", "Method", "Checked in at"]
    rows = [
        [
            i,
            a.employee_code,
            a.employee_name,
            a.dept_name or "",
            a.check_in_method.value,
            a.check_in_time.strftime("%Y-%m-%d %H:%M") if a.check_in_time else "",
        ]
        for i, a in enumerate(attendees, start=1)
    ]
    df = _frame(rows, columns)
    df.insert(1, "Activity", activity.name)
    return _to_xlsx(df, "Attendees")


def health_records_workbook(records: Iterable[HealthRecord]) -> bytes:
    columns = [
        "Recorded at",
        "Employee code",
        "Name",
        "Department",
        "Systolic",
        "Diastolic",
        "Heart rate",
        "Blood sugar",
        "Weight (kg)",
        "Height (cm)",
        "BMI",
        "Blood pressure",
        "Notes",
    ]
    rows = [
        [
            r.recorded_at.strftime("%Y-%m-%d %H:%M"),
            r.employee_code,
            r.employee_name,
            r.dept_name or "",
            r.systolic,
            r.diastolic,
            r.heart_rate,
            r.blood_sugar,
            r.weight,
            r.height,
            bmi(r.weight, r.height),
            blood_pressure_status(r.systolic, r.diastolic).value,
            r.notes or "",
        ]
        for r in records
    ]
    return _to_xlsx(_frame(rows, columns), "Health records")


def at_risk_workbook(ranked: Iterable[RankedRecord]) -> bytes:
    columns = ["No.", "Employee code", "Name", "Department", "Recorded at", "Risk score", "Risks"]
    rows = [
        [
            i,
            r.employee_code,
            r.employee_name,
            r.dept_name or "",
            r.recorded_at.strftime("%Y-%m-%d %H:%M"),
            r.score,
            ", ".join(r.labels),
        ]
        for i, r in enumerate(ranked, start=1)
    ]
    return _to_xlsx(_frame(rows, columns), "At risk")


def ranking_workbook(ranking: Iterable[DepartmentRanking], month: Optional[str] = None) -> bytes:
    columns = [
        "Rank",
        "Department",
        "Inspections",
        "Improvement",
        "Cleanliness",
        "Innovation",
        "Total",
        "Latest date",
        "Latest score",
        "Band",
    ]
    rows = [
        [
            d.rank,
            d.department_name,
            d.count,
            d.total_improvement,
            d.total_cleanliness,
            d.total_innovation,
            d.total_score,
            d.latest_date,
            d.latest_score,
            d.band.value,
        ]
        for d in ranking
    ]
    return _to_xlsx(_frame(rows, columns), f"5S {month}" if month else "5S ranking")
