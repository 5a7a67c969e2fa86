from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class HealthRecord:
    """One vitals reading of an employee.

    employee_name / dept_name / employee_code are display fields resolved by
    the record store.
    """

    record_id: int
    employee_id: int
    systolic: int
    diastolic: int
    heart_rate: Optional[int]
    weight: float
    height: float
    recorded_at: datetime
    blood_sugar: Optional[int] = None
    notes: Optional[str] = None
    employee_name: str = ""
    employee_code: str = ""
    dept_id: Optional[int] = None
    dept_name: Optional[str] = None


@dataclass(frozen=True)
class HealthRecordInput:
    employee_id: int
    systolic: int
    diastolic: int
    heart_rate: int
    weight: float
    height: float
    recorded_at: datetime
    blood_sugar: Optional[int] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class RiskAssessment:
    score: int
    labels: tuple[str, ...] = ()


@dataclass(frozen=True)
class RankedRecord:
    record_id: int
    employee_id: int
    employee_name: str
    employee_code: str
    dept_name: Optional[str]
    recorded_at: datetime
    score: int
    labels: tuple[str, ...]
