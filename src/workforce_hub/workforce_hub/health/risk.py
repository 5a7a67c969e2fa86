from __future__ import annotations

import math
from numbers import Real
from typing import Any, Iterable, Optional

from ..core.constants import DEFAULT_AT_RISK_LIMIT, DEFAULT_AT_RISK_MIN_SCORE
from ..core.enums import BloodPressureStatus
from ..core.exceptions import ValidationError
from .model import HealthRecord, RankedRecord, RiskAssessment

CRITICAL_BP = "critical high blood pressure"
HIGH_BP = "high blood pressure"
SLOW_PULSE = "abnormally slow pulse"
FAST_PULSE = "abnormally fast pulse"
VERY_HIGH_SUGAR = "very high blood sugar"
HIGH_SUGAR = "high blood sugar"


def _vital(value: Any, field_name: str) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, Real) or math.isnan(value):
        raise ValidationError(f"{field_name} must be a number")
    return float(value)


def score_risk(record: HealthRecord) -> RiskAssessment:
    """Additive risk score from blood pressure, pulse and blood sugar.

    Within one vital only the highest tier fires. Absent values add nothing.
    """

    systolic = _vital(record.systolic, "Systolic pressure")
    diastolic = _vital(record.diastolic, "Diastolic pressure")
    heart_rate = _vital(record.heart_rate, "Heart rate")
    blood_sugar = _vital(record.blood_sugar, "Blood sugar")

    score = 0
    labels: list[str] = []

    sys_v = systolic if systolic is not None else 0.0
    dia_v = diastolic if diastolic is not None else 0.0
    if sys_v >= 180 or dia_v >= 120:
        score += 50
        labels.append(CRITICAL_BP)
    elif sys_v >= 140 or dia_v >= 90:
        score += 30
        labels.append(HIGH_BP)

    if heart_rate is not None:
        if heart_rate < 50:
            score += 25
            labels.append(SLOW_PULSE)
        elif heart_rate > 120:
            score += 25
            labels.append(FAST_PULSE)

    if blood_sugar is not None:
        if blood_sugar >= 200:
            score += 40
            labels.append(VERY_HIGH_SUGAR)
        elif blood_sugar >= 126:
            score += 20
            labels.append(HIGH_SUGAR)

    return RiskAssessment(score=score, labels=tuple(labels))


def rank_at_risk(
    records: Iterable[HealthRecord],
    min_score: int = DEFAULT_AT_RISK_MIN_SCORE,
    limit: int = DEFAULT_AT_RISK_LIMIT,
) -> list[RankedRecord]:
    """Records scoring at least min_score, highest first, at most limit of them.

    Equal scores keep their input order.
    """

    ranked = []
    for r in records:
        risk = score_risk(r)
        if risk.score < min_score:
            continue
        ranked.append(
            RankedRecord(
                record_id=r.record_id,
                employee_id=r.employee_id,
                employee_name=r.employee_name,
                employee_code=r.employee_code,
                dept_name=r.dept_name,
                recorded_at=r.recorded_at,
                score=risk.score,
                labels=risk.labels,
            )
        )
    ranked.sort(key=lambda x: x.score, reverse=True)
    return ranked[: max(int(limit), 0)]


def blood_pressure_status(systolic: int, diastolic: int) -> BloodPressureStatus:
    if systolic >= 140 or diastolic >= 90:
        return BloodPressureStatus.HIGH
    if systolic >= 120 or diastolic >= 80:
        return BloodPressureStatus.ELEVATED
    return BloodPressureStatus.NORMAL


def bmi(weight: float, height: float) -> Optional[float]:
    """Body-mass index (kg / m^2) rounded to one decimal; None without a height."""

    if not height or not weight:
        return None
    meters = height / 100.0
    return round(weight / (meters * meters), 1)
