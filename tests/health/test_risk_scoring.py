from __future__ import annotations

from datetime import datetime

import pytest

from src.workforce_hub.workforce_hub.core.enums import BloodPressureStatus
from src.workforce_hub.workforce_hub.core.exceptions import ValidationError
from src.workforce_hub.workforce_hub.health.model import HealthRecord
from src.workforce_hub.workforce_hub.health.risk import blood_pressure_status, bmi, rank_at_risk, score_risk


def _rec(record_id=1, systolic=120, diastolic=75, heart_rate=72, blood_sugar=None, name="") -> HealthRecord:
    return HealthRecord(
        record_id=record_id,
        employee_id=record_id,
        systolic=systolic,
        diastolic=diastolic,
        heart_rate=heart_rate,
        blood_sugar=blood_sugar,
        weight=65.0,
        height=170.0,
        recorded_at=datetime(2024, 6, 1, 8, 0),
        employee_name=name or f"Employee {record_id}",
    )


def test_normal_vitals_score_zero():
    risk = score_risk(_rec())
    assert risk.score == 0
    assert risk.labels == ()


def test_blood_pressure_tiers_replace_each_other():
    assert score_risk(_rec(systolic=139)).score == 0
    assert score_risk(_rec(systolic=140)).score == 30
    assert score_risk(_rec(systolic=179)).score == 30
    critical = score_risk(_rec(systolic=180))
    assert critical.score == 50
    assert critical.labels == ("critical high blood pressure",)


def test_diastolic_alone_triggers_tiers():
    assert score_risk(_rec(diastolic=90)).labels == ("high blood pressure",)
    assert score_risk(_rec(diastolic=120)).score == 50


def test_pulse_and_sugar_add_up():
    risk = score_risk(_rec(systolic=150, heart_rate=130, blood_sugar=210))
    assert risk.score == 30 + 25 + 40
    assert risk.labels == ("high blood pressure", "abnormally fast pulse", "very high blood sugar")


def test_slow_pulse_and_high_sugar():
    risk = score_risk(_rec(heart_rate=45, blood_sugar=130))
    assert risk.score == 45
    assert risk.labels == ("abnormally slow pulse", "high blood sugar")


def test_missing_optional_values_add_nothing():
    assert score_risk(_rec(heart_rate=None, blood_sugar=None)).score == 0


def test_non_numeric_vitals_raise():
    with pytest.raises(ValidationError):
        score_risk(_rec(systolic="high"))
    with pytest.raises(ValidationError):
        score_risk(_rec(blood_sugar=float("nan")))


def test_rank_at_risk_filters_and_limits():
    # thirteen records score 20 or more, two score 0
    vitals = [
        dict(systolic=180, blood_sugar=210),  # 90
        dict(systolic=180, heart_rate=45, blood_sugar=None),  # 75
        dict(systolic=150, blood_sugar=210),  # 70
        dict(systolic=180, blood_sugar=130),  # 70
        dict(systolic=180),  # 50
        dict(systolic=150, heart_rate=45),  # 55
        dict(blood_sugar=210),  # 40
        dict(systolic=150),  # 30
        dict(heart_rate=130),  # 25
        dict(blood_sugar=130),  # 20
        dict(blood_sugar=130, heart_rate=72),  # 20
        dict(systolic=150, heart_rate=130, blood_sugar=130),  # 75
        dict(systolic=150, blood_sugar=130),  # 50
        dict(),  # 0
        dict(),  # 0
    ]
    records = [_rec(record_id=i + 1, **v) for i, v in enumerate(vitals)]

    ranked = rank_at_risk(records, 20, 10)

    assert len(ranked) == 10
    assert all(r.score >= 20 for r in ranked)
    scores = [r.score for r in ranked]
    assert scores == sorted(scores, reverse=True)
    assert scores[0] == 90


def test_rank_at_risk_excludes_scores_below_minimum():
    records = [_rec(record_id=1, heart_rate=130), _rec(record_id=2), _rec(record_id=3, blood_sugar=130)]
    ranked = rank_at_risk(records, min_score=20, limit=10)
    assert [r.record_id for r in ranked] == [1, 3]


def test_rank_at_risk_keeps_input_order_on_ties():
    records = [_rec(record_id=i, systolic=150) for i in (5, 3, 9)]
    assert [r.record_id for r in rank_at_risk(records)] == [5, 3, 9]


def test_rank_at_risk_carries_display_fields():
    ranked = rank_at_risk([_rec(record_id=7, systolic=190, name="Anan Srisuk")])
    assert ranked[0].employee_name == "Anan Srisuk"
    assert ranked[0].labels == ("critical high blood pressure",)


def test_blood_pressure_status():
    assert blood_pressure_status(118, 78) == BloodPressureStatus.NORMAL
    assert blood_pressure_status(120, 70) == BloodPressureStatus.ELEVATED
    assert blood_pressure_status(110, 85) == BloodPressureStatus.ELEVATED
    assert blood_pressure_status(140, 70) == BloodPressureStatus.HIGH


def test_bmi_rounds_to_one_decimal():
    assert bmi(70.0, 175.0) == 22.9
    assert bmi(70.0, 0) is None
