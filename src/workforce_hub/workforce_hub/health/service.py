from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.events import ChangeFeed
from ..common.validators import (
    optional_int_in_range,
    optional_text,
    require_float_in_range,
    require_int_in_range,
    to_int,
)
from ..core.constants import (
    BLOOD_SUGAR_RANGE,
    DEFAULT_AT_RISK_LIMIT,
    DEFAULT_AT_RISK_MIN_SCORE,
    DEFAULT_HEALTH_DASHBOARD_DAYS,
    DIASTOLIC_RANGE,
    HEART_RATE_RANGE,
    HEIGHT_RANGE,
    SYSTOLIC_RANGE,
    WEIGHT_RANGE,
)
from ..core.enums import BloodPressureStatus, Collection
from ..core.exceptions import NotFoundError, ValidationError
from ..masterdata.repository import EmployeeRepository
from .model import HealthRecord, HealthRecordInput, RankedRecord
from .repository import HealthRecordRepository
from .risk import blood_pressure_status, rank_at_risk

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DailyAverage:
    day: date
    count: int
    systolic: int
    diastolic: int
    heart_rate: int
    blood_sugar: int


@dataclass(frozen=True)
class HealthDashboard:
    days: int
    record_count: int
    avg_systolic: int
    avg_diastolic: int
    avg_heart_rate: int
    avg_blood_sugar: int
    bp_status: dict = field(default_factory=dict)
    daily: list[DailyAverage] = field(default_factory=list)
    at_risk: list[RankedRecord] = field(default_factory=list)


def _round(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _mean(values: list) -> int:
    return _round(sum(values) / len(values)) if values else 0


def search_records(records: Iterable[HealthRecord], term: str = "", dept_id: Optional[int] = None) -> list[HealthRecord]:
    """Substring match on employee name or code, optionally within one department."""

    needle = (term or "").strip().lower()
    out = []
    for r in records:
        if dept_id is not None and r.dept_id != dept_id:
            continue
        if needle and needle not in r.employee_name.lower() and needle not in r.employee_code.lower():
            continue
        out.append(r)
    return out


def summarize_vitals(records: Sequence[HealthRecord]) -> tuple[int, int, int, int]:
    """Average systolic, diastolic, heart rate and blood sugar, rounded.

    Blood sugar is averaged over the readings that have one.
    """

    vitals = [r for r in records if r.systolic or r.heart_rate]
    sugars = [r.blood_sugar for r in records if r.blood_sugar]
    return (
        _mean([r.systolic or 0 for r in vitals]),
        _mean([r.diastolic or 0 for r in vitals]),
        _mean([r.heart_rate or 0 for r in vitals]),
        _mean(sugars),
    )


def daily_averages(records: Iterable[HealthRecord]) -> list[DailyAverage]:
    by_day: dict[date, list[HealthRecord]] = {}
    for r in records:
        by_day.setdefault(r.recorded_at.date(), []).append(r)

    out = []
    for day in sorted(by_day):
        rows = by_day[day]
        out.append(
            DailyAverage(
                day=day,
                count=len(rows),
                systolic=_mean([r.systolic for r in rows]),
                diastolic=_mean([r.diastolic for r in rows]),
                heart_rate=_mean([r.heart_rate for r in rows if r.heart_rate is not None]),
                blood_sugar=_mean([r.blood_sugar for r in rows if r.blood_sugar]),
            )
        )
    return out


def status_distribution(records: Iterable[HealthRecord]) -> dict:
    counts = {s.value: 0 for s in BloodPressureStatus}
    for r in records:
        counts[blood_pressure_status(r.systolic or 0, r.diastolic or 0).value] += 1
    return counts


class HealthService:
    def __init__(
        self,
        records: HealthRecordRepository,
        employees: EmployeeRepository,
        *,
        feed: Optional[ChangeFeed] = None,
        dashboard_days: int = DEFAULT_HEALTH_DASHBOARD_DAYS,
        at_risk_min_score: int = DEFAULT_AT_RISK_MIN_SCORE,
        at_risk_limit: int = DEFAULT_AT_RISK_LIMIT,
    ):
        self._records = records
        self._employees = employees
        self._feed = feed or ChangeFeed()
        self._dashboard_days = int(dashboard_days)
        self._at_risk_min_score = int(at_risk_min_score)
        self._at_risk_limit = int(at_risk_limit)

    @staticmethod
    def _parse_recorded_at(value: Any, now: datetime) -> datetime:
        if value in (None, ""):
            return now
        if isinstance(value, datetime):
            recorded_at = value
        elif isinstance(value, date):
            recorded_at = datetime.combine(value, now.time())
        else:
            text = str(value).strip()
            try:
                recorded_at = datetime.fromisoformat(text)
            except ValueError:
                raise ValidationError("Recorded time is not valid (YYYY-MM-DD HH:MM)")
            if len(text) == 10:
                recorded_at = datetime.combine(recorded_at.date(), now.time())
        if recorded_at.tzinfo is not None:
            recorded_at = recorded_at.replace(tzinfo=None)
        if recorded_at > now:
            raise ValidationError("Recorded time cannot be in the future")
        return recorded_at

    def _clean(self, payload: dict, now: datetime) -> HealthRecordInput:
        if payload.get("employee_id") in (None, ""):
            raise ValidationError("Employee is required")
        employee_id = to_int(payload.get("employee_id"), "Employee")
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")

        return HealthRecordInput(
            employee_id=employee_id,
            systolic=require_int_in_range(payload.get("systolic"), "Systolic pressure", *SYSTOLIC_RANGE),
            diastolic=require_int_in_range(payload.get("diastolic"), "Diastolic pressure", *DIASTOLIC_RANGE),
            heart_rate=require_int_in_range(payload.get("heart_rate"), "Heart rate", *HEART_RATE_RANGE),
            blood_sugar=optional_int_in_range(payload.get("blood_sugar"), "Blood sugar", *BLOOD_SUGAR_RANGE),
            weight=require_float_in_range(payload.get("weight"), "Weight", *WEIGHT_RANGE),
            height=require_float_in_range(payload.get("height"), "Height", *HEIGHT_RANGE),
            recorded_at=self._parse_recorded_at(payload.get("recorded_at"), now),
            notes=optional_text(payload.get("notes")),
        )

    # ----- records -----

    def list_records(self, *, search: str = "", dept_id: Optional[int] = None) -> list[HealthRecord]:
        return search_records(self._records.list_all(), search, dept_id)

    def get_record(self, record_id: int) -> HealthRecord:
        record = self._records.get_by_id(int(record_id))
        if not record:
            raise NotFoundError("Health record not found")
        return record

    def record(self, payload: dict, *, now: Optional[datetime] = None) -> int:
        data = self._clean(payload, now or now_local())
        record_id = self._records.create(data)
        logger.info("Recorded vitals %s for employee %s", record_id, data.employee_id)
        self._feed.publish(Collection.HEALTH_RECORDS)
        return record_id

    def update_record(self, record_id: int, payload: dict, *, now: Optional[datetime] = None) -> None:
        data = self._clean(payload, now or now_local())
        if not self._records.update(int(record_id), data):
            raise NotFoundError("Health record not found")
        self._feed.publish(Collection.HEALTH_RECORDS)

    def delete_record(self, record_id: int) -> None:
        if not self._records.delete(int(record_id)):
            raise NotFoundError("Health record not found")
        logger.info("Deleted health record %s", record_id)
        self._feed.publish(Collection.HEALTH_RECORDS)

    # ----- dashboard -----

    def window_records(self, *, days: Optional[int] = None, now: Optional[datetime] = None) -> list[HealthRecord]:
        window = self._dashboard_days if days is None else int(days)
        if window < 1:
            raise ValidationError("Days must be 1 or more")
        since = (now or now_local()) - timedelta(days=window)
        return list(self._records.list_since(since))

    def at_risk(self, *, days: Optional[int] = None, now: Optional[datetime] = None) -> list[RankedRecord]:
        return rank_at_risk(self.window_records(days=days, now=now), self._at_risk_min_score, self._at_risk_limit)

    def dashboard(self, *, days: Optional[int] = None, now: Optional[datetime] = None) -> HealthDashboard:
        window = self._dashboard_days if days is None else int(days)
        records = self.window_records(days=window, now=now)
        avg_sys, avg_dia, avg_hr, avg_sugar = summarize_vitals(records)
        return HealthDashboard(
            days=window,
            record_count=len(records),
            avg_systolic=avg_sys,
            avg_diastolic=avg_dia,
            avg_heart_rate=avg_hr,
            avg_blood_sugar=avg_sugar,
            bp_status=status_distribution(records),
            daily=daily_averages(records),
            at_risk=rank_at_risk(records, self._at_risk_min_score, self._at_risk_limit),
        )

    def count_records(self) -> int:
        return len(self._records.list_all())
