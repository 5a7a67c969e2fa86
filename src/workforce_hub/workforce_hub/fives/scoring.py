from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

from ..common.validators import require_int_in_range
from ..core.constants import (
    FIVE_S_BOTTOM_BAND_MIN_DEPARTMENTS,
    FIVE_S_BOTTOM_BAND_SIZE,
    FIVE_S_MAX_SUBSCORE,
    FIVE_S_MIN_SUBSCORE,
    FIVE_S_TOP_BAND_SIZE,
)
from ..core.enums import InspectionGrade, RankBand
from .model import DepartmentRanking, InspectionRecord, ResultsSummary, ValidatedScores


def validate_scores(improvement: Any, cleanliness: Any, innovation: Any) -> ValidatedScores:
    """Check the three sub-scores are whole numbers in [0, 10] and total them."""

    s1 = require_int_in_range(improvement, "Improvement score", FIVE_S_MIN_SUBSCORE, FIVE_S_MAX_SUBSCORE)
    s2 = require_int_in_range(cleanliness, "Cleanliness score", FIVE_S_MIN_SUBSCORE, FIVE_S_MAX_SUBSCORE)
    s3 = require_int_in_range(innovation, "Innovation score", FIVE_S_MIN_SUBSCORE, FIVE_S_MAX_SUBSCORE)
    return ValidatedScores(improvement=s1, cleanliness=s2, innovation=s3, total=s1 + s2 + s3)


def rank_label(total: int) -> InspectionGrade:
    if total >= 27:
        return InspectionGrade.EXCELLENT
    if total >= 21:
        return InspectionGrade.GOOD
    if total >= 15:
        return InspectionGrade.AVERAGE
    return InspectionGrade.NEEDS_IMPROVEMENT


def normalize_inspector(name: Optional[str]) -> str:
    return " ".join((name or "").split()).casefold()


def is_duplicate_inspection(
    month_records: Iterable[InspectionRecord],
    inspector_name: str,
    department_id: int,
    *,
    exclude_id: Optional[int] = None,
) -> bool:
    """True when the inspector already scored this department in the given records.

    Callers pass the records of the inspection month only. Names compare
    after trimming, collapsing inner whitespace and case folding.
    """

    wanted = normalize_inspector(inspector_name)
    for r in month_records:
        if exclude_id is not None and r.inspection_id == exclude_id:
            continue
        if r.department_id == department_id and normalize_inspector(r.inspector_name) == wanted:
            return True
    return False


def rank_band(rank: int, count: int) -> RankBand:
    if rank <= FIVE_S_TOP_BAND_SIZE:
        return RankBand.TOP
    if count >= FIVE_S_BOTTOM_BAND_MIN_DEPARTMENTS and rank > count - FIVE_S_BOTTOM_BAND_SIZE:
        return RankBand.BOTTOM
    return RankBand.MIDDLE


def aggregate_by_department(records: Iterable[InspectionRecord]) -> list[DepartmentRanking]:
    """Sum sub-scores per department and rank departments by summed total.

    Departments are keyed by id; the display name of the first record seen is
    carried along. Equal totals keep the order in which departments first
    appear. Inputs are never modified.
    """

    groups: dict[int, dict] = {}
    for r in records:
        scores = validate_scores(r.score_improvement, r.score_cleanliness, r.score_innovation)
        when = r.inspection_date or ""
        g = groups.get(r.department_id)
        if g is None:
            groups[r.department_id] = {
                "department_name": r.department_name,
                "improvement": scores.improvement,
                "cleanliness": scores.cleanliness,
                "innovation": scores.innovation,
                "total": scores.total,
                "count": 1,
                "latest_date": when,
                "latest_score": scores.total,
            }
            continue
        g["improvement"] += scores.improvement
        g["cleanliness"] += scores.cleanliness
        g["innovation"] += scores.innovation
        g["total"] += scores.total
        g["count"] += 1
        if when > g["latest_date"]:
            g["latest_date"] = when
            g["latest_score"] = scores.total

    ordered = sorted(groups.items(), key=lambda item: item[1]["total"], reverse=True)
    n = len(ordered)
    return [
        DepartmentRanking(
            department_id=dept_id,
            department_name=g["department_name"],
            total_improvement=g["improvement"],
            total_cleanliness=g["cleanliness"],
            total_innovation=g["innovation"],
            total_score=g["total"],
            count=g["count"],
            latest_date=g["latest_date"],
            latest_score=g["latest_score"],
            rank=i,
            band=rank_band(i, n),
        )
        for i, (dept_id, g) in enumerate(ordered, start=1)
    ]


def filter_by_month(records: Iterable[InspectionRecord], month: Optional[str]) -> list[InspectionRecord]:
    """Records whose date falls in the YYYY-MM month (all records when month is empty)."""

    if not month:
        return list(records)
    return [r for r in records if (r.inspection_date or "")[:7] == month]


def month_options(records: Iterable[InspectionRecord]) -> list[str]:
    """Distinct YYYY-MM keys, newest first."""

    return sorted({r.inspection_date[:7] for r in records if r.inspection_date}, reverse=True)


def summarize(records: Sequence[InspectionRecord]) -> Optional[ResultsSummary]:
    if not records:
        return None
    n = len(records)
    return ResultsSummary(
        inspection_count=n,
        avg_improvement=round(sum(r.score_improvement for r in records) / n, 1),
        avg_cleanliness=round(sum(r.score_cleanliness for r in records) / n, 1),
        avg_innovation=round(sum(r.score_innovation for r in records) / n, 1),
        avg_total=round(sum(r.total_score for r in records) / n, 1),
    )


def search_inspections(
    records: Iterable[InspectionRecord], term: str = "", department_id: Optional[int] = None
) -> list[InspectionRecord]:
    needle = (term or "").strip().lower()
    return [
        r
        for r in records
        if (department_id is None or r.department_id == department_id)
        and (not needle or needle in (r.inspector_name or "").lower())
    ]
