from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import RankBand


@dataclass(frozen=True)
class InspectionRecord:
    """One 5S inspection of a department.

    inspection_date is an ISO date string (YYYY-MM-DD) so that month
    filtering and latest-date tracking work on plain string comparison.
    """

    inspection_id: int
    department_id: int
    department_name: str
    inspector_name: str
    inspection_date: str
    score_improvement: int
    score_cleanliness: int
    score_innovation: int
    total_score: int
    notes: Optional[str] = None


@dataclass(frozen=True)
class ValidatedScores:
    improvement: int
    cleanliness: int
    innovation: int
    total: int


@dataclass(frozen=True)
class InspectionInput:
    department_id: int
    inspector_name: str
    inspection_date: date
    scores: ValidatedScores
    notes: Optional[str] = None


@dataclass(frozen=True)
class DepartmentRanking:
    department_id: int
    department_name: str
    total_improvement: int
    total_cleanliness: int
    total_innovation: int
    total_score: int
    count: int
    latest_date: str
    latest_score: int
    rank: int
    band: RankBand


@dataclass(frozen=True)
class ResultsSummary:
    """Overall averages of a filtered inspection list (one decimal)."""

    inspection_count: int
    avg_improvement: float
    avg_cleanliness: float
    avg_innovation: float
    avg_total: float


@dataclass(frozen=True)
class FiveSResults:
    month: Optional[str]
    ranking: list[DepartmentRanking] = field(default_factory=list)
    summary: Optional[ResultsSummary] = None
    inspections: list[InspectionRecord] = field(default_factory=list)
    month_options: list[str] = field(default_factory=list)
