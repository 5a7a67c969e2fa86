from __future__ import annotations

import copy
from dataclasses import replace

import pytest

from src.workforce_hub.workforce_hub.core.enums import InspectionGrade, RankBand
from src.workforce_hub.workforce_hub.core.exceptions import OutOfRangeError, ValidationError
from src.workforce_hub.workforce_hub.fives.model import InspectionRecord
from src.workforce_hub.workforce_hub.fives.scoring import (
    aggregate_by_department,
    filter_by_month,
    is_duplicate_inspection,
    month_options,
    rank_band,
    rank_label,
    search_inspections,
    summarize,
    validate_scores,
)


def _ins(inspection_id, department_id, scores=(5, 5, 5), inspector="A", when="2024-06-10", name=None):
    s1, s2, s3 = scores
    return InspectionRecord(
        inspection_id=inspection_id,
        department_id=department_id,
        department_name=name or f"Dept {department_id}",
        inspector_name=inspector,
        inspection_date=when,
        score_improvement=s1,
        score_cleanliness=s2,
        score_innovation=s3,
        total_score=s1 + s2 + s3,
    )


def test_validate_scores_totals():
    scores = validate_scores(7, "8", 9.0)
    assert (scores.improvement, scores.cleanliness, scores.innovation, scores.total) == (7, 8, 9, 24)


@pytest.mark.parametrize("triple", [(11, 5, 5), (-1, 0, 0), (0, 0, 10.5)])
def test_validate_scores_rejects_out_of_range(triple):
    with pytest.raises(ValidationError):
        validate_scores(*triple)


def test_out_of_range_is_its_own_error():
    with pytest.raises(OutOfRangeError):
        validate_scores(11, 5, 5)
    with pytest.raises(OutOfRangeError):
        validate_scores(-1, 0, 0)


@pytest.mark.parametrize("bad", ["abc", "", None, True, float("nan")])
def test_validate_scores_rejects_non_numbers(bad):
    with pytest.raises(ValidationError):
        validate_scores(bad, 5, 5)


def test_rank_label_thresholds():
    assert rank_label(30) == InspectionGrade.EXCELLENT
    assert rank_label(27) == InspectionGrade.EXCELLENT
    assert rank_label(26) == InspectionGrade.GOOD
    assert rank_label(21) == InspectionGrade.GOOD
    assert rank_label(15) == InspectionGrade.AVERAGE
    assert rank_label(14) == InspectionGrade.NEEDS_IMPROVEMENT


def test_duplicate_guard():
    month_records = [_ins(1, 1, inspector="A")]
    assert is_duplicate_inspection(month_records, "A", 1) is True
    assert is_duplicate_inspection(month_records, "A", 2) is False
    assert is_duplicate_inspection(month_records, "B", 1) is False


def test_duplicate_guard_normalizes_names():
    month_records = [_ins(1, 1, inspector="Somchai  Dee")]
    assert is_duplicate_inspection(month_records, "  somchai dee ", 1) is True


def test_duplicate_guard_can_skip_the_record_being_edited():
    month_records = [_ins(1, 1, inspector="A")]
    assert is_duplicate_inspection(month_records, "A", 1, exclude_id=1) is False


def test_rank_band():
    assert [rank_band(r, 6).value for r in range(1, 7)] == ["top", "top", "top", "middle", "bottom", "bottom"]
    assert [rank_band(r, 4) for r in range(1, 5)] == [RankBand.TOP] * 3 + [RankBand.MIDDLE]
    assert rank_band(5, 5) == RankBand.BOTTOM
    assert rank_band(4, 5) == RankBand.BOTTOM


def test_aggregate_sums_counts_and_sorts():
    records = [
        _ins(1, 1, (5, 5, 5), when="2024-06-01"),
        _ins(2, 2, (10, 10, 10), when="2024-06-02"),
        _ins(3, 1, (9, 9, 9), when="2024-06-20"),
        _ins(4, 1, (1, 1, 1), when="2024-06-05"),
    ]

    ranking = aggregate_by_department(records)

    assert [d.department_id for d in ranking] == [1, 2]
    first = ranking[0]
    assert first.total_improvement == 15
    assert first.total_score == 45
    assert first.count == 3
    assert first.latest_date == "2024-06-20"
    assert first.latest_score == 27
    assert (first.rank, first.band) == (1, RankBand.TOP)
    assert ranking[1].rank == 2


def test_aggregate_ties_keep_encounter_order():
    records = [
        _ins(1, 10, (10, 10, 10)),
        _ins(2, 10, (10, 10, 0)),  # dept 10 = 50
        _ins(3, 20, (10, 10, 10)),
        _ins(4, 20, (10, 10, 10)),
        _ins(5, 20, (10, 10, 0)),  # dept 20 = 80
        _ins(6, 30, (10, 10, 10)),
        _ins(7, 30, (10, 10, 10)),
        _ins(8, 30, (10, 10, 0)),  # dept 30 = 80
    ]

    ranking = aggregate_by_department(records)

    assert [(d.department_id, d.total_score) for d in ranking] == [(20, 80), (30, 80), (10, 50)]


def test_aggregate_groups_by_id_not_name():
    records = [_ins(1, 1, name="Office"), _ins(2, 2, name="Office")]
    assert len(aggregate_by_department(records)) == 2


def test_aggregate_is_idempotent_and_leaves_input_alone():
    records = [_ins(1, 1, (3, 4, 5)), _ins(2, 2, (6, 7, 8)), _ins(3, 1, (1, 2, 3))]
    before = copy.deepcopy(records)

    first = aggregate_by_department(records)
    second = aggregate_by_department(records)

    assert first == second
    assert records == before


def test_aggregate_totals_stay_in_range():
    ranking = aggregate_by_department([_ins(1, 1, (10, 10, 10)), _ins(2, 2, (0, 0, 0))])
    assert all(0 <= d.latest_score <= 30 for d in ranking)


def test_aggregate_rejects_malformed_scores():
    with pytest.raises(ValidationError):
        aggregate_by_department([replace(_ins(1, 1), score_improvement="x")])


def test_month_filter_options_and_summary():
    records = [
        _ins(1, 1, (6, 6, 6), when="2024-06-10"),
        _ins(2, 2, (8, 8, 9), when="2024-06-11"),
        _ins(3, 1, (2, 2, 2), when="2024-05-30"),
    ]

    june = filter_by_month(records, "2024-06")
    assert [r.inspection_id for r in june] == [1, 2]
    assert filter_by_month(records, None) == records
    assert month_options(records) == ["2024-06", "2024-05"]

    summary = summarize(june)
    assert summary.inspection_count == 2
    assert summary.avg_improvement == 7.0
    assert summary.avg_innovation == 7.5
    assert summary.avg_total == 21.5
    assert summarize([]) is None


def test_search_inspections():
    records = [_ins(1, 1, inspector="Somchai"), _ins(2, 2, inspector="Malee"), _ins(3, 2, inspector="somsak")]
    assert [r.inspection_id for r in search_inspections(records, "SOM")] == [1, 3]
    assert [r.inspection_id for r in search_inspections(records, "som", department_id=2)] == [3]
