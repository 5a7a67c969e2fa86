from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

from ..common.datetime_utils import month_bounds, now_local, normalize_month, parse_iso_date
from ..common.events import ChangeFeed
from ..common.validators import optional_text, require_non_empty, to_int
from ..core.enums import Collection, Role
from ..core.exceptions import AuthorizationError, DuplicateInspectionError, NotFoundError, ValidationError
from ..masterdata.model import Department
from ..masterdata.repository import DepartmentRepository
from .model import DepartmentRanking, FiveSResults, InspectionInput, InspectionRecord
from .repository import InspectionRepository
from .scoring import (
    aggregate_by_department,
    filter_by_month,
    is_duplicate_inspection,
    month_options,
    search_inspections,
    summarize,
    validate_scores,
)

logger = logging.getLogger(__name__)


class FiveSService:
    """Use case: submit 5S inspections and rank departments by their scores."""

    def __init__(
        self,
        inspections: InspectionRepository,
        departments: DepartmentRepository,
        *,
        feed: Optional[ChangeFeed] = None,
    ):
        self._inspections = inspections
        self._departments = departments
        self._feed = feed or ChangeFeed()

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

    def _department(self, value: Any) -> Department:
        if value in (None, ""):
            raise ValidationError("Department is required")
        department = self._departments.get_by_id(to_int(value, "Department"))
        if not department:
            raise NotFoundError("Department not found")
        return department

    @staticmethod
    def _inspection_date(value: Any, today: date) -> date:
        if value in (None, ""):
            return today
        if isinstance(value, date):
            return value
        try:
            return parse_iso_date(str(value).strip())
        except ValueError:
            raise ValidationError("Inspection date is not valid (YYYY-MM-DD)")

    def _clean(self, payload: dict, *, exclude_id: Optional[int] = None) -> InspectionInput:
        # Scores first: a bad score must be reported before any lookup.
        scores = validate_scores(
            payload.get("score_improvement"),
            payload.get("score_cleanliness"),
            payload.get("score_innovation"),
        )
        inspector_name = require_non_empty(payload.get("inspector_name") or "", "Inspector name")
        department = self._department(payload.get("department_id"))

        inspector_dept = payload.get("inspector_department_id")
        if inspector_dept not in (None, "") and to_int(inspector_dept, "Inspector department") == department.dept_id:
            raise ValidationError("Inspectors cannot score their own department")

        inspection_date = self._inspection_date(payload.get("inspection_date"), now_local().date())
        first, last = month_bounds(inspection_date.year, inspection_date.month)
        month_records = self._inspections.list_between(first, last)
        if is_duplicate_inspection(month_records, inspector_name, department.dept_id, exclude_id=exclude_id):
            logger.info("Duplicate 5S inspection: %s -> department %s", inspector_name, department.dept_id)
            raise DuplicateInspectionError(inspector_name, department.name)

        return InspectionInput(
            department_id=department.dept_id,
            inspector_name=inspector_name,
            inspection_date=inspection_date,
            scores=scores,
            notes=optional_text(payload.get("notes")),
        )

    def submit(self, payload: dict) -> int:
        data = self._clean(payload)
        inspection_id = self._inspections.create(data)
        logger.info(
            "Recorded 5S inspection %s: department %s total %s", inspection_id, data.department_id, data.scores.total
        )
        self._feed.publish(Collection.INSPECTIONS)
        return inspection_id

    def update(self, *, current_role: Role, inspection_id: int, payload: dict) -> None:
        self._require_admin(current_role)
        self.get(inspection_id)
        data = self._clean(payload, exclude_id=int(inspection_id))
        if not self._inspections.update(int(inspection_id), data):
            raise NotFoundError("Inspection not found")
        self._feed.publish(Collection.INSPECTIONS)

    def delete(self, *, current_role: Role, inspection_id: int) -> None:
        self._require_admin(current_role)
        if not self._inspections.delete(int(inspection_id)):
            raise NotFoundError("Inspection not found")
        logger.info("Deleted 5S inspection %s", inspection_id)
        self._feed.publish(Collection.INSPECTIONS)

    def get(self, inspection_id: int) -> InspectionRecord:
        record = self._inspections.get_by_id(int(inspection_id))
        if not record:
            raise NotFoundError("Inspection not found")
        return record

    def ranking(self, month: Optional[str] = None) -> list[DepartmentRanking]:
        month = normalize_month(month)
        return aggregate_by_department(filter_by_month(self._inspections.list_all(), month))

    def results(
        self,
        *,
        month: Optional[str] = None,
        search: str = "",
        department_id: Optional[int] = None,
    ) -> FiveSResults:
        month = normalize_month(month)
        everything = list(self._inspections.list_all())
        filtered = filter_by_month(everything, month)
        return FiveSResults(
            month=month,
            ranking=aggregate_by_department(filtered),
            summary=summarize(filtered),
            inspections=search_inspections(filtered, search, department_id),
            month_options=month_options(everything),
        )
