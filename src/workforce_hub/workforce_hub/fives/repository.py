from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import InspectionInput, InspectionRecord


class InspectionRepository(Protocol):
    def list_all(self) -> Sequence[InspectionRecord]:
        """All inspections, newest inspection date first."""

        raise NotImplementedError

    def list_between(self, first: date, last: date) -> Sequence[InspectionRecord]:
        """Inspections dated first..last inclusive."""

        raise NotImplementedError

    def get_by_id(self, inspection_id: int) -> Optional[InspectionRecord]:
        raise NotImplementedError

    def create(self, data: InspectionInput) -> int:
        raise NotImplementedError

    def update(self, inspection_id: int, data: InspectionInput) -> bool:
        raise NotImplementedError

    def delete(self, inspection_id: int) -> bool:
        raise NotImplementedError
