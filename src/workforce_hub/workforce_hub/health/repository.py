from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import HealthRecord, HealthRecordInput


class HealthRecordRepository(Protocol):
    def list_all(self) -> Sequence[HealthRecord]:
        """All records, latest reading first."""

        raise NotImplementedError

    def list_since(self, since: datetime) -> Sequence[HealthRecord]:
        """Records with recorded_at >= since, oldest first."""

        raise NotImplementedError

    def get_by_id(self, record_id: int) -> Optional[HealthRecord]:
        raise NotImplementedError

    def create(self, data: HealthRecordInput) -> int:
        raise NotImplementedError

    def update(self, record_id: int, data: HealthRecordInput) -> bool:
        raise NotImplementedError

    def delete(self, record_id: int) -> bool:
        raise NotImplementedError
