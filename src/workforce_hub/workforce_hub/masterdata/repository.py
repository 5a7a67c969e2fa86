from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Branch, Department, Employee, EmployeeInput, Position


class BranchRepository(Protocol):
    def list_all(self) -> Sequence[Branch]:
        raise NotImplementedError

    def get_by_id(self, branch_id: int) -> Optional[Branch]:
        raise NotImplementedError

    def create(self, *, name: str, address: Optional[str], phone: Optional[str]) -> int:
        raise NotImplementedError

    def update(self, branch_id: int, *, name: str, address: Optional[str], phone: Optional[str]) -> bool:
        raise NotImplementedError

    def delete(self, branch_id: int) -> bool:
        raise NotImplementedError


class DepartmentRepository(Protocol):
    def list_all(self) -> Sequence[Department]:
        raise NotImplementedError

    def get_by_id(self, dept_id: int) -> Optional[Department]:
        raise NotImplementedError

    def create(self, *, name: str, branch_id: Optional[int]) -> int:
        raise NotImplementedError

    def update(self, dept_id: int, *, name: str, branch_id: Optional[int]) -> bool:
        raise NotImplementedError

    def delete(self, dept_id: int) -> bool:
        raise NotImplementedError


class PositionRepository(Protocol):
    def list_all(self) -> Sequence[Position]:
        raise NotImplementedError

    def create(self, *, name: str, level: int) -> int:
        raise NotImplementedError

    def update(self, position_id: int, *, name: str, level: int) -> bool:
        raise NotImplementedError

    def delete(self, position_id: int) -> bool:
        raise NotImplementedError


class EmployeeRepository(Protocol):
    """Employee repository interface.

    Note (DIP): the service layer depends on this interface, never on a concrete DB.
    """

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        """Case-insensitive lookup on the trimmed code."""

        raise NotImplementedError

    def create(self, data: EmployeeInput) -> int:
        raise NotImplementedError

    def update(self, employee_id: int, data: EmployeeInput) -> bool:
        raise NotImplementedError

    def delete(self, employee_id: int) -> bool:
        raise NotImplementedError
