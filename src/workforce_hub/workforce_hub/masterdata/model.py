from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Branch:
    branch_id: int
    name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    is_active: bool = True


@dataclass(frozen=True)
class Department:
    dept_id: int
    name: str
    branch_id: Optional[int] = None
    branch_name: Optional[str] = None
    is_active: bool = True


@dataclass(frozen=True)
class Position:
    position_id: int
    name: str
    level: int = 1


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: plain data object; display names of branch/department/position are
    resolved by the record store and carried along for read views.
    """

    employee_id: int
    employee_code: str
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    branch_id: Optional[int] = None
    dept_id: Optional[int] = None
    position_id: Optional[int] = None
    photo_url: Optional[str] = None
    is_active: bool = True
    branch_name: Optional[str] = None
    dept_name: Optional[str] = None
    position_name: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class EmployeeInput:
    """Validated employee fields ready for the record store."""

    employee_code: str
    first_name: str
    last_name: str
    email: Optional[str]
    phone: Optional[str]
    branch_id: Optional[int]
    dept_id: Optional[int]
    position_id: Optional[int]
    photo_url: Optional[str]
