from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence

from ..common.events import ChangeFeed
from ..common.validators import optional_text, require_non_empty, to_int
from ..core.enums import Collection, Role
from ..core.exceptions import AuthorizationError, DuplicateRecordError, NotFoundError, ValidationError
from .model import Branch, Department, Employee, EmployeeInput, Position
from .repository import BranchRepository, DepartmentRepository, EmployeeRepository, PositionRepository

logger = logging.getLogger(__name__)


def search_employees(employees: Iterable[Employee], term: str) -> list[Employee]:
    """Case-insensitive substring match on first name, last name or code."""

    needle = (term or "").strip().lower()
    if not needle:
        return list(employees)
    return [
        e
        for e in employees
        if needle in e.first_name.lower() or needle in e.last_name.lower() or needle in e.employee_code.lower()
    ]


def _optional_id(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "" or value == 0:
        return None
    return to_int(value, field_name)


class MasterDataService:
    """Use case: manage branches, departments, positions and employees (admin)."""

    def __init__(
        self,
        branches: BranchRepository,
        departments: DepartmentRepository,
        positions: PositionRepository,
        employees: EmployeeRepository,
        *,
        feed: Optional[ChangeFeed] = None,
    ):
        self._branches = branches
        self._departments = departments
        self._positions = positions
        self._employees = employees
        self._feed = feed or ChangeFeed()

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

    # ----- reads -----

    def list_branches(self) -> Sequence[Branch]:
        return self._branches.list_all()

    def list_departments(self, *, branch_id: Optional[int] = None, active_only: bool = False) -> list[Department]:
        items = list(self._departments.list_all())
        if branch_id is not None:
            items = [d for d in items if d.branch_id == branch_id]
        if active_only:
            items = [d for d in items if d.is_active]
        return items

    def list_positions(self) -> Sequence[Position]:
        return self._positions.list_all()

    def list_employees(
        self,
        *,
        search: str = "",
        branch_id: Optional[int] = None,
        dept_id: Optional[int] = None,
        active_only: bool = False,
    ) -> list[Employee]:
        items = search_employees(self._employees.list_all(), search)
        if branch_id is not None:
            items = [e for e in items if e.branch_id == branch_id]
        if dept_id is not None:
            items = [e for e in items if e.dept_id == dept_id]
        if active_only:
            items = [e for e in items if e.is_active]
        return items

    def get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def get_department(self, dept_id: int) -> Department:
        department = self._departments.get_by_id(int(dept_id))
        if not department:
            raise NotFoundError("Department not found")
        return department

    def find_employee_by_code(self, code: str) -> Employee:
        """Resolve a scanned/typed employee code (trimmed, case-insensitive)."""

        clean = (code or "").strip()
        if not clean:
            raise ValidationError("Employee code is required")
        employee = self._employees.get_by_code(clean)
        if not employee:
            raise NotFoundError(f"Employee not found: {clean}")
        return employee

    # ----- branches -----

    def create_branch(self, *, current_role: Role, name: str, address: str = "", phone: str = "") -> int:
        self._require_admin(current_role)
        branch_id = self._branches.create(
            name=require_non_empty(name, "Branch name"),
            address=optional_text(address),
            phone=optional_text(phone),
        )
        logger.info("Created branch %s", branch_id)
        self._feed.publish(Collection.BRANCHES)
        return branch_id

    def update_branch(self, *, current_role: Role, branch_id: int, name: str, address: str = "", phone: str = "") -> None:
        self._require_admin(current_role)
        ok = self._branches.update(
            int(branch_id),
            name=require_non_empty(name, "Branch name"),
            address=optional_text(address),
            phone=optional_text(phone),
        )
        if not ok:
            raise NotFoundError("Branch not found")
        self._feed.publish(Collection.BRANCHES)

    def delete_branch(self, *, current_role: Role, branch_id: int) -> None:
        self._require_admin(current_role)
        if not self._branches.delete(int(branch_id)):
            raise NotFoundError("Branch not found")
        logger.info("Deleted branch %s", branch_id)
        self._feed.publish(Collection.BRANCHES)

    # ----- departments -----

    def _check_branch(self, branch_id: Optional[int]) -> None:
        if branch_id is not None and not self._branches.get_by_id(branch_id):
            raise ValidationError("Branch does not exist")

    def create_department(self, *, current_role: Role, name: str, branch_id: Any = None) -> int:
        self._require_admin(current_role)
        clean_branch = _optional_id(branch_id, "Branch")
        self._check_branch(clean_branch)
        dept_id = self._departments.create(name=require_non_empty(name, "Department name"), branch_id=clean_branch)
        logger.info("Created department %s", dept_id)
        self._feed.publish(Collection.DEPARTMENTS)
        return dept_id

    def update_department(self, *, current_role: Role, dept_id: int, name: str, branch_id: Any = None) -> None:
        self._require_admin(current_role)
        clean_branch = _optional_id(branch_id, "Branch")
        self._check_branch(clean_branch)
        if not self._departments.update(int(dept_id), name=require_non_empty(name, "Department name"), branch_id=clean_branch):
            raise NotFoundError("Department not found")
        self._feed.publish(Collection.DEPARTMENTS)

    def delete_department(self, *, current_role: Role, dept_id: int) -> None:
        self._require_admin(current_role)
        if not self._departments.delete(int(dept_id)):
            raise NotFoundError("Department not found")
        logger.info("Deleted department %s", dept_id)
        self._feed.publish(Collection.DEPARTMENTS)

    # ----- positions -----

    @staticmethod
    def _clean_level(level: Any) -> int:
        value = to_int(level, "Level")
        if value < 1:
            raise ValidationError("Level must be 1 or higher")
        return value

    def create_position(self, *, current_role: Role, name: str, level: Any = 1) -> int:
        self._require_admin(current_role)
        position_id = self._positions.create(name=require_non_empty(name, "Position name"), level=self._clean_level(level))
        self._feed.publish(Collection.POSITIONS)
        return position_id

    def update_position(self, *, current_role: Role, position_id: int, name: str, level: Any = 1) -> None:
        self._require_admin(current_role)
        ok = self._positions.update(
            int(position_id), name=require_non_empty(name, "Position name"), level=self._clean_level(level)
        )
        if not ok:
            raise NotFoundError("Position not found")
        self._feed.publish(Collection.POSITIONS)

    def delete_position(self, *, current_role: Role, position_id: int) -> None:
        self._require_admin(current_role)
        if not self._positions.delete(int(position_id)):
            raise NotFoundError("Position not found")
        self._feed.publish(Collection.POSITIONS)

    # ----- employees -----

    def _clean_employee(self, payload: dict) -> EmployeeInput:
        return EmployeeInput(
            employee_code=require_non_empty(payload.get("employee_code", ""), "Employee code"),
            first_name=require_non_empty(payload.get("first_name", ""), "First name"),
            last_name=require_non_empty(payload.get("last_name", ""), "Last name"),
            email=optional_text(payload.get("email")),
            phone=optional_text(payload.get("phone")),
            branch_id=_optional_id(payload.get("branch_id"), "Branch"),
            dept_id=_optional_id(payload.get("dept_id"), "Department"),
            position_id=_optional_id(payload.get("position_id"), "Position"),
            photo_url=optional_text(payload.get("photo_url")),
        )

    def create_employee(self, *, current_role: Role, payload: dict) -> int:
        self._require_admin(current_role)
        data = self._clean_employee(payload)
        if self._employees.get_by_code(data.employee_code):
            raise ValidationError("Employee code already exists")
        try:
            employee_id = self._employees.create(data)
        except DuplicateRecordError:
            raise ValidationError("Employee code already exists")
        logger.info("Created employee %s (%s)", employee_id, data.employee_code)
        self._feed.publish(Collection.EMPLOYEES)
        return employee_id

    def update_employee(self, *, current_role: Role, employee_id: int, payload: dict) -> None:
        self._require_admin(current_role)
        data = self._clean_employee(payload)
        clash = self._employees.get_by_code(data.employee_code)
        if clash and clash.employee_id != int(employee_id):
            raise ValidationError("Employee code already exists")
        if not self._employees.update(int(employee_id), data):
            raise NotFoundError("Employee not found")
        self._feed.publish(Collection.EMPLOYEES)

    def delete_employee(self, *, current_role: Role, employee_id: int) -> None:
        self._require_admin(current_role)
        if not self._employees.delete(int(employee_id)):
            raise NotFoundError("Employee not found")
        logger.info("Deleted employee %s", employee_id)
        self._feed.publish(Collection.EMPLOYEES)
