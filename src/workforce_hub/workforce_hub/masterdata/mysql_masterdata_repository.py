from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_int
from .model import Branch, Department, Employee, EmployeeInput, Position
from .repository import BranchRepository, DepartmentRepository, EmployeeRepository, PositionRepository


def _row_to_branch(r: dict) -> Branch:
    return Branch(
        branch_id=int(r["branch_id"]),
        name=r["name"],
        address=r.get("address"),
        phone=r.get("phone"),
        is_active=bool(r.get("is_active", True)),
    )


def _row_to_department(r: dict) -> Department:
    return Department(
        dept_id=int(r["dept_id"]),
        name=r["name"],
        branch_id=optional_int(r.get("branch_id")),
        branch_name=r.get("branch_name"),
        is_active=bool(r.get("is_active", True)),
    )


def _row_to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        employee_code=r["employee_code"],
        first_name=r["first_name"],
        last_name=r["last_name"],
        email=r.get("email"),
        phone=r.get("phone"),
        branch_id=optional_int(r.get("branch_id")),
        dept_id=optional_int(r.get("dept_id")),
        position_id=optional_int(r.get("position_id")),
        photo_url=r.get("photo_url"),
        is_active=bool(r.get("is_active", True)),
        branch_name=r.get("branch_name"),
        dept_name=r.get("dept_name"),
        position_name=r.get("position_name"),
    )


class MySQLBranchRepository(BranchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Branch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT branch_id, name, address, phone, is_active FROM branches ORDER BY name")
            return [_row_to_branch(r) for r in fetchall(cur)]

    def get_by_id(self, branch_id: int) -> Optional[Branch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT branch_id, name, address, phone, is_active FROM branches WHERE branch_id=%s",
                (branch_id,),
            )
            r = fetchone(cur)
            return _row_to_branch(r) if r else None

    def create(self, *, name: str, address: Optional[str], phone: Optional[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO branches(name, address, phone) VALUES(%s,%s,%s)",
                (name, address, phone),
            )
            return int(cur.lastrowid)

    def update(self, branch_id: int, *, name: str, address: Optional[str], phone: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE branches SET name=%s, address=%s, phone=%s WHERE branch_id=%s",
                (name, address, phone, branch_id),
            )
            return cur.rowcount > 0

    def delete(self, branch_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM branches WHERE branch_id=%s", (branch_id,))
            return cur.rowcount > 0


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    _SELECT = """
        SELECT d.dept_id, d.name, d.branch_id, d.is_active, b.name AS branch_name
        FROM departments d
        LEFT JOIN branches b ON b.branch_id = d.branch_id
    """

    def list_all(self) -> Sequence[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(self._SELECT + " ORDER BY d.name")
            return [_row_to_department(r) for r in fetchall(cur)]

    def get_by_id(self, dept_id: int) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(self._SELECT + " WHERE d.dept_id=%s", (dept_id,))
            r = fetchone(cur)
            return _row_to_department(r) if r else None

    def create(self, *, name: str, branch_id: Optional[int]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO departments(name, branch_id) VALUES(%s,%s)", (name, branch_id))
            return int(cur.lastrowid)

    def update(self, dept_id: int, *, name: str, branch_id: Optional[int]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE departments SET name=%s, branch_id=%s WHERE dept_id=%s",
                (name, branch_id, dept_id),
            )
            return cur.rowcount > 0

    def delete(self, dept_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM departments WHERE dept_id=%s", (dept_id,))
            return cur.rowcount > 0


class MySQLPositionRepository(PositionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Position]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT position_id, name, level FROM positions ORDER BY level, name")
            return [
                Position(position_id=int(r["position_id"]), name=r["name"], level=int(r["level"]))
                for r in fetchall(cur)
            ]

    def create(self, *, name: str, level: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO positions(name, level) VALUES(%s,%s)", (name, level))
            return int(cur.lastrowid)

    def update(self, position_id: int, *, name: str, level: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE positions SET name=%s, level=%s WHERE position_id=%s", (name, level, position_id))
            return cur.rowcount > 0

    def delete(self, position_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM positions WHERE position_id=%s", (position_id,))
            return cur.rowcount > 0


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    _SELECT = """
        SELECT e.employee_id, e.employee_code, e.first_name, e.last_name, e.email, e.phone,
               e.branch_id, e.dept_id, e.position_id, e.photo_url, e.is_active,
               b.name AS branch_name, d.name AS dept_name, p.name AS position_name
        FROM employees e
        LEFT JOIN branches b ON b.branch_id = e.branch_id
        LEFT JOIN departments d ON d.dept_id = e.dept_id
        LEFT JOIN positions p ON p.position_id = e.position_id
    """

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(self._SELECT + " ORDER BY e.first_name, e.last_name")
            return [_row_to_employee(r) for r in fetchall(cur)]

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(self._SELECT + " WHERE e.employee_id=%s", (employee_id,))
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                self._SELECT + " WHERE LOWER(e.employee_code)=LOWER(%s)",
                ((employee_code or "").strip(),),
            )
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def create(self, data: EmployeeInput) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(employee_code, first_name, last_name, email, phone,
                                      branch_id, dept_id, position_id, photo_url)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    data.employee_code,
                    data.first_name,
                    data.last_name,
                    data.email,
                    data.phone,
                    data.branch_id,
                    data.dept_id,
                    data.position_id,
                    data.photo_url,
                ),
            )
            return int(cur.lastrowid)

    def update(self, employee_id: int, data: EmployeeInput) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET employee_code=%s, first_name=%s, last_name=%s, email=%s, phone=%s,
                    branch_id=%s, dept_id=%s, position_id=%s, photo_url=%s
                WHERE employee_id=%s
                """,
                (
                    data.employee_code,
                    data.first_name,
                    data.last_name,
                    data.email,
                    data.phone,
                    data.branch_id,
                    data.dept_id,
                    data.position_id,
                    data.photo_url,
                    employee_id,
                ),
            )
            return cur.rowcount > 0

    def delete(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (employee_id,))
            return cur.rowcount > 0
