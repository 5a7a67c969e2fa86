from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_int
from .model import User, UserView
from .repository import UserRepository


def _role(value) -> Role:
    # Older rows may carry "Admin" / "Staff".
    try:
        return Role(str(value or "").strip().lower())
    except ValueError:
        return Role.STAFF


def _row_to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        username=row["username"],
        full_name=row["full_name"],
        password_hash=row["password_hash"],
        role=_role(row.get("role")),
        email=row.get("email"),
        employee_id=optional_int(row.get("employee_id")),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    _SELECT = """
        SELECT user_id, username, full_name, email, password_hash, role, employee_id, is_active
        FROM users
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(self._SELECT + " WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(self._SELECT + " WHERE username=%s", (username,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def create_user(
        self,
        *,
        username: str,
        full_name: str,
        email: Optional[str],
        password_hash: str,
        role: Role,
        employee_id: Optional[int],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(username, full_name, email, password_hash, role, employee_id, is_active)
                VALUES(%s,%s,%s,%s,%s,%s,1)
                """,
                (username, full_name, email, password_hash, role.value, employee_id),
            )
            return int(cur.lastrowid)

    def update_user(
        self,
        user_id: int,
        *,
        full_name: str,
        email: Optional[str],
        role: Role,
        employee_id: Optional[int],
        is_active: bool,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET full_name=%s, email=%s, role=%s, employee_id=%s, is_active=%s
                WHERE user_id=%s
                """,
                (full_name, email, role.value, employee_id, 1 if is_active else 0, user_id),
            )
            return cur.rowcount > 0

    def set_password(self, user_id: int, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET password_hash=%s WHERE user_id=%s", (password_hash, user_id))
            return cur.rowcount > 0

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (user_id,))
            return cur.rowcount > 0

    def list_admin_view(self) -> Sequence[UserView]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT u.user_id, u.username, u.full_name, u.role, u.email, u.employee_id, u.is_active,
                       e.employee_code
                FROM users u
                LEFT JOIN employees e ON e.employee_id = u.employee_id
                ORDER BY u.user_id ASC
                """
            )
            return [
                UserView(
                    user_id=int(r["user_id"]),
                    username=r["username"],
                    full_name=r["full_name"],
                    role=_role(r.get("role")),
                    email=r.get("email"),
                    employee_id=optional_int(r.get("employee_id")),
                    employee_code=r.get("employee_code"),
                    is_active=bool(r.get("is_active", True)),
                )
                for r in fetchall(cur)
            ]
