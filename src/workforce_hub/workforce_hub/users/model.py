from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Login account. employee_id links the account to an employee record."""

    user_id: int
    username: str
    full_name: str
    password_hash: str
    role: Role
    email: Optional[str] = None
    employee_id: Optional[int] = None
    is_active: bool = True


@dataclass(frozen=True)
class UserView:
    """Row of the admin user list (no password hash)."""

    user_id: int
    username: str
    full_name: str
    role: Role
    email: Optional[str]
    employee_id: Optional[int]
    employee_code: Optional[str]
    is_active: bool
