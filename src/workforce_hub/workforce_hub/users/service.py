from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.events import ChangeFeed
from ..common.validators import optional_text, require_min_length, require_non_empty, to_int
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Collection, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from ..masterdata.repository import EmployeeRepository
from .model import UserView
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    username: str
    full_name: str
    role: Role
    employee_id: Optional[int] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def parse_role(value: Any) -> Role:
    try:
        return Role(str(value or "").strip().lower())
    except ValueError:
        raise ValidationError("Role must be admin or staff")


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._users.get_by_username((username or "").strip())
        if not user or not user.is_active:
            logger.info("Login rejected for %r", username)
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # placeholder or corrupted hash values
            ok = False

        if not ok:
            logger.info("Login rejected for %r", username)
            raise AuthenticationError("Invalid username or password")

        logger.info("User %s logged in", user.user_id)
        return SessionUser(
            user_id=user.user_id,
            username=user.username,
            full_name=user.full_name,
            role=user.role,
            employee_id=user.employee_id,
        )


class UserService:
    """Use case: manage login accounts (admin)."""

    def __init__(self, users: UserRepository, employees: EmployeeRepository, *, feed: Optional[ChangeFeed] = None):
        self._users = users
        self._employees = employees
        self._feed = feed or ChangeFeed()

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

    def _employee_id(self, value: Any) -> Optional[int]:
        if value in (None, "", 0):
            return None
        employee_id = to_int(value, "Employee")
        if not self._employees.get_by_id(employee_id):
            raise ValidationError("Employee does not exist")
        return employee_id

    def create_account(
        self,
        *,
        current_role: Role,
        username: str,
        full_name: str,
        password: str,
        email: Optional[str] = None,
        role: Any = Role.STAFF,
        employee_id: Any = None,
    ) -> int:
        self._require_admin(current_role)
        username = require_non_empty(username, "Username")
        full_name = require_non_empty(full_name, "Full name")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_username(username):
            raise ValidationError("Username already exists")

        user_id = self._users.create_user(
            username=username,
            full_name=full_name,
            email=optional_text(email),
            password_hash=generate_password_hash(password),
            role=role if isinstance(role, Role) else parse_role(role),
            employee_id=self._employee_id(employee_id),
        )
        logger.info("Created user %s (%s)", user_id, username)
        self._feed.publish(Collection.USERS)
        return user_id

    def list_users(self, *, current_role: Role) -> Sequence[UserView]:
        self._require_admin(current_role)
        return self._users.list_admin_view()

    def update_user(
        self,
        *,
        current_role: Role,
        user_id: int,
        full_name: str,
        email: Optional[str] = None,
        role: Any = Role.STAFF,
        employee_id: Any = None,
        is_active: bool = True,
    ) -> None:
        self._require_admin(current_role)
        ok = self._users.update_user(
            int(user_id),
            full_name=require_non_empty(full_name, "Full name"),
            email=optional_text(email),
            role=role if isinstance(role, Role) else parse_role(role),
            employee_id=self._employee_id(employee_id),
            is_active=bool(is_active),
        )
        if not ok:
            raise NotFoundError("User not found")
        self._feed.publish(Collection.USERS)

    def reset_password(self, *, current_role: Role, user_id: int, password: str) -> None:
        self._require_admin(current_role)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        if not self._users.set_password(int(user_id), generate_password_hash(password)):
            raise NotFoundError("User not found")
        logger.info("Password reset for user %s", user_id)

    def change_password(self, *, user_id: int, old_password: str, new_password: str) -> None:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        if not check_password_hash(user.password_hash, old_password or ""):
            raise AuthenticationError("Current password is incorrect")
        require_min_length(new_password, "Password", MIN_PASSWORD_LENGTH)
        self._users.set_password(user.user_id, generate_password_hash(new_password))

    def delete_user(self, *, current_role: Role, user_id: int) -> None:
        self._require_admin(current_role)

        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        if user.role == Role.ADMIN:
            raise ValidationError("Admin accounts cannot be deleted")

        if not self._users.delete_by_id(user.user_id):
            raise ValidationError("Failed to delete user")
        logger.info("Deleted user %s", user_id)
        self._feed.publish(Collection.USERS)
