from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User, UserView


class UserRepository(Protocol):
    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

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
        raise NotImplementedError

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
        raise NotImplementedError

    def set_password(self, user_id: int, password_hash: str) -> bool:
        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError

    def list_admin_view(self) -> Sequence[UserView]:
        raise NotImplementedError
