from __future__ import annotations

import pytest

from src.workforce_hub.workforce_hub.core.enums import Role
from src.workforce_hub.workforce_hub.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)


def test_authenticate(container):
    user = container.auth_service.authenticate("admin", "admin123")
    assert user.is_admin
    assert user.full_name == "Administrator"

    staff = container.auth_service.authenticate(" staff ", "staff123")
    assert staff.role == Role.STAFF
    assert staff.employee_id == 1


@pytest.mark.parametrize("username,password", [("admin", "wrong"), ("ghost", "admin123"), ("", "")])
def test_authenticate_rejects_bad_credentials(container, username, password):
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate(username, password)


def test_inactive_user_cannot_log_in(container):
    container.user_service.update_user(
        current_role=Role.ADMIN, user_id=2, full_name="Staff Member", role="staff", employee_id=1, is_active=False
    )
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("staff", "staff123")


def test_create_account(container):
    svc = container.user_service
    user_id = svc.create_account(
        current_role=Role.ADMIN, username="malee", full_name="Malee Chaiyo", password="secret1", employee_id=2
    )
    assert container.auth_service.authenticate("malee", "secret1").user_id == user_id

    with pytest.raises(ValidationError):
        svc.create_account(current_role=Role.ADMIN, username="malee", full_name="Dup", password="secret1")
    with pytest.raises(ValidationError):
        svc.create_account(current_role=Role.ADMIN, username="short", full_name="Short", password="12345")
    with pytest.raises(ValidationError):
        svc.create_account(current_role=Role.ADMIN, username="x", full_name="X", password="secret1", role="owner")
    with pytest.raises(ValidationError):
        svc.create_account(current_role=Role.ADMIN, username="y", full_name="Y", password="secret1", employee_id=77)
    with pytest.raises(AuthorizationError):
        svc.create_account(current_role=Role.STAFF, username="z", full_name="Z", password="secret1")


def test_admin_accounts_cannot_be_deleted(container):
    svc = container.user_service
    with pytest.raises(ValidationError):
        svc.delete_user(current_role=Role.ADMIN, user_id=1)
    svc.delete_user(current_role=Role.ADMIN, user_id=2)
    with pytest.raises(NotFoundError):
        svc.delete_user(current_role=Role.ADMIN, user_id=2)


def test_change_password(container):
    svc = container.user_service
    with pytest.raises(AuthenticationError):
        svc.change_password(user_id=2, old_password="nope", new_password="another1")
    svc.change_password(user_id=2, old_password="staff123", new_password="another1")
    assert container.auth_service.authenticate("staff", "another1").user_id == 2
