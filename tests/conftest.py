from __future__ import annotations

from datetime import date, datetime

import pytest
from werkzeug.security import generate_password_hash

from src.workforce_hub.workforce_hub.activities.model import Activity
from src.workforce_hub.workforce_hub.common.events import ChangeFeed
from src.workforce_hub.workforce_hub.container import wire_container
from src.workforce_hub.workforce_hub.core.enums import Role
from src.workforce_hub.workforce_hub.masterdata.model import Branch, Department, Employee, Position
from src.workforce_hub.workforce_hub.users.model import User

from fakes import (
    InMemoryActivities,
    InMemoryAttendance,
    InMemoryBranches,
    InMemoryDepartments,
    InMemoryEmployees,
    InMemoryHealthRecords,
    InMemoryInspections,
    InMemoryPositions,
    InMemoryUsers,
)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 6, 1, 9, 30, 0)


@pytest.fixture
def departments() -> InMemoryDepartments:
    return InMemoryDepartments(
        [
            Department(dept_id=1, name="Production", branch_id=1),
            Department(dept_id=2, name="Warehouse", branch_id=1),
            Department(dept_id=3, name="Quality", branch_id=1),
        ]
    )


@pytest.fixture
def employees() -> InMemoryEmployees:
    return InMemoryEmployees(
        [
            Employee(employee_id=1, employee_code="EMP001", first_name="Anan", last_name="Srisuk", dept_id=1, dept_name="Production"),
            Employee(employee_id=2, employee_code="EMP002", first_name="Malee", last_name="Chaiyo", dept_id=2, dept_name="Warehouse"),
        ]
    )


@pytest.fixture
def users() -> InMemoryUsers:
    return InMemoryUsers(
        [
            User(user_id=1, username="admin", full_name="Administrator", password_hash=generate_password_hash("admin123"), role=Role.ADMIN),
            User(user_id=2, username="staff", full_name="Staff Member", password_hash=generate_password_hash("staff123"), role=Role.STAFF, employee_id=1),
        ]
    )


@pytest.fixture
def container(fixed_now, departments, employees, users):
    return wire_container(
        branches_repo=InMemoryBranches([Branch(branch_id=1, name="Head Office")]),
        departments_repo=departments,
        positions_repo=InMemoryPositions([Position(position_id=1, name="Operator", level=1)]),
        employees_repo=employees,
        activities_repo=InMemoryActivities(
            [
                Activity(activity_id=1, name="Safety Day", activity_date=date(2024, 6, 3), location="Hall A"),
                Activity(activity_id=2, name="Sports Day", activity_date=date(2024, 5, 20), location="Field"),
            ]
        ),
        attendance_repo=InMemoryAttendance(employees, fixed_now),
        health_repo=InMemoryHealthRecords(employees),
        inspections_repo=InMemoryInspections(departments),
        users_repo=users,
        feed=ChangeFeed(),
    )


@pytest.fixture
def app(container, monkeypatch):
    from src.workforce_hub.workforce_hub.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, username: str, password: str):
    return client.post("/api/login", json={"username": username, "password": password})


@pytest.fixture
def admin_client(client):
    assert login(client, "admin", "admin123").status_code == 200
    return client


@pytest.fixture
def staff_client(client):
    assert login(client, "staff", "staff123").status_code == 200
    return client
