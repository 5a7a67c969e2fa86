from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .activities.mysql_activity_repository import MySQLActivityRepository, MySQLAttendanceRepository
from .activities.repository import ActivityRepository, AttendanceRepository
from .activities.service import ActivityService
from .common.events import ChangeFeed
from .core.constants import (
    DEFAULT_AT_RISK_LIMIT,
    DEFAULT_AT_RISK_MIN_SCORE,
    DEFAULT_HEALTH_DASHBOARD_DAYS,
    DEFAULT_UPCOMING_DAYS,
)
from .database.connection import DBConfig, DatabaseConnection
from .fives.mysql_inspection_repository import MySQLInspectionRepository
from .fives.repository import InspectionRepository
from .fives.service import FiveSService
from .health.mysql_health_repository import MySQLHealthRecordRepository
from .health.repository import HealthRecordRepository
from .health.service import HealthService
from .masterdata.mysql_masterdata_repository import (
    MySQLBranchRepository,
    MySQLDepartmentRepository,
    MySQLEmployeeRepository,
    MySQLPositionRepository,
)
from .masterdata.repository import BranchRepository, DepartmentRepository, EmployeeRepository, PositionRepository
from .masterdata.service import MasterDataService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    feed: ChangeFeed

    branches_repo: BranchRepository
    departments_repo: DepartmentRepository
    positions_repo: PositionRepository
    employees_repo: EmployeeRepository
    activities_repo: ActivityRepository
    attendance_repo: AttendanceRepository
    health_repo: HealthRecordRepository
    inspections_repo: InspectionRepository
    users_repo: UserRepository

    auth_service: AuthService
    user_service: UserService
    masterdata_service: MasterDataService
    activity_service: ActivityService
    health_service: HealthService
    fives_service: FiveSService


def wire_container(
    *,
    branches_repo: BranchRepository,
    departments_repo: DepartmentRepository,
    positions_repo: PositionRepository,
    employees_repo: EmployeeRepository,
    activities_repo: ActivityRepository,
    attendance_repo: AttendanceRepository,
    health_repo: HealthRecordRepository,
    inspections_repo: InspectionRepository,
    users_repo: UserRepository,
    conn: Optional[DatabaseConnection] = None,
    feed: Optional[ChangeFeed] = None,
    upcoming_days: int = DEFAULT_UPCOMING_DAYS,
    health_dashboard_days: int = DEFAULT_HEALTH_DASHBOARD_DAYS,
    at_risk_min_score: int = DEFAULT_AT_RISK_MIN_SCORE,
    at_risk_limit: int = DEFAULT_AT_RISK_LIMIT,
) -> Container:
    """Build services over any set of repositories (MySQL or in-memory)."""

    feed = feed or ChangeFeed()

    auth_service = AuthService(users_repo)
    user_service = UserService(users_repo, employees_repo, feed=feed)
    masterdata_service = MasterDataService(branches_repo, departments_repo, positions_repo, employees_repo, feed=feed)
    activity_service = ActivityService(
        activities_repo,
        attendance_repo,
        employees_repo,
        feed=feed,
        upcoming_days=upcoming_days,
    )
    health_service = HealthService(
        health_repo,
        employees_repo,
        feed=feed,
        dashboard_days=health_dashboard_days,
        at_risk_min_score=at_risk_min_score,
        at_risk_limit=at_risk_limit,
    )
    fives_service = FiveSService(inspections_repo, departments_repo, feed=feed)

    return Container(
        conn=conn,
        feed=feed,
        branches_repo=branches_repo,
        departments_repo=departments_repo,
        positions_repo=positions_repo,
        employees_repo=employees_repo,
        activities_repo=activities_repo,
        attendance_repo=attendance_repo,
        health_repo=health_repo,
        inspections_repo=inspections_repo,
        users_repo=users_repo,
        auth_service=auth_service,
        user_service=user_service,
        masterdata_service=masterdata_service,
        activity_service=activity_service,
        health_service=health_service,
        fives_service=fives_service,
    )


def build_container(*, db_config: dict, **options) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        conn=conn,
        branches_repo=MySQLBranchRepository(conn),
        departments_repo=MySQLDepartmentRepository(conn),
        positions_repo=MySQLPositionRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        activities_repo=MySQLActivityRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        health_repo=MySQLHealthRecordRepository(conn),
        inspections_repo=MySQLInspectionRepository(conn),
        users_repo=MySQLUserRepository(conn),
        **options,
    )
