from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .access.gate import AccessGate
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import now_local
from .core.constants import DEFAULT_DASHBOARD_QUERY_TIMEOUT, DEFAULT_DASHBOARD_WORKERS
from .dashboard.mysql_dashboard_repository import MySQLDashboardRepository
from .dashboard.repository import DashboardRepository
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .identity.service import AuthService
from .identity.tokens import TokenService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import EmployeeService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository
    dashboard_repo: DashboardRepository

    tokens: TokenService
    access_gate: AccessGate
    auth_service: AuthService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    leave_service: LeaveService
    dashboard_service: DashboardService


def assemble(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    dashboard_repo: DashboardRepository,
    tokens: TokenService,
    conn: Optional[DatabaseConnection] = None,
    dashboard_workers: int = DEFAULT_DASHBOARD_WORKERS,
    dashboard_timeout: float = DEFAULT_DASHBOARD_QUERY_TIMEOUT,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    """Wire services over any repository implementations."""
    return Container(
        conn=conn,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        dashboard_repo=dashboard_repo,
        tokens=tokens,
        access_gate=AccessGate(tokens),
        auth_service=AuthService(users_repo, tokens),
        employee_service=EmployeeService(users_repo),
        attendance_service=AttendanceService(attendance_repo, clock=clock),
        leave_service=LeaveService(leaves_repo, clock=clock),
        dashboard_service=DashboardService(
            dashboard_repo,
            max_workers=dashboard_workers,
            timeout=dashboard_timeout,
            clock=clock,
        ),
    )


def build_container(
    *,
    db_config: dict,
    jwt_secret: str,
    jwt_algorithm: str = "HS256",
    jwt_expires_minutes: int = 480,
    dashboard_workers: int = DEFAULT_DASHBOARD_WORKERS,
    dashboard_timeout: float = DEFAULT_DASHBOARD_QUERY_TIMEOUT,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        dashboard_repo=MySQLDashboardRepository(conn),
        tokens=TokenService(jwt_secret, algorithm=jwt_algorithm, expires_minutes=jwt_expires_minutes),
        dashboard_workers=dashboard_workers,
        dashboard_timeout=dashboard_timeout,
    )
