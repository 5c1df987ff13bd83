from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auth.middleware import Authenticator
from .auth.mysql_otp_repository import MySQLOTPRepository
from .auth.passwords import PasswordHasher
from .auth.repository import OTPRepository
from .auth.service import AuthService
from .auth.settings import AuthSettings
from .auth.tokens import TokenService
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .tasks.mysql_task_repository import MySQLTaskRepository
from .tasks.repository import TaskRepository
from .tasks.service import TaskService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    auth_settings: AuthSettings

    users_repo: UserRepository
    otps_repo: OTPRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository
    tasks_repo: TaskRepository

    token_service: TokenService
    authenticator: Authenticator
    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    leave_service: LeaveService
    task_service: TaskService


def wire_container(
    *,
    auth_settings: AuthSettings,
    users_repo: UserRepository,
    otps_repo: OTPRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    tasks_repo: TaskRepository,
    hasher: Optional[PasswordHasher] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Assemble services around any set of repositories (MySQL or in-memory)."""

    token_service = TokenService(auth_settings.secret_key, ttl=auth_settings.token_ttl)
    auth_service = AuthService(users_repo, otps_repo, hasher or PasswordHasher(), token_service, auth_settings)

    return Container(
        conn=conn,
        auth_settings=auth_settings,
        users_repo=users_repo,
        otps_repo=otps_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        tasks_repo=tasks_repo,
        token_service=token_service,
        authenticator=Authenticator(token_service),
        auth_service=auth_service,
        user_service=UserService(users_repo),
        attendance_service=AttendanceService(attendance_repo),
        leave_service=LeaveService(leaves_repo),
        task_service=TaskService(tasks_repo, users_repo),
    )


def build_container(*, db_config: dict, auth_settings: AuthSettings) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return wire_container(
        auth_settings=auth_settings,
        users_repo=MySQLUserRepository(conn),
        otps_repo=MySQLOTPRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        tasks_repo=MySQLTaskRepository(conn),
        conn=conn,
    )
