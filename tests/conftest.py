from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from src.employee_system.employee_system.attendance.model import AttendanceRecord
from src.employee_system.employee_system.auth.model import OTPToken, Principal
from src.employee_system.employee_system.auth.passwords import PasswordHasher
from src.employee_system.employee_system.auth.settings import AuthSettings
from src.employee_system.employee_system.container import wire_container
from src.employee_system.employee_system.core.enums import LeaveStatus, Role, TaskStatus
from src.employee_system.employee_system.core.exceptions import ConflictError
from src.employee_system.employee_system.leaves.model import LeaveRequest
from src.employee_system.employee_system.main import create_app
from src.employee_system.employee_system.tasks.model import Task
from src.employee_system.employee_system.users.model import User


class InMemoryUsers:
    def __init__(self):
        self.by_id: dict[int, User] = {}
        self._next_id = 1

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.by_id.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        for u in self.by_id.values():
            if u.email == email:
                return u
        return None

    def create_user(self, *, name, email, password_hash, role) -> User:
        if self.get_by_email(email):
            raise ConflictError("User with this email already exists")
        user = User(
            user_id=self._next_id,
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            created_at=datetime(2026, 1, 1, 8, 0, 0),
        )
        self.by_id[user.user_id] = user
        self._next_id += 1
        return user

    def update_password_hash(self, user_id: int, password_hash: str) -> bool:
        user = self.by_id.get(int(user_id))
        if not user:
            return False
        self.by_id[user.user_id] = replace(user, password_hash=password_hash)
        return True

    def list_users(self, *, role=None):
        return [u for u in self.by_id.values() if role is None or u.role == role]


class InMemoryOTPs:
    def __init__(self, users: InMemoryUsers):
        self._users = users
        self.tokens: dict[int, OTPToken] = {}
        self._next_id = 1

    def create_otp(self, *, user_id, code, expires_at) -> int:
        otp_id = self._next_id
        self._next_id += 1
        self.tokens[otp_id] = OTPToken(otp_id=otp_id, user_id=user_id, code=code, expires_at=expires_at)
        return otp_id

    def find_latest_unused(self, *, user_id, code) -> Optional[OTPToken]:
        matches = [t for t in self.tokens.values() if t.user_id == user_id and t.code == code and not t.used]
        return max(matches, key=lambda t: t.otp_id) if matches else None

    def mark_used(self, otp_id) -> bool:
        token = self.tokens.get(otp_id)
        if not token or token.used:
            return False
        self.tokens[otp_id] = replace(token, used=True)
        return True

    def consume_and_update_password(self, *, otp_id, user_id, password_hash) -> bool:
        if not self.mark_used(otp_id):
            return False
        return self._users.update_password_hash(user_id, password_hash)


class InMemoryAttendance:
    def __init__(self):
        self.records: dict[int, AttendanceRecord] = {}
        self._next_id = 1

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        for r in self.records.values():
            if r.user_id == user_id and r.work_date == work_date:
                return r
        return None

    def get_recent_for_user(self, user_id: int, limit: int):
        items = [r for r in self.records.values() if r.user_id == user_id]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def create_checkin(self, *, user_id, work_date, check_in) -> AttendanceRecord:
        rec = AttendanceRecord(attendance_id=self._next_id, user_id=user_id, work_date=work_date, check_in=check_in)
        self.records[rec.attendance_id] = rec
        self._next_id += 1
        return rec

    def update_checkout(self, *, attendance_id, check_out):
        rec = self.records.get(attendance_id)
        if not rec or rec.check_out is not None:
            return None
        self.records[attendance_id] = replace(rec, check_out=check_out)
        return self.records[attendance_id]

    def list_all(self, *, user_id=None, work_date=None, limit=100):
        items = [
            r
            for r in self.records.values()
            if (user_id is None or r.user_id == user_id) and (work_date is None or r.work_date == work_date)
        ]
        return items[:limit]


class InMemoryLeaves:
    def __init__(self):
        self.leaves: dict[int, LeaveRequest] = {}
        self._next_id = 1

    def create_leave(self, *, user_id, start_date, end_date, reason) -> LeaveRequest:
        leave = LeaveRequest(
            request_id=self._next_id,
            user_id=user_id,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=LeaveStatus.PENDING,
        )
        self.leaves[leave.request_id] = leave
        self._next_id += 1
        return leave

    def get_leave(self, request_id):
        return self.leaves.get(int(request_id))

    def list_leaves(self, *, status=None, user_id=None):
        return [
            lr
            for lr in self.leaves.values()
            if (status is None or lr.status == status) and (user_id is None or lr.user_id == user_id)
        ]

    def update_status(self, *, request_id, status):
        leave = self.leaves.get(int(request_id))
        if not leave:
            return None
        self.leaves[leave.request_id] = replace(leave, status=status)
        return self.leaves[leave.request_id]


class InMemoryTasks:
    def __init__(self):
        self.tasks: dict[int, Task] = {}
        self._next_id = 1

    def create_task(self, *, title, description, due_date, status, assigned_to, created_by) -> Task:
        task = Task(
            task_id=self._next_id,
            title=title,
            description=description,
            due_date=due_date,
            status=status,
            assigned_to=assigned_to,
            created_by=created_by,
        )
        self.tasks[task.task_id] = task
        self._next_id += 1
        return task

    def get_task(self, task_id):
        return self.tasks.get(int(task_id))

    def list_tasks(self, *, assigned_to=None, status=None):
        return [
            t
            for t in self.tasks.values()
            if (assigned_to is None or t.assigned_to == assigned_to) and (status is None or t.status == status)
        ]

    def update_status(self, *, task_id, status):
        task = self.tasks.get(int(task_id))
        if not task:
            return None
        self.tasks[task.task_id] = replace(task, status=status)
        return self.tasks[task.task_id]

    def delete_task(self, task_id) -> bool:
        return self.tasks.pop(int(task_id), None) is not None


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 8, 30, 0)


@pytest.fixture
def hasher() -> PasswordHasher:
    # Low iteration count keeps the suite fast; the digest format is the same.
    return PasswordHasher(method="pbkdf2:sha256:1000")


@pytest.fixture
def users() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def otps(users) -> InMemoryOTPs:
    return InMemoryOTPs(users)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def leaves_repo() -> InMemoryLeaves:
    return InMemoryLeaves()


@pytest.fixture
def tasks_repo() -> InMemoryTasks:
    return InMemoryTasks()


@pytest.fixture
def auth_settings() -> AuthSettings:
    return AuthSettings(secret_key="test-secret", token_ttl=timedelta(days=7), otp_expire_minutes=10, env_mode="development")


@pytest.fixture
def container(auth_settings, users, otps, attendance_repo, leaves_repo, tasks_repo, hasher):
    return wire_container(
        auth_settings=auth_settings,
        users_repo=users,
        otps_repo=otps,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        tasks_repo=tasks_repo,
        hasher=hasher,
    )


@pytest.fixture
def app(container):
    return create_app(container=container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(users, hasher):
    def _make(email: str, role: Role = Role.EMPLOYEE, password: str = "secret123", name: str = "Someone") -> User:
        return users.create_user(name=name, email=email, password_hash=hasher.hash(password), role=role)

    return _make


@pytest.fixture
def bearer(container):
    def _bearer(user: User) -> dict:
        token = container.token_service.issue(Principal.of(user))
        return {"Authorization": f"Bearer {token}"}

    return _bearer


@pytest.fixture
def task_status():
    return TaskStatus
