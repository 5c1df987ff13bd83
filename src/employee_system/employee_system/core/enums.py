from __future__ import annotations

from enum import Enum

from .exceptions import ValidationError


class Role(str, Enum):
    """User role used for authorization checks."""

    EMPLOYEE = "employee"
    ADMIN = "admin"
    HR = "hr"

    @classmethod
    def parse(cls, value: object) -> "Role":
        try:
            return cls(value)
        except ValueError:
            raise ValidationError("Invalid role. Must be employee, admin, or hr")


def is_elevated(role: Role) -> bool:
    """Admin and HR may act on any employee's records."""

    if role is Role.ADMIN:
        return True
    if role is Role.HR:
        return True
    if role is Role.EMPLOYEE:
        return False
    raise ValueError(f"Unknown role: {role!r}")


class LeaveStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    DECLINED = "Declined"


class TaskStatus(str, Enum):
    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class TokenFailure(str, Enum):
    """Why a bearer token was rejected. Logged, never sent to the client."""

    SIGNATURE = "signature"
    MALFORMED = "malformed"
    EXPIRED = "expired"
