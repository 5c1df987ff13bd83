from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role, is_elevated
from ..users.model import User


@dataclass(frozen=True)
class Principal:
    """Identity carried by a bearer token and handed to protected views."""

    user_id: int
    email: str
    role: Role

    @property
    def is_elevated(self) -> bool:
        return is_elevated(self.role)

    @classmethod
    def of(cls, user: User) -> "Principal":
        return cls(user_id=user.user_id, email=user.email, role=user.role)

    def to_dict(self) -> dict:
        return {"id": self.user_id, "email": self.email, "role": self.role.value}


@dataclass(frozen=True)
class OTPToken:
    otp_id: int
    user_id: int
    code: str
    expires_at: datetime
    used: bool = False
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class OTPIssue:
    """Result of an OTP request. ``code`` must only leave the process in development."""

    code: str
    expires_at: datetime


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: User
