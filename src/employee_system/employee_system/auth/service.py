from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import utc_now
from ..common.validators import text_field
from ..core.enums import Role
from ..core.exceptions import (
    ConflictError,
    ExpiredOTPError,
    InvalidCredentialsError,
    InvalidOTPError,
    NotFoundError,
    ValidationError,
)
from ..users.model import User
from ..users.repository import UserRepository
from .model import LoginResult, OTPIssue, Principal
from .otp import generate_otp, is_otp_expired, otp_expiry
from .passwords import PasswordHasher
from .repository import OTPRepository
from .settings import AuthSettings
from .tokens import TokenService

logger = logging.getLogger(__name__)


def _secret(value, field_name: str) -> str:
    # Passwords are taken verbatim; only the type is checked.
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    return value


class AuthService:
    """Use cases: register, login, and OTP-verified password reset.

    A reset cycle goes Requested -> Verified | Expired | Invalid. Several codes
    may be outstanding for one user; each is consumable once.
    """

    def __init__(
        self,
        users: UserRepository,
        otps: OTPRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
        settings: AuthSettings,
    ):
        self._users = users
        self._otps = otps
        self._hasher = hasher
        self._tokens = tokens
        self._settings = settings
        self._dummy_hash: Optional[str] = None

    def register(self, *, name: str, email: str, password: str, role: str) -> User:
        name, email = text_field(name, "name"), text_field(email, "email")
        password = _secret(password, "password")
        if not name or not email or not password or not role:
            raise ValidationError("Please provide all required fields: name, email, password, role")
        parsed_role = Role.parse(role)

        if self._users.get_by_email(email):
            raise ConflictError("User with this email already exists")

        user = self._users.create_user(
            name=name,
            email=email,
            password_hash=self._hasher.hash(password),
            role=parsed_role,
        )
        logger.info("Registered user id=%s role=%s", user.user_id, user.role.value)
        return user

    def login(self, *, email: str, password: str, now: Optional[datetime] = None) -> LoginResult:
        email, password = text_field(email, "email"), _secret(password, "password")
        if not email or not password:
            raise ValidationError("Please provide email and password")

        user = self._users.get_by_email(email)
        if not user:
            # Spend the same hashing work as a real check so timing does not leak account existence.
            self._hasher.verify(password, self._get_dummy_hash())
            raise InvalidCredentialsError()
        if not self._hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError()

        token = self._tokens.issue(Principal.of(user), now=now or utc_now())
        return LoginResult(token=token, user=user)

    def request_otp(self, *, email: str, now: Optional[datetime] = None) -> OTPIssue:
        email = text_field(email, "email")
        if not email:
            raise ValidationError("Please provide email")

        user = self._users.get_by_email(email)
        if not user:
            raise NotFoundError("User not found")

        now = now or utc_now()
        code = generate_otp()
        expires_at = otp_expiry(now, self._settings.otp_expire_minutes)
        self._otps.create_otp(user_id=user.user_id, code=code, expires_at=expires_at)

        # No delivery channel: the log is where the code goes.
        logger.info("OTP for %s: %s (expires at %s UTC)", email, code, expires_at.isoformat())
        return OTPIssue(code=code, expires_at=expires_at)

    def verify_otp_and_change_password(
        self,
        *,
        email: str,
        code: str,
        new_password: str,
        now: Optional[datetime] = None,
    ) -> None:
        email, code = text_field(email, "email"), text_field(code, "otp")
        new_password = _secret(new_password, "newPassword")
        if not email or not code or not new_password:
            raise ValidationError("Please provide email, OTP, and new password")

        user = self._users.get_by_email(email)
        if not user:
            raise NotFoundError("User not found")

        token = self._otps.find_latest_unused(user_id=user.user_id, code=code)
        if not token:
            raise InvalidOTPError("Invalid OTP")
        if is_otp_expired(token.expires_at, now or utc_now()):
            raise ExpiredOTPError("OTP has expired")

        consumed = self._otps.consume_and_update_password(
            otp_id=token.otp_id,
            user_id=user.user_id,
            password_hash=self._hasher.hash(new_password),
        )
        if not consumed:
            raise InvalidOTPError("OTP already used")
        logger.info("Password changed via OTP for user id=%s", user.user_id)

    def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self._hasher.hash("not-a-real-password")
        return self._dummy_hash
