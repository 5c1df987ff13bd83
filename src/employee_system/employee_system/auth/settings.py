from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from types import ModuleType

from ..core.constants import DEFAULT_OTP_EXPIRE_MINUTES, DEFAULT_TOKEN_TTL_DAYS
from ..core.exceptions import ConfigurationError

ENV_MODES = {"development", "testing", "production"}


@dataclass(frozen=True)
class AuthSettings:
    """Process-wide auth configuration, fixed at startup."""

    secret_key: str
    token_ttl: timedelta = timedelta(days=DEFAULT_TOKEN_TTL_DAYS)
    otp_expire_minutes: int = DEFAULT_OTP_EXPIRE_MINUTES
    env_mode: str = "production"

    def __post_init__(self):
        if not self.secret_key or not self.secret_key.strip():
            raise ConfigurationError("JWT_SECRET / SECRET_KEY must be set to a non-empty value")
        if self.env_mode not in ENV_MODES:
            raise ConfigurationError(f"Unknown environment mode: {self.env_mode!r}")
        if int(self.otp_expire_minutes) <= 0:
            raise ConfigurationError("OTP_EXPIRE_MINUTES must be positive")

    @property
    def expose_otp(self) -> bool:
        # Development-only affordance; never true in production.
        return self.env_mode == "development"

    @classmethod
    def from_module(cls, settings: ModuleType) -> "AuthSettings":
        return cls(
            secret_key=str(getattr(settings, "SECRET_KEY", "") or ""),
            token_ttl=timedelta(days=int(getattr(settings, "TOKEN_TTL_DAYS", DEFAULT_TOKEN_TTL_DAYS))),
            otp_expire_minutes=int(getattr(settings, "OTP_EXPIRE_MINUTES", DEFAULT_OTP_EXPIRE_MINUTES)),
            env_mode=str(getattr(settings, "ENV_MODE", "production")),
        )
