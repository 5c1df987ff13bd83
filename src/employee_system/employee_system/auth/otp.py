"""One-time password codes for the password reset flow."""
from __future__ import annotations

import secrets
from datetime import datetime, timedelta

from ..core.constants import DEFAULT_OTP_EXPIRE_MINUTES, OTP_DIGITS


def generate_otp() -> str:
    """Uniform six-digit code; leading zeros are kept ("000042")."""
    return f"{secrets.randbelow(10 ** OTP_DIGITS):0{OTP_DIGITS}d}"


def otp_expiry(now: datetime, minutes: int = DEFAULT_OTP_EXPIRE_MINUTES) -> datetime:
    return now + timedelta(minutes=int(minutes))


def is_otp_expired(expires_at: datetime, now: datetime) -> bool:
    # The expiry instant itself is still valid.
    return now > expires_at
