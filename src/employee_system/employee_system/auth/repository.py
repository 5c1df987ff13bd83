from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import OTPToken


class OTPRepository(Protocol):
    def create_otp(self, *, user_id: int, code: str, expires_at: datetime) -> int:
        raise NotImplementedError

    def find_latest_unused(self, *, user_id: int, code: str) -> Optional[OTPToken]:
        """Newest unused token for this user with exactly this code."""

        raise NotImplementedError

    def mark_used(self, otp_id: int) -> bool:
        raise NotImplementedError

    def consume_and_update_password(self, *, otp_id: int, user_id: int, password_hash: str) -> bool:
        """Mark the OTP used and store the new hash as a single transaction.

        Returns False (and changes nothing) if the OTP was already used.
        """

        raise NotImplementedError
