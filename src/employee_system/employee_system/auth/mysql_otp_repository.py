from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import OTPToken
from .repository import OTPRepository


class MySQLOTPRepository(OTPRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_otp(self, *, user_id: int, code: str, expires_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO otp_tokens(user_id, otp, expires_at) VALUES(%s,%s,%s)",
                (int(user_id), code, expires_at),
            )
            return int(cur.lastrowid)

    def find_latest_unused(self, *, user_id: int, code: str) -> Optional[OTPToken]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, user_id, otp, expires_at, used, created_at
                FROM otp_tokens
                WHERE user_id=%s AND otp=%s AND used=FALSE
                ORDER BY created_at DESC, id DESC
                LIMIT 1
                """,
                (int(user_id), code),
            )
            r = fetchone(cur)
            if not r:
                return None
            return OTPToken(
                otp_id=int(r["id"]),
                user_id=int(r["user_id"]),
                code=r["otp"],
                expires_at=r["expires_at"],
                used=bool(r["used"]),
                created_at=r.get("created_at"),
            )

    def mark_used(self, otp_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE otp_tokens SET used=TRUE WHERE id=%s AND used=FALSE", (int(otp_id),))
            return cur.rowcount > 0

    def consume_and_update_password(self, *, otp_id: int, user_id: int, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # Claim the token first; losing the race leaves the password alone.
            cur.execute(
                "UPDATE otp_tokens SET used=TRUE WHERE id=%s AND user_id=%s AND used=FALSE",
                (int(otp_id), int(user_id)),
            )
            if cur.rowcount == 0:
                return False
            cur.execute("UPDATE users SET password_hash=%s WHERE id=%s", (password_hash, int(user_id)))
            return True
