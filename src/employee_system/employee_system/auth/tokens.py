"""Signed, self-contained bearer tokens.

Tokens are itsdangerous URL-safe signed JSON carrying ``id``, ``email``,
``role``, ``iat`` and ``exp`` (UTC epoch seconds). There is no revocation:
a token is honoured until ``exp`` even if the user's role or password
changes in the meantime.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Optional

from itsdangerous import BadPayload, BadSignature, URLSafeSerializer

from ..common.datetime_utils import epoch_seconds, to_epoch, utc_now
from ..core.constants import DEFAULT_TOKEN_TTL_DAYS, TOKEN_SALT
from ..core.enums import Role, TokenFailure
from ..core.exceptions import ConfigurationError, InvalidTokenError
from .model import Principal


class TokenService:
    def __init__(self, secret: str, ttl: timedelta = timedelta(days=DEFAULT_TOKEN_TTL_DAYS)):
        if not secret:
            raise ConfigurationError("Token signing secret is not configured")
        if ttl.total_seconds() <= 0:
            raise ConfigurationError("Token lifetime must be positive")
        self._serializer = URLSafeSerializer(secret, salt=TOKEN_SALT)
        self._ttl_seconds = int(ttl.total_seconds())

    @property
    def ttl(self) -> timedelta:
        return timedelta(seconds=self._ttl_seconds)

    def issue(self, principal: Principal, now: Optional[datetime] = None) -> str:
        issued_at = to_epoch(now or utc_now())
        payload = {
            "id": principal.user_id,
            "email": principal.email,
            "role": principal.role.value,
            "iat": issued_at,
            "exp": issued_at + self._ttl_seconds,
        }
        return self._serializer.dumps(payload)

    def verify(self, token: str, now: Optional[datetime] = None) -> Principal:
        if not token or "." not in token:
            raise InvalidTokenError(TokenFailure.MALFORMED)

        try:
            payload = self._serializer.loads(token)
        except BadPayload as exc:
            raise InvalidTokenError(TokenFailure.MALFORMED) from exc
        except BadSignature as exc:
            raise InvalidTokenError(TokenFailure.SIGNATURE) from exc

        principal, expires_at = self._parse_claims(payload)
        # now == exp is still valid; any fraction of a second past it is not.
        if epoch_seconds(now or utc_now()) > expires_at:
            raise InvalidTokenError(TokenFailure.EXPIRED)
        return principal

    @staticmethod
    def _parse_claims(payload: Any) -> tuple[Principal, int]:
        if not isinstance(payload, dict):
            raise InvalidTokenError(TokenFailure.MALFORMED)

        user_id = payload.get("id")
        email = payload.get("email")
        exp = payload.get("exp")
        if not isinstance(user_id, int) or not isinstance(email, str) or not isinstance(exp, int):
            raise InvalidTokenError(TokenFailure.MALFORMED)
        try:
            role = Role(payload.get("role"))
        except ValueError as exc:
            raise InvalidTokenError(TokenFailure.MALFORMED) from exc

        return Principal(user_id=user_id, email=email, role=role), exp
