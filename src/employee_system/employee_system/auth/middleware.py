from __future__ import annotations

import logging
from datetime import datetime
from functools import wraps
from typing import Optional

from flask import has_request_context, request

from ..core.exceptions import Forbidden, InvalidTokenError, Unauthenticated
from .model import Principal
from .tokens import TokenService

logger = logging.getLogger(__name__)


def parse_bearer(header: Optional[str]) -> str:
    if not header:
        raise Unauthenticated("No token provided. Authorization denied.")
    scheme, _, credential = header.strip().partition(" ")
    if scheme != "Bearer" or not credential.strip():
        raise Unauthenticated("No token provided. Authorization denied.")
    return credential.strip()


def ensure_elevated(principal: Principal) -> Principal:
    if not principal.is_elevated:
        raise Forbidden("Access denied. Admin or HR role required.")
    return principal


def ensure_self_or_elevated(principal: Principal, resource_owner_id: int) -> Principal:
    if principal.is_elevated or principal.user_id == int(resource_owner_id):
        return principal
    raise Forbidden("Access denied. You can only access your own resources.")


class Authenticator:
    """Guards protected views.

    The verified identity is passed to the view as the ``principal`` keyword
    argument; nothing is stashed on the request object.
    """

    def __init__(self, tokens: TokenService):
        self._tokens = tokens

    def authenticate(self, header: Optional[str], now: Optional[datetime] = None) -> Principal:
        token = parse_bearer(header)
        try:
            return self._tokens.verify(token, now=now)
        except InvalidTokenError as exc:
            logger.info("Rejected bearer token (%s) on %s", exc.reason.value, request.path if has_request_context() else "-")
            raise Unauthenticated("Invalid token. Authorization denied.") from exc

    def require_auth(self, view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            principal = self.authenticate(request.headers.get("Authorization"))
            return view(*args, principal=principal, **kwargs)

        return wrapper

    def require_elevated(self, view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            principal = self.authenticate(request.headers.get("Authorization"))
            ensure_elevated(principal)
            return view(*args, principal=principal, **kwargs)

        return wrapper

    def require_self_or_elevated(self, param: str = "user_id"):
        """Owner id comes from the URL rule, falling back to the JSON body."""

        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                principal = self.authenticate(request.headers.get("Authorization"))
                owner = kwargs.get(param)
                if owner is None:
                    body = request.get_json(silent=True) or {}
                    owner = body.get(param) if isinstance(body, dict) else None
                try:
                    owner_id = int(owner)
                except (TypeError, ValueError):
                    owner_id = None
                if owner_id is None:
                    ensure_elevated(principal)
                else:
                    ensure_self_or_elevated(principal, owner_id)
                return view(*args, principal=principal, **kwargs)

            return wrapper

        return decorator
