from __future__ import annotations

from typing import Optional, Sequence

from ..auth.middleware import ensure_self_or_elevated
from ..auth.model import Principal
from ..core.enums import Role
from ..core.exceptions import NotFoundError
from .model import User
from .repository import UserRepository


class UserService:
    """Use case: user directory (profile, admin listing)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def profile(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def get_user(self, principal: Principal, user_id: int) -> User:
        ensure_self_or_elevated(principal, user_id)
        return self.profile(user_id)

    def list_users(self, *, role: Optional[str] = None) -> Sequence[User]:
        parsed = Role.parse(role) if role else None
        return self._users.list_users(role=parsed)
