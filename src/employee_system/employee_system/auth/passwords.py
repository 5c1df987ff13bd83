from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.constants import DEFAULT_PASSWORD_METHOD, DEFAULT_SALT_LENGTH
from ..core.exceptions import HashingError


class PasswordHasher:
    """Salted, deliberately slow one-way hashing via werkzeug.

    The digest embeds method, cost and salt, so ``verify`` works for any
    digest produced by ``hash`` even if the configured cost later changes.
    """

    def __init__(self, method: str = DEFAULT_PASSWORD_METHOD, salt_length: int = DEFAULT_SALT_LENGTH):
        self._method = method
        self._salt_length = int(salt_length)

    def hash(self, plaintext: str) -> str:
        try:
            return generate_password_hash(plaintext, method=self._method, salt_length=self._salt_length)
        except (ValueError, TypeError, AttributeError, OSError) as exc:
            raise HashingError(f"Password hashing failed: {exc}") from exc

    def verify(self, plaintext: str, digest: str) -> bool:
        if not digest:
            return False
        try:
            return check_password_hash(digest, plaintext)
        except (ValueError, TypeError, AttributeError):
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            return False
