from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ConfigurationError(Exception):
    """Raised at startup when required settings are missing."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConflictError(ValidationError):
    """Raised when a unique key (e.g. email) is already taken."""


class AuthenticationError(DomainError):
    """Raised when the caller cannot be identified."""

    status_code = 401


class InvalidCredentialsError(AuthenticationError):
    """Unknown email or wrong password; deliberately indistinguishable."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class Unauthenticated(AuthenticationError):
    """Missing, malformed or rejected bearer credential."""


class InvalidTokenError(AuthenticationError):
    """Raised by the token service; carries the internal failure reason."""

    def __init__(self, reason, detail: Optional[str] = None):
        self.reason = reason
        super().__init__(detail or f"Invalid token ({reason.value})")


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class Forbidden(AuthorizationError):
    """Authenticated, but not allowed to touch this resource."""


class NotFoundError(DomainError):
    status_code = 404


class OTPError(ValidationError):
    """Base for OTP failures. The client only ever sees the generic message."""

    public_message = "Invalid or expired OTP"


class InvalidOTPError(OTPError):
    """No unused OTP matches the submitted code."""


class ExpiredOTPError(OTPError):
    """The newest matching OTP is past its expiry."""


class StoreError(DomainError):
    """Underlying persistence failure."""

    status_code = 500


class HashingError(DomainError):
    status_code = 500
