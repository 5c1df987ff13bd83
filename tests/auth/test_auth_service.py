from __future__ import annotations

from datetime import timedelta

import pytest

from src.employee_system.employee_system.core.enums import Role
from src.employee_system.employee_system.core.exceptions import (
    ConflictError,
    ExpiredOTPError,
    InvalidCredentialsError,
    InvalidOTPError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def auth(container):
    return container.auth_service


def test_register_stores_hash_and_parsed_role(auth, users, hasher):
    user = auth.register(name=" Ana ", email="ana@example.com", password="pw-123456", role="hr")

    stored = users.get_by_email("ana@example.com")
    assert stored == user
    assert stored.name == "Ana"
    assert stored.role is Role.HR
    assert stored.password_hash != "pw-123456"
    assert hasher.verify("pw-123456", stored.password_hash)


def test_duplicate_email_is_rejected_and_only_one_row_exists(auth, users):
    auth.register(name="A", email="dup@example.com", password="pw-123456", role="employee")

    with pytest.raises(ConflictError, match="already exists"):
        auth.register(name="B", email="dup@example.com", password="other-pw", role="admin")

    assert len(users.list_users()) == 1


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(name="", email="x@example.com", password="pw", role="employee"),
        dict(name="X", email="   ", password="pw", role="employee"),
        dict(name="X", email="x@example.com", password="", role="employee"),
        dict(name="X", email="x@example.com", password="pw", role=None),
    ],
)
def test_register_requires_every_field(auth, kwargs):
    with pytest.raises(ValidationError, match="Please provide all required fields"):
        auth.register(**kwargs)


def test_register_rejects_unknown_role(auth):
    with pytest.raises(ValidationError, match="Invalid role"):
        auth.register(name="X", email="x@example.com", password="pw", role="superuser")


def test_login_returns_token_for_the_user(auth, container, make_user, fixed_now):
    user = make_user("emp@example.com", Role.EMPLOYEE, password="employee123")

    result = auth.login(email="emp@example.com", password="employee123", now=fixed_now)

    assert result.user == user
    principal = container.token_service.verify(result.token, now=fixed_now)
    assert principal.user_id == user.user_id
    assert principal.role is Role.EMPLOYEE


def test_wrong_password_and_unknown_email_fail_identically(auth, make_user):
    make_user("emp@example.com", password="employee123")

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        auth.login(email="emp@example.com", password="nope")
    with pytest.raises(InvalidCredentialsError) as unknown_email:
        auth.login(email="ghost@example.com", password="nope")

    assert type(wrong_password.value) is type(unknown_email.value)
    assert str(wrong_password.value) == str(unknown_email.value) == "Invalid credentials"
    assert wrong_password.value.status_code == unknown_email.value.status_code == 401


def test_login_requires_email_and_password(auth):
    with pytest.raises(ValidationError):
        auth.login(email="", password="x")
    with pytest.raises(ValidationError):
        auth.login(email="a@example.com", password="")


def test_request_otp_for_unknown_email(auth):
    with pytest.raises(NotFoundError, match="User not found"):
        auth.request_otp(email="ghost@example.com")


def test_request_otp_stores_code_with_ten_minute_expiry(auth, otps, make_user, fixed_now):
    user = make_user("emp@example.com")

    issued = auth.request_otp(email="emp@example.com", now=fixed_now)

    assert issued.expires_at == fixed_now + timedelta(minutes=10)
    (stored,) = otps.tokens.values()
    assert stored.user_id == user.user_id
    assert stored.code == issued.code
    assert stored.used is False


def test_otp_changes_password_once_and_cannot_be_reused(auth, otps, make_user, fixed_now):
    make_user("emp@example.com", password="old-password")
    issued = auth.request_otp(email="emp@example.com", now=fixed_now)

    auth.verify_otp_and_change_password(
        email="emp@example.com", code=issued.code, new_password="new-password", now=fixed_now + timedelta(minutes=5)
    )

    assert auth.login(email="emp@example.com", password="new-password").user.email == "emp@example.com"
    with pytest.raises(InvalidCredentialsError):
        auth.login(email="emp@example.com", password="old-password")
    assert all(t.used for t in otps.tokens.values())

    with pytest.raises(InvalidOTPError):
        auth.verify_otp_and_change_password(
            email="emp@example.com", code=issued.code, new_password="third-password", now=fixed_now
        )
    auth.login(email="emp@example.com", password="new-password")


def test_expired_otp_leaves_password_unchanged(auth, users, make_user, fixed_now):
    user = make_user("emp@example.com", password="old-password")
    before = users.get_by_id(user.user_id).password_hash
    issued = auth.request_otp(email="emp@example.com", now=fixed_now)

    with pytest.raises(ExpiredOTPError, match="OTP has expired"):
        auth.verify_otp_and_change_password(
            email="emp@example.com",
            code=issued.code,
            new_password="new-password",
            now=issued.expires_at + timedelta(seconds=1),
        )

    assert users.get_by_id(user.user_id).password_hash == before


def test_otp_is_accepted_at_its_expiry_instant(auth, make_user, fixed_now):
    make_user("emp@example.com", password="old-password")
    issued = auth.request_otp(email="emp@example.com", now=fixed_now)

    auth.verify_otp_and_change_password(
        email="emp@example.com", code=issued.code, new_password="new-password", now=issued.expires_at
    )

    auth.login(email="emp@example.com", password="new-password")


def test_wrong_code_is_invalid(auth, make_user, fixed_now):
    make_user("emp@example.com")
    issued = auth.request_otp(email="emp@example.com", now=fixed_now)
    wrong = "000000" if issued.code != "000000" else "111111"

    with pytest.raises(InvalidOTPError, match="Invalid OTP"):
        auth.verify_otp_and_change_password(email="emp@example.com", code=wrong, new_password="x", now=fixed_now)


def test_several_outstanding_codes_are_each_usable(auth, make_user, fixed_now):
    make_user("emp@example.com")
    first = auth.request_otp(email="emp@example.com", now=fixed_now)
    second = auth.request_otp(email="emp@example.com", now=fixed_now + timedelta(minutes=1))

    auth.verify_otp_and_change_password(email="emp@example.com", code=second.code, new_password="pw-two", now=fixed_now)
    auth.verify_otp_and_change_password(email="emp@example.com", code=first.code, new_password="pw-one", now=fixed_now)

    auth.login(email="emp@example.com", password="pw-one")


def test_losing_the_consume_race_is_reported_as_already_used(auth, otps, users, make_user, fixed_now, monkeypatch):
    user = make_user("emp@example.com", password="old-password")
    before = users.get_by_id(user.user_id).password_hash
    issued = auth.request_otp(email="emp@example.com", now=fixed_now)
    lookup = otps.find_latest_unused

    def lookup_then_concurrent_consume(**kwargs):
        token = lookup(**kwargs)
        otps.consume_and_update_password(otp_id=token.otp_id, user_id=token.user_id, password_hash=before)
        return token

    monkeypatch.setattr(otps, "find_latest_unused", lookup_then_concurrent_consume)

    with pytest.raises(InvalidOTPError, match="already used"):
        auth.verify_otp_and_change_password(
            email="emp@example.com", code=issued.code, new_password="new-password", now=fixed_now
        )
    assert users.get_by_id(user.user_id).password_hash == before


def test_verify_otp_requires_all_fields(auth):
    with pytest.raises(ValidationError):
        auth.verify_otp_and_change_password(email="a@example.com", code="", new_password="x")


def test_emails_are_matched_exactly_as_stored(auth, users):
    auth.register(name="Lower", email="alice@example.com", password="pw-lower", role="employee")
    auth.register(name="Upper", email="Alice@example.com", password="pw-upper", role="employee")

    assert len(users.list_users()) == 2
    assert auth.login(email="Alice@example.com", password="pw-upper").user.name == "Upper"
    with pytest.raises(InvalidCredentialsError):
        auth.login(email="ALICE@example.com", password="pw-lower")
