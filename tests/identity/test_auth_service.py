from __future__ import annotations

import pytest

from irs_timesheet.core.enums import AccountStatus, Role
from irs_timesheet.core.exceptions import (
    AccountBlocked,
    AccountNotFound,
    AuthenticationError,
    InvalidCredentials,
    ProfileIncomplete,
)
from irs_timesheet.identity.service import AuthService


def _auth(world) -> AuthService:
    return AuthService(world.identity, world.users)


def test_login_returns_projection_and_normalizes_email(world):
    acc = world.add_account("John Doe", "john@irs.com", Role.EMPLOYEE, password="pw12345")

    s_user = _auth(world).authenticate("  JOHN@IRS.com ", "pw12345")

    assert s_user.account_id == acc.account_id
    assert s_user.role == Role.EMPLOYEE
    assert s_user.to_dict() == {"id": acc.account_id, "name": "John Doe", "email": "john@irs.com", "role": "Employee"}


def test_unknown_email_is_account_not_found(world):
    with pytest.raises(AccountNotFound):
        _auth(world).authenticate("nobody@irs.com", "whatever")


def test_wrong_password_is_invalid_credentials(world):
    world.add_account("John", "john@irs.com", Role.EMPLOYEE, password="pw12345")
    with pytest.raises(InvalidCredentials):
        _auth(world).authenticate("john@irs.com", "nope123")


def test_disabled_identity_is_blocked(world):
    world.add_account("John", "john@irs.com", Role.EMPLOYEE, password="pw12345")
    world.identity.by_email["john@irs.com"].disabled = True
    with pytest.raises(AccountBlocked):
        _auth(world).authenticate("john@irs.com", "pw12345")


def test_blocked_profile_fails_even_with_correct_password_and_signs_out(world):
    acc = world.add_account("John", "john@irs.com", Role.EMPLOYEE, password="pw12345", status=AccountStatus.BLOCKED)

    with pytest.raises(AccountBlocked):
        _auth(world).authenticate("john@irs.com", "pw12345")

    assert world.identity.signed_out == [acc.account_id]


def test_identity_without_profile_is_profile_incomplete(world):
    identity_id = world.identity.create_identity("ghost@irs.com", "pw12345")

    with pytest.raises(ProfileIncomplete):
        _auth(world).authenticate("ghost@irs.com", "pw12345")

    assert world.identity.signed_out == [identity_id]


def test_profile_without_role_is_profile_incomplete(world):
    world.add_account("Half", "half@irs.com", None, password="pw12345")
    with pytest.raises(ProfileIncomplete):
        _auth(world).authenticate("half@irs.com", "pw12345")


def test_all_login_failures_are_authentication_errors():
    for err in (InvalidCredentials, AccountNotFound, AccountBlocked, ProfileIncomplete):
        assert issubclass(err, AuthenticationError)


def test_current_account_drops_blocked_or_deleted_users(world):
    acc = world.add_account("John", "john@irs.com", Role.EMPLOYEE)
    auth = _auth(world)

    assert auth.current_account(acc.account_id).name == "John"

    world.users.update_fields(acc.account_id, {"status": AccountStatus.BLOCKED})
    assert auth.current_account(acc.account_id) is None

    world.users.delete_by_id(acc.account_id)
    assert auth.current_account(acc.account_id) is None


def test_logout_signs_out(world):
    acc = world.add_account("John", "john@irs.com", Role.EMPLOYEE)
    _auth(world).logout(acc.account_id)
    assert world.identity.signed_out == [acc.account_id]
