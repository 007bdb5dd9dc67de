"""Unit tests for operator credential checks"""

import pytest
from conftest import ADMIN_EMAIL, ADMIN_PASSWORD, LOADER_EMAIL, LOADER_PASSWORD
from payment_desk.config import settings
from payment_desk.domain.credentials import authenticate, configured_operators, find_operator
from payment_desk.domain.exceptions import AuthenticationError, ConfigurationError
from payment_desk.domain.models import Identity, Role


def test_admin_credentials_resolve_to_admin():
    assert authenticate(ADMIN_EMAIL, ADMIN_PASSWORD) == Identity(ADMIN_EMAIL, Role.ADMIN)


def test_loader_credentials_resolve_to_loader():
    assert authenticate(LOADER_EMAIL, LOADER_PASSWORD) == Identity(LOADER_EMAIL, Role.LOADER)


def test_wrong_password_and_unknown_email_look_identical():
    """No user-enumeration signal in the failure"""
    with pytest.raises(AuthenticationError) as wrong_password:
        authenticate(ADMIN_EMAIL, "not-the-password")
    with pytest.raises(AuthenticationError) as unknown_email:
        authenticate("nobody@example.com", ADMIN_PASSWORD)

    assert wrong_password.value.message == unknown_email.value.message
    assert wrong_password.value.details == unknown_email.value.details


def test_password_of_other_operator_rejected():
    with pytest.raises(AuthenticationError):
        authenticate(ADMIN_EMAIL, LOADER_PASSWORD)


def test_overlong_password_rejected_without_error():
    with pytest.raises(AuthenticationError):
        authenticate(ADMIN_EMAIL, "x" * 100)


def test_unconfigured_operator_cannot_log_in(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(settings, "loader_password_hash", "")

    assert [op.role for op in configured_operators()] == [Role.ADMIN]
    assert find_operator(LOADER_EMAIL) is None
    with pytest.raises(AuthenticationError):
        authenticate(LOADER_EMAIL, LOADER_PASSWORD)


def test_corrupt_hash_is_a_configuration_error(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(settings, "admin_password_hash", "plaintext-by-mistake")
    with pytest.raises(ConfigurationError):
        authenticate(ADMIN_EMAIL, ADMIN_PASSWORD)
