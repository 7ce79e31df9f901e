"""Unit tests for :class:`AuthService` wired to in-memory doubles."""

from __future__ import annotations

import pytest

from blogapi.repositories.store import DataStore
from blogapi.services._shared.base import ServiceContext
from blogapi.services._shared.errors import (
    AuthenticationError,
    InactiveAccountError,
    TokenIssueError,
    ValidationError,
)
from blogapi.services._shared.ports.refresh_token_store import InMemoryRefreshTokenStore
from blogapi.services._shared.ports.token_provider import StubTokenProvider
from blogapi.services.auth.dto import LoginIn, LogoutIn, RefreshIn
from blogapi.services.auth.service import AuthService
from tests.factories import StoreSession
from tests.factories.user import UserFactory


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def data_store():
    data_store = DataStore()
    StoreSession.set(data_store)
    yield data_store
    StoreSession.set(None)


@pytest.fixture()
def service(data_store) -> AuthService:
    """Build an AuthService wired to in-memory doubles."""
    return AuthService(
        data_store,
        token_provider=StubTokenProvider(),
        refresh_store=InMemoryRefreshTokenStore(),
    )


@pytest.fixture()
def member(data_store):
    return UserFactory(username="testuser", email="test@example.com", password="test123")


def _as(service: AuthService, user) -> AuthService:
    return AuthService(
        service.store,
        token_provider=service.tokens,
        refresh_store=service.refresh_store,
        ctx=ServiceContext(actor=user),
    )


# ------------------------------- Login ------------------------------------ #
def test_login_by_username_or_email_issues_pair_and_record(service, member):
    by_name = service.login(LoginIn(identifier="testuser", password="test123"))
    by_mail = service.login(LoginIn(identifier="test@example.com", password="test123"))

    for result in (by_name, by_mail):
        assert result.user is member
        assert service.tokens.verify(result.access_token).type == "access"
        assert service.tokens.verify(result.refresh_token).type == "refresh"
        record = service.refresh_store.get(result.refresh_token)
        assert record is not None
        assert record.user_id == member.id
        assert record.is_revoked is False


@pytest.mark.parametrize(
    ("identifier", "password", "error", "message"),
    [
        ("testuser", None, ValidationError, "Password is required"),
        (None, "test123", ValidationError, "Username or email is required"),
        ("ghost", "test123", AuthenticationError, "Invalid credentials"),
        ("testuser", "wrong", AuthenticationError, "Invalid credentials"),
    ],
)
def test_login_rejections(service, member, identifier, password, error, message):
    with pytest.raises(error) as excinfo:
        service.login(LoginIn(identifier=identifier, password=password))
    assert str(excinfo.value) == message


def test_login_checks_password_before_active_flag(service):
    UserFactory(username="sleepy", password="right", is_active=False)

    with pytest.raises(AuthenticationError):
        service.login(LoginIn(identifier="sleepy", password="wrong"))
    with pytest.raises(InactiveAccountError) as excinfo:
        service.login(LoginIn(identifier="sleepy", password="right"))
    assert str(excinfo.value) == "User account is inactive"


def test_login_signing_failure_is_token_issue_error(service, member):
    service.tokens.fail_issuing = True
    with pytest.raises(TokenIssueError) as excinfo:
        service.login(LoginIn(identifier="testuser", password="test123"))
    assert str(excinfo.value) == "Failed to generate tokens"
    # Nothing was persisted for the failed login
    assert service.refresh_store.revoke_all_for_user(member.id) == 0


# ------------------------------ Refresh ----------------------------------- #
def test_refresh_rotates_and_old_token_is_single_use(service, member):
    first = service.login(LoginIn(identifier="testuser", password="test123"))

    second = service.refresh(RefreshIn(refresh_token=first.refresh_token))

    assert second.refresh_token != first.refresh_token
    assert service.refresh_store.get(first.refresh_token).is_revoked is True
    assert service.refresh_store.get(second.refresh_token).is_revoked is False
    with pytest.raises(AuthenticationError) as excinfo:
        service.refresh(RefreshIn(refresh_token=first.refresh_token))
    assert str(excinfo.value) == "Invalid or revoked refresh token"


def test_refresh_requires_token(service):
    with pytest.raises(ValidationError) as excinfo:
        service.refresh(RefreshIn(refresh_token=""))
    assert str(excinfo.value) == "Refresh token is required"


def test_refresh_unknown_token(service):
    with pytest.raises(AuthenticationError) as excinfo:
        service.refresh(RefreshIn(refresh_token="refresh.nobody.1"))
    assert str(excinfo.value) == "Invalid or revoked refresh token"


def test_refresh_expired_record_is_revoked(service, member, freeze_time):
    with freeze_time("2024-01-01"):
        pair = service.login(LoginIn(identifier="testuser", password="test123"))

    with freeze_time("2024-01-09"):
        with pytest.raises(AuthenticationError) as excinfo:
            service.refresh(RefreshIn(refresh_token=pair.refresh_token))

    assert str(excinfo.value) == "Refresh token expired"
    assert service.refresh_store.get(pair.refresh_token).is_revoked is True


def test_refresh_rejects_access_token_with_record(service, member):
    # A stored record whose token is not a refresh JWT fails the type check
    pair = service.login(LoginIn(identifier="testuser", password="test123"))
    service.refresh_store.add(service._new_record(member.id, pair.access_token))

    with pytest.raises(AuthenticationError) as excinfo:
        service.refresh(RefreshIn(refresh_token=pair.access_token))
    assert str(excinfo.value) == "Invalid JWT refresh token type"


def test_refresh_rejects_deactivated_user(service, member):
    pair = service.login(LoginIn(identifier="testuser", password="test123"))
    member.is_active = False

    with pytest.raises(AuthenticationError) as excinfo:
        service.refresh(RefreshIn(refresh_token=pair.refresh_token))
    assert str(excinfo.value) == "User not found or inactive for refresh token"


def test_refresh_signing_failure_message(service, member):
    pair = service.login(LoginIn(identifier="testuser", password="test123"))
    service.tokens.fail_issuing = True

    with pytest.raises(TokenIssueError) as excinfo:
        service.refresh(RefreshIn(refresh_token=pair.refresh_token))
    assert str(excinfo.value) == "Failed to generate new access token"
    assert service.refresh_store.get(pair.refresh_token).is_revoked is False


# ------------------------------- Logout ----------------------------------- #
def test_logout_revokes_and_is_idempotent(service, member):
    pair = service.login(LoginIn(identifier="testuser", password="test123"))

    service.logout(LogoutIn(refresh_token=pair.refresh_token))
    service.logout(LogoutIn(refresh_token=pair.refresh_token))
    service.logout(LogoutIn(refresh_token="never-issued"))

    assert service.refresh_store.get(pair.refresh_token).is_revoked is True


def test_logout_requires_token(service):
    with pytest.raises(ValidationError) as excinfo:
        service.logout(LogoutIn(refresh_token=None))
    assert str(excinfo.value) == "Refresh token is required for logout"


def test_logout_all_revokes_every_session(service, member):
    pairs = [service.login(LoginIn(identifier="testuser", password="test123")) for _ in range(2)]

    revoked = _as(service, member).logout_all()

    assert revoked == 2
    for pair in pairs:
        with pytest.raises(AuthenticationError):
            service.refresh(RefreshIn(refresh_token=pair.refresh_token))


def test_logout_all_requires_actor(service):
    with pytest.raises(AuthenticationError):
        service.logout_all()


# --------------------------- Bearer resolution ---------------------------- #
def test_resolve_current_user(service, member):
    pair = service.login(LoginIn(identifier="testuser", password="test123"))

    assert service.resolve_current_user(f"Bearer {pair.access_token}") is member
    assert service.resolve_current_user(None) is None
    assert service.resolve_current_user(pair.access_token) is None
    assert service.resolve_current_user("Bearer ") is None
    assert service.resolve_current_user("Bearer garbage") is None
    assert service.resolve_current_user(f"Bearer {pair.refresh_token}") is None


def test_resolve_current_user_unknown_subject(service):
    token = service.tokens.issue_access_token("deleted-user")
    assert service.resolve_current_user(f"Bearer {token}") is None


def test_verify_raises_uniform_message(service):
    with pytest.raises(AuthenticationError) as excinfo:
        service.verify("Bearer garbage")
    assert str(excinfo.value) == "Token is invalid or expired"
