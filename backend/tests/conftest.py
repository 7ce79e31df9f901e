"""Global pytest fixtures for the blog API.

Every test gets its own application, hence its own empty data store and
refresh-token store; nothing leaks between cases.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import pytest
from flask import Flask

from blogapi import create_app
from blogapi.core.config import TestingConfig
from blogapi.core.extensions import REFRESH_STORE_KEY, STORE_KEY
from blogapi.models.user import User
from blogapi.repositories.store import DataStore
from tests.factories import StoreSession
from tests.factories.user import AdminFactory, UserFactory
from tests.helpers.auth import bearer, issue_token


@pytest.fixture()
def app() -> Generator[Flask, None, None]:
    """Create a Flask application configured for tests.

    Yields
    ------
    flask.Flask
        Application with :class:`TestingConfig` applied and an app context
        pushed, so token helpers work outside requests.
    """

    application = create_app(TestingConfig, instance_relative_config=False)
    application.logger.setLevel("WARNING")
    with application.app_context():
        yield application


@pytest.fixture()
def client(app: Flask) -> Any:
    """Return a Flask test client."""

    return app.test_client()


@pytest.fixture()
def store(app: Flask) -> Generator[DataStore, None, None]:
    """Expose the app's data store and wire the factories to it."""

    data_store = app.extensions[STORE_KEY]
    StoreSession.set(data_store)
    try:
        yield data_store
    finally:
        StoreSession.set(None)


@pytest.fixture()
def refresh_store(app: Flask) -> Any:
    return app.extensions[REFRESH_STORE_KEY]


@pytest.fixture()
def user(store: DataStore) -> User:
    """Regular active user with password ``test123``."""

    return UserFactory(username="testuser", email="test@example.com", password="test123")


@pytest.fixture()
def other_user(store: DataStore) -> User:
    return UserFactory(username="stranger", email="stranger@example.com")


@pytest.fixture()
def admin(store: DataStore) -> User:
    return AdminFactory(username="admin", email="admin@example.com", password="admin123")


@pytest.fixture()
def inactive_user(store: DataStore) -> User:
    return UserFactory(
        username="inactive", email="inactive@example.com", password="inactive123", is_active=False
    )


@pytest.fixture()
def auth_header(user: User) -> dict[str, str]:
    """Authorization header carrying a valid access token for ``user``."""

    return bearer(issue_token(user.id))


@pytest.fixture()
def headers_for() -> Callable[[User], dict[str, str]]:
    """Factory returning an Authorization header for any user."""

    def _factory(who: User) -> dict[str, str]:
        return bearer(issue_token(who.id))

    return _factory


@pytest.fixture()
def freeze_time() -> Callable[[str | None], Any]:
    """Factory returning :func:`freezegun.freeze_time`.

    Examples
    --------
    >>> def test_with_frozen_time(freeze_time):
    ...     with freeze_time("2024-01-01"):
    ...         ...
    """

    from freezegun import freeze_time as _freeze_time

    def _factory(target: str | None = None) -> Any:
        return _freeze_time(target or "2024-01-01")

    return _factory
