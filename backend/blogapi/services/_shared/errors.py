"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
helpers. They are the stable contract between repositories, models and
application services.

The translation to HTTP responses is handled by ``blogapi/core/errors.py``
via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass

# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories or domain logic.
    - The API layer or BaseService will later translate them to APIError.
    """

    def __init__(self, message: str = "Service error") -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class ValidationError(ServiceError):
    """A required field is missing or unusable (400)."""


class AuthenticationError(ServiceError):
    """Credentials or tokens were rejected (401)."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class AuthorizationError(ServiceError):
    """The caller is authenticated but may not act on the resource (403)."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message)


class InactiveAccountError(AuthorizationError):
    """Correct credentials for an account whose ``is_active`` flag is off (403)."""

    def __init__(self, message: str = "User account is inactive") -> None:
        super().__init__(message)


class TokenIssueError(ServiceError):
    """Signing a token failed (500)."""

    def __init__(self, message: str = "Failed to generate tokens") -> None:
        super().__init__(message)


@dataclass(eq=False)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "Post").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str
    :param detail: Client-facing message; defaults to ``"<entity> not found"``.
    :type detail: str | None
    """

    entity: str
    key: str
    detail: str | None = None

    def __post_init__(self) -> None:
        super().__init__(self.detail or f"{self.entity} not found")


@dataclass(eq=False)
class ConflictError(ServiceError):
    """
    Raised when a uniqueness rule or business rule conflict occurs.

    :param entity: Entity name (e.g., "Follow").
    :type entity: str
    :param detail: Short human-readable explanation, returned to clients.
    :type detail: str
    """

    entity: str
    detail: str

    def __post_init__(self) -> None:
        super().__init__(self.detail)
