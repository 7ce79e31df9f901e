# blogapi/services/_shared/base.py
from __future__ import annotations

import functools
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, TypeVar

from blogapi.core import errors as api_errors
from blogapi.models.user import User
from blogapi.repositories.base import Pagination
from blogapi.repositories.store import DataStore
from blogapi.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ServiceError,
    TokenIssueError,
    ValidationError,
)
from blogapi.services._shared.policies.common import can_mutate

F = TypeVar("F", bound=Callable[..., Any])


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data.

    :param actor: Authenticated user resolved from the bearer token, if any.
    :param request_id: Correlation id for logging/tracing.
    """

    actor: User | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Hold the injected :class:`DataStore` (no module-level singleton).
    * Centralize error translation.
    * Offer shared validation helpers (pagination, ownership).
    * Keep services thin, orchestration-only, no web leakage.
    """

    def __init__(self, store: DataStore, *, ctx: ServiceContext | None = None) -> None:
        """
        Initialize the base service.

        :param store: Data store shared by the application instance.
        :param ctx: Optional request-scoped context (actor, tracing).
        """
        self.store = store
        self.ctx = ctx or ServiceContext()

    # ----------------------- Validation utilities ---------------------------

    def ensure_pagination(
        self, *, page: int, limit: int, sort: Iterable[str] | None = None
    ) -> Pagination:
        """
        Build a Pagination value object with basic clamping.

        :param page: 1-based page number.
        :param limit: Page size.
        :param sort: Sort tokens like ``["-created_at", "title"]``.
        :returns: Pagination instance.
        """
        page = max(1, int(page))
        limit = max(1, int(limit))
        return Pagination(page=page, limit=limit, sort=list(sort or []))

    def require_actor(self) -> User:
        """
        Return the authenticated caller.

        :raises AuthenticationError: When the request carried no valid access token.
        """
        if self.ctx.actor is None:
            raise AuthenticationError("Unauthorized")
        return self.ctx.actor

    # --------------------------- AuthZ --------------------------------

    def ensure_can_mutate(self, owner_id: str, *, msg: str = "Forbidden") -> None:
        """
        Ensure the current actor authored the resource or is an admin.

        :param owner_id: Author id stored on the resource.
        :param msg: Optional custom error message.
        :raises AuthorizationError: If the actor is neither owner nor admin.
        """
        actor = self.require_actor()
        if not can_mutate(actor, owner_id):
            raise AuthorizationError(msg)

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map domain/service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :returns: Translated exception ready to be re-raised.
        """
        if isinstance(exc, NotFoundError):
            return api_errors.NotFound(str(exc))
        if isinstance(exc, ConflictError):
            return api_errors.Conflict(str(exc))
        if isinstance(exc, AuthenticationError):
            return api_errors.Unauthorized(str(exc))
        if isinstance(exc, AuthorizationError):
            return api_errors.Forbidden(str(exc))
        if isinstance(exc, TokenIssueError):
            return api_errors.InternalError(str(exc))
        if isinstance(exc, ValidationError):
            return api_errors.BadRequest(str(exc))

        # Any other ServiceError subclass -> 400 Bad Request
        if isinstance(exc, ServiceError):
            return api_errors.APIError(message=str(exc), status_code=400, code="bad_request")

        # Fallback: return untouched (will bubble up to Flask handler)
        return exc


def translating(func: F) -> F:
    """Decorator re-raising :class:`ServiceError` as the matching API error."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        try:
            return func(*args, **kwargs)
        except ServiceError as exc:
            raise BaseService.translate_exceptions(exc) from exc

    return wrapper  # type: ignore[return-value]
