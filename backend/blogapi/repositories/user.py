"""User repository with login lookups."""

from __future__ import annotations

from blogapi.models.user import User
from blogapi.repositories.base import Exact, InMemoryRepository


class UserRepository(InMemoryRepository[User]):
    """Persistence-only repository for :class:`User`.

    It NEVER handles JWT or session creation; only user records.
    """

    entity = User

    def _sortable_fields(self):
        return {
            "created_at": "created_at",
            "createdAt": "created_at",
            "username": "username",
        }

    def _unique_fields(self):
        return ("username", "email")

    def _updatable_fields(self):
        return {"first_name", "last_name", "bio", "avatar_url", "role", "is_active"}

    def get_by_username(self, username: str) -> User | None:
        return self.find_first([Exact("username", username)])

    def get_by_email(self, email: str) -> User | None:
        return self.find_first([Exact("email", email)])

    def get_by_identifier(self, identifier: str) -> User | None:
        """Resolve a login identifier: username first, then email."""
        with self._lock:
            return self.get_by_username(identifier) or self.get_by_email(identifier)
