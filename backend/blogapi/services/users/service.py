# blogapi/services/users/service.py
from __future__ import annotations

from blogapi.models.user import User
from blogapi.repositories.base import Contains, Filter, Page, Pagination
from blogapi.services._shared.base import BaseService
from blogapi.services._shared.errors import NotFoundError


class UserService(BaseService):
    """Read-only user directory; accounts are created by the seeder."""

    def list_users(self, pagination: Pagination, *, search: str | None = None) -> Page[User]:
        """Newest users first, optionally narrowed to usernames containing ``search``."""
        filters: list[Filter] = []
        if search:
            filters.append(Contains("username", search))
        return self.store.users.paginate(filters, pagination)

    def get_user(self, user_id: str) -> User:
        user = self.store.users.get(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def me(self) -> User:
        return self.require_actor()
