"""User model definition for the blog platform."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from werkzeug.security import check_password_hash, generate_password_hash

from .base import new_id, utcnow


class Role(StrEnum):
    ADMIN = "admin"
    MODERATOR = "moderator"
    USER = "user"


@dataclass(slots=True)
class User:
    """
    Authentication identity and public profile.

    Fields
    ------
    username : str
        Public handle. Unique per store.
    email : str
        Login email. Unique per store.
    password_hash : str
        Hashed password (write via :meth:`set_password`). Never serialized.
    role : Role
        ``admin`` may mutate any resource; other roles only their own.
    is_active : bool
        Inactive accounts cannot log in or refresh.
    """

    username: str
    email: str
    password_hash: str = ""
    first_name: str = ""
    last_name: str = ""
    bio: str | None = None
    avatar_url: str | None = None
    role: Role = Role.USER
    is_active: bool = True
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    # -------------------- Password API --------------------
    def set_password(self, raw: str) -> None:
        """
        Hash and set the password.

        :param raw: Plain text password to hash.
        :raises ValueError: If ``raw`` is empty.
        """
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str) -> bool:
        """
        Verify a password against the stored hash.

        :param raw: Plain text password to check.
        :returns: ``True`` when the password matches.
        """
        if not self.password_hash or not raw:
            return False
        return check_password_hash(self.password_hash, raw)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
