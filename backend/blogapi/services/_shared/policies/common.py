"""Ownership policies shared by every mutating use case."""

from __future__ import annotations

from blogapi.models.user import User


def is_owner(*, actor_id: str | None, owner_id: str | None) -> bool:
    """Return True if the actor owns the resource."""
    return actor_id is not None and str(actor_id) == str(owner_id)


def can_mutate(actor: User, owner_id: str) -> bool:
    """Allow update/delete for the resource author or any admin."""
    return is_owner(actor_id=actor.id, owner_id=owner_id) or actor.is_admin
