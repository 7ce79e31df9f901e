"""Factory Boy helpers wired to the in-memory data store of the test app."""

from __future__ import annotations

import factory

from blogapi.models import Comment, Follow, Like, Post, Tag, User
from blogapi.repositories.store import DataStore

# Model class -> DataStore attribute holding its repository
COLLECTIONS = {
    User: "users",
    Tag: "tags",
    Post: "posts",
    Comment: "comments",
    Like: "likes",
    Follow: "follows",
}


class StoreSession:
    """Store the data store provided by the pytest fixture layer."""

    _store: DataStore | None = None

    @classmethod
    def set(cls, store: DataStore | None) -> None:
        """Register the store used to persist factory objects."""
        cls._store = store

    @classmethod
    def get(cls) -> DataStore:
        """Return the registered store.

        Raises
        ------
        RuntimeError
            If factories are used without the ``store`` fixture wiring.
        """
        if cls._store is None:
            raise RuntimeError("Factories store not set. Did you pass the 'store' fixture?")
        return cls._store


class BaseFactory(factory.Factory):
    """Build entities and add them to the registered store on ``create``."""

    class Meta:
        abstract = True

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        instance = model_class(*args, **kwargs)
        repo = getattr(StoreSession.get(), COLLECTIONS[model_class])
        return repo.add(instance)
