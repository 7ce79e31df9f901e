"""In-memory data store grouping every repository behind one lock."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from blogapi.repositories.comment import CommentRepository
from blogapi.repositories.post import PostRepository
from blogapi.repositories.social import FollowRepository, LikeRepository
from blogapi.repositories.tag import TagRepository
from blogapi.repositories.user import UserRepository


class DataStore:
    """
    Single logical store for one application instance.

    All repositories share a re-entrant lock. Single repository calls are
    atomic on their own; :meth:`transaction` holds the lock across a
    multi-step sequence (cascade delete, check-then-create) so no other
    thread observes a half-applied change.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.users = UserRepository(self, self._lock)
        self.posts = PostRepository(self, self._lock)
        self.comments = CommentRepository(self, self._lock)
        self.tags = TagRepository(self, self._lock)
        self.likes = LikeRepository(self, self._lock)
        self.follows = FollowRepository(self, self._lock)

    @contextmanager
    def transaction(self) -> Iterator[DataStore]:
        """Hold the store lock for the duration of the block."""
        with self._lock:
            yield self

    def reset(self) -> None:
        """Drop every record from every collection."""
        with self._lock:
            for repo in self._repositories():
                repo.clear()

    def counts(self) -> dict[str, int]:
        with self._lock:
            return {
                "users": len(self.users),
                "tags": len(self.tags),
                "posts": len(self.posts),
                "comments": len(self.comments),
                "likes": len(self.likes),
                "follows": len(self.follows),
            }

    def _repositories(self):
        return (self.users, self.posts, self.comments, self.tags, self.likes, self.follows)
