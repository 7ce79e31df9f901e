"""Like and follow repositories."""

from __future__ import annotations

from blogapi.models.social import Follow, Like, LikeTarget
from blogapi.repositories.base import Exact, InMemoryRepository


class LikeRepository(InMemoryRepository[Like]):
    entity = Like

    def _relations(self):
        return {"user_id": "users"}

    def find_for(self, user_id: str, target_type: LikeTarget, target_id: str) -> Like | None:
        return self.find_first(
            [
                Exact("user_id", user_id),
                Exact("target_type", target_type),
                Exact("target_id", target_id),
            ]
        )


class FollowRepository(InMemoryRepository[Follow]):
    entity = Follow

    def _relations(self):
        return {"follower_id": "users", "following_id": "users"}

    def find_pair(self, follower_id: str, following_id: str) -> Follow | None:
        return self.find_first(
            [Exact("follower_id", follower_id), Exact("following_id", following_id)]
        )
