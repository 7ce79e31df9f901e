# blogapi/services/social/service.py
from __future__ import annotations

import logging

from blogapi.models.social import Follow, Like, LikeTarget
from blogapi.services._shared.base import BaseService
from blogapi.services._shared.errors import ConflictError, NotFoundError, ValidationError
from blogapi.services._shared.views import FollowView, LikeView, follow_view, like_view

log = logging.getLogger(__name__)


class SocialService(BaseService):
    """
    Likes and follows.

    Every check-then-write sequence runs inside
    :meth:`~blogapi.repositories.store.DataStore.transaction`, so two
    concurrent toggles on the same target cannot both create a like.
    """

    # ------------------------------------------------------------------ #
    # Likes
    # ------------------------------------------------------------------ #

    def toggle_post_like(self, post_id: str) -> tuple[bool, LikeView | None]:
        return self._toggle(LikeTarget.POST, post_id)

    def toggle_comment_like(self, comment_id: str) -> tuple[bool, LikeView | None]:
        return self._toggle(LikeTarget.COMMENT, comment_id)

    def _toggle(self, target_type: LikeTarget, target_id: str) -> tuple[bool, LikeView | None]:
        """
        Remove the caller's like on the target if present, create it otherwise.

        :returns: ``(False, None)`` after an unlike, ``(True, like)`` after a like.
        :raises AuthenticationError: No authenticated caller.
        :raises NotFoundError: The post or comment does not exist.
        """
        actor = self.require_actor()
        with self.store.transaction():
            if target_type is LikeTarget.POST:
                if self.store.posts.get(target_id) is None:
                    raise NotFoundError("Post", target_id)
            elif self.store.comments.get(target_id) is None:
                raise NotFoundError("Comment", target_id)

            existing = self.store.likes.find_for(actor.id, target_type, target_id)
            if existing is not None:
                self.store.likes.delete(existing.id)
                return False, None

            like = Like(user_id=actor.id, target_type=target_type, target_id=target_id)
            self.store.likes.add(like)
            return True, like_view(self.store, like)

    # ------------------------------------------------------------------ #
    # Follows
    # ------------------------------------------------------------------ #

    def follow(self, target_id: str) -> FollowView:
        """
        Make the caller follow ``target_id``.

        :raises ValidationError: Caller targets themselves.
        :raises NotFoundError: Unknown target user.
        :raises ConflictError: The follow already exists.
        """
        actor = self.require_actor()
        if actor.id == target_id:
            raise ValidationError("Cannot follow yourself")
        with self.store.transaction():
            if self.store.users.get(target_id) is None:
                raise NotFoundError("User", target_id, detail="Target user not found")
            if self.store.follows.find_pair(actor.id, target_id) is not None:
                raise ConflictError("Follow", "Already following")
            follow = Follow(follower_id=actor.id, following_id=target_id)
            self.store.follows.add(follow)
            log.info("user.followed", extra={"event": "follow", "user_id": actor.id})
            return follow_view(self.store, follow)

    def unfollow(self, target_id: str) -> None:
        actor = self.require_actor()
        with self.store.transaction():
            follow = self.store.follows.find_pair(actor.id, target_id)
            if follow is None:
                raise NotFoundError("Follow", target_id, detail="Not following this user")
            self.store.follows.delete(follow.id)
