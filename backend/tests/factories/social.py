"""Factories for likes and follows."""

from __future__ import annotations

import factory

from blogapi.models.social import Follow, Like, LikeTarget
from tests.factories import BaseFactory
from tests.factories.content import PostFactory
from tests.factories.user import UserFactory


class PostLikeFactory(BaseFactory):
    class Meta:
        model = Like

    class Params:
        user = factory.SubFactory(UserFactory)
        post = factory.SubFactory(PostFactory)

    user_id = factory.LazyAttribute(lambda o: o.user.id)
    target_type = LikeTarget.POST
    target_id = factory.LazyAttribute(lambda o: o.post.id)


class FollowFactory(BaseFactory):
    class Meta:
        model = Follow

    class Params:
        follower = factory.SubFactory(UserFactory)
        following = factory.SubFactory(UserFactory)

    follower_id = factory.LazyAttribute(lambda o: o.follower.id)
    following_id = factory.LazyAttribute(lambda o: o.following.id)
