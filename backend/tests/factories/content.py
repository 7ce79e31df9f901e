"""Factories for tags, posts and comments."""

from __future__ import annotations

import factory

from blogapi.models.comment import Comment
from blogapi.models.post import Post, PostStatus, slugify
from blogapi.models.tag import Tag
from tests.factories import BaseFactory
from tests.factories.user import UserFactory


class TagFactory(BaseFactory):
    class Meta:
        model = Tag

    name = factory.Sequence(lambda n: f"topic{n}")
    slug = factory.LazyAttribute(lambda o: slugify(o.name))


class PostFactory(BaseFactory):
    """Published post; pass ``author=`` to pick the author."""

    class Meta:
        model = Post

    class Params:
        author = factory.SubFactory(UserFactory)

    title = factory.Sequence(lambda n: f"Post number {n}")
    content = factory.Faker("paragraph")
    status = PostStatus.PUBLISHED
    author_id = factory.LazyAttribute(lambda o: o.author.id)
    tag_ids = factory.LazyFunction(list)


class CommentFactory(BaseFactory):
    class Meta:
        model = Comment

    class Params:
        author = factory.SubFactory(UserFactory)
        post = factory.SubFactory(PostFactory)

    content = factory.Faker("sentence")
    author_id = factory.LazyAttribute(lambda o: o.author.id)
    post_id = factory.LazyAttribute(lambda o: o.post.id)
