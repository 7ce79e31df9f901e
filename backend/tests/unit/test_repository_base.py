"""Unit tests for the in-memory repositories, filters and pagination."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from blogapi.repositories.base import (
    Contains,
    Exact,
    HasMember,
    IsNull,
    Pagination,
    RelatedEquals,
    parse_sort_tokens,
)
from blogapi.repositories.store import DataStore
from blogapi.services._shared.errors import ConflictError
from tests.factories import StoreSession
from tests.factories.content import CommentFactory, PostFactory, TagFactory
from tests.factories.user import UserFactory


@pytest.fixture()
def data_store():
    data_store = DataStore()
    StoreSession.set(data_store)
    yield data_store
    StoreSession.set(None)


def _at(minutes: int) -> datetime:
    return datetime(2024, 1, 1, tzinfo=UTC) + timedelta(minutes=minutes)


class TestFilters:
    def test_exact_and_contains(self, data_store):
        author = UserFactory()
        PostFactory(author=author, title="Learning Flask")
        PostFactory(author=author, title="Async in practice")

        assert [p.title for p in data_store.posts.find([Contains("title", "flask")])] == [
            "Learning Flask"
        ]
        assert data_store.posts.count([Exact("author_id", author.id)]) == 2

    def test_has_member_and_is_null(self, data_store):
        tag = TagFactory()
        tagged = PostFactory(tag_ids=[tag.id])
        PostFactory()
        root = CommentFactory(post=tagged)
        CommentFactory(post=tagged, parent_comment_id=root.id)

        assert [p.id for p in data_store.posts.find([HasMember("tag_ids", tag.id)])] == [tagged.id]
        assert [c.id for c in data_store.comments.find([IsNull("parent_comment_id")])] == [root.id]

    def test_related_equals_follows_single_and_list_references(self, data_store):
        alice = UserFactory(username="alice")
        python = TagFactory(name="python")
        mine = PostFactory(author=alice, tag_ids=[python.id])
        PostFactory()

        by_author = data_store.posts.find([RelatedEquals("author_id", "username", "alice")])
        by_tag = data_store.posts.find([RelatedEquals("tag_ids", "name", "python")])

        assert [p.id for p in by_author] == [mine.id]
        assert [p.id for p in by_tag] == [mine.id]

    def test_related_equals_unknown_relation_raises(self, data_store):
        with pytest.raises(ValueError):
            data_store.tags.find([RelatedEquals("author_id", "username", "x")])


class TestPagination:
    def test_page_metadata(self, data_store):
        author = UserFactory()
        for i in range(12):
            PostFactory(author=author, created_at=_at(i))

        page = data_store.posts.paginate(None, Pagination(page=2, limit=5, sort=[]))

        assert len(page.items) == 5
        assert page.total == 12
        assert page.total_pages == 3
        assert page.has_next is True
        assert page.has_previous is True
        # Default ordering is newest first
        assert page.items[0].created_at == _at(6)

    def test_last_page_and_out_of_range(self, data_store):
        for i in range(7):
            PostFactory(created_at=_at(i))

        last = data_store.posts.paginate(None, Pagination(page=2, limit=5, sort=[]))
        beyond = data_store.posts.paginate(None, Pagination(page=9, limit=5, sort=[]))

        assert len(last.items) == 2 and last.has_next is False
        assert beyond.items == [] and beyond.total == 7

    def test_total_counts_filtered_set(self, data_store):
        author = UserFactory()
        PostFactory(author=author)
        PostFactory(author=author)
        PostFactory()

        page = data_store.posts.paginate(
            [Exact("author_id", author.id)], Pagination(page=1, limit=1, sort=[])
        )
        assert page.total == 2
        assert page.total_pages == 2

    def test_sort_tokens_whitelist_and_tiebreak(self, data_store):
        PostFactory(title="b", created_at=_at(1))
        PostFactory(title="a", created_at=_at(1))
        PostFactory(title="c", created_at=_at(0))

        by_title = data_store.posts.find(sort=["title"])
        ignored = data_store.posts.find(sort=["password_hash"])

        assert [p.title for p in by_title] == ["a", "b", "c"]
        assert len(ignored) == 3
        assert parse_sort_tokens(["-createdAt", " ", "title"]) == [
            ("createdAt", True),
            ("title", False),
        ]


class TestWrites:
    def test_unique_fields_conflict(self, data_store):
        UserFactory(username="dup")
        with pytest.raises(ConflictError):
            UserFactory(username="dup")

    def test_update_whitelist_bumps_updated_at(self, data_store, freeze_time):
        with freeze_time("2024-01-01"):
            post = PostFactory()
        with freeze_time("2024-02-01"):
            data_store.posts.update(post, title="Renamed")

        assert post.title == "Renamed"
        assert post.updated_at > post.created_at
        with pytest.raises(ValueError):
            data_store.posts.update(post, author_id="someone-else")

    def test_delete_where_and_reset(self, data_store):
        post = PostFactory()
        CommentFactory(post=post)
        CommentFactory(post=post)

        assert data_store.comments.delete_where([Exact("post_id", post.id)]) == 2
        data_store.reset()
        assert data_store.counts() == dict.fromkeys(
            ("users", "tags", "posts", "comments", "likes", "follows"), 0
        )

    def test_tag_existing_ids_keeps_order_and_drops_unknown(self, data_store):
        first, second = TagFactory(), TagFactory()
        assert data_store.tags.existing_ids([second.id, "nope", first.id, second.id]) == [
            second.id,
            first.id,
        ]

    def test_user_identifier_lookup(self, data_store):
        user = UserFactory(username="reader", email="reader@example.com")
        assert data_store.users.get_by_identifier("reader") is user
        assert data_store.users.get_by_identifier("reader@example.com") is user
        assert data_store.users.get_by_identifier("ghost") is None
