"""Integration tests for user directory and follow endpoints."""

from __future__ import annotations

from blogapi.models.post import PostStatus
from tests.factories.content import CommentFactory, PostFactory
from tests.factories.social import FollowFactory
from tests.factories.user import UserFactory
from tests.helpers.assertions import assert_error, assert_pagination
from tests.helpers.http import build_url


def test_list_users_without_passwords(client, store, user, other_user) -> None:
    body = client.get("/api/users").get_json()

    assert_pagination(body)
    assert body["pagination"]["totalCount"] == 2
    for item in body["data"]:
        assert not {"password", "passwordHash", "password_hash"} & item.keys()


def test_search_users_by_username(client, store) -> None:
    UserFactory(username="alice")
    UserFactory(username="malice")
    UserFactory(username="bob")

    body = client.get(build_url("/api/users", search="ALIC")).get_json()

    assert sorted(u["username"] for u in body["data"]) == ["alice", "malice"]


def test_blank_search_lists_everyone(client, store) -> None:
    UserFactory.create_batch(3)

    resp = client.get("/api/users?search=")

    assert resp.status_code == 200
    assert resp.get_json()["pagination"]["totalCount"] == 3


def test_get_user(client, user) -> None:
    resp = client.get(f"/api/users/{user.id}")

    assert resp.status_code == 200
    assert resp.get_json()["username"] == "testuser"
    assert_error(client.get("/api/users/unknown"), 404, "User not found")


def test_user_posts_and_comments(client, store, user) -> None:
    PostFactory(author=user)
    PostFactory(author=user, status=PostStatus.DRAFT)
    CommentFactory.create_batch(2, author=user)

    posts = client.get(f"/api/users/{user.id}/posts").get_json()
    drafts = client.get(build_url(f"/api/users/{user.id}/posts", status="draft")).get_json()
    blank = client.get(f"/api/users/{user.id}/posts?status=")
    comments = client.get(f"/api/users/{user.id}/comments").get_json()

    assert posts["pagination"]["totalCount"] == 2
    assert blank.status_code == 200
    assert blank.get_json()["pagination"]["totalCount"] == 2
    assert [p["status"] for p in drafts["data"]] == ["draft"]
    assert comments["pagination"]["totalCount"] == 2


def test_follow_and_unfollow(client, store, user, other_user, auth_header) -> None:
    url = f"/api/users/{other_user.id}/follow"

    created = client.post(url, headers=auth_header)
    duplicate = client.post(url, headers=auth_header)
    removed = client.delete(url, headers=auth_header)
    again = client.delete(url, headers=auth_header)

    assert created.status_code == 201
    body = created.get_json()
    assert body["follower"]["id"] == user.id
    assert body["following"]["id"] == other_user.id
    assert_error(duplicate, 409, "Already following")
    assert removed.status_code == 204
    assert_error(again, 404, "Not following this user")


def test_follow_rules(client, store, user, auth_header) -> None:
    assert_error(
        client.post(f"/api/users/{user.id}/follow", headers=auth_header),
        400,
        "Cannot follow yourself",
    )
    assert_error(
        client.post("/api/users/ghost/follow", headers=auth_header), 404, "Target user not found"
    )
    assert_error(client.post(f"/api/users/{user.id}/follow"), 401)


def test_existing_follow_conflicts(client, store, user, other_user, auth_header) -> None:
    FollowFactory(follower=user, following=other_user)
    assert_error(client.post(f"/api/users/{other_user.id}/follow", headers=auth_header), 409)
