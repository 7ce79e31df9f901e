"""Integration tests for post endpoints."""

from __future__ import annotations

from blogapi.models.post import PostStatus
from tests.factories.content import CommentFactory, PostFactory, TagFactory
from tests.factories.social import PostLikeFactory
from tests.helpers.assertions import assert_error, assert_pagination
from tests.helpers.http import build_url


def test_list_defaults_to_published(client, store, user) -> None:
    PostFactory.create_batch(3, author=user)
    PostFactory(author=user, status=PostStatus.DRAFT)

    resp = client.get("/api/posts")

    assert resp.status_code == 200
    body = resp.get_json()
    assert_pagination(body)
    assert body["pagination"]["totalCount"] == 3
    assert {post["status"] for post in body["data"]} == {"published"}

    drafts = client.get(build_url("/api/posts", status="draft")).get_json()
    assert drafts["pagination"]["totalCount"] == 1


def test_list_blank_and_unknown_status(client, store, user) -> None:
    PostFactory.create_batch(2, author=user)
    PostFactory(author=user, status=PostStatus.DRAFT)

    blank = client.get("/api/posts?status=&order=")
    archived = client.get(build_url("/api/posts", status="archived"))

    assert blank.status_code == 200
    assert blank.get_json()["pagination"]["totalCount"] == 2
    assert {post["status"] for post in blank.get_json()["data"]} == {"published"}
    assert archived.status_code == 200
    assert archived.get_json()["data"] == []
    assert archived.get_json()["pagination"]["totalCount"] == 0


def test_list_filters_by_tag_author_and_search(client, store, user, other_user) -> None:
    python = TagFactory(name="python")
    PostFactory(author=user, title="Typing in Python", tag_ids=[python.id])
    PostFactory(author=other_user, title="Gardening tips")

    by_tag = client.get(build_url("/api/posts", tag="python")).get_json()
    by_author = client.get(build_url("/api/posts", author="stranger")).get_json()
    by_search = client.get(build_url("/api/posts", search="TYPING")).get_json()

    assert [p["title"] for p in by_tag["data"]] == ["Typing in Python"]
    assert by_tag["data"][0]["tags"][0]["slug"] == "python"
    assert [p["title"] for p in by_author["data"]] == ["Gardening tips"]
    assert [p["title"] for p in by_search["data"]] == ["Typing in Python"]


def test_list_sorting(client, store, user) -> None:
    for title, views in (("b", 5), ("a", 50), ("c", 1)):
        PostFactory(author=user, title=title, view_count=views)

    by_title = client.get(build_url("/api/posts", sort="title", order="asc")).get_json()
    by_views = client.get(build_url("/api/posts", sort="viewCount")).get_json()

    assert [p["title"] for p in by_title["data"]] == ["a", "b", "c"]
    assert [p["viewCount"] for p in by_views["data"]] == [50, 5, 1]


def test_create_post(client, store, user, auth_header) -> None:
    tag = TagFactory()
    payload = {"title": "Hello World", "content": "Body text", "tagIds": [tag.id, "missing"]}

    resp = client.post("/api/posts", json=payload, headers=auth_header)

    assert resp.status_code == 201
    data = resp.get_json()
    assert data["slug"] == "hello-world"
    assert data["status"] == "draft"
    assert data["excerpt"] == "Body text..."
    assert data["author"]["id"] == user.id
    assert [t["id"] for t in data["tags"]] == [tag.id]
    assert data["viewCount"] == 0


def test_create_post_validation(client, user, auth_header) -> None:
    resp = client.post("/api/posts", json={"title": "Only title"}, headers=auth_header)
    assert_error(resp, 400, "Title and content are required")

    resp = client.post(
        "/api/posts", json={"title": "t", "content": "c", "status": "bogus"}, headers=auth_header
    )
    body = assert_error(resp, 400)
    assert "status" in body["details"]["errors"]


def test_create_post_requires_auth(client) -> None:
    assert_error(client.post("/api/posts", json={"title": "t", "content": "c"}), 401)


def test_get_post_counts_views(client, store, user) -> None:
    post = PostFactory(author=user)

    first = client.get(f"/api/posts/{post.id}").get_json()
    second = client.get(f"/api/posts/{post.id}").get_json()

    assert second["viewCount"] == first["viewCount"] + 1
    assert_error(client.get("/api/posts/unknown"), 404, "Post not found")


def test_get_post_by_slug(client, store, user) -> None:
    post = PostFactory(author=user, title="Slugged Post", slug="slugged-post")

    resp = client.get("/api/posts/slug/slugged-post")

    assert resp.status_code == 200
    assert resp.get_json()["id"] == post.id
    assert_error(client.get("/api/posts/slug/nothing-here"), 404)


def test_update_post_by_author(client, store, user, auth_header) -> None:
    post = PostFactory(author=user, title="Old")

    resp = client.patch(
        f"/api/posts/{post.id}", json={"title": "New Title", "status": "draft"}, headers=auth_header
    )

    assert resp.status_code == 200
    data = resp.get_json()
    assert data["title"] == "New Title"
    assert data["slug"] == "new-title"
    assert data["status"] == "draft"
    assert data["content"] == post.content


def test_update_post_ownership(client, store, user, other_user, admin, headers_for) -> None:
    post = PostFactory(author=user)

    forbidden = client.patch(
        f"/api/posts/{post.id}", json={"title": "Hijack"}, headers=headers_for(other_user)
    )
    as_admin = client.patch(
        f"/api/posts/{post.id}", json={"title": "Moderated"}, headers=headers_for(admin)
    )

    assert_error(forbidden, 403, "Forbidden")
    assert as_admin.status_code == 200
    assert as_admin.get_json()["title"] == "Moderated"


def test_delete_post_cascades(client, store, user, other_user, auth_header) -> None:
    post = PostFactory(author=user)
    comment = CommentFactory(post=post, author=other_user)
    PostLikeFactory(post=post, user=other_user)
    keep = PostFactory(author=user)

    resp = client.delete(f"/api/posts/{post.id}", headers=auth_header)

    assert resp.status_code == 204
    assert store.posts.get(post.id) is None
    assert store.comments.get(comment.id) is None
    assert store.likes.find_for(other_user.id, "post", post.id) is None
    assert store.posts.get(keep.id) is not None
    assert_error(client.delete(f"/api/posts/{post.id}", headers=auth_header), 404)


def test_delete_post_forbidden_for_stranger(client, store, user, other_user, headers_for) -> None:
    post = PostFactory(author=user)
    assert_error(client.delete(f"/api/posts/{post.id}", headers=headers_for(other_user)), 403)
    assert store.posts.get(post.id) is not None


def test_like_toggle_and_stats(client, store, user, auth_header) -> None:
    post = PostFactory(author=user, view_count=7)
    CommentFactory(post=post)
    CommentFactory(post=post, is_deleted=True)

    liked = client.post(f"/api/posts/{post.id}/like", headers=auth_header).get_json()
    stats = client.get(f"/api/posts/{post.id}/stats").get_json()
    unliked = client.post(f"/api/posts/{post.id}/like", headers=auth_header).get_json()

    assert liked["liked"] is True
    assert liked["like"]["targetId"] == post.id
    assert stats == {"postId": post.id, "likes": 1, "comments": 1, "views": 7}
    assert unliked == {"liked": False}
    assert client.get(f"/api/posts/{post.id}/stats").get_json()["likes"] == 0


def test_like_unknown_post(client, user, auth_header) -> None:
    assert_error(client.post("/api/posts/missing/like", headers=auth_header), 404)
