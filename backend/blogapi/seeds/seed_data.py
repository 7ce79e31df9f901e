"""Deterministic fake-data seeding for the in-memory store.

The same ``random_seed`` always yields the same users, tags, posts, comments,
likes and follows (ids included); only timestamps move with the clock since
they are drawn relative to "now".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from faker import Faker

from blogapi.models.comment import Comment
from blogapi.models.post import Post, PostStatus, slugify
from blogapi.models.social import Follow, Like, LikeTarget
from blogapi.models.tag import Tag
from blogapi.models.user import Role, User
from blogapi.repositories.store import DataStore

LOGGER = logging.getLogger(__name__)

DEFAULT_RANDOM_SEED = 123
DEFAULT_PASSWORD = "password123"

USER_COUNT = 15
TAG_COUNT = 10
POST_COUNT = 50
COMMENT_COUNT = 150
REPLY_CHANCE = 30  # percent
POST_LIKE_ATTEMPTS = 100
COMMENT_LIKE_ATTEMPTS = 100
FOLLOW_ATTEMPTS = 80


@dataclass(frozen=True, slots=True)
class Account:
    username: str
    email: str
    password: str
    role: Role
    is_active: bool = True
    first_name: str = ""
    last_name: str = ""


WELL_KNOWN_ACCOUNTS: tuple[Account, ...] = (
    Account("admin", "admin@example.com", "admin123", Role.ADMIN, True, "Admin", "User"),
    Account("testuser", "test@example.com", "test123", Role.USER, True, "Test", "User"),
    Account("inactive", "inactive@example.com", "inactive123", Role.USER, False, "Inactive", "User"),
)


def _timestamp_pair(fake: Faker) -> tuple[datetime, datetime]:
    created = fake.date_time_between(start_date="-1y", end_date="-1d", tzinfo=UTC)
    updated = fake.date_time_between(start_date=created, end_date="now", tzinfo=UTC)
    return created, updated


def _seed_users(store: DataStore, fake: Faker) -> list[User]:
    users: list[User] = []
    for account in WELL_KNOWN_ACCOUNTS:
        created, updated = _timestamp_pair(fake)
        user = User(
            id=fake.uuid4(),
            username=account.username,
            email=account.email,
            first_name=account.first_name,
            last_name=account.last_name,
            role=account.role,
            is_active=account.is_active,
            avatar_url=fake.image_url(width=128, height=128),
            created_at=created,
            updated_at=updated,
        )
        user.set_password(account.password)
        users.append(store.users.add(user))

    reserved = {account.username for account in WELL_KNOWN_ACCOUNTS}
    while len(users) < USER_COUNT:
        username = fake.unique.user_name()
        if username in reserved:
            continue
        created, updated = _timestamp_pair(fake)
        user = User(
            id=fake.uuid4(),
            username=username,
            email=fake.unique.email(),
            first_name=fake.first_name(),
            last_name=fake.last_name(),
            bio=fake.paragraph() if fake.boolean(chance_of_getting_true=70) else None,
            avatar_url=fake.image_url(width=128, height=128),
            role=fake.random_element([Role.MODERATOR, Role.USER]),
            created_at=created,
            updated_at=updated,
        )
        user.set_password(DEFAULT_PASSWORD)
        users.append(store.users.add(user))
    return users


def _seed_tags(store: DataStore, fake: Faker) -> list[Tag]:
    tags: list[Tag] = []
    for _ in range(TAG_COUNT):
        name = fake.unique.word()
        tag = Tag(
            id=fake.uuid4(),
            name=name,
            slug=slugify(name),
            description=fake.sentence() if fake.boolean(chance_of_getting_true=60) else None,
            color=fake.hex_color(),
            created_at=_timestamp_pair(fake)[0],
        )
        tags.append(store.tags.add(tag))
    return tags


def _seed_posts(store: DataStore, fake: Faker, users: list[User], tags: list[Tag]) -> list[Post]:
    posts: list[Post] = []
    for _ in range(POST_COUNT):
        created, updated = _timestamp_pair(fake)
        chosen = fake.random_elements(tags, length=fake.random_int(1, 3), unique=True)
        post = Post(
            id=fake.uuid4(),
            title=fake.sentence(nb_words=6).rstrip("."),
            content="\n\n".join(fake.paragraphs(nb=3)),
            status=fake.random_element([PostStatus.DRAFT, PostStatus.PUBLISHED]),
            author_id=fake.random_element(users).id,
            tag_ids=[tag.id for tag in chosen],
            view_count=fake.random_int(0, 1000),
            created_at=created,
            updated_at=updated,
        )
        posts.append(store.posts.add(post))
    return posts


def _seed_comments(
    store: DataStore, fake: Faker, users: list[User], posts: list[Post]
) -> list[Comment]:
    comments: list[Comment] = []
    for _ in range(COMMENT_COUNT):
        parent = None
        if comments and fake.boolean(chance_of_getting_true=REPLY_CHANCE):
            parent = fake.random_element(comments)
        # Replies stay in the thread of their parent
        post_id = parent.post_id if parent else fake.random_element(posts).id
        created, updated = _timestamp_pair(fake)
        comment = Comment(
            id=fake.uuid4(),
            content=fake.paragraph(),
            author_id=fake.random_element(users).id,
            post_id=post_id,
            parent_comment_id=parent.id if parent else None,
            created_at=created,
            updated_at=updated,
        )
        comments.append(store.comments.add(comment))
    return comments


def _seed_likes(
    store: DataStore,
    fake: Faker,
    users: list[User],
    target_type: LikeTarget,
    target_ids: list[str],
    attempts: int,
) -> int:
    created = 0
    for _ in range(attempts):
        user_id = fake.random_element(users).id
        target_id = fake.random_element(target_ids)
        # Likes are unique per (user, target); repeated draws are skipped
        if store.likes.find_for(user_id, target_type, target_id) is not None:
            continue
        store.likes.add(
            Like(
                id=fake.uuid4(),
                user_id=user_id,
                target_type=target_type,
                target_id=target_id,
                created_at=fake.date_time_between(start_date="-30d", tzinfo=UTC),
            )
        )
        created += 1
    return created


def _seed_follows(store: DataStore, fake: Faker, users: list[User]) -> int:
    created = 0
    for _ in range(FOLLOW_ATTEMPTS):
        follower = fake.random_element(users)
        following = fake.random_element([u for u in users if u.id != follower.id])
        if store.follows.find_pair(follower.id, following.id) is not None:
            continue
        store.follows.add(
            Follow(
                id=fake.uuid4(),
                follower_id=follower.id,
                following_id=following.id,
                created_at=fake.date_time_between(start_date="-30d", tzinfo=UTC),
            )
        )
        created += 1
    return created


def run_all(
    store: DataStore, *, random_seed: int = DEFAULT_RANDOM_SEED, verbose: bool = False
) -> dict[str, int]:
    """Replace the store contents with freshly generated fake data.

    Parameters
    ----------
    store:
        Store to reset and populate.
    random_seed:
        Seed for the Faker instance driving every random choice.
    verbose:
        Log per-collection counts at INFO level.

    Returns
    -------
    dict[str, int]
        Number of records per collection after seeding.
    """
    fake = Faker()
    fake.seed_instance(random_seed)

    with store.transaction():
        store.reset()
        users = _seed_users(store, fake)
        tags = _seed_tags(store, fake)
        posts = _seed_posts(store, fake, users, tags)
        comments = _seed_comments(store, fake, users, posts)
        _seed_likes(store, fake, users, LikeTarget.POST, [p.id for p in posts], POST_LIKE_ATTEMPTS)
        _seed_likes(
            store, fake, users, LikeTarget.COMMENT, [c.id for c in comments], COMMENT_LIKE_ATTEMPTS
        )
        _seed_follows(store, fake, users)
        summary = store.counts()

    if verbose:
        for collection, count in summary.items():
            LOGGER.info("seed.%s", collection, extra={"event": "seeded", "count": count})
    return summary
