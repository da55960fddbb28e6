"""Test configuration, fixtures and seeding helpers."""

from datetime import datetime
from typing import Any
from uuid import uuid4

import logfire
import pytest
from dishka import AsyncContainer

from quill.domain.model.comment import Comment
from quill.domain.model.post import Post
from quill.domain.model.user import User
from quill.domain.repository import CommentRepository, PostRepository, UserRepository
from quill.domain.service import PostService
from quill.domain.value import Actor, Category, CommentId, PostId, Role, Slug, UserId


@pytest.fixture(scope="session", autouse=True)
def quiet_logfire():
    """Keep telemetry local while tests run."""
    logfire.configure(send_to_logfire=False, console=False)


def make_slug(title: str) -> Slug:
    """Slug a post with this title gets when no other post collides."""
    return Slug(PostService.slugify(title))


def actor_for(user: User) -> Actor:
    """The actor a request layer would build for ``user``."""
    return Actor(user_id=user.id, role=user.role)


async def seed_user(
    env: AsyncContainer,
    name: str = "Test User",
    role: Role = Role.USER,
    created_at: datetime | None = None,
) -> User:
    """Store a user directly, bypassing identity flows."""
    user = User(
        id=UserId(uuid4()),
        name=name,
        email=f"{name.lower().replace(' ', '.')}@example.com",
        role=role,
        created_at=created_at or datetime.now(),
    )
    user_repo = await env.get(UserRepository)
    return await user_repo.save(user)


async def seed_post(
    env: AsyncContainer,
    author: User,
    title: str = "Test Post",
    **overrides: Any,
) -> Post:
    """Store a post directly so tests control counters and timestamps."""
    post_id = PostId(uuid4())
    now = datetime.now()
    data: dict[str, Any] = {
        "id": post_id,
        "slug": make_slug(title),
        "title": title,
        "excerpt": f"About {title}",
        "content": f"Body of {title}",
        "category": Category.TRAVEL,
        "author_id": author.id,
        "created_at": now,
        "updated_at": now,
    }
    data.update(overrides)
    post_repo = await env.get(PostRepository)
    return await post_repo.save(Post.model_validate(data))


async def seed_comment(
    env: AsyncContainer,
    post: Post,
    author: User,
    content: str = "Nice post",
    parent: Comment | None = None,
    created_at: datetime | None = None,
) -> Comment:
    """Store a comment row without touching the post's counter."""
    now = created_at or datetime.now()
    comment = Comment(
        id=CommentId(uuid4()),
        post_id=post.id,
        author_id=author.id,
        content=content,
        parent_id=parent.id if parent else None,
        depth=parent.depth + 1 if parent else 0,
        created_at=now,
        updated_at=now,
    )
    comment_repo = await env.get(CommentRepository)
    return await comment_repo.save(comment)
