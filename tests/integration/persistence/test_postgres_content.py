"""Integration tests for the PostgreSQL repositories.

Needs a migrated database (``python scripts/run_migrations.py``) reachable
through DATABASE__URL. Set QUILL_INTEGRATION=1 to run them.
"""

import os
from uuid import uuid4

import pytest

from quill.domain.error import ValidationError
from quill.domain.query import PostQueryBuilder
from quill.domain.repository import CommentRepository, LikeRepository, PostRepository
from quill.domain.service import CommentService, IntegrityService, LikeService, PostService
from quill.domain.value import Category, LikeTargetType
from tests.conftest import seed_user
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    not os.getenv("QUILL_INTEGRATION"), reason="QUILL_INTEGRATION not set"
)

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


async def _post(env, author, category=Category.TRAVEL):
    post_service = await env.get(PostService)
    return await post_service.create_post(
        author_id=author.id,
        title=f"Integration {uuid4().hex[:8]}",
        excerpt="x",
        content="y",
        category=category,
        tags=["integration"],
    )


class TestPostgresContent:
    """Round trips through the real schema."""

    @pytest.mark.asyncio
    async def test_post_query_filters_in_sql(self, integration_env):
        # Arrange
        post_repo = await integration_env.get(PostRepository)
        author = await seed_user(integration_env, name="Integration Author")
        travel = await _post(integration_env, author, Category.TRAVEL)
        await _post(integration_env, author, Category.FOOD)

        # Act
        query = PostQueryBuilder().build(
            {"author": str(author.id), "category": "travel", "tags": "integration"}
        )
        found = await post_repo.find_by_query(query)

        # Assert
        assert [p.id for p in found] == [travel.id]
        assert await post_repo.count_by_query(query) == 1

    @pytest.mark.asyncio
    async def test_like_toggle_and_cascade(self, integration_env):
        like_service = await integration_env.get(LikeService)
        comment_service = await integration_env.get(CommentService)
        integrity_service = await integration_env.get(IntegrityService)
        comment_repo = await integration_env.get(CommentRepository)
        like_repo = await integration_env.get(LikeRepository)
        author = await seed_user(integration_env, name="Integration Liker")
        post = await _post(integration_env, author)
        comment = await comment_service.create_comment(post.id, author.id, "hi")
        await comment_service.create_comment(post.id, author.id, "re", parent=comment)

        liked = await like_service.toggle_post_like(post.id, author.id)
        assert (liked.liked, liked.total_likes) == (True, 1)

        result = await integrity_service.delete_post(post.id)

        assert result.comments == 2
        assert await comment_repo.count_by_post(post.id) == 0
        assert await like_repo.count_by_target(LikeTargetType.POST, post.id) == 0

    @pytest.mark.asyncio
    async def test_negative_counter_delta_is_refused(self, integration_env):
        post_repo = await integration_env.get(PostRepository)
        author = await seed_user(integration_env, name="Integration Counter")
        post = await _post(integration_env, author)

        assert await post_repo.adjust_like_count(post.id, -1) is None
        assert await post_repo.adjust_like_count(post.id, 1) == 1

    @pytest.mark.asyncio
    async def test_cross_post_parent_is_rejected(self, integration_env):
        integrity_service = await integration_env.get(IntegrityService)
        comment_service = await integration_env.get(CommentService)
        author = await seed_user(integration_env, name="Integration Replier")
        post_a = await _post(integration_env, author)
        post_b = await _post(integration_env, author)
        parent = await comment_service.create_comment(post_b.id, author.id, "on b")

        with pytest.raises(ValidationError):
            await integrity_service.resolve_parent(post_a.id, parent.id)
