"""Unit tests for CommentService."""

import pytest

from quill.domain.error import NotFoundError, ValidationError
from quill.domain.repository import CommentRepository
from quill.domain.service import CommentService
from tests.conftest import seed_comment, seed_post, seed_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreateComment:
    """Tests for building and storing comments."""

    @pytest.mark.asyncio
    async def test_top_level_comment_has_depth_zero(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        author = await seed_user(unit_env)
        post = await seed_post(unit_env, author)

        # Act
        comment = await comment_service.create_comment(
            post_id=post.id, author_id=author.id, content="First!"
        )

        # Assert
        assert comment.parent_id is None
        assert comment.depth == 0
        assert comment.like_count == 0

    @pytest.mark.asyncio
    async def test_reply_depth_follows_parent(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        author = await seed_user(unit_env)
        post = await seed_post(unit_env, author)
        parent = await seed_comment(unit_env, post, author)

        reply = await comment_service.create_comment(
            post_id=post.id, author_id=author.id, content="Agreed", parent=parent
        )
        nested = await comment_service.create_comment(
            post_id=post.id, author_id=author.id, content="Same", parent=reply
        )

        assert reply.parent_id == parent.id
        assert (reply.depth, nested.depth) == (1, 2)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   \n\t", "x" * 1001])
    async def test_content_length_is_validated(self, unit_env, content):
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author = await seed_user(unit_env)
        post = await seed_post(unit_env, author)

        with pytest.raises(ValidationError, match="content"):
            await comment_service.create_comment(
                post_id=post.id, author_id=author.id, content=content
            )

        assert await comment_repo.count() == 0


class TestReadAndUpdate:
    """Tests for comment reads and edits."""

    @pytest.mark.asyncio
    async def test_get_comment_raises_when_missing(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        author = await seed_user(unit_env)
        post = await seed_post(unit_env, author)
        comment = await seed_comment(unit_env, post, author)
        comment_repo = await unit_env.get(CommentRepository)
        await comment_repo.delete(comment.id)

        with pytest.raises(NotFoundError):
            await comment_service.get_comment(comment.id)

    @pytest.mark.asyncio
    async def test_update_content(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        author = await seed_user(unit_env)
        post = await seed_post(unit_env, author)
        comment = await seed_comment(unit_env, post, author, content="tpyo")

        updated = await comment_service.update_content(comment, "typo")

        assert updated.content == "typo"
        assert updated.created_at == comment.created_at
        assert updated.updated_at >= comment.updated_at

    @pytest.mark.asyncio
    async def test_update_rejects_empty_content(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        author = await seed_user(unit_env)
        post = await seed_post(unit_env, author)
        comment = await seed_comment(unit_env, post, author, content="keep me")

        with pytest.raises(ValidationError):
            await comment_service.update_content(comment, "   ")

        stored = await comment_service.get_comment(comment.id)
        assert stored.content == "keep me"

    @pytest.mark.asyncio
    async def test_content_is_stored_trimmed(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        author = await seed_user(unit_env)
        post = await seed_post(unit_env, author)

        comment = await comment_service.create_comment(
            post_id=post.id, author_id=author.id, content="  hello  "
        )
        updated = await comment_service.update_content(comment, " edited\n")

        assert comment.content == "hello"
        assert updated.content == "edited"
