"""Unit tests for CreateCommentUseCase."""

from uuid import uuid4

import pytest

from quill.application.usecase.comment import CreateCommentRequest, CreateCommentUseCase
from quill.domain.error import NotFoundError, UnauthenticatedError, ValidationError
from quill.domain.repository import CommentRepository, PostRepository
from tests.conftest import actor_for, seed_comment, seed_post, seed_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_create_comment_increments_post_count(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        author = await seed_user(unit_env)
        post = await seed_post(unit_env, author, comment_count=5)
        # Keep the counter honest: five existing comments
        for _ in range(5):
            await seed_comment(unit_env, post, author)

        # Act
        response = await use_case.execute(
            CreateCommentRequest(
                post_id=str(post.id), actor=actor_for(author), content="Great read"
            )
        )

        # Assert
        assert response.comment.post_id == str(post.id)
        assert response.comment.depth == 0
        assert response.comment_count == 6
        assert (await post_repo.find_by_id(post.id)).comment_count == 6

    @pytest.mark.asyncio
    async def test_reply_to_comment_on_same_post(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        author = await seed_user(unit_env)
        post = await seed_post(unit_env, author, comment_count=1)
        parent = await seed_comment(unit_env, post, author)

        response = await use_case.execute(
            CreateCommentRequest(
                post_id=str(post.id),
                actor=actor_for(author),
                content="Replying",
                parent_id=str(parent.id),
            )
        )

        assert response.comment.parent_id == str(parent.id)
        assert response.comment.depth == 1
        assert response.comment_count == 2

    @pytest.mark.asyncio
    async def test_parent_on_other_post_fails_and_creates_nothing(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        author = await seed_user(unit_env)
        post_a = await seed_post(unit_env, author, title="A")
        post_b = await seed_post(unit_env, author, title="B", comment_count=1)
        foreign_parent = await seed_comment(unit_env, post_b, author)

        # Act
        with pytest.raises(ValidationError):
            await use_case.execute(
                CreateCommentRequest(
                    post_id=str(post_a.id),
                    actor=actor_for(author),
                    content="Misplaced",
                    parent_id=str(foreign_parent.id),
                )
            )

        # Assert
        assert await comment_repo.count() == 1
        assert (await post_repo.find_by_id(post_a.id)).comment_count == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("parent_id", ["garbage", str(uuid4())])
    async def test_unknown_parent_is_invalid(self, unit_env, parent_id):
        use_case = await unit_env.get(CreateCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        author = await seed_user(unit_env)
        post = await seed_post(unit_env, author)

        with pytest.raises(ValidationError):
            await use_case.execute(
                CreateCommentRequest(
                    post_id=str(post.id),
                    actor=actor_for(author),
                    content="Orphan",
                    parent_id=parent_id,
                )
            )

        assert await comment_repo.count() == 0

    @pytest.mark.asyncio
    async def test_create_comment_with_nonexistent_post_raises_error(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        author = await seed_user(unit_env)

        with pytest.raises(NotFoundError, match="Post"):
            await use_case.execute(
                CreateCommentRequest(
                    post_id=str(uuid4()), actor=actor_for(author), content="Hello?"
                )
            )

    @pytest.mark.asyncio
    async def test_anonymous_comment_is_unauthenticated(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        author = await seed_user(unit_env)
        post = await seed_post(unit_env, author)

        with pytest.raises(UnauthenticatedError):
            await use_case.execute(
                CreateCommentRequest(post_id=str(post.id), content="Who am I")
            )

    @pytest.mark.asyncio
    async def test_empty_content_rolls_back(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        author = await seed_user(unit_env)
        post = await seed_post(unit_env, author)

        with pytest.raises(ValidationError):
            await use_case.execute(
                CreateCommentRequest(post_id=str(post.id), actor=actor_for(author), content="")
            )

        assert (await post_repo.find_by_id(post.id)).comment_count == 0
