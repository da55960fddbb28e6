"""Unit tests for reading, updating and deleting comments."""

from datetime import datetime, timedelta

import pytest

from quill.application.usecase.comment import (
    DeleteCommentRequest,
    DeleteCommentUseCase,
    GetCommentRequest,
    GetCommentUseCase,
    ListCommentsRequest,
    ListCommentsUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from quill.domain.error import NotAuthorizedError, NotFoundError, UnauthenticatedError
from quill.domain.repository import CommentRepository, PostRepository
from quill.domain.value import Role
from tests.conftest import actor_for, seed_comment, seed_post, seed_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

START = datetime(2024, 4, 1, 18, 0)


class TestReadComments:
    """Tests for GetCommentUseCase and ListCommentsUseCase."""

    @pytest.mark.asyncio
    async def test_get_comment(self, unit_env):
        use_case = await unit_env.get(GetCommentUseCase)
        author = await seed_user(unit_env)
        post = await seed_post(unit_env, author)
        comment = await seed_comment(unit_env, post, author, content="Hi")

        response = await use_case.execute(GetCommentRequest(comment_id=str(comment.id)))

        assert response.comment.content == "Hi"

    @pytest.mark.asyncio
    async def test_get_missing_comment(self, unit_env):
        use_case = await unit_env.get(GetCommentUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetCommentRequest(comment_id="nope"))

    @pytest.mark.asyncio
    async def test_list_for_post_is_oldest_first_with_threads(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListCommentsUseCase)
        author = await seed_user(unit_env)
        post = await seed_post(unit_env, author)
        other = await seed_post(unit_env, author, title="Other")
        first = await seed_comment(unit_env, post, author, content="1", created_at=START)
        await seed_comment(
            unit_env, post, author, content="2", created_at=START + timedelta(minutes=2)
        )
        await seed_comment(
            unit_env,
            post,
            author,
            content="1a",
            parent=first,
            created_at=START + timedelta(minutes=3),
        )
        await seed_comment(unit_env, other, author, content="elsewhere")

        # Act
        response = await use_case.execute(ListCommentsRequest(post_id=str(post.id)))

        # Assert
        assert [c.content for c in response.comments] == ["1", "2", "1a"]
        assert [(c.content, c.depth) for c in response.threads] == [
            ("1", 0),
            ("1a", 1),
            ("2", 0),
        ]
        assert response.total == 3

    @pytest.mark.asyncio
    async def test_list_latest_across_posts(self, unit_env):
        use_case = await unit_env.get(ListCommentsUseCase)
        author = await seed_user(unit_env)
        post = await seed_post(unit_env, author)
        other = await seed_post(unit_env, author, title="Other")
        for i in range(4):
            target = post if i % 2 else other
            await seed_comment(
                unit_env, target, author, content=f"c{i}", created_at=START + timedelta(minutes=i)
            )

        response = await use_case.execute(ListCommentsRequest(limit=3))

        assert [c.content for c in response.comments] == ["c3", "c2", "c1"]
        assert response.total == 4
        assert response.post_id is None

    @pytest.mark.asyncio
    async def test_list_for_missing_post(self, unit_env):
        use_case = await unit_env.get(ListCommentsUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                ListCommentsRequest(post_id="00000000-0000-0000-0000-000000000000")
            )


class TestUpdateComment:
    """Tests for UpdateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_author_updates_comment(self, unit_env):
        use_case = await unit_env.get(UpdateCommentUseCase)
        author = await seed_user(unit_env)
        post = await seed_post(unit_env, author)
        comment = await seed_comment(unit_env, post, author, content="Old")

        response = await use_case.execute(
            UpdateCommentRequest(
                comment_id=str(comment.id), actor=actor_for(author), content="New"
            )
        )

        assert response.comment.content == "New"

    @pytest.mark.asyncio
    async def test_other_user_cannot_update(self, unit_env):
        use_case = await unit_env.get(UpdateCommentUseCase)
        author = await seed_user(unit_env)
        intruder = await seed_user(unit_env, name="Intruder")
        post = await seed_post(unit_env, author)
        comment = await seed_comment(unit_env, post, author)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                UpdateCommentRequest(
                    comment_id=str(comment.id), actor=actor_for(intruder), content="Mine"
                )
            )

    @pytest.mark.asyncio
    async def test_anonymous_update_is_unauthenticated(self, unit_env):
        use_case = await unit_env.get(UpdateCommentUseCase)
        author = await seed_user(unit_env)
        post = await seed_post(unit_env, author)
        comment = await seed_comment(unit_env, post, author)

        with pytest.raises(UnauthenticatedError):
            await use_case.execute(
                UpdateCommentRequest(comment_id=str(comment.id), content="x")
            )


class TestDeleteComment:
    """Tests for DeleteCommentUseCase."""

    @pytest.mark.asyncio
    async def test_admin_deletes_thread(self, unit_env):
        # Arrange
        use_case = await unit_env.get(DeleteCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        author = await seed_user(unit_env)
        admin = await seed_user(unit_env, name="Admin", role=Role.ADMIN)
        post = await seed_post(unit_env, author, comment_count=3)
        root = await seed_comment(unit_env, post, author)
        reply = await seed_comment(unit_env, post, author, parent=root)
        await seed_comment(unit_env, post, author, parent=reply)

        # Act
        response = await use_case.execute(
            DeleteCommentRequest(comment_id=str(root.id), actor=actor_for(admin))
        )

        # Assert
        assert response.deleted_comments == 3
        assert response.post_id == str(post.id)
        assert await comment_repo.count_by_post(post.id) == 0
        assert (await post_repo.find_by_id(post.id)).comment_count == 0

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete(self, unit_env):
        use_case = await unit_env.get(DeleteCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        author = await seed_user(unit_env)
        intruder = await seed_user(unit_env, name="Intruder")
        post = await seed_post(unit_env, author, comment_count=1)
        comment = await seed_comment(unit_env, post, author)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                DeleteCommentRequest(comment_id=str(comment.id), actor=actor_for(intruder))
            )

        assert await comment_repo.find_by_id(comment.id) is not None
