"""Unit tests for IntegrityService reference checks and cascades."""

from uuid import uuid4

import pytest

from quill.domain.error import NotFoundError, ValidationError
from quill.domain.repository import CommentRepository, LikeRepository, PostRepository
from quill.domain.service import IntegrityService, LikeService
from quill.domain.value import CommentId, LikeTargetType, PostId, UserId
from tests.conftest import seed_comment, seed_post, seed_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestReferenceChecks:
    """Tests for existence and parent checks."""

    @pytest.mark.asyncio
    async def test_require_post_and_user(self, unit_env):
        integrity_service = await unit_env.get(IntegrityService)
        author = await seed_user(unit_env)
        post = await seed_post(unit_env, author)

        assert (await integrity_service.require_post(post.id)).id == post.id
        assert (await integrity_service.require_user(author.id)).id == author.id

        with pytest.raises(NotFoundError, match="Post"):
            await integrity_service.require_post(PostId(uuid4()))
        with pytest.raises(NotFoundError, match="User"):
            await integrity_service.require_user(UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_resolve_parent_on_same_post(self, unit_env):
        integrity_service = await unit_env.get(IntegrityService)
        author = await seed_user(unit_env)
        post = await seed_post(unit_env, author)
        parent = await seed_comment(unit_env, post, author)

        assert await integrity_service.resolve_parent(post.id, None) is None
        assert (await integrity_service.resolve_parent(post.id, parent.id)).id == parent.id

    @pytest.mark.asyncio
    async def test_resolve_parent_on_other_post_is_invalid(self, unit_env):
        integrity_service = await unit_env.get(IntegrityService)
        author = await seed_user(unit_env)
        post_a = await seed_post(unit_env, author, title="A")
        post_b = await seed_post(unit_env, author, title="B")
        parent_on_b = await seed_comment(unit_env, post_b, author)

        with pytest.raises(ValidationError, match="different post"):
            await integrity_service.resolve_parent(post_a.id, parent_on_b.id)

    @pytest.mark.asyncio
    async def test_resolve_missing_parent_is_invalid(self, unit_env):
        integrity_service = await unit_env.get(IntegrityService)
        author = await seed_user(unit_env)
        post = await seed_post(unit_env, author)

        with pytest.raises(ValidationError, match="not found"):
            await integrity_service.resolve_parent(post.id, CommentId(uuid4()))


class TestDeletePost:
    """Tests for the post cascade."""

    @pytest.mark.asyncio
    async def test_delete_post_removes_comments_replies_and_likes(self, unit_env):
        # Arrange
        integrity_service = await unit_env.get(IntegrityService)
        like_service = await unit_env.get(LikeService)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        like_repo = await unit_env.get(LikeRepository)

        author = await seed_user(unit_env)
        reader = await seed_user(unit_env, name="Reader")
        post = await seed_post(unit_env, author, title="Doomed")
        other = await seed_post(unit_env, author, title="Survivor")

        top = await seed_comment(unit_env, post, reader)
        reply = await seed_comment(unit_env, post, author, parent=top)
        deep = await seed_comment(unit_env, post, reader, parent=reply)
        kept = await seed_comment(unit_env, other, reader)

        await like_service.toggle_post_like(post.id, reader.id)
        await like_service.toggle_comment_like(deep.id, author.id)
        await like_service.toggle_comment_like(top.id, author.id)
        await like_service.toggle_post_like(other.id, reader.id)

        # Act
        result = await integrity_service.delete_post(post.id)

        # Assert
        assert (result.comments, result.likes) == (3, 3)
        assert await post_repo.find_by_id(post.id) is None
        for comment in (top, reply, deep):
            assert await comment_repo.find_by_id(comment.id) is None
            assert await like_repo.count_by_target(LikeTargetType.COMMENT, comment.id) == 0
        assert await like_repo.count_by_target(LikeTargetType.POST, post.id) == 0

        # Unrelated content is untouched
        assert await comment_repo.find_by_id(kept.id) is not None
        assert await like_repo.count_by_target(LikeTargetType.POST, other.id) == 1

    @pytest.mark.asyncio
    async def test_delete_missing_post_raises(self, unit_env):
        integrity_service = await unit_env.get(IntegrityService)

        with pytest.raises(NotFoundError):
            await integrity_service.delete_post(PostId(uuid4()))

    @pytest.mark.asyncio
    async def test_failed_cascade_leaves_graph_untouched(self, unit_env, monkeypatch):
        integrity_service = await unit_env.get(IntegrityService)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        author = await seed_user(unit_env)
        post = await seed_post(unit_env, author)
        await seed_comment(unit_env, post, author)
        await seed_comment(unit_env, post, author)

        async def broken_delete(post_id):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(post_repo, "delete", broken_delete)

        with pytest.raises(RuntimeError):
            await integrity_service.delete_post(post.id)

        assert await post_repo.find_by_id(post.id) is not None
        assert await comment_repo.count_by_post(post.id) == 2


class TestDeleteComment:
    """Tests for the comment subtree cascade."""

    @pytest.mark.asyncio
    async def test_delete_comment_removes_subtree_and_adjusts_count(self, unit_env):
        # Arrange
        integrity_service = await unit_env.get(IntegrityService)
        like_service = await unit_env.get(LikeService)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        author = await seed_user(unit_env)

        post = await seed_post(unit_env, author, comment_count=5)
        root = await seed_comment(unit_env, post, author)
        child_a = await seed_comment(unit_env, post, author, parent=root)
        child_b = await seed_comment(unit_env, post, author, parent=root)
        grandchild = await seed_comment(unit_env, post, author, parent=child_a)
        sibling = await seed_comment(unit_env, post, author)
        await like_service.toggle_comment_like(grandchild.id, author.id)

        # Act
        result = await integrity_service.delete_comment(root.id)

        # Assert
        assert (result.comments, result.likes) == (4, 1)
        for comment in (root, child_a, child_b, grandchild):
            assert await comment_repo.find_by_id(comment.id) is None
        assert await comment_repo.find_by_id(sibling.id) is not None
        assert (await post_repo.find_by_id(post.id)).comment_count == 1

    @pytest.mark.asyncio
    async def test_delete_reply_keeps_ancestors(self, unit_env):
        integrity_service = await unit_env.get(IntegrityService)
        comment_repo = await unit_env.get(CommentRepository)
        author = await seed_user(unit_env)
        post = await seed_post(unit_env, author, comment_count=2)
        root = await seed_comment(unit_env, post, author)
        reply = await seed_comment(unit_env, post, author, parent=root)

        result = await integrity_service.delete_comment(reply.id)

        assert result.comments == 1
        assert await comment_repo.find_by_id(root.id) is not None

    @pytest.mark.asyncio
    async def test_drifted_comment_count_is_repaired(self, unit_env):
        integrity_service = await unit_env.get(IntegrityService)
        post_repo = await unit_env.get(PostRepository)
        author = await seed_user(unit_env)
        # Counter says 0 although three comments exist
        post = await seed_post(unit_env, author, comment_count=0)
        doomed = await seed_comment(unit_env, post, author)
        await seed_comment(unit_env, post, author)
        await seed_comment(unit_env, post, author)

        await integrity_service.delete_comment(doomed.id)

        assert (await post_repo.find_by_id(post.id)).comment_count == 2
