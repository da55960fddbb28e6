"""Unit tests for dashboard use cases."""

from datetime import datetime, timedelta

import pytest

from quill.application.usecase.dashboard import (
    GetActivityUseCase,
    GetDashboardStatsUseCase,
    ReconcileCountersRequest,
    ReconcileCountersUseCase,
)
from quill.domain.error import NotAuthorizedError, NotFoundError, UnauthenticatedError
from quill.domain.repository import CommentRepository, PostRepository
from quill.domain.value import Role
from tests.conftest import actor_for, seed_comment, seed_post, seed_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestActivity:
    """Tests for the activity feed and stats."""

    @pytest.mark.asyncio
    async def test_activity_is_bounded_and_newest_first(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetActivityUseCase)
        start = datetime.now() - timedelta(hours=1)
        for i in range(4):
            user = await seed_user(unit_env, name=f"User {i}", created_at=start)
            post = await seed_post(
                unit_env,
                user,
                title=f"Post {i}",
                created_at=start + timedelta(minutes=i * 3 + 1),
            )
            await seed_comment(
                unit_env, post, user, created_at=start + timedelta(minutes=i * 3 + 2)
            )

        # Act
        response = await use_case.execute()

        # Assert
        assert len(response.events) == 10
        timestamps = [e.timestamp for e in response.events]
        assert timestamps == sorted(timestamps, reverse=True)
        assert response.events[0].type == "comment"

    @pytest.mark.asyncio
    async def test_dashboard_stats(self, unit_env):
        use_case = await unit_env.get(GetDashboardStatsUseCase)
        old = datetime.now() - timedelta(days=30)
        veteran = await seed_user(unit_env, name="Veteran", created_at=old)
        newcomer = await seed_user(unit_env, name="Newcomer")
        await seed_post(unit_env, veteran, title="Archive", created_at=old)
        post = await seed_post(unit_env, newcomer, title="Fresh")
        await seed_comment(unit_env, post, veteran)

        response = await use_case.execute()

        stats = response.stats
        assert (stats.users.total, stats.users.recent) == (2, 1)
        assert (stats.posts.total, stats.posts.recent) == (2, 1)
        assert (stats.comments.total, stats.comments.recent) == (1, 1)
        assert len(response.recent_activity) == 5


class TestReconcileCounters:
    """Tests for ReconcileCountersUseCase."""

    @pytest.mark.asyncio
    async def test_admin_repairs_drifted_counters(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ReconcileCountersUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        author = await seed_user(unit_env)
        admin = await seed_user(unit_env, name="Admin", role=Role.ADMIN)
        post = await seed_post(unit_env, author, like_count=9, comment_count=9)
        comment = await seed_comment(unit_env, post, author)
        await comment_repo.set_like_count(comment.id, 3)

        # Act
        response = await use_case.execute(
            ReconcileCountersRequest(post_id=str(post.id), actor=actor_for(admin))
        )

        # Assert
        assert (response.like_count, response.comment_count) == (0, 1)
        assert response.comments_checked == 1
        stored = await post_repo.find_by_id(post.id)
        assert (stored.like_count, stored.comment_count) == (0, 1)
        assert (await comment_repo.find_by_id(comment.id)).like_count == 0

    @pytest.mark.asyncio
    async def test_author_is_not_authorized(self, unit_env):
        use_case = await unit_env.get(ReconcileCountersUseCase)
        post_repo = await unit_env.get(PostRepository)
        author = await seed_user(unit_env)
        post = await seed_post(unit_env, author, like_count=9)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                ReconcileCountersRequest(post_id=str(post.id), actor=actor_for(author))
            )

        assert (await post_repo.find_by_id(post.id)).like_count == 9

    @pytest.mark.asyncio
    async def test_anonymous_is_unauthenticated(self, unit_env):
        use_case = await unit_env.get(ReconcileCountersUseCase)

        with pytest.raises(UnauthenticatedError):
            await use_case.execute(
                ReconcileCountersRequest(post_id="00000000-0000-0000-0000-000000000000")
            )

    @pytest.mark.asyncio
    async def test_missing_post(self, unit_env):
        use_case = await unit_env.get(ReconcileCountersUseCase)
        admin = await seed_user(unit_env, name="Admin", role=Role.ADMIN)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                ReconcileCountersRequest(
                    post_id="00000000-0000-0000-0000-000000000000", actor=actor_for(admin)
                )
            )
