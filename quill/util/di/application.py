"""Application layer DI providers."""

from dishka import Scope, provide

from quill.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentUseCase,
    ListCommentsUseCase,
    UpdateCommentUseCase,
)
from quill.application.usecase.dashboard import (
    GetActivityUseCase,
    GetDashboardStatsUseCase,
    ReconcileCountersUseCase,
)
from quill.application.usecase.like import ToggleLikeUseCase
from quill.application.usecase.post import (
    CreatePostUseCase,
    DeletePostUseCase,
    GetFeaturedPostsUseCase,
    GetPostUseCase,
    GetRelatedPostsUseCase,
    ListPostsUseCase,
    UpdatePostUseCase,
)
from quill.config import Settings
from quill.domain.query import PostQueryBuilder
from quill.domain.repository import CommentRepository, UnitOfWork
from quill.domain.service import (
    ActivityService,
    CommentService,
    CounterService,
    IntegrityService,
    LikeService,
    PostService,
)
from quill.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed.

    Use cases are REQUEST-scoped, sharing the request's services and session.
    """

    scope = Scope.REQUEST

    # Post use cases

    @provide
    def get_create_post_use_case(
        self, post_service: PostService, integrity_service: IntegrityService
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(
            post_service=post_service, integrity_service=integrity_service
        )

    @provide
    def get_get_post_use_case(
        self, post_service: PostService, comment_service: CommentService
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(post_service=post_service, comment_service=comment_service)

    @provide
    def get_list_posts_use_case(
        self, post_service: PostService, query_builder: PostQueryBuilder
    ) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(post_service=post_service, query_builder=query_builder)

    @provide
    def get_update_post_use_case(self, post_service: PostService) -> UpdatePostUseCase:
        """Provide update post use case."""
        return UpdatePostUseCase(post_service=post_service)

    @provide
    def get_delete_post_use_case(
        self, post_service: PostService, integrity_service: IntegrityService
    ) -> DeletePostUseCase:
        """Provide delete post use case."""
        return DeletePostUseCase(
            post_service=post_service, integrity_service=integrity_service
        )

    @provide
    def get_featured_posts_use_case(
        self, post_service: PostService, settings: Settings
    ) -> GetFeaturedPostsUseCase:
        """Provide featured posts use case."""
        return GetFeaturedPostsUseCase(post_service=post_service, settings=settings)

    @provide
    def get_related_posts_use_case(
        self, post_service: PostService, settings: Settings
    ) -> GetRelatedPostsUseCase:
        """Provide related posts use case."""
        return GetRelatedPostsUseCase(post_service=post_service, settings=settings)

    # Comment use cases

    @provide
    def get_create_comment_use_case(
        self,
        comment_service: CommentService,
        integrity_service: IntegrityService,
        counter_service: CounterService,
        unit_of_work: UnitOfWork,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service,
            integrity_service=integrity_service,
            counter_service=counter_service,
            unit_of_work=unit_of_work,
        )

    @provide
    def get_get_comment_use_case(
        self, comment_service: CommentService
    ) -> GetCommentUseCase:
        """Provide get comment use case."""
        return GetCommentUseCase(comment_service=comment_service)

    @provide
    def get_list_comments_use_case(
        self, comment_service: CommentService, integrity_service: IntegrityService
    ) -> ListCommentsUseCase:
        """Provide list comments use case."""
        return ListCommentsUseCase(
            comment_service=comment_service, integrity_service=integrity_service
        )

    @provide
    def get_update_comment_use_case(
        self, comment_service: CommentService
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(comment_service=comment_service)

    @provide
    def get_delete_comment_use_case(
        self, comment_service: CommentService, integrity_service: IntegrityService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(
            comment_service=comment_service, integrity_service=integrity_service
        )

    # Like use cases

    @provide
    def get_toggle_like_use_case(self, like_service: LikeService) -> ToggleLikeUseCase:
        """Provide toggle like use case."""
        return ToggleLikeUseCase(like_service=like_service)

    # Dashboard use cases

    @provide
    def get_activity_use_case(
        self, activity_service: ActivityService, settings: Settings
    ) -> GetActivityUseCase:
        """Provide activity feed use case."""
        return GetActivityUseCase(activity_service=activity_service, settings=settings)

    @provide
    def get_dashboard_stats_use_case(
        self, activity_service: ActivityService, settings: Settings
    ) -> GetDashboardStatsUseCase:
        """Provide dashboard stats use case."""
        return GetDashboardStatsUseCase(
            activity_service=activity_service, settings=settings
        )

    @provide
    def get_reconcile_counters_use_case(
        self,
        counter_service: CounterService,
        comment_repository: CommentRepository,
        unit_of_work: UnitOfWork,
    ) -> ReconcileCountersUseCase:
        """Provide counter reconciliation use case."""
        return ReconcileCountersUseCase(
            counter_service=counter_service,
            comment_repository=comment_repository,
            unit_of_work=unit_of_work,
        )
