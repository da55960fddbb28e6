"""Domain layer DI providers."""

from dishka import Scope, provide

from quill.domain.repository import (
    CommentRepository,
    LikeRepository,
    PostRepository,
    UnitOfWork,
    UserRepository,
)
from quill.domain.service import (
    ActivityService,
    CommentService,
    CounterService,
    IntegrityService,
    LikeService,
    PostService,
)
from quill.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_post_service(self, post_repository: PostRepository) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository)

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository)

    @provide
    def get_counter_service(
        self,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
    ) -> CounterService:
        """Provide counter maintenance service."""
        return CounterService(
            post_repository=post_repository,
            comment_repository=comment_repository,
            like_repository=like_repository,
        )

    @provide
    def get_integrity_service(
        self,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
        user_repository: UserRepository,
        unit_of_work: UnitOfWork,
        counter_service: CounterService,
    ) -> IntegrityService:
        """Provide integrity service."""
        return IntegrityService(
            post_repository=post_repository,
            comment_repository=comment_repository,
            like_repository=like_repository,
            user_repository=user_repository,
            unit_of_work=unit_of_work,
            counter_service=counter_service,
        )

    @provide
    def get_like_service(
        self,
        like_repository: LikeRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        counter_service: CounterService,
        unit_of_work: UnitOfWork,
    ) -> LikeService:
        """Provide like domain service."""
        return LikeService(
            like_repository=like_repository,
            post_repository=post_repository,
            comment_repository=comment_repository,
            counter_service=counter_service,
            unit_of_work=unit_of_work,
        )

    @provide
    def get_activity_service(
        self,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        user_repository: UserRepository,
    ) -> ActivityService:
        """Provide activity feed service."""
        return ActivityService(
            post_repository=post_repository,
            comment_repository=comment_repository,
            user_repository=user_repository,
        )
