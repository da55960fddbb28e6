"""Counter reconciliation use case."""

import logfire
from pydantic import BaseModel

from quill.application.usecase.base import parse_id, require_actor
from quill.domain.error import NotAuthorizedError
from quill.domain.repository import CommentRepository, UnitOfWork
from quill.domain.service import CounterService
from quill.domain.value import Actor, PostId


class ReconcileCountersRequest(BaseModel):
    """Reconcile counters request."""

    post_id: str  # UUID string
    actor: Actor | None = None


class ReconcileCountersResponse(BaseModel):
    """Counters after reconciliation."""

    post_id: str
    like_count: int
    comment_count: int
    comments_checked: int


class ReconcileCountersUseCase:
    """Admin-only repair of a post's counters and its comments' like counters."""

    def __init__(
        self,
        counter_service: CounterService,
        comment_repository: CommentRepository,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize reconcile counters use case.

        Args:
            counter_service: Counter maintenance
            comment_repository: Comment repository (the post's comments)
            unit_of_work: Transaction boundary
        """
        self.counter_service = counter_service
        self.comment_repository = comment_repository
        self.unit_of_work = unit_of_work

    async def execute(self, request: ReconcileCountersRequest) -> ReconcileCountersResponse:
        """Execute reconcile flow.

        Raises:
            UnauthenticatedError: If no actor was supplied
            NotAuthorizedError: If the actor is not an administrator
            NotFoundError: If the post doesn't exist
        """
        actor = require_actor(request.actor, "reconcile counters")
        post_id = PostId(parse_id(request.post_id, "Post"))
        if not actor.is_admin:
            raise NotAuthorizedError(
                "reconcile", "post", str(post_id), str(actor.user_id)
            )

        with logfire.span("reconcile_counters.execute", post_id=str(post_id)):
            async with self.unit_of_work.transaction():
                post = await self.counter_service.reconcile_post(post_id)
                comments = await self.comment_repository.find_by_post(post_id)
                for comment in comments:
                    await self.counter_service.reconcile_comment(comment.id)

            return ReconcileCountersResponse(
                post_id=str(post_id),
                like_count=post.like_count,
                comment_count=post.comment_count,
                comments_checked=len(comments),
            )
