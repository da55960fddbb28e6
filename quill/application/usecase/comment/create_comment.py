"""Create comment use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from quill.application.usecase.base import parse_id, require_actor
from quill.application.usecase.views import CommentView
from quill.domain.error import ValidationError
from quill.domain.repository import UnitOfWork
from quill.domain.service import CommentService, CounterService, IntegrityService
from quill.domain.value import Actor, CommentId, PostId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str  # UUID string
    actor: Actor | None = None
    content: str
    parent_id: str | None = None  # Parent comment ID for replies


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment: CommentView
    comment_count: int  # Post's comment count after the insert


class CreateCommentUseCase:
    """Use case for commenting on a post or replying to another comment."""

    def __init__(
        self,
        comment_service: CommentService,
        integrity_service: IntegrityService,
        counter_service: CounterService,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            integrity_service: Reference checks
            counter_service: Post comment counter
            unit_of_work: Transaction boundary
        """
        self.comment_service = comment_service
        self.integrity_service = integrity_service
        self.counter_service = counter_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Steps, all in one transaction:
        1. Verify the post and the author exist
        2. Verify the parent (if replying) sits on the same post
        3. Insert the comment and add one to the post's comment count

        Raises:
            UnauthenticatedError: If no actor was supplied
            NotFoundError: If the post doesn't exist
            ValidationError: If the parent is invalid or the content is bad
        """
        actor = require_actor(request.actor, "comment")
        post_id = PostId(parse_id(request.post_id, "Post"))
        parent_id = self._parse_parent(request.parent_id)

        with logfire.span(
            "create_comment.execute",
            post_id=str(post_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            async with self.unit_of_work.transaction():
                await self.integrity_service.require_post(post_id)
                await self.integrity_service.require_user(actor.user_id)
                parent = await self.integrity_service.resolve_parent(post_id, parent_id)

                comment = await self.comment_service.create_comment(
                    post_id=post_id,
                    author_id=actor.user_id,
                    content=request.content,
                    parent=parent,
                )
                comment_count = await self.counter_service.adjust_comment_count(
                    post_id, 1
                )

            return CreateCommentResponse(
                comment=CommentView.from_domain(comment),
                comment_count=comment_count,
            )

    @staticmethod
    def _parse_parent(raw: str | None) -> CommentId | None:
        if raw is None:
            return None
        try:
            return CommentId(UUID(raw))
        except ValueError:
            raise ValidationError(f"Parent comment not found: {raw}")
