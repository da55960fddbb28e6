"""Delete comment use case."""

import logfire
from pydantic import BaseModel

from quill.application.usecase.base import parse_id, require_owner
from quill.domain.service import CommentService, IntegrityService
from quill.domain.value import Actor, CommentId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str  # UUID string
    actor: Actor | None = None


class DeleteCommentResponse(BaseModel):
    """Rows removed with the comment (the comment itself included)."""

    comment_id: str
    post_id: str
    deleted_comments: int
    deleted_likes: int


class DeleteCommentUseCase:
    """Use case for deleting a comment and its replies."""

    def __init__(
        self, comment_service: CommentService, integrity_service: IntegrityService
    ) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
            integrity_service: Cascading delete
        """
        self.comment_service = comment_service
        self.integrity_service = integrity_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            NotFoundError: If the comment doesn't exist
            UnauthenticatedError: If no actor was supplied
            NotAuthorizedError: If the actor is neither author nor admin
        """
        comment_id = CommentId(parse_id(request.comment_id, "Comment"))

        with logfire.span("delete_comment.execute", comment_id=str(comment_id)):
            comment = await self.comment_service.get_comment(comment_id)
            require_owner(
                request.actor, comment.author_id, "delete", "comment", comment.id
            )

            result = await self.integrity_service.delete_comment(comment_id)
            return DeleteCommentResponse(
                comment_id=str(comment_id),
                post_id=str(comment.post_id),
                deleted_comments=result.comments,
                deleted_likes=result.likes,
            )
