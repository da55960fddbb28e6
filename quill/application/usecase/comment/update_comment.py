"""Update comment use case."""

from pydantic import BaseModel

from quill.application.usecase.base import parse_id, require_owner
from quill.application.usecase.views import CommentView
from quill.domain.service import CommentService
from quill.domain.value import Actor, CommentId


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str  # UUID string
    actor: Actor | None = None
    content: str


class UpdateCommentResponse(BaseModel):
    """Update comment response."""

    comment: CommentView


class UpdateCommentUseCase:
    """Use case for editing a comment (author or admin only)."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Raises:
            NotFoundError: If the comment doesn't exist
            UnauthenticatedError: If no actor was supplied
            NotAuthorizedError: If the actor is neither author nor admin
            ValidationError: If the content is empty or too long
        """
        comment_id = CommentId(parse_id(request.comment_id, "Comment"))
        comment = await self.comment_service.get_comment(comment_id)
        require_owner(request.actor, comment.author_id, "update", "comment", comment.id)

        updated = await self.comment_service.update_content(comment, request.content)
        return UpdateCommentResponse(comment=CommentView.from_domain(updated))
