"""Get and list comments use cases."""

import logfire
from pydantic import BaseModel, Field

from quill.application.usecase.base import parse_id
from quill.application.usecase.views import CommentView
from quill.domain.model import build_threads, walk_threads
from quill.domain.service import CommentService, IntegrityService
from quill.domain.value import CommentId, PostId


class GetCommentRequest(BaseModel):
    """Get comment request."""

    comment_id: str  # UUID string


class GetCommentResponse(BaseModel):
    """Get comment response."""

    comment: CommentView


class GetCommentUseCase:
    """Use case for reading a single comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: GetCommentRequest) -> GetCommentResponse:
        """Execute get comment flow.

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        comment_id = CommentId(parse_id(request.comment_id, "Comment"))
        comment = await self.comment_service.get_comment(comment_id)
        return GetCommentResponse(comment=CommentView.from_domain(comment))


class ListCommentsRequest(BaseModel):
    """List comments request.

    With a ``post_id`` all comments of that post are returned oldest first,
    and again in thread order. Without one, one page of the latest comments
    across all posts is returned, with ``total`` counting every comment.
    """

    post_id: str | None = None
    limit: int = Field(default=10, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ListCommentsResponse(BaseModel):
    """List comments response."""

    post_id: str | None
    comments: list[CommentView]
    threads: list[CommentView]
    total: int


class ListCommentsUseCase:
    """Use case for listing comments of a post or site-wide."""

    def __init__(
        self, comment_service: CommentService, integrity_service: IntegrityService
    ) -> None:
        """Initialize list comments use case.

        Args:
            comment_service: Comment domain service
            integrity_service: Post existence check
        """
        self.comment_service = comment_service
        self.integrity_service = integrity_service

    async def execute(self, request: ListCommentsRequest) -> ListCommentsResponse:
        """Execute list comments flow.

        Raises:
            NotFoundError: If ``post_id`` names a missing post
        """
        with logfire.span("list_comments.execute", post_id=request.post_id):
            if request.post_id is None:
                comments = await self.comment_service.get_latest_comments(
                    limit=request.limit, offset=request.offset
                )
                return ListCommentsResponse(
                    post_id=None,
                    comments=[CommentView.from_domain(c) for c in comments],
                    threads=[],
                    total=await self.comment_service.count_comments(),
                )

            post_id = PostId(parse_id(request.post_id, "Post"))
            await self.integrity_service.require_post(post_id)
            comments = await self.comment_service.get_comments_for_post(post_id)

            return ListCommentsResponse(
                post_id=str(post_id),
                comments=[CommentView.from_domain(c) for c in comments],
                threads=[
                    CommentView.from_domain(c)
                    for c in walk_threads(build_threads(comments))
                ],
                total=len(comments),
            )
