"""Get post detail use case."""

import logfire
from pydantic import BaseModel

from quill.application.usecase.base import parse_id
from quill.application.usecase.views import CommentView, PostView
from quill.domain.model import build_threads, walk_threads
from quill.domain.service import CommentService, PostService
from quill.domain.value import PostId


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str  # UUID string


class GetPostResponse(BaseModel):
    """Post detail with its comments in thread order.

    Comments come depth-first: each comment is followed by its replies,
    oldest first. ``parent_id`` and ``depth`` place them in the tree.
    """

    post: PostView
    comments: list[CommentView]


class GetPostUseCase:
    """Use case for the post detail view.

    Every call counts as one view of the post.
    """

    def __init__(
        self, post_service: PostService, comment_service: CommentService
    ) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
            comment_service: Comment domain service
        """
        self.post_service = post_service
        self.comment_service = comment_service

    async def execute(self, request: GetPostRequest) -> GetPostResponse:
        """Execute get post flow.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        post_id = PostId(parse_id(request.post_id, "Post"))

        with logfire.span("get_post.execute", post_id=str(post_id)):
            post = await self.post_service.view_post(post_id)
            comments = await self.comment_service.get_comments_for_post(post_id)

            return GetPostResponse(
                post=PostView.from_domain(post),
                comments=[
                    CommentView.from_domain(comment)
                    for comment in walk_threads(build_threads(comments))
                ],
            )
