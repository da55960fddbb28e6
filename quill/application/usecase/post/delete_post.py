"""Delete post use case."""

import logfire
from pydantic import BaseModel

from quill.application.usecase.base import parse_id, require_owner
from quill.domain.service import IntegrityService, PostService
from quill.domain.value import Actor, PostId


class DeletePostRequest(BaseModel):
    """Delete post request."""

    post_id: str  # UUID string
    actor: Actor | None = None


class DeletePostResponse(BaseModel):
    """Rows removed with the post."""

    post_id: str
    deleted_comments: int
    deleted_likes: int


class DeletePostUseCase:
    """Use case for deleting a post with its comments and likes."""

    def __init__(
        self, post_service: PostService, integrity_service: IntegrityService
    ) -> None:
        """Initialize delete post use case.

        Args:
            post_service: Post domain service
            integrity_service: Cascading delete
        """
        self.post_service = post_service
        self.integrity_service = integrity_service

    async def execute(self, request: DeletePostRequest) -> DeletePostResponse:
        """Execute delete post flow.

        Raises:
            NotFoundError: If the post doesn't exist
            UnauthenticatedError: If no actor was supplied
            NotAuthorizedError: If the actor is neither author nor admin
        """
        post_id = PostId(parse_id(request.post_id, "Post"))

        with logfire.span("delete_post.execute", post_id=str(post_id)):
            post = await self.post_service.get_post(post_id)
            require_owner(request.actor, post.author_id, "delete", "post", post.id)

            result = await self.integrity_service.delete_post(post_id)
            return DeletePostResponse(
                post_id=str(post_id),
                deleted_comments=result.comments,
                deleted_likes=result.likes,
            )
