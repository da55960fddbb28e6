"""Update post use case."""

from typing import Any

import logfire
from pydantic import BaseModel, Field

from quill.application.usecase.base import parse_id, require_owner
from quill.application.usecase.views import PostView
from quill.domain.service import PostService
from quill.domain.value import Actor, PostId


class UpdatePostRequest(BaseModel):
    """Update post request."""

    post_id: str  # UUID string
    actor: Actor | None = None
    changes: dict[str, Any] = Field(default_factory=dict)
    regenerate_slug: bool = False


class UpdatePostResponse(BaseModel):
    """Update post response."""

    post: PostView


class UpdatePostUseCase:
    """Use case for editing a post (author or admin only)."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize update post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: UpdatePostRequest) -> UpdatePostResponse:
        """Execute update post flow.

        Raises:
            NotFoundError: If the post doesn't exist
            UnauthenticatedError: If no actor was supplied
            NotAuthorizedError: If the actor is neither author nor admin
            ValidationError: If a field is not editable or a value is invalid
        """
        post_id = PostId(parse_id(request.post_id, "Post"))

        with logfire.span("update_post.execute", post_id=str(post_id)):
            post = await self.post_service.get_post(post_id)
            require_owner(request.actor, post.author_id, "update", "post", post.id)

            updated = await self.post_service.update_post(
                post, request.changes, regenerate_slug=request.regenerate_slug
            )
            return UpdatePostResponse(post=PostView.from_domain(updated))
