"""Create post use case."""

import logfire
from pydantic import BaseModel, Field

from quill.application.usecase.base import require_actor
from quill.application.usecase.views import PostView
from quill.domain.service import IntegrityService, PostService
from quill.domain.value import Actor


class CreatePostRequest(BaseModel):
    """Create post request.

    Content fields are optional here so that missing values are reported
    as domain validation errors rather than request parsing errors.
    """

    actor: Actor | None = None
    title: str | None = None
    excerpt: str | None = None
    content: str | None = None
    category: str | None = None
    tags: list[str] = Field(default_factory=list)
    featured: bool = False
    cover_image: str | None = None


class CreatePostResponse(BaseModel):
    """Create post response."""

    post: PostView


class CreatePostUseCase:
    """Use case for publishing a post."""

    def __init__(
        self, post_service: PostService, integrity_service: IntegrityService
    ) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
            integrity_service: Reference checks (author must exist)
        """
        self.post_service = post_service
        self.integrity_service = integrity_service

    async def execute(self, request: CreatePostRequest) -> CreatePostResponse:
        """Execute create post flow.

        Raises:
            UnauthenticatedError: If no actor was supplied
            NotFoundError: If the actor's user record doesn't exist
            ValidationError: If a field is missing or invalid
            ConflictError: If a concurrent writer took the same slug
        """
        actor = require_actor(request.actor, "create a post")

        with logfire.span("create_post.execute", author_id=str(actor.user_id)):
            await self.integrity_service.require_user(actor.user_id)

            post = await self.post_service.create_post(
                author_id=actor.user_id,
                title=request.title,
                excerpt=request.excerpt,
                content=request.content,
                category=request.category,
                tags=request.tags,
                featured=request.featured,
                cover_image=request.cover_image,
            )

            return CreatePostResponse(post=PostView.from_domain(post))
