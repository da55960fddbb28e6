"""Featured and related posts use cases."""

from pydantic import BaseModel

from quill.application.usecase.base import parse_id
from quill.application.usecase.views import PostView
from quill.config import Settings
from quill.domain.service import PostService
from quill.domain.value import PostId


class GetFeaturedPostsResponse(BaseModel):
    """Most recent featured posts."""

    posts: list[PostView]


class GetFeaturedPostsUseCase:
    """Use case for the featured posts strip."""

    def __init__(self, post_service: PostService, settings: Settings) -> None:
        self.post_service = post_service
        self.limit = settings.content.featured_limit

    async def execute(self) -> GetFeaturedPostsResponse:
        posts = await self.post_service.get_featured_posts(self.limit)
        return GetFeaturedPostsResponse(posts=[PostView.from_domain(p) for p in posts])


class GetRelatedPostsRequest(BaseModel):
    """Related posts request."""

    post_id: str  # UUID string


class GetRelatedPostsResponse(BaseModel):
    """Most recent posts in the same category."""

    post_id: str
    posts: list[PostView]


class GetRelatedPostsUseCase:
    """Use case for "more like this" suggestions under a post."""

    def __init__(self, post_service: PostService, settings: Settings) -> None:
        self.post_service = post_service
        self.limit = settings.content.related_limit

    async def execute(self, request: GetRelatedPostsRequest) -> GetRelatedPostsResponse:
        """Execute related posts flow.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        post_id = PostId(parse_id(request.post_id, "Post"))
        post = await self.post_service.get_post(post_id)
        related = await self.post_service.get_related_posts(post, self.limit)
        return GetRelatedPostsResponse(
            post_id=str(post_id),
            posts=[PostView.from_domain(p) for p in related],
        )
