"""Toggle like use case."""

from pydantic import BaseModel

from quill.application.usecase.base import parse_id, require_actor
from quill.domain.service import LikeService
from quill.domain.value import Actor, CommentId, LikeTargetType, PostId


class ToggleLikeRequest(BaseModel):
    """Toggle like request."""

    actor: Actor | None = None
    target_type: LikeTargetType = LikeTargetType.POST
    target_id: str  # UUID string


class ToggleLikeResponse(BaseModel):
    """State of the pair after the toggle."""

    target_type: LikeTargetType
    target_id: str
    liked: bool
    total_likes: int


class ToggleLikeUseCase:
    """Use case for liking or un-liking a post or comment."""

    def __init__(self, like_service: LikeService) -> None:
        """Initialize toggle like use case.

        Args:
            like_service: Like domain service
        """
        self.like_service = like_service

    async def execute(self, request: ToggleLikeRequest) -> ToggleLikeResponse:
        """Execute toggle like flow.

        Raises:
            UnauthenticatedError: If no actor was supplied
            NotFoundError: If the target doesn't exist
            ConflictError: If concurrent toggles kept colliding
        """
        actor = require_actor(request.actor, "like")

        if request.target_type == LikeTargetType.POST:
            post_id = PostId(parse_id(request.target_id, "Post"))
            result = await self.like_service.toggle_post_like(post_id, actor.user_id)
        else:  # LikeTargetType.COMMENT
            comment_id = CommentId(parse_id(request.target_id, "Comment"))
            result = await self.like_service.toggle_comment_like(
                comment_id, actor.user_id
            )

        return ToggleLikeResponse(
            target_type=request.target_type,
            target_id=request.target_id,
            liked=result.liked,
            total_likes=result.total_likes,
        )
