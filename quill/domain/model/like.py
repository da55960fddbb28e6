"""Like entity.

At most one like exists per (user, target) pair. Posts are the
authoritative target; comment likes follow the same rules.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from quill.domain.model.common import DomainModel
from quill.domain.value import LikeId, LikeTargetType, UserId


class Like(DomainModel):
    """Like entity.

    Business rules:
    - One like per user per target (enforced by a unique constraint)
    - Polymorphic reference to the target (post or comment)
    """

    id: LikeId
    user_id: UserId
    target_type: LikeTargetType
    target_id: UUID  # PostId or CommentId (both are UUIDs)
    created_at: datetime = Field(default_factory=datetime.now)
