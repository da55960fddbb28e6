"""PostgreSQL repository implementations."""

from quill.persistence.repository.comment import PostgresCommentRepository
from quill.persistence.repository.like import PostgresLikeRepository
from quill.persistence.repository.post import PostgresPostRepository
from quill.persistence.repository.unit_of_work import SqlAlchemyUnitOfWork
from quill.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresPostRepository",
    "PostgresCommentRepository",
    "PostgresLikeRepository",
    "SqlAlchemyUnitOfWork",
]
