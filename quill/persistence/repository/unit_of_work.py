"""PostgreSQL transaction boundary."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from quill.domain.repository import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Atomic blocks as SAVEPOINTs inside the request session.

    The request-scoped session commits or rolls back the outer transaction;
    each ``transaction()`` block is released or rolled back on its own.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        async with self.session.begin_nested():
            yield
