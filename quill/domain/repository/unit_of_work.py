"""Transaction boundary interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class UnitOfWork(ABC):
    """Groups repository writes into one atomic unit.

    Writes made inside ``transaction()`` are all applied or all discarded,
    including when the surrounding task is cancelled. Transactions nest:
    an inner failure only discards the inner block's writes.

    Usage:
        async with unit_of_work.transaction():
            await like_repository.save(like)
            await post_repository.adjust_like_count(post_id, 1)
    """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Open an atomic block."""
        pass
