"""In-memory transaction manager for testing."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from stackit.domain.repository import TransactionManager

from .store import InMemoryStore


class InMemoryTransactionManager(TransactionManager):
    """Serializes atomic blocks on a store-wide lock.

    The outermost block holds the store's lock, which stands in for the row
    locks a database would take. Every block snapshots the tables on entry
    and restores them if it raises, mirroring SAVEPOINT rollback.
    """

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        if self.store.active.get():
            async with self._savepoint():
                yield
            return

        async with self.store.lock:
            token = self.store.active.set(True)
            try:
                async with self._savepoint():
                    yield
            finally:
                self.store.active.reset(token)

    @asynccontextmanager
    async def _savepoint(self) -> AsyncIterator[None]:
        snapshot = self.store.snapshot()
        try:
            yield
        except BaseException:
            self.store.restore(snapshot)
            raise
