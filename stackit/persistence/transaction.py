"""PostgreSQL transaction manager."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from sqlalchemy.exc import DBAPIError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.domain.repository import TransactionManager
from stackit.persistence.error import translate_error


class PostgresTransactionManager(TransactionManager):
    """Atomic blocks on the request's session.

    Each block is a SAVEPOINT, so a failed inner block rolls back only its own
    writes. When the outermost block exits cleanly the session's transaction
    is committed, making the work durable before the response is sent.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize transaction manager.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session
        self._depth = 0

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        outermost = self._depth == 0
        self._depth += 1
        try:
            async with self.session.begin_nested():
                yield
            if outermost:
                await self.session.commit()
        except (DBAPIError, PoolTimeoutError, ConnectionError, TimeoutError) as e:
            translated = translate_error(e)
            if translated is None:
                raise
            logfire.warn(
                "Transaction failed",
                error=type(translated).__name__,
                retryable=translated.retryable,
                cause=str(e),
            )
            raise translated from e
        finally:
            self._depth -= 1
