"""PostgreSQL implementation of Votable repository."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import Table, select
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.domain.error import NotFoundError
from stackit.domain.repository import VotableRepository
from stackit.domain.value import TargetKind, VotableRef
from stackit.persistence.tables import answers_table, questions_table

_TABLES: dict[TargetKind, Table] = {
    TargetKind.QUESTION: questions_table,
    TargetKind.ANSWER: answers_table,
}


class PostgresVotableRepository(VotableRepository):
    """Score access on the questions and answers tables."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def lock(self, kind: TargetKind, target_id: UUID) -> Optional[VotableRef]:
        """SELECT ... FOR UPDATE on the target row."""
        table = _TABLES[kind]
        stmt = (
            select(table.c.id, table.c.author_id, table.c.score)
            .where(table.c.id == target_id)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if not row:
            return None
        return VotableRef(kind=kind, id=row.id, author_id=row.author_id, score=row.score)

    async def apply_score_delta(self, kind: TargetKind, target_id: UUID, delta: int) -> int:
        """Atomically add to the score using SQL-level arithmetic."""
        table = _TABLES[kind]
        stmt = (
            table.update()
            .where(table.c.id == target_id)
            .values(score=table.c.score + delta)
            .returning(table.c.score)
        )
        result = await self.session.execute(stmt)
        score = result.scalar_one_or_none()
        if score is None:
            raise NotFoundError(kind.value, str(target_id))
        await self.session.flush()
        return score

    async def set_score(self, kind: TargetKind, target_id: UUID, score: int) -> int:
        """Overwrite the stored score."""
        table = _TABLES[kind]
        stmt = (
            table.update()
            .where(table.c.id == target_id)
            .values(score=score)
            .returning(table.c.score)
        )
        result = await self.session.execute(stmt)
        stored = result.scalar_one_or_none()
        if stored is None:
            raise NotFoundError(kind.value, str(target_id))
        await self.session.flush()
        return stored

    async def list_ids(self, kind: TargetKind) -> List[UUID]:
        """List the IDs of every votable of a kind."""
        table = _TABLES[kind]
        result = await self.session.execute(select(table.c.id).order_by(table.c.id))
        return list(result.scalars().all())
