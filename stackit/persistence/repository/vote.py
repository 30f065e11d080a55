"""PostgreSQL implementation of Vote repository."""

from datetime import datetime
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import and_, case, delete, func, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.domain.error import ConflictError, NotFoundError
from stackit.domain.model import Vote
from stackit.domain.repository import VoteRepository
from stackit.domain.value import TargetKind, UserId, VoteDirection, VoteId, VoteTally
from stackit.persistence.mappers import row_to_vote, vote_to_dict
from stackit.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, vote_id: VoteId) -> Optional[Vote]:
        """Find a vote by ID."""
        stmt = select(votes_table).where(votes_table.c.id == vote_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_voter_and_target(
        self, voter_id: UserId, target_kind: TargetKind, target_id: UUID
    ) -> Optional[Vote]:
        """Find a voter's vote on a specific target."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.voter_id == voter_id,
                votes_table.c.target_kind == target_kind.value,
                votes_table.c.target_id == target_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_voter_and_targets(
        self, voter_id: UserId, target_kind: TargetKind, target_ids: Sequence[UUID]
    ) -> List[Vote]:
        """Find a voter's votes on several targets (batch query)."""
        if not target_ids:
            return []
        stmt = select(votes_table).where(
            and_(
                votes_table.c.voter_id == voter_id,
                votes_table.c.target_kind == target_kind.value,
                votes_table.c.target_id.in_(list(target_ids)),
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def find_by_voter(self, voter_id: UserId) -> List[Vote]:
        """Find all votes cast by a voter."""
        stmt = select(votes_table).where(votes_table.c.voter_id == voter_id)
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def find_by_target(self, target_kind: TargetKind, target_id: UUID) -> List[Vote]:
        """Find all votes on a target."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.target_kind == target_kind.value,
                votes_table.c.target_id == target_id,
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def tally(self, target_kind: TargetKind, target_id: UUID) -> VoteTally:
        """Count up and down votes on a target."""
        is_up = votes_table.c.direction == VoteDirection.UP.value
        stmt = select(
            func.coalesce(func.sum(case((is_up, 1), else_=0)), 0).label("up"),
            func.coalesce(func.sum(case((is_up, 0), else_=1)), 0).label("down"),
        ).where(
            and_(
                votes_table.c.target_kind == target_kind.value,
                votes_table.c.target_id == target_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.one()
        return VoteTally(up=row.up, down=row.down)

    async def insert(self, vote: Vote) -> Vote:
        """Insert a new vote."""
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        try:
            await self.session.execute(stmt)
            await self.session.flush()
        except IntegrityError as e:
            raise ConflictError("Vote already exists for this target") from e
        return vote

    async def update_direction(self, vote_id: VoteId, direction: VoteDirection) -> Vote:
        """Flip a vote's direction in place."""
        stmt = (
            votes_table.update()
            .where(votes_table.c.id == vote_id)
            .values(direction=direction.value, updated_at=datetime.now())
            .returning(votes_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if not row:
            raise NotFoundError("vote", str(vote_id))
        await self.session.flush()
        return row_to_vote(row._asdict())

    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote."""
        stmt = delete(votes_table).where(votes_table.c.id == vote_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
