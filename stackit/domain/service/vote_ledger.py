"""Vote ledger.

The single entry point for writing votes. Every write runs in an atomic
block together with the matching counter maintainer call, so scores follow
the ledger no matter which code path mutates it (voting, content deletion
or account cleanup).
"""

from datetime import datetime
from uuid import UUID, uuid4

import logfire

from stackit.domain.error import NotFoundError
from stackit.domain.model import Vote
from stackit.domain.repository import TransactionManager, VoteRepository
from stackit.domain.value import TargetKind, UserId, VoteDirection, VoteId

from .base import Service
from .counter_maintainer import CounterMaintainer


class VoteLedger(Service):
    """Mutations of the vote ledger."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        counter_maintainer: CounterMaintainer,
        transaction_manager: TransactionManager,
    ) -> None:
        """Initialize vote ledger.

        Args:
            vote_repository: Vote repository
            counter_maintainer: Score maintainer for ledger writes
            transaction_manager: Transaction manager
        """
        self.vote_repository = vote_repository
        self.counter_maintainer = counter_maintainer
        self.transaction_manager = transaction_manager

    async def insert(self, vote: Vote) -> int:
        """Insert a vote.

        Args:
            vote: New vote

        Returns:
            Target score after the insert

        Raises:
            ConflictError: If the voter already holds a vote on the target
            NotFoundError: If the target does not exist
        """
        async with self.transaction_manager.atomic():
            saved = await self.vote_repository.insert(vote)
            return await self.counter_maintainer.on_insert(saved)

    async def change_direction(
        self, vote: Vote, direction: VoteDirection
    ) -> tuple[Vote, int]:
        """Flip an existing vote to the given direction.

        Returns:
            The updated vote and the target score after the change
        """
        async with self.transaction_manager.atomic():
            updated = await self.vote_repository.update_direction(vote.id, direction)
            score = await self.counter_maintainer.on_update(vote, updated)
            return updated, score

    async def retract(self, vote: Vote) -> int:
        """Delete a vote.

        Returns:
            Target score after the delete

        Raises:
            NotFoundError: If the vote was already deleted
        """
        async with self.transaction_manager.atomic():
            deleted = await self.vote_repository.delete(vote.id)
            if not deleted:
                raise NotFoundError("vote", str(vote.id))
            return await self.counter_maintainer.on_delete(vote)

    async def _remove(self, votes: list[Vote]) -> int:
        # Rows already gone (retracted since the read) leave the score alone
        removed = 0
        for vote in votes:
            if await self.vote_repository.delete(vote.id):
                await self.counter_maintainer.on_delete(vote)
                removed += 1
        return removed

    async def purge_target(self, kind: TargetKind, target_id: UUID) -> int:
        """Delete every vote on a target.

        Called before the target itself is deleted, with the target locked.

        Returns:
            Number of votes deleted
        """
        with logfire.span(
            "vote_ledger.purge_target", target_kind=kind.value, target_id=str(target_id)
        ):
            async with self.transaction_manager.atomic():
                votes = await self.vote_repository.find_by_target(kind, target_id)
                removed = await self._remove(votes)

            logfire.info(
                "Votes purged from target",
                target_kind=kind.value,
                target_id=str(target_id),
                count=removed,
            )
            return removed

    async def purge_voter(self, voter_id: UserId) -> int:
        """Delete every vote a user has cast, adjusting each target's score.

        Returns:
            Number of votes deleted
        """
        with logfire.span("vote_ledger.purge_voter", voter_id=str(voter_id)):
            async with self.transaction_manager.atomic():
                votes = await self.vote_repository.find_by_voter(voter_id)
                removed = await self._remove(votes)

            logfire.info("Votes purged for voter", voter_id=str(voter_id), count=removed)
            return removed

    @staticmethod
    def new_vote(
        voter_id: UserId, kind: TargetKind, target_id: UUID, direction: VoteDirection
    ) -> Vote:
        """Build a vote record for `insert`."""
        now = datetime.now()
        return Vote(
            id=VoteId(uuid4()),
            voter_id=voter_id,
            target_kind=kind,
            target_id=target_id,
            direction=direction,
            created_at=now,
            updated_at=now,
        )
