"""Counter maintainer.

Keeps each question's and answer's `score` equal to (#up - #down) over the
vote ledger. It is called for every ledger write, inside the same atomic
block as the write, so a score change and the vote change it mirrors are
applied together or not at all.
"""

from uuid import UUID

import logfire

from stackit.domain.error import NotFoundError
from stackit.domain.model import ScoreReconciliation, Vote
from stackit.domain.repository import VotableRepository, VoteRepository
from stackit.domain.value import TargetKind, VoteDirection

from .base import Service


class CounterMaintainer(Service):
    """Applies score deltas for ledger inserts, updates and deletes."""

    def __init__(
        self, votable_repository: VotableRepository, vote_repository: VoteRepository
    ) -> None:
        """Initialize counter maintainer.

        Args:
            votable_repository: Score storage for questions and answers
            vote_repository: Vote ledger (read for reconciliation)
        """
        self.votable_repository = votable_repository
        self.vote_repository = vote_repository

    @staticmethod
    def delta(direction: VoteDirection) -> int:
        """Score contribution of one vote."""
        return 1 if direction is VoteDirection.UP else -1

    async def on_insert(self, vote: Vote) -> int:
        """Account for a newly inserted vote.

        Returns:
            Target score after the change

        Raises:
            NotFoundError: If the target no longer exists
        """
        return await self._apply(vote.target_kind, vote.target_id, self.delta(vote.direction))

    async def on_update(self, old: Vote, new: Vote) -> int:
        """Account for a vote whose direction changed.

        Returns:
            Target score after the change
        """
        change = self.delta(new.direction) - self.delta(old.direction)
        return await self._apply(new.target_kind, new.target_id, change)

    async def on_delete(self, vote: Vote) -> int:
        """Account for a deleted vote.

        Returns:
            Target score after the change
        """
        return await self._apply(vote.target_kind, vote.target_id, -self.delta(vote.direction))

    async def reconcile(self, kind: TargetKind, target_id: UUID) -> ScoreReconciliation:
        """Recompute a target's score from the ledger and store it.

        Must run inside an atomic block that holds the target's lock so no
        vote lands between the tally and the write.

        Args:
            kind: Kind of target
            target_id: ID of the target

        Returns:
            Stored score before and after

        Raises:
            NotFoundError: If the target does not exist
        """
        with logfire.span(
            "counter_maintainer.reconcile", target_kind=kind.value, target_id=str(target_id)
        ):
            target = await self.votable_repository.lock(kind, target_id)
            if target is None:
                raise NotFoundError(kind.value, str(target_id))

            tally = await self.vote_repository.tally(kind, target_id)
            current = target.score
            if tally.score != current:
                current = await self.votable_repository.set_score(kind, target_id, tally.score)
                logfire.warn(
                    "Score drift corrected",
                    target_kind=kind.value,
                    target_id=str(target_id),
                    previous=target.score,
                    current=current,
                )

            return ScoreReconciliation(
                target_kind=kind, target_id=target_id, previous=target.score, current=current
            )

    async def _apply(self, kind: TargetKind, target_id: UUID, delta: int) -> int:
        with logfire.span(
            "counter_maintainer.apply",
            target_kind=kind.value,
            target_id=str(target_id),
            delta=delta,
        ):
            score = await self.votable_repository.apply_score_delta(kind, target_id, delta)
            logfire.info(
                "Score updated", target_kind=kind.value, target_id=str(target_id), score=score
            )
            return score
