"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from uuid import UUID

from stackit.domain.model.vote import Vote
from stackit.domain.value import TargetKind, UserId, VoteDirection, VoteId, VoteTally


class VoteRepository(ABC):
    """Repository for the vote ledger.

    Writes go through `VoteLedger`, which keeps scores in step; nothing else
    should call `insert`, `update_direction` or `delete`.
    """

    @abstractmethod
    async def find_by_id(self, vote_id: VoteId) -> Optional[Vote]:
        """Find a vote by ID.

        Args:
            vote_id: The vote's unique identifier

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_voter_and_target(
        self, voter_id: UserId, target_kind: TargetKind, target_id: UUID
    ) -> Optional[Vote]:
        """Find a voter's vote on a specific target.

        Args:
            voter_id: The voter's ID
            target_kind: Kind of target (question or answer)
            target_id: ID of the target

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_voter_and_targets(
        self, voter_id: UserId, target_kind: TargetKind, target_ids: Sequence[UUID]
    ) -> List[Vote]:
        """Find a voter's votes on several targets of one kind (batch query).

        Args:
            voter_id: The voter's ID
            target_kind: Kind of the targets
            target_ids: Target IDs to check

        Returns:
            The voter's votes on the given targets
        """
        pass

    @abstractmethod
    async def find_by_voter(self, voter_id: UserId) -> List[Vote]:
        """Find all votes cast by a voter."""
        pass

    @abstractmethod
    async def find_by_target(self, target_kind: TargetKind, target_id: UUID) -> List[Vote]:
        """Find all votes on a target."""
        pass

    @abstractmethod
    async def tally(self, target_kind: TargetKind, target_id: UUID) -> VoteTally:
        """Count up and down votes on a target.

        Args:
            target_kind: Kind of target
            target_id: ID of the target

        Returns:
            Vote tally for the target
        """
        pass

    @abstractmethod
    async def insert(self, vote: Vote) -> Vote:
        """Insert a new vote.

        Args:
            vote: The vote to insert

        Returns:
            The inserted vote

        Raises:
            ConflictError: If the voter already holds a vote on the target
        """
        pass

    @abstractmethod
    async def update_direction(self, vote_id: VoteId, direction: VoteDirection) -> Vote:
        """Flip a vote's direction in place.

        Args:
            vote_id: The vote ID
            direction: New direction

        Returns:
            The updated vote

        Raises:
            NotFoundError: If the vote no longer exists
        """
        pass

    @abstractmethod
    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote.

        Returns:
            True if a vote was deleted, False if it did not exist
        """
        pass
