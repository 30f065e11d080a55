"""In-memory vote repository for testing."""

from datetime import datetime
from typing import List, Optional, Sequence
from uuid import UUID

from stackit.domain.error import ConflictError, NotFoundError
from stackit.domain.model import Vote
from stackit.domain.repository import VoteRepository
from stackit.domain.value import TargetKind, UserId, VoteDirection, VoteId, VoteTally

from .store import InMemoryStore


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_id(self, vote_id: VoteId) -> Optional[Vote]:
        """Find a vote by ID."""
        return self.store.votes.get(vote_id)

    async def find_by_voter_and_target(
        self, voter_id: UserId, target_kind: TargetKind, target_id: UUID
    ) -> Optional[Vote]:
        """Find a voter's vote on a target."""
        for vote in self.store.votes.values():
            if (
                vote.voter_id == voter_id
                and vote.target_kind == target_kind
                and vote.target_id == target_id
            ):
                return vote
        return None

    async def find_by_voter_and_targets(
        self, voter_id: UserId, target_kind: TargetKind, target_ids: Sequence[UUID]
    ) -> List[Vote]:
        """Find a voter's votes on several targets."""
        wanted = set(target_ids)
        return [
            v
            for v in self.store.votes.values()
            if v.voter_id == voter_id and v.target_kind == target_kind and v.target_id in wanted
        ]

    async def find_by_voter(self, voter_id: UserId) -> List[Vote]:
        """Find all votes cast by a voter."""
        return [v for v in self.store.votes.values() if v.voter_id == voter_id]

    async def find_by_target(self, target_kind: TargetKind, target_id: UUID) -> List[Vote]:
        """Find all votes on a target."""
        return [
            v
            for v in self.store.votes.values()
            if v.target_kind == target_kind and v.target_id == target_id
        ]

    async def tally(self, target_kind: TargetKind, target_id: UUID) -> VoteTally:
        """Count up and down votes on a target."""
        votes = await self.find_by_target(target_kind, target_id)
        up = sum(1 for v in votes if v.direction == VoteDirection.UP)
        return VoteTally(up=up, down=len(votes) - up)

    async def insert(self, vote: Vote) -> Vote:
        """Insert a vote, enforcing one vote per voter and target."""
        existing = await self.find_by_voter_and_target(
            vote.voter_id, vote.target_kind, vote.target_id
        )
        if existing or vote.id in self.store.votes:
            raise ConflictError("Vote already exists for this target")
        self.store.votes[vote.id] = vote
        return vote

    async def update_direction(self, vote_id: VoteId, direction: VoteDirection) -> Vote:
        """Flip a vote's direction."""
        vote = self.store.votes.get(vote_id)
        if not vote:
            raise NotFoundError("vote", str(vote_id))
        updated = vote.model_copy(update={"direction": direction, "updated_at": datetime.now()})
        self.store.votes[vote_id] = updated
        return updated

    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote."""
        return self.store.votes.pop(vote_id, None) is not None
