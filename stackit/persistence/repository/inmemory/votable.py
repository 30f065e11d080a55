"""In-memory votable repository for testing."""

from typing import Any, List, Optional
from uuid import UUID

from stackit.domain.error import NotFoundError
from stackit.domain.repository import VotableRepository
from stackit.domain.value import TargetKind, VotableRef

from .store import InMemoryStore


class InMemoryVotableRepository(VotableRepository):
    """Score access on the store's questions and answers.

    Row locking is covered by the store-wide lock held by the outermost
    atomic block, so `lock` only reads.
    """

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def _table(self, kind: TargetKind) -> dict[UUID, Any]:
        return self.store.questions if kind == TargetKind.QUESTION else self.store.answers

    async def lock(self, kind: TargetKind, target_id: UUID) -> Optional[VotableRef]:
        """Read the target (the store lock is already held)."""
        target = self._table(kind).get(target_id)
        if target is None:
            return None
        return VotableRef(
            kind=kind, id=target.id, author_id=target.author_id, score=target.score
        )

    async def apply_score_delta(self, kind: TargetKind, target_id: UUID, delta: int) -> int:
        """Add to the target's score."""
        table = self._table(kind)
        target = table.get(target_id)
        if target is None:
            raise NotFoundError(kind.value, str(target_id))
        table[target_id] = target.model_copy(update={"score": target.score + delta})
        return target.score + delta

    async def set_score(self, kind: TargetKind, target_id: UUID, score: int) -> int:
        """Overwrite the target's score."""
        table = self._table(kind)
        target = table.get(target_id)
        if target is None:
            raise NotFoundError(kind.value, str(target_id))
        table[target_id] = target.model_copy(update={"score": score})
        return score

    async def list_ids(self, kind: TargetKind) -> List[UUID]:
        """List the IDs of every votable of a kind."""
        return sorted(self._table(kind).keys(), key=str)
