"""Vote entity and vote outcomes.

The set of votes is the ledger: the only source of truth for scores. Each
user holds at most one vote per target, which they can flip or retract.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from stackit.domain.model.common import DomainModel
from stackit.domain.value import (
    TargetKind,
    UserId,
    VoteAction,
    VoteDirection,
    VoteId,
    VoteState,
)


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per (voter, target, kind) (enforced by a unique constraint)
    - Polymorphic reference to the votable (question or answer)
    """

    id: VoteId
    voter_id: UserId
    target_kind: TargetKind
    target_id: UUID  # QuestionId or AnswerId (both are UUIDs)
    direction: VoteDirection
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class VoteOutcome(DomainModel):
    """Result of submitting a vote intent."""

    target_kind: TargetKind
    target_id: UUID
    state: VoteState
    action: VoteAction
    score: int


class ScoreReconciliation(DomainModel):
    """A stored score compared against the ledger tally."""

    target_kind: TargetKind
    target_id: UUID
    previous: int
    current: int

    @property
    def corrected(self) -> bool:
        return self.previous != self.current
