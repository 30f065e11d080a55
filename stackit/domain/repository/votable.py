"""Votable repository interface.

Questions and answers share the score column the counter maintainer
writes. This repository addresses either by (kind, id) so score handling
stays in one place.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from stackit.domain.value import TargetKind, VotableRef


class VotableRepository(ABC):
    """Score access for questions and answers."""

    @abstractmethod
    async def lock(self, kind: TargetKind, target_id: UUID) -> Optional[VotableRef]:
        """Lock a votable row for the rest of the current atomic block.

        Competing vote intents on the same target queue behind this lock.

        Args:
            kind: Kind of target
            target_id: ID of the target

        Returns:
            The locked target, or None if it does not exist
        """
        pass

    @abstractmethod
    async def apply_score_delta(self, kind: TargetKind, target_id: UUID, delta: int) -> int:
        """Atomically add `delta` to a target's score.

        Args:
            kind: Kind of target
            target_id: ID of the target
            delta: Signed change

        Returns:
            The score after the change

        Raises:
            NotFoundError: If the target does not exist
        """
        pass

    @abstractmethod
    async def set_score(self, kind: TargetKind, target_id: UUID, score: int) -> int:
        """Overwrite a target's score.

        Returns:
            The stored score

        Raises:
            NotFoundError: If the target does not exist
        """
        pass

    @abstractmethod
    async def list_ids(self, kind: TargetKind) -> List[UUID]:
        """List the IDs of every votable of a kind."""
        pass
