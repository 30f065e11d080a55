"""Reconcile scores use case."""

from pydantic import BaseModel

from stackit.domain.service import VoteService


class ScoreCorrection(BaseModel):
    """A score that disagreed with the vote ledger."""

    target_type: str
    target_id: str
    previous: int
    current: int


class ReconcileScoresResponse(BaseModel):
    """Reconcile scores response."""

    corrected: list[ScoreCorrection]


class ReconcileScoresUseCase:
    """Use case for recomputing every stored score from the vote ledger."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize reconcile scores use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self) -> ReconcileScoresResponse:
        """Execute reconciliation over all questions and answers."""
        results = await self.vote_service.reconcile_scores()
        return ReconcileScoresResponse(
            corrected=[
                ScoreCorrection(
                    target_type=result.target_kind.value,
                    target_id=str(result.target_id),
                    previous=result.previous,
                    current=result.current,
                )
                for result in results
            ]
        )
