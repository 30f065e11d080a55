"""Submit vote use case."""

from uuid import UUID

from pydantic import BaseModel

from stackit.domain.service import VoteService
from stackit.domain.value import UserId, VoteAction, VoteState


class SubmitVoteRequest(BaseModel):
    """Submit vote request.

    Fields are plain strings so malformed values reach the vote service,
    which reports them in a fixed order.
    """

    target_id: str | None = None
    target_type: str | None = None  # "question" or "answer"
    vote_type: str | None = None  # "upvote"/"downvote" (or "up"/"down")
    user_id: str | None = None  # Authenticated user, None if anonymous


class SubmitVoteResponse(BaseModel):
    """Outcome of a vote intent."""

    success: bool = True
    target_id: str
    target_type: str
    state: VoteState  # Caller's vote after this request
    action: VoteAction
    score: int  # Target's score after this request


class SubmitVoteUseCase:
    """Use case for casting, flipping or retracting a vote."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize submit vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: SubmitVoteRequest) -> SubmitVoteResponse:
        """Execute submit vote flow.

        Raises:
            UnauthenticatedError: If there is no caller
            InvalidArgumentError: If target type, vote type or ID is malformed
            NotFoundError: If the target does not exist
            ConflictError: If a concurrent change prevented the commit
            StoreUnavailableError: If the store is unreachable
        """
        voter_id = UserId(UUID(request.user_id)) if request.user_id else None
        outcome = await self.vote_service.submit_vote(
            voter_id, request.target_id, request.target_type, request.vote_type
        )
        return SubmitVoteResponse(
            target_id=str(outcome.target_id),
            target_type=outcome.target_kind.value,
            state=outcome.state,
            action=outcome.action,
            score=outcome.score,
        )
