"""Get user vote use case."""

from uuid import UUID

from pydantic import BaseModel

from stackit.domain.service import VoteService
from stackit.domain.value import TargetKind, UserId, VoteState


class GetUserVoteRequest(BaseModel):
    """Get user vote request."""

    target_id: str
    target_type: str
    user_id: str  # Authenticated user


class GetUserVoteResponse(BaseModel):
    """The caller's current vote on a target."""

    target_id: str
    target_type: str
    state: VoteState


class GetUserVoteUseCase:
    """Use case for reading the caller's vote on a target."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize get user vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: GetUserVoteRequest) -> GetUserVoteResponse:
        """Execute get user vote flow.

        Raises:
            InvalidArgumentError: If target type or ID is malformed
        """
        kind = TargetKind.parse(request.target_type)
        direction = await self.vote_service.get_user_vote(
            UserId(UUID(request.user_id)), request.target_id, kind
        )
        return GetUserVoteResponse(
            target_id=request.target_id,
            target_type=kind.value,
            state=VoteState.of(direction),
        )
