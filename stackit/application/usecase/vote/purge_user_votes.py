"""Purge user votes use case."""

from uuid import UUID

from pydantic import BaseModel

from stackit.domain.service import VoteService
from stackit.domain.value import UserId


class PurgeUserVotesRequest(BaseModel):
    """Purge user votes request."""

    user_id: str  # Authenticated user


class PurgeUserVotesResponse(BaseModel):
    """Purge user votes response."""

    removed: int


class PurgeUserVotesUseCase:
    """Use case for withdrawing every vote a user has cast."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize purge user votes use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: PurgeUserVotesRequest) -> PurgeUserVotesResponse:
        """Execute purge flow; affected scores are adjusted in the same transaction."""
        removed = await self.vote_service.purge_votes_by_voter(UserId(UUID(request.user_id)))
        return PurgeUserVotesResponse(removed=removed)
