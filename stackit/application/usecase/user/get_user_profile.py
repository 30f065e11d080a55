"""Get user profile use case."""

from datetime import datetime

from pydantic import BaseModel

from stackit.domain.service import UserService
from stackit.domain.value import Username


class GetUserProfileRequest(BaseModel):
    """Get user profile request."""

    username: str


class GetUserProfileResponse(BaseModel):
    """Public profile."""

    user_id: str
    username: Username
    avatar_url: str | None
    created_at: datetime


class GetUserProfileUseCase:
    """Use case for getting a user's public profile by username."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize get user profile use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: GetUserProfileRequest) -> GetUserProfileResponse:
        """Execute get user profile flow.

        Raises:
            NotFoundError: If no user has this username
        """
        user = await self.user_service.get_by_username(request.username)
        return GetUserProfileResponse(
            user_id=str(user.id),
            username=user.username,
            avatar_url=user.avatar_url,
            created_at=user.created_at,
        )
