"""Update user profile use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from stackit.domain.service import UserService
from stackit.domain.value import UserId, Username


class UpdateUserProfileRequest(BaseModel):
    """Update user profile request."""

    user_id: str  # Authenticated user
    username: str | None = Field(default=None, max_length=50)
    avatar_url: str | None = Field(default=None, max_length=2048)


class UpdateUserProfileResponse(BaseModel):
    """Updated profile."""

    user_id: str
    username: Username
    avatar_url: str | None
    updated_at: datetime


class UpdateUserProfileUseCase:
    """Use case for editing the caller's own profile."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize update user profile use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: UpdateUserProfileRequest) -> UpdateUserProfileResponse:
        """Execute update user profile flow.

        Raises:
            InvalidArgumentError: If the username is malformed or taken
            NotFoundError: If the profile does not exist
        """
        user = await self.user_service.update_profile(
            UserId(UUID(request.user_id)),
            username=request.username,
            avatar_url=request.avatar_url,
        )
        return UpdateUserProfileResponse(
            user_id=str(user.id),
            username=user.username,
            avatar_url=user.avatar_url,
            updated_at=user.updated_at,
        )
