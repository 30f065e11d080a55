"""Get current user use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from stackit.domain.error import UnauthenticatedError
from stackit.domain.service import JWTService, UserService
from stackit.domain.value import UserId, Username
from stackit.util.jwt import JWTError


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str  # JWT token


class GetCurrentUserResponse(BaseModel):
    """Get current user response."""

    user_id: str
    username: Username
    avatar_url: str | None
    email: str | None
    created_at: datetime


class GetCurrentUserUseCase:
    """Use case for resolving the authenticated caller."""

    def __init__(self, jwt_service: JWTService, user_service: UserService) -> None:
        """Initialize get current user use case.

        Args:
            jwt_service: JWT token domain service
            user_service: User domain service
        """
        self.jwt_service = jwt_service
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Execute get current user flow.

        Steps:
        1. Verify JWT token via JWT service
        2. Extract user_id from the `sub` claim
        3. Load the profile, provisioning it on first access
        4. Return user info

        Args:
            request: Request with JWT token

        Returns:
            The caller's profile

        Raises:
            UnauthenticatedError: If the token is invalid, expired or has no user id
        """
        try:
            payload = self.jwt_service.verify_token(request.token)
        except JWTError as e:
            raise UnauthenticatedError(str(e))

        try:
            user_id = UserId(UUID(payload.user_id))
        except ValueError:
            raise UnauthenticatedError("Invalid token subject")

        user = await self.user_service.ensure_profile(user_id, payload.username)

        return GetCurrentUserResponse(
            user_id=str(user.id),
            username=user.username,
            avatar_url=user.avatar_url,
            email=payload.email,
            created_at=user.created_at,
        )
