"""User profile routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header
from pydantic import BaseModel, Field

from stackit.application.usecase.auth import GetCurrentUserResponse, GetCurrentUserUseCase
from stackit.application.usecase.user import (
    GetUserProfileRequest,
    GetUserProfileResponse,
    GetUserProfileUseCase,
    UpdateUserProfileRequest,
    UpdateUserProfileResponse,
    UpdateUserProfileUseCase,
)
from stackit.application.usecase.vote import (
    PurgeUserVotesRequest,
    PurgeUserVotesResponse,
    PurgeUserVotesUseCase,
)
from stackit.interface.api.identity import require_user

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class UpdateProfileAPIRequest(BaseModel):
    """API request for updating the caller's profile."""

    username: str | None = Field(default=None, max_length=50)
    avatar_url: str | None = Field(default=None, max_length=2048)


@router.get("/me", response_model=GetCurrentUserResponse)
async def get_me(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> GetCurrentUserResponse:
    """Get the caller's profile, creating it on first access."""
    return await require_user(get_current_user_use_case, authorization, auth_token)


@router.patch("/me", response_model=UpdateUserProfileResponse)
async def update_me(
    request: UpdateProfileAPIRequest,
    update_profile_use_case: FromDishka[UpdateUserProfileUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> UpdateUserProfileResponse:
    """Update the caller's username and/or avatar.

    Renaming also updates the author name shown on the caller's questions
    and answers.
    """
    user = await require_user(get_current_user_use_case, authorization, auth_token)
    return await update_profile_use_case.execute(
        UpdateUserProfileRequest(
            user_id=user.user_id,
            username=request.username,
            avatar_url=request.avatar_url,
        )
    )


@router.delete("/me/votes", response_model=PurgeUserVotesResponse)
async def purge_my_votes(
    purge_use_case: FromDishka[PurgeUserVotesUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> PurgeUserVotesResponse:
    """Withdraw every vote the caller has cast.

    Scores of the affected questions and answers are adjusted accordingly.
    """
    user = await require_user(get_current_user_use_case, authorization, auth_token)
    return await purge_use_case.execute(PurgeUserVotesRequest(user_id=user.user_id))


@router.get("/{username}", response_model=GetUserProfileResponse)
async def get_user_profile(
    username: str,
    get_profile_use_case: FromDishka[GetUserProfileUseCase],
) -> GetUserProfileResponse:
    """Get a user's public profile by username."""
    return await get_profile_use_case.execute(GetUserProfileRequest(username=username))
