"""Vote routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header
from pydantic import BaseModel

from stackit.application.usecase.auth import GetCurrentUserUseCase
from stackit.application.usecase.vote import (
    GetUserVoteRequest,
    GetUserVoteResponse,
    GetUserVoteUseCase,
    SubmitVoteRequest,
    SubmitVoteResponse,
    SubmitVoteUseCase,
)
from stackit.interface.api.identity import optional_user, require_user

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class VoteAPIRequest(BaseModel):
    """API request for a vote intent.

    Submitting the direction already held retracts the vote; submitting the
    opposite direction flips it.
    """

    target_id: str | None = None
    target_type: str | None = None  # "question" or "answer"
    vote_type: str | None = None  # "upvote" or "downvote"


@router.post("/vote", response_model=SubmitVoteResponse)
async def submit_vote(
    request: VoteAPIRequest,
    submit_vote_use_case: FromDishka[SubmitVoteUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> SubmitVoteResponse:
    """Cast, flip or retract a vote on a question or answer.

    Requires authentication.

    Args:
        request: Target and direction
        submit_vote_use_case: Submit vote use case from DI
        get_current_user_use_case: Get current user use case from DI
        authorization: Bearer token header
        auth_token: JWT token from cookie

    Returns:
        The caller's resulting vote state and the target's score

    Example:
        POST /vote {"target_id": "...", "target_type": "answer", "vote_type": "upvote"}
    """
    # Anonymous intents go through so the service reports them as unauthenticated
    user = await optional_user(get_current_user_use_case, authorization, auth_token)

    with logfire.span("api.submit_vote", target_type=request.target_type):
        return await submit_vote_use_case.execute(
            SubmitVoteRequest(
                target_id=request.target_id,
                target_type=request.target_type,
                vote_type=request.vote_type,
                user_id=user.user_id if user else None,
            )
        )


@router.get("/vote", response_model=GetUserVoteResponse)
async def get_user_vote(
    target_id: str,
    target_type: str,
    get_user_vote_use_case: FromDishka[GetUserVoteUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> GetUserVoteResponse:
    """Get the caller's current vote on a target.

    Requires authentication.

    Example:
        GET /vote?target_id=...&target_type=question
    """
    user = await require_user(get_current_user_use_case, authorization, auth_token)
    return await get_user_vote_use_case.execute(
        GetUserVoteRequest(
            target_id=target_id, target_type=target_type, user_id=user.user_id
        )
    )
