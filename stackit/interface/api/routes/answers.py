"""Answer routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel, Field

from stackit.application.usecase.answer import (
    AcceptAnswerRequest,
    AcceptAnswerResponse,
    AcceptAnswerUseCase,
    DeleteAnswerRequest,
    DeleteAnswerUseCase,
    UpdateAnswerRequest,
    UpdateAnswerResponse,
    UpdateAnswerUseCase,
)
from stackit.application.usecase.auth import GetCurrentUserUseCase
from stackit.interface.api.identity import require_user

router = APIRouter(prefix="/answers", tags=["answers"], route_class=DishkaRoute)


class UpdateAnswerAPIRequest(BaseModel):
    """API request for editing an answer."""

    content: str = Field(min_length=1, max_length=20000)


@router.patch("/{answer_id}", response_model=UpdateAnswerResponse)
async def update_answer(
    answer_id: str,
    request: UpdateAnswerAPIRequest,
    update_answer_use_case: FromDishka[UpdateAnswerUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> UpdateAnswerResponse:
    """Edit an answer.

    Requires authentication. Only the author can edit.
    """
    user = await require_user(get_current_user_use_case, authorization, auth_token)
    return await update_answer_use_case.execute(
        UpdateAnswerRequest(
            answer_id=answer_id, user_id=user.user_id, content=request.content
        )
    )


@router.post("/{answer_id}/accept", response_model=AcceptAnswerResponse)
async def accept_answer(
    answer_id: str,
    accept_answer_use_case: FromDishka[AcceptAnswerUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> AcceptAnswerResponse:
    """Accept an answer, or withdraw acceptance if it is already accepted.

    Requires authentication. Only the question's author can accept.
    """
    user = await require_user(get_current_user_use_case, authorization, auth_token)
    return await accept_answer_use_case.execute(
        AcceptAnswerRequest(answer_id=answer_id, user_id=user.user_id)
    )


@router.delete("/{answer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_answer(
    answer_id: str,
    delete_answer_use_case: FromDishka[DeleteAnswerUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> None:
    """Delete an answer and the votes on it.

    Requires authentication. Only the author can delete.
    """
    user = await require_user(get_current_user_use_case, authorization, auth_token)
    await delete_answer_use_case.execute(
        DeleteAnswerRequest(answer_id=answer_id, user_id=user.user_id)
    )
