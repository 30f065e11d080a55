"""Question routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query, status
from pydantic import BaseModel, Field

from stackit.application.usecase.answer import (
    CreateAnswerRequest,
    CreateAnswerResponse,
    CreateAnswerUseCase,
)
from stackit.application.usecase.auth import GetCurrentUserUseCase
from stackit.application.usecase.question import (
    CreateQuestionRequest,
    CreateQuestionResponse,
    CreateQuestionUseCase,
    DeleteQuestionRequest,
    DeleteQuestionUseCase,
    GetQuestionRequest,
    GetQuestionResponse,
    GetQuestionUseCase,
    ListQuestionsRequest,
    ListQuestionsResponse,
    ListQuestionsUseCase,
    UpdateQuestionRequest,
    UpdateQuestionResponse,
    UpdateQuestionUseCase,
)
from stackit.domain.repository import QuestionFilter
from stackit.interface.api.identity import optional_user, require_user

router = APIRouter(prefix="/questions", tags=["questions"], route_class=DishkaRoute)


class CreateQuestionAPIRequest(BaseModel):
    """API request for asking a question."""

    title: str = Field(min_length=1, max_length=300)
    description: str = Field(min_length=1, max_length=20000)
    tags: list[str] = Field(min_length=1, max_length=5)


class UpdateQuestionAPIRequest(BaseModel):
    """API request for editing a question. Omitted fields are unchanged."""

    title: str | None = Field(default=None, max_length=300)
    description: str | None = Field(default=None, max_length=20000)
    tags: list[str] | None = Field(default=None, max_length=5)


class CreateAnswerAPIRequest(BaseModel):
    """API request for answering a question."""

    content: str = Field(min_length=1, max_length=20000)


@router.post(
    "", response_model=CreateQuestionResponse, status_code=status.HTTP_201_CREATED
)
async def create_question(
    request: CreateQuestionAPIRequest,
    create_question_use_case: FromDishka[CreateQuestionUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> CreateQuestionResponse:
    """Ask a new question.

    Requires authentication.

    Args:
        request: Question title, description and tags
        create_question_use_case: Create question use case from DI
        get_current_user_use_case: Get current user use case from DI
        authorization: Bearer token header
        auth_token: JWT token from cookie

    Returns:
        Created question
    """
    user = await require_user(get_current_user_use_case, authorization, auth_token)
    return await create_question_use_case.execute(
        CreateQuestionRequest(
            title=request.title,
            description=request.description,
            tags=request.tags,
            author_id=user.user_id,
        )
    )


@router.get("", response_model=ListQuestionsResponse)
async def list_questions(
    list_questions_use_case: FromDishka[ListQuestionsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    filter: QuestionFilter = QuestionFilter.ALL,
    search: str | None = Query(default=None, max_length=200),
    tag: str | None = None,
    page: int = 1,
    per_page: int | None = None,
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ListQuestionsResponse:
    """List questions.

    Args:
        filter: all, newest, unanswered or popular
        search: Case-insensitive text to find in title or description
        tag: Only questions carrying this tag
        page: Page number (1-based)
        per_page: Page size (1-100, default 10)

    Returns:
        One page of questions with paging totals

    Example:
        GET /questions?filter=unanswered&tag=python&page=2
    """
    user = await optional_user(get_current_user_use_case, authorization, auth_token)

    with logfire.span("api.list_questions", filter=filter.value, page=page):
        return await list_questions_use_case.execute(
            ListQuestionsRequest(
                filter=filter,
                search=search,
                tag=tag,
                page=page,
                per_page=per_page,
                user_id=user.user_id if user else None,
            )
        )


@router.get("/{question_id}", response_model=GetQuestionResponse)
async def get_question(
    question_id: str,
    get_question_use_case: FromDishka[GetQuestionUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> GetQuestionResponse:
    """Get a question with its answers.

    Authenticated viewers also get their own vote on the question and on
    each answer.
    """
    user = await optional_user(get_current_user_use_case, authorization, auth_token)
    return await get_question_use_case.execute(
        GetQuestionRequest(
            question_id=question_id, user_id=user.user_id if user else None
        )
    )


@router.patch("/{question_id}", response_model=UpdateQuestionResponse)
async def update_question(
    question_id: str,
    request: UpdateQuestionAPIRequest,
    update_question_use_case: FromDishka[UpdateQuestionUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> UpdateQuestionResponse:
    """Edit a question.

    Requires authentication. Only the author can edit.
    """
    user = await require_user(get_current_user_use_case, authorization, auth_token)
    return await update_question_use_case.execute(
        UpdateQuestionRequest(
            question_id=question_id,
            user_id=user.user_id,
            title=request.title,
            description=request.description,
            tags=request.tags,
        )
    )


@router.delete("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_question(
    question_id: str,
    delete_question_use_case: FromDishka[DeleteQuestionUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> None:
    """Delete a question with its answers and all votes on them.

    Requires authentication. Only the author can delete.
    """
    user = await require_user(get_current_user_use_case, authorization, auth_token)
    await delete_question_use_case.execute(
        DeleteQuestionRequest(question_id=question_id, user_id=user.user_id)
    )


@router.post(
    "/{question_id}/answers",
    response_model=CreateAnswerResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_answer(
    question_id: str,
    request: CreateAnswerAPIRequest,
    create_answer_use_case: FromDishka[CreateAnswerUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> CreateAnswerResponse:
    """Answer a question.

    Requires authentication.
    """
    user = await require_user(get_current_user_use_case, authorization, auth_token)
    return await create_answer_use_case.execute(
        CreateAnswerRequest(
            question_id=question_id,
            content=request.content,
            author_id=user.user_id,
        )
    )
