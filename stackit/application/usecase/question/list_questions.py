"""List questions use case."""

import math
from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from stackit.domain.repository import QuestionFilter
from stackit.domain.service import QuestionService, VoteService
from stackit.domain.value import TargetKind, UserId, Username


class QuestionListItem(BaseModel):
    """Question list item in response."""

    question_id: str
    title: str
    description: str
    tags: list[str]
    author_id: str
    author_username: Username
    score: int
    answer_count: int
    accepted_answer_id: str | None
    created_at: datetime
    user_vote: str | None


class ListQuestionsRequest(BaseModel):
    """List questions request.

    Page bounds are enforced by the question service against the
    configured limits.
    """

    filter: QuestionFilter = QuestionFilter.ALL
    search: str | None = None
    tag: str | None = None
    page: int = 1
    per_page: int | None = None
    user_id: str | None = None  # Viewer (if authenticated)


class ListQuestionsResponse(BaseModel):
    """One page of questions."""

    data: list[QuestionListItem]
    count: int
    page: int
    per_page: int
    total_pages: int


class ListQuestionsUseCase:
    """Use case for listing questions with filtering, search and pagination."""

    def __init__(self, question_service: QuestionService, vote_service: VoteService) -> None:
        """Initialize list questions use case.

        Args:
            question_service: Question domain service
            vote_service: Vote domain service (viewer's votes)
        """
        self.question_service = question_service
        self.vote_service = vote_service

    async def execute(self, request: ListQuestionsRequest) -> ListQuestionsResponse:
        """Execute list questions flow.

        Raises:
            InvalidArgumentError: If page, page size or tag is invalid
        """
        per_page = request.per_page
        if per_page is None:
            per_page = self.question_service.pagination_settings.default_per_page
        questions, total = await self.question_service.list_questions(
            filter=request.filter,
            search=request.search,
            tag=request.tag,
            page=request.page,
            per_page=per_page,
        )

        votes: dict[UUID, str] = {}
        if request.user_id and questions:
            directions = await self.vote_service.get_user_votes(
                UserId(UUID(request.user_id)),
                TargetKind.QUESTION,
                [question.id for question in questions],
            )
            votes = {target: d.value for target, d in directions.items()}

        logfire.info(
            "Questions listed",
            filter=request.filter.value,
            page=request.page,
            returned=len(questions),
            total=total,
        )

        return ListQuestionsResponse(
            data=[
                QuestionListItem(
                    question_id=str(q.id),
                    title=q.title,
                    description=q.description,
                    tags=[tag.root for tag in q.tags],
                    author_id=str(q.author_id),
                    author_username=q.author_username,
                    score=q.score,
                    answer_count=q.answer_count,
                    accepted_answer_id=str(q.accepted_answer_id) if q.accepted_answer_id else None,
                    created_at=q.created_at,
                    user_vote=votes.get(q.id),
                )
                for q in questions
            ],
            count=total,
            page=request.page,
            per_page=per_page,
            total_pages=math.ceil(total / per_page),
        )
