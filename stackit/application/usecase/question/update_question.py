"""Update question use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from stackit.domain.service import QuestionService
from stackit.domain.value import QuestionId, UserId, parse_identifier


class UpdateQuestionRequest(BaseModel):
    """Update question request (omitted fields are left unchanged)."""

    question_id: str
    user_id: str  # Authenticated user
    title: str | None = Field(default=None, max_length=300)
    description: str | None = Field(default=None, max_length=20000)
    tags: list[str] | None = Field(default=None, max_length=5)


class UpdateQuestionResponse(BaseModel):
    """Update question response."""

    question_id: str
    title: str
    description: str
    tags: list[str]
    score: int
    answer_count: int
    updated_at: datetime


class UpdateQuestionUseCase:
    """Use case for editing a question."""

    def __init__(self, question_service: QuestionService) -> None:
        """Initialize update question use case.

        Args:
            question_service: Question domain service
        """
        self.question_service = question_service

    async def execute(self, request: UpdateQuestionRequest) -> UpdateQuestionResponse:
        """Execute update question flow.

        Raises:
            NotFoundError: If the question does not exist
            NotAuthorizedError: If the caller is not the author
            InvalidArgumentError: If a field is invalid
        """
        question = await self.question_service.update_question(
            QuestionId(parse_identifier(request.question_id, "question_id")),
            UserId(UUID(request.user_id)),
            title=request.title,
            description=request.description,
            tags=request.tags,
        )
        return UpdateQuestionResponse(
            question_id=str(question.id),
            title=question.title,
            description=question.description,
            tags=[tag.root for tag in question.tags],
            score=question.score,
            answer_count=question.answer_count,
            updated_at=question.updated_at,
        )
