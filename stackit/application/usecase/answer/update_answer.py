"""Update answer use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from stackit.domain.service import AnswerService
from stackit.domain.value import AnswerId, UserId, parse_identifier


class UpdateAnswerRequest(BaseModel):
    """Update answer request."""

    answer_id: str
    user_id: str  # Authenticated user
    content: str = Field(min_length=1, max_length=20000)


class UpdateAnswerResponse(BaseModel):
    """Update answer response."""

    answer_id: str
    content: str
    score: int
    is_accepted: bool
    updated_at: datetime


class UpdateAnswerUseCase:
    """Use case for editing an answer."""

    def __init__(self, answer_service: AnswerService) -> None:
        """Initialize update answer use case.

        Args:
            answer_service: Answer domain service
        """
        self.answer_service = answer_service

    async def execute(self, request: UpdateAnswerRequest) -> UpdateAnswerResponse:
        """Execute update answer flow.

        Raises:
            NotFoundError: If the answer does not exist
            NotAuthorizedError: If the caller is not the author
        """
        answer = await self.answer_service.update_answer(
            AnswerId(parse_identifier(request.answer_id, "answer_id")),
            UserId(UUID(request.user_id)),
            request.content,
        )
        return UpdateAnswerResponse(
            answer_id=str(answer.id),
            content=answer.content,
            score=answer.score,
            is_accepted=answer.is_accepted,
            updated_at=answer.updated_at,
        )
