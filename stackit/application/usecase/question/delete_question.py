"""Delete question use case."""

from uuid import UUID

from pydantic import BaseModel

from stackit.domain.service import QuestionService
from stackit.domain.value import QuestionId, UserId, parse_identifier


class DeleteQuestionRequest(BaseModel):
    """Delete question request."""

    question_id: str
    user_id: str  # Authenticated user


class DeleteQuestionUseCase:
    """Use case for deleting a question with its answers and votes."""

    def __init__(self, question_service: QuestionService) -> None:
        """Initialize delete question use case.

        Args:
            question_service: Question domain service
        """
        self.question_service = question_service

    async def execute(self, request: DeleteQuestionRequest) -> None:
        """Execute delete question flow.

        Raises:
            NotFoundError: If the question does not exist
            NotAuthorizedError: If the caller is not the author
        """
        await self.question_service.delete_question(
            QuestionId(parse_identifier(request.question_id, "question_id")),
            UserId(UUID(request.user_id)),
        )
