"""Delete answer use case."""

from uuid import UUID

from pydantic import BaseModel

from stackit.domain.service import AnswerService
from stackit.domain.value import AnswerId, UserId, parse_identifier


class DeleteAnswerRequest(BaseModel):
    """Delete answer request."""

    answer_id: str
    user_id: str  # Authenticated user


class DeleteAnswerUseCase:
    """Use case for deleting an answer and its votes."""

    def __init__(self, answer_service: AnswerService) -> None:
        """Initialize delete answer use case.

        Args:
            answer_service: Answer domain service
        """
        self.answer_service = answer_service

    async def execute(self, request: DeleteAnswerRequest) -> None:
        """Execute delete answer flow.

        Raises:
            NotFoundError: If the answer does not exist
            NotAuthorizedError: If the caller is not the author
        """
        await self.answer_service.delete_answer(
            AnswerId(parse_identifier(request.answer_id, "answer_id")),
            UserId(UUID(request.user_id)),
        )
