"""Accept answer use case."""

from uuid import UUID

from pydantic import BaseModel

from stackit.domain.service import AnswerService
from stackit.domain.value import AnswerId, UserId, parse_identifier


class AcceptAnswerRequest(BaseModel):
    """Accept answer request."""

    answer_id: str
    user_id: str  # Authenticated user (must have asked the question)


class AcceptAnswerResponse(BaseModel):
    """Acceptance state after the toggle."""

    answer_id: str
    question_id: str
    is_accepted: bool


class AcceptAnswerUseCase:
    """Use case for accepting (or un-accepting) an answer."""

    def __init__(self, answer_service: AnswerService) -> None:
        """Initialize accept answer use case.

        Args:
            answer_service: Answer domain service
        """
        self.answer_service = answer_service

    async def execute(self, request: AcceptAnswerRequest) -> AcceptAnswerResponse:
        """Execute accept answer flow.

        Raises:
            NotFoundError: If the answer does not exist
            NotAuthorizedError: If the caller did not ask the question
        """
        answer = await self.answer_service.accept_answer(
            AnswerId(parse_identifier(request.answer_id, "answer_id")),
            UserId(UUID(request.user_id)),
        )
        return AcceptAnswerResponse(
            answer_id=str(answer.id),
            question_id=str(answer.question_id),
            is_accepted=answer.is_accepted,
        )
