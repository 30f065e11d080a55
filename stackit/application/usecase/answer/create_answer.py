"""Create answer use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from stackit.domain.service import AnswerService, UserService
from stackit.domain.value import QuestionId, UserId, Username, parse_identifier


class CreateAnswerRequest(BaseModel):
    """Create answer request."""

    question_id: str
    content: str = Field(min_length=1, max_length=20000)
    author_id: str  # Authenticated user


class CreateAnswerResponse(BaseModel):
    """Create answer response."""

    answer_id: str
    question_id: str
    author_id: str
    author_username: Username
    content: str
    score: int
    is_accepted: bool
    created_at: datetime


class CreateAnswerUseCase:
    """Use case for answering a question."""

    def __init__(self, answer_service: AnswerService, user_service: UserService) -> None:
        """Initialize create answer use case.

        Args:
            answer_service: Answer domain service
            user_service: User domain service
        """
        self.answer_service = answer_service
        self.user_service = user_service

    async def execute(self, request: CreateAnswerRequest) -> CreateAnswerResponse:
        """Execute create answer flow.

        Raises:
            NotFoundError: If the question does not exist
            InvalidArgumentError: If the content is invalid
        """
        question_id = QuestionId(parse_identifier(request.question_id, "question_id"))
        author = await self.user_service.get_by_id(UserId(UUID(request.author_id)))
        answer = await self.answer_service.create_answer(question_id, author, request.content)
        return CreateAnswerResponse(
            answer_id=str(answer.id),
            question_id=str(answer.question_id),
            author_id=str(answer.author_id),
            author_username=answer.author_username,
            content=answer.content,
            score=answer.score,
            is_accepted=answer.is_accepted,
            created_at=answer.created_at,
        )
