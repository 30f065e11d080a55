"""Create question use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from stackit.domain.service import QuestionService, UserService
from stackit.domain.value import UserId, Username


class CreateQuestionRequest(BaseModel):
    """Create question request."""

    title: str = Field(min_length=1, max_length=300)
    description: str = Field(min_length=1, max_length=20000)
    tags: list[str] = Field(min_length=1, max_length=5)
    author_id: str  # Authenticated user


class CreateQuestionResponse(BaseModel):
    """Create question response."""

    question_id: str
    title: str
    description: str
    tags: list[str]
    author_id: str
    author_username: Username
    score: int
    answer_count: int
    created_at: datetime


class CreateQuestionUseCase:
    """Use case for asking a question."""

    def __init__(self, question_service: QuestionService, user_service: UserService) -> None:
        """Initialize create question use case.

        Args:
            question_service: Question domain service
            user_service: User domain service
        """
        self.question_service = question_service
        self.user_service = user_service

    async def execute(self, request: CreateQuestionRequest) -> CreateQuestionResponse:
        """Execute create question flow.

        Raises:
            InvalidArgumentError: If title, description or tags are invalid
            NotFoundError: If the author has no profile
        """
        author = await self.user_service.get_by_id(UserId(UUID(request.author_id)))
        question = await self.question_service.create_question(
            author=author,
            title=request.title,
            description=request.description,
            tags=request.tags,
        )
        return CreateQuestionResponse(
            question_id=str(question.id),
            title=question.title,
            description=question.description,
            tags=[tag.root for tag in question.tags],
            author_id=str(question.author_id),
            author_username=question.author_username,
            score=question.score,
            answer_count=question.answer_count,
            created_at=question.created_at,
        )
