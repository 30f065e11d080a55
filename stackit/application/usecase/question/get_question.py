"""Get question use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from stackit.domain.service import AnswerService, QuestionService, VoteService
from stackit.domain.value import QuestionId, TargetKind, UserId, Username, parse_identifier


class AnswerItem(BaseModel):
    """Answer shown under a question."""

    answer_id: str
    author_id: str
    author_username: Username
    content: str
    score: int
    is_accepted: bool
    created_at: datetime
    updated_at: datetime
    user_vote: str | None  # Viewer's vote: "upvote", "downvote" or None


class GetQuestionRequest(BaseModel):
    """Get question request."""

    question_id: str
    user_id: str | None = None  # Viewer (if authenticated)


class GetQuestionResponse(BaseModel):
    """Question with its answers."""

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
    updated_at: datetime
    user_vote: str | None
    answers: list[AnswerItem]


class GetQuestionUseCase:
    """Use case for reading a question page."""

    def __init__(
        self,
        question_service: QuestionService,
        answer_service: AnswerService,
        vote_service: VoteService,
    ) -> None:
        """Initialize get question use case.

        Args:
            question_service: Question domain service
            answer_service: Answer domain service
            vote_service: Vote domain service (viewer's votes)
        """
        self.question_service = question_service
        self.answer_service = answer_service
        self.vote_service = vote_service

    async def execute(self, request: GetQuestionRequest) -> GetQuestionResponse:
        """Execute get question flow.

        Steps:
        1. Load the question
        2. Load its answers (accepted first, then by score)
        3. Batch-load the viewer's votes on the question and its answers

        Raises:
            InvalidArgumentError: If the question ID is malformed
            NotFoundError: If the question does not exist
        """
        question_id = QuestionId(parse_identifier(request.question_id, "question_id"))
        question = await self.question_service.get_question(question_id)
        answers = await self.answer_service.list_answers(question_id)

        question_vote = None
        answer_votes: dict[UUID, str] = {}
        if request.user_id:
            viewer = UserId(UUID(request.user_id))
            direction = await self.vote_service.get_user_vote(
                viewer, question.id, TargetKind.QUESTION
            )
            question_vote = direction.value if direction else None
            votes = await self.vote_service.get_user_votes(
                viewer, TargetKind.ANSWER, [answer.id for answer in answers]
            )
            answer_votes = {target: d.value for target, d in votes.items()}

        return GetQuestionResponse(
            question_id=str(question.id),
            title=question.title,
            description=question.description,
            tags=[tag.root for tag in question.tags],
            author_id=str(question.author_id),
            author_username=question.author_username,
            score=question.score,
            answer_count=question.answer_count,
            accepted_answer_id=(
                str(question.accepted_answer_id) if question.accepted_answer_id else None
            ),
            created_at=question.created_at,
            updated_at=question.updated_at,
            user_vote=question_vote,
            answers=[
                AnswerItem(
                    answer_id=str(answer.id),
                    author_id=str(answer.author_id),
                    author_username=answer.author_username,
                    content=answer.content,
                    score=answer.score,
                    is_accepted=answer.is_accepted,
                    created_at=answer.created_at,
                    updated_at=answer.updated_at,
                    user_vote=answer_votes.get(answer.id),
                )
                for answer in answers
            ],
        )
