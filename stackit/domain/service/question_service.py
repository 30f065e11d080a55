"""Question domain service."""

from datetime import datetime
from uuid import uuid4

import logfire
from pydantic import ValidationError

from stackit.config import PaginationSettings
from stackit.domain.error import InvalidArgumentError, NotAuthorizedError, NotFoundError
from stackit.domain.model import Question, User
from stackit.domain.repository import (
    AnswerRepository,
    QuestionFilter,
    QuestionRepository,
    TransactionManager,
    VotableRepository,
)
from stackit.domain.value import QuestionId, TagName, TargetKind, UserId

from .base import Service
from .vote_ledger import VoteLedger

MAX_TITLE_LENGTH = 300
MAX_BODY_LENGTH = 20000
MAX_TAGS = 5


def clean_text(value: str, field: str, max_length: int) -> str:
    """Strip a user-supplied text field and check its length.

    Raises:
        InvalidArgumentError: If the value is blank or too long
    """
    cleaned = value.strip()
    if not cleaned:
        raise InvalidArgumentError(f"{field.capitalize()} is required", field=field)
    if len(cleaned) > max_length:
        raise InvalidArgumentError(
            f"{field.capitalize()} must be at most {max_length} characters", field=field
        )
    return cleaned


def parse_tags(tags: list[str]) -> list[TagName]:
    """Normalize question tags: lowercase, deduplicated, order kept.

    Raises:
        InvalidArgumentError: If a tag is malformed or the count is not 1-5
    """
    parsed: list[TagName] = []
    for raw in tags:
        try:
            tag = TagName(raw)
        except ValidationError:
            raise InvalidArgumentError(f"Invalid tag: {raw!r}", field="tags")
        if tag not in parsed:
            parsed.append(tag)

    if not parsed:
        raise InvalidArgumentError("At least one tag is required", field="tags")
    if len(parsed) > MAX_TAGS:
        raise InvalidArgumentError(f"At most {MAX_TAGS} tags are allowed", field="tags")
    return parsed


class QuestionService(Service):
    """Domain service for question operations."""

    def __init__(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        votable_repository: VotableRepository,
        vote_ledger: VoteLedger,
        transaction_manager: TransactionManager,
        pagination_settings: PaginationSettings,
    ) -> None:
        """Initialize question service.

        Args:
            question_repository: Question repository
            answer_repository: Answer repository
            votable_repository: Score storage, locked before votes are purged
            vote_ledger: Vote ledger (vote cleanup on delete)
            transaction_manager: Transaction manager
            pagination_settings: Listing page size limits
        """
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.votable_repository = votable_repository
        self.vote_ledger = vote_ledger
        self.transaction_manager = transaction_manager
        self.pagination_settings = pagination_settings

    async def create_question(
        self, author: User, title: str, description: str, tags: list[str]
    ) -> Question:
        """Create a question.

        Args:
            author: Asking user's profile
            title: Question title
            description: Question body
            tags: Tag names (1-5)

        Returns:
            Created question

        Raises:
            InvalidArgumentError: If any field is invalid
        """
        with logfire.span("question_service.create_question", author_id=str(author.id)):
            now = datetime.now()
            question = Question(
                id=QuestionId(uuid4()),
                title=clean_text(title, "title", MAX_TITLE_LENGTH),
                description=clean_text(description, "description", MAX_BODY_LENGTH),
                author_id=author.id,
                author_username=author.username,
                tags=parse_tags(tags),
                created_at=now,
                updated_at=now,
            )

            async with self.transaction_manager.atomic():
                saved = await self.question_repository.save(question)

            logfire.info(
                "Question created",
                question_id=str(saved.id),
                tags=[tag.root for tag in saved.tags],
            )
            return saved

    async def get_question(self, question_id: QuestionId) -> Question:
        """Get a question by ID.

        Raises:
            NotFoundError: If the question does not exist
        """
        with logfire.span("question_service.get_question", question_id=str(question_id)):
            question = await self.question_repository.find_by_id(question_id)
            if not question:
                logfire.warn("Question not found", question_id=str(question_id))
                raise NotFoundError("question", str(question_id))
            return question

    async def list_questions(
        self,
        filter: QuestionFilter = QuestionFilter.ALL,
        search: str | None = None,
        tag: str | None = None,
        page: int = 1,
        per_page: int | None = None,
    ) -> tuple[list[Question], int]:
        """List questions, one page at a time.

        Args:
            filter: Listing filter
            search: Substring to look for in title or description
            tag: Tag to filter by
            page: 1-based page number
            per_page: Page size (defaults to the configured size)

        Returns:
            Questions on the page and the total number of matches

        Raises:
            InvalidArgumentError: If page, page size or tag is invalid
        """
        if per_page is None:
            per_page = self.pagination_settings.default_per_page
        if page < 1:
            raise InvalidArgumentError("Page must be at least 1", field="page")
        if not 1 <= per_page <= self.pagination_settings.max_per_page:
            raise InvalidArgumentError(
                f"per_page must be between 1 and {self.pagination_settings.max_per_page}",
                field="per_page",
            )

        tag_name = None
        if tag:
            try:
                tag_name = TagName(tag)
            except ValidationError:
                raise InvalidArgumentError(f"Invalid tag: {tag!r}", field="tag")
        search = search.strip() if search else None

        with logfire.span(
            "question_service.list_questions",
            filter=filter.value,
            tag=tag_name.root if tag_name else None,
            page=page,
            per_page=per_page,
        ):
            questions = await self.question_repository.find_all(
                filter=filter,
                search=search or None,
                tag=tag_name,
                limit=per_page,
                offset=(page - 1) * per_page,
            )
            total = await self.question_repository.count(
                filter=filter, search=search or None, tag=tag_name
            )
            return questions, total

    async def update_question(
        self,
        question_id: QuestionId,
        editor_id: UserId,
        title: str | None = None,
        description: str | None = None,
        tags: list[str] | None = None,
    ) -> Question:
        """Edit a question's content.

        Raises:
            NotFoundError: If the question does not exist
            NotAuthorizedError: If the editor is not the author
            InvalidArgumentError: If any field is invalid
        """
        with logfire.span(
            "question_service.update_question",
            question_id=str(question_id),
            editor_id=str(editor_id),
        ):
            question = await self.get_question(question_id)
            if question.author_id != editor_id:
                raise NotAuthorizedError("Only the author can edit this question")

            updates: dict = {"updated_at": datetime.now()}
            if title is not None:
                updates["title"] = clean_text(title, "title", MAX_TITLE_LENGTH)
            if description is not None:
                updates["description"] = clean_text(
                    description, "description", MAX_BODY_LENGTH
                )
            if tags is not None:
                updates["tags"] = parse_tags(tags)

            async with self.transaction_manager.atomic():
                saved = await self.question_repository.save(
                    question.model_copy(update=updates)
                )

            logfire.info("Question updated", question_id=str(question_id))
            return saved

    async def delete_question(self, question_id: QuestionId, requester_id: UserId) -> None:
        """Delete a question with its answers and every vote on them.

        Raises:
            NotFoundError: If the question does not exist
            NotAuthorizedError: If the requester is not the author
        """
        with logfire.span(
            "question_service.delete_question",
            question_id=str(question_id),
            requester_id=str(requester_id),
        ):
            question = await self.get_question(question_id)
            if question.author_id != requester_id:
                raise NotAuthorizedError("Only the author can delete this question")

            async with self.transaction_manager.atomic():
                # Votes on these targets wait behind the row locks until the rows are gone
                if await self.votable_repository.lock(TargetKind.QUESTION, question_id) is None:
                    raise NotFoundError("question", str(question_id))
                answers = await self.answer_repository.find_by_question(question_id)
                for answer in answers:
                    await self.votable_repository.lock(TargetKind.ANSWER, answer.id)
                for answer in answers:
                    await self.vote_ledger.purge_target(TargetKind.ANSWER, answer.id)
                    await self.answer_repository.delete(answer.id)
                await self.vote_ledger.purge_target(TargetKind.QUESTION, question_id)
                await self.question_repository.delete(question_id)

            logfire.info(
                "Question deleted", question_id=str(question_id), answers=len(answers)
            )
