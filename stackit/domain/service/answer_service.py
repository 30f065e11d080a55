"""Answer domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from stackit.domain.error import NotAuthorizedError, NotFoundError
from stackit.domain.model import Answer, User
from stackit.domain.repository import (
    AnswerRepository,
    QuestionRepository,
    TransactionManager,
    VotableRepository,
)
from stackit.domain.value import AnswerId, QuestionId, TargetKind, UserId

from .base import Service
from .question_service import MAX_BODY_LENGTH, clean_text
from .vote_ledger import VoteLedger


class AnswerService(Service):
    """Domain service for answer operations."""

    def __init__(
        self,
        answer_repository: AnswerRepository,
        question_repository: QuestionRepository,
        votable_repository: VotableRepository,
        vote_ledger: VoteLedger,
        transaction_manager: TransactionManager,
    ) -> None:
        """Initialize answer service.

        Args:
            answer_repository: Answer repository
            question_repository: Question repository
            votable_repository: Score storage, locked before votes are purged
            vote_ledger: Vote ledger (vote cleanup on delete)
            transaction_manager: Transaction manager
        """
        self.answer_repository = answer_repository
        self.question_repository = question_repository
        self.votable_repository = votable_repository
        self.vote_ledger = vote_ledger
        self.transaction_manager = transaction_manager

    async def create_answer(
        self, question_id: QuestionId, author: User, content: str
    ) -> Answer:
        """Answer a question.

        Args:
            question_id: Question being answered
            author: Answering user's profile
            content: Answer body

        Returns:
            Created answer

        Raises:
            NotFoundError: If the question does not exist
            InvalidArgumentError: If the content is blank or too long
        """
        with logfire.span(
            "answer_service.create_answer",
            question_id=str(question_id),
            author_id=str(author.id),
        ):
            body = clean_text(content, "content", MAX_BODY_LENGTH)
            question = await self.question_repository.find_by_id(question_id)
            if not question:
                logfire.warn("Answer to non-existent question", question_id=str(question_id))
                raise NotFoundError("question", str(question_id))

            now = datetime.now()
            answer = Answer(
                id=AnswerId(uuid4()),
                question_id=question_id,
                author_id=author.id,
                author_username=author.username,
                content=body,
                created_at=now,
                updated_at=now,
            )

            async with self.transaction_manager.atomic():
                saved = await self.answer_repository.save(answer)
                await self.question_repository.adjust_answer_count(question_id, 1)

            logfire.info(
                "Answer created", answer_id=str(saved.id), question_id=str(question_id)
            )
            return saved

    async def get_answer(self, answer_id: AnswerId) -> Answer:
        """Get an answer by ID.

        Raises:
            NotFoundError: If the answer does not exist
        """
        answer = await self.answer_repository.find_by_id(answer_id)
        if not answer:
            logfire.warn("Answer not found", answer_id=str(answer_id))
            raise NotFoundError("answer", str(answer_id))
        return answer

    async def list_answers(self, question_id: QuestionId) -> list[Answer]:
        """Answers to a question: accepted first, then by score, then newest."""
        return await self.answer_repository.find_by_question(question_id)

    async def update_answer(
        self, answer_id: AnswerId, editor_id: UserId, content: str
    ) -> Answer:
        """Edit an answer's content.

        Raises:
            NotFoundError: If the answer does not exist
            NotAuthorizedError: If the editor is not the author
            InvalidArgumentError: If the content is blank or too long
        """
        with logfire.span(
            "answer_service.update_answer",
            answer_id=str(answer_id),
            editor_id=str(editor_id),
        ):
            answer = await self.get_answer(answer_id)
            if answer.author_id != editor_id:
                raise NotAuthorizedError("Only the author can edit this answer")

            updated = answer.model_copy(
                update={
                    "content": clean_text(content, "content", MAX_BODY_LENGTH),
                    "updated_at": datetime.now(),
                }
            )
            async with self.transaction_manager.atomic():
                saved = await self.answer_repository.save(updated)

            logfire.info("Answer updated", answer_id=str(answer_id))
            return saved

    async def accept_answer(self, answer_id: AnswerId, requester_id: UserId) -> Answer:
        """Toggle acceptance of an answer.

        Accepting clears any previously accepted answer on the question;
        accepting the already-accepted answer withdraws acceptance.

        Returns:
            The answer with its new acceptance state

        Raises:
            NotFoundError: If the answer or its question does not exist
            NotAuthorizedError: If the requester did not ask the question
        """
        with logfire.span(
            "answer_service.accept_answer",
            answer_id=str(answer_id),
            requester_id=str(requester_id),
        ):
            answer = await self.get_answer(answer_id)
            question = await self.question_repository.find_by_id(answer.question_id)
            if not question:
                raise NotFoundError("question", str(answer.question_id))
            if question.author_id != requester_id:
                raise NotAuthorizedError("Only the question author can accept an answer")

            accepted_id = None if answer.is_accepted else answer.id
            async with self.transaction_manager.atomic():
                await self.answer_repository.set_accepted(question.id, accepted_id)
                await self.question_repository.set_accepted_answer(question.id, accepted_id)

            logfire.info(
                "Answer acceptance changed",
                answer_id=str(answer_id),
                question_id=str(question.id),
                accepted=accepted_id is not None,
            )
            return await self.get_answer(answer_id)

    async def delete_answer(self, answer_id: AnswerId, requester_id: UserId) -> None:
        """Delete an answer and every vote on it.

        Raises:
            NotFoundError: If the answer does not exist
            NotAuthorizedError: If the requester is not the author
        """
        with logfire.span(
            "answer_service.delete_answer",
            answer_id=str(answer_id),
            requester_id=str(requester_id),
        ):
            answer = await self.get_answer(answer_id)
            if answer.author_id != requester_id:
                raise NotAuthorizedError("Only the author can delete this answer")

            async with self.transaction_manager.atomic():
                # Votes on the answer wait behind the row lock until it is gone
                if await self.votable_repository.lock(TargetKind.ANSWER, answer.id) is None:
                    raise NotFoundError("answer", str(answer.id))
                await self.vote_ledger.purge_target(TargetKind.ANSWER, answer.id)
                if answer.is_accepted:
                    await self.question_repository.set_accepted_answer(
                        answer.question_id, None
                    )
                await self.answer_repository.delete(answer.id)
                await self.question_repository.adjust_answer_count(answer.question_id, -1)

            logfire.info("Answer deleted", answer_id=str(answer_id))
