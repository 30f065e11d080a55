"""Answer repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from stackit.domain.model.answer import Answer
from stackit.domain.value import AnswerId, QuestionId, UserId, Username


class AnswerRepository(ABC):
    """Repository for Answer entities."""

    @abstractmethod
    async def find_by_id(self, answer_id: AnswerId) -> Optional[Answer]:
        """Find an answer by ID.

        Args:
            answer_id: The answer's unique identifier

        Returns:
            The answer if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_question(self, question_id: QuestionId) -> List[Answer]:
        """Find all answers to a question.

        Ordered accepted first, then by score (highest first), then newest.

        Args:
            question_id: The question ID

        Returns:
            Answers to the question
        """
        pass

    @abstractmethod
    async def save(self, answer: Answer) -> Answer:
        """Save an answer (create, or update its content).

        Acceptance and score are not written; see `set_accepted`.

        Args:
            answer: The answer to save

        Returns:
            The saved answer as stored
        """
        pass

    @abstractmethod
    async def delete(self, answer_id: AnswerId) -> bool:
        """Delete an answer.

        Returns:
            True if an answer was deleted
        """
        pass

    @abstractmethod
    async def set_accepted(
        self, question_id: QuestionId, answer_id: Optional[AnswerId]
    ) -> None:
        """Mark one answer of a question as accepted, clearing the others.

        Args:
            question_id: The question whose answers are updated
            answer_id: Answer to accept, or None to clear acceptance
        """
        pass

    @abstractmethod
    async def rename_author(self, author_id: UserId, username: Username) -> None:
        """Refresh the denormalized author username on a user's answers."""
        pass
