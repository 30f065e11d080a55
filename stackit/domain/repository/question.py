"""Question repository interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional

from stackit.domain.model.question import Question
from stackit.domain.value import AnswerId, QuestionId, TagName, UserId, Username


class QuestionFilter(str, Enum):
    """Filter applied to question listings."""

    ALL = "all"  # created_at DESC
    NEWEST = "newest"  # created_at DESC
    UNANSWERED = "unanswered"  # answer_count = 0, created_at DESC
    POPULAR = "popular"  # score DESC, created_at DESC


class QuestionRepository(ABC):
    """Repository for Question aggregate.

    Implementations never write `score` or `answer_count` from a saved
    model; those columns change only through the atomic adjust methods.
    """

    @abstractmethod
    async def find_by_id(self, question_id: QuestionId) -> Optional[Question]:
        """Find a question by ID.

        Args:
            question_id: The question's unique identifier

        Returns:
            The question if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        filter: QuestionFilter = QuestionFilter.ALL,
        search: Optional[str] = None,
        tag: Optional[TagName] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Question]:
        """Find questions with filtering and pagination.

        Args:
            filter: Listing filter and ordering
            search: Case-insensitive substring matched on title or description
            tag: Only questions carrying this tag
            limit: Maximum number of questions to return
            offset: Number of questions to skip

        Returns:
            List of questions matching the criteria
        """
        pass

    @abstractmethod
    async def count(
        self,
        filter: QuestionFilter = QuestionFilter.ALL,
        search: Optional[str] = None,
        tag: Optional[TagName] = None,
    ) -> int:
        """Count questions matching the given filters.

        Returns:
            Total number of questions matching the criteria
        """
        pass

    @abstractmethod
    async def save(self, question: Question) -> Question:
        """Save a question (create, or update its editable content).

        Args:
            question: The question to save

        Returns:
            The saved question as stored
        """
        pass

    @abstractmethod
    async def delete(self, question_id: QuestionId) -> bool:
        """Delete a question.

        Returns:
            True if a question was deleted
        """
        pass

    @abstractmethod
    async def adjust_answer_count(self, question_id: QuestionId, delta: int) -> None:
        """Atomically add `delta` to a question's answer count.

        Args:
            question_id: The question ID
            delta: Signed change (+1 on answer created, -1 on answer deleted)
        """
        pass

    @abstractmethod
    async def set_accepted_answer(
        self, question_id: QuestionId, answer_id: Optional[AnswerId]
    ) -> None:
        """Record which answer is accepted (None clears it)."""
        pass

    @abstractmethod
    async def rename_author(self, author_id: UserId, username: Username) -> None:
        """Refresh the denormalized author username on a user's questions."""
        pass

    @abstractmethod
    async def tag_counts(self, limit: int = 20) -> list[tuple[TagName, int]]:
        """Count tag usage across questions.

        Args:
            limit: Maximum number of tags to return

        Returns:
            (tag, count) pairs, most used first, ties by name
        """
        pass
