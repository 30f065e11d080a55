"""In-memory question repository for testing."""

from collections import Counter
from typing import List, Optional

from stackit.domain.model import Question
from stackit.domain.repository import QuestionFilter, QuestionRepository
from stackit.domain.value import AnswerId, QuestionId, TagName, UserId, Username

from .store import InMemoryStore


class InMemoryQuestionRepository(QuestionRepository):
    """In-memory implementation of QuestionRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def _matching(
        self,
        filter: QuestionFilter,
        search: Optional[str],
        tag: Optional[TagName],
    ) -> list[Question]:
        questions = list(self.store.questions.values())
        if filter == QuestionFilter.UNANSWERED:
            questions = [q for q in questions if q.answer_count == 0]
        if search:
            needle = search.lower()
            questions = [
                q
                for q in questions
                if needle in q.title.lower() or needle in q.description.lower()
            ]
        if tag:
            questions = [q for q in questions if tag in q.tags]
        return questions

    async def find_by_id(self, question_id: QuestionId) -> Optional[Question]:
        """Find a question by ID."""
        return self.store.questions.get(question_id)

    async def find_all(
        self,
        filter: QuestionFilter = QuestionFilter.ALL,
        search: Optional[str] = None,
        tag: Optional[TagName] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Question]:
        """Find questions with filtering and pagination."""
        questions = self._matching(filter, search, tag)
        questions.sort(key=lambda q: str(q.id))
        if filter == QuestionFilter.POPULAR:
            questions.sort(key=lambda q: (q.score, q.created_at), reverse=True)
        else:
            questions.sort(key=lambda q: q.created_at, reverse=True)
        return questions[offset : offset + limit]

    async def count(
        self,
        filter: QuestionFilter = QuestionFilter.ALL,
        search: Optional[str] = None,
        tag: Optional[TagName] = None,
    ) -> int:
        """Count questions matching the given filters."""
        return len(self._matching(filter, search, tag))

    async def save(self, question: Question) -> Question:
        """Save a question; derived counters keep their stored values."""
        existing = self.store.questions.get(question.id)
        if existing:
            question = question.model_copy(
                update={
                    "score": existing.score,
                    "answer_count": existing.answer_count,
                    "accepted_answer_id": existing.accepted_answer_id,
                    "created_at": existing.created_at,
                }
            )
        else:
            question = question.model_copy(
                update={"score": 0, "answer_count": 0, "accepted_answer_id": None}
            )
        self.store.questions[question.id] = question
        return question

    async def delete(self, question_id: QuestionId) -> bool:
        """Delete a question and, like the FK cascade, its answers."""
        if question_id not in self.store.questions:
            return False
        del self.store.questions[question_id]
        for answer_id in [
            a.id for a in self.store.answers.values() if a.question_id == question_id
        ]:
            del self.store.answers[answer_id]
        return True

    async def adjust_answer_count(self, question_id: QuestionId, delta: int) -> None:
        """Adjust answer count."""
        question = self.store.questions.get(question_id)
        if question:
            self.store.questions[question_id] = question.model_copy(
                update={"answer_count": question.answer_count + delta}
            )

    async def set_accepted_answer(
        self, question_id: QuestionId, answer_id: Optional[AnswerId]
    ) -> None:
        """Record the accepted answer."""
        question = self.store.questions.get(question_id)
        if question:
            self.store.questions[question_id] = question.model_copy(
                update={"accepted_answer_id": answer_id}
            )

    async def rename_author(self, author_id: UserId, username: Username) -> None:
        """Refresh the denormalized author username."""
        for question in list(self.store.questions.values()):
            if question.author_id == author_id:
                self.store.questions[question.id] = question.model_copy(
                    update={"author_username": username}
                )

    async def tag_counts(self, limit: int = 20) -> list[tuple[TagName, int]]:
        """Count tag usage across questions."""
        counts = Counter(
            tag.root for question in self.store.questions.values() for tag in question.tags
        )
        ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        return [(TagName(name), count) for name, count in ranked[:limit]]
