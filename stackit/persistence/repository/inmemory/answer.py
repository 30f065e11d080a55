"""In-memory answer repository for testing."""

from typing import List, Optional

from stackit.domain.model import Answer
from stackit.domain.repository import AnswerRepository
from stackit.domain.value import AnswerId, QuestionId, UserId, Username

from .store import InMemoryStore


class InMemoryAnswerRepository(AnswerRepository):
    """In-memory implementation of AnswerRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_id(self, answer_id: AnswerId) -> Optional[Answer]:
        """Find an answer by ID."""
        return self.store.answers.get(answer_id)

    async def find_by_question(self, question_id: QuestionId) -> List[Answer]:
        """Find answers: accepted first, then by score, then newest."""
        answers = [a for a in self.store.answers.values() if a.question_id == question_id]
        answers.sort(key=lambda a: (a.is_accepted, a.score, a.created_at), reverse=True)
        return answers

    async def save(self, answer: Answer) -> Answer:
        """Save an answer; score and acceptance keep their stored values."""
        existing = self.store.answers.get(answer.id)
        if existing:
            answer = answer.model_copy(
                update={
                    "score": existing.score,
                    "is_accepted": existing.is_accepted,
                    "created_at": existing.created_at,
                }
            )
        else:
            answer = answer.model_copy(update={"score": 0, "is_accepted": False})
        self.store.answers[answer.id] = answer
        return answer

    async def delete(self, answer_id: AnswerId) -> bool:
        """Delete an answer."""
        return self.store.answers.pop(answer_id, None) is not None

    async def set_accepted(
        self, question_id: QuestionId, answer_id: Optional[AnswerId]
    ) -> None:
        """Accept one answer of a question and clear the rest."""
        for answer in list(self.store.answers.values()):
            if answer.question_id == question_id:
                self.store.answers[answer.id] = answer.model_copy(
                    update={"is_accepted": answer.id == answer_id}
                )

    async def rename_author(self, author_id: UserId, username: Username) -> None:
        """Refresh the denormalized author username."""
        for answer in list(self.store.answers.values()):
            if answer.author_id == author_id:
                self.store.answers[answer.id] = answer.model_copy(
                    update={"author_username": username}
                )
