"""PostgreSQL implementation of Answer repository."""

from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.domain.model import Answer
from stackit.domain.repository import AnswerRepository
from stackit.domain.value import AnswerId, QuestionId, UserId, Username
from stackit.persistence.mappers import answer_to_dict, row_to_answer
from stackit.persistence.tables import answers_table


class PostgresAnswerRepository(AnswerRepository):
    """PostgreSQL implementation of AnswerRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, answer_id: AnswerId) -> Optional[Answer]:
        """Find an answer by ID."""
        stmt = select(answers_table).where(answers_table.c.id == answer_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_answer(row._asdict()) if row else None

    async def find_by_question(self, question_id: QuestionId) -> List[Answer]:
        """Find all answers to a question, accepted first then by score."""
        stmt = (
            select(answers_table)
            .where(answers_table.c.question_id == question_id)
            .order_by(
                desc(answers_table.c.is_accepted),
                desc(answers_table.c.score),
                desc(answers_table.c.created_at),
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_answer(row._asdict()) for row in result.fetchall()]

    async def save(self, answer: Answer) -> Answer:
        """Save an answer (create or update content)."""
        answer_dict = answer_to_dict(answer)
        existing = await self.find_by_id(answer.id)

        if existing:
            stmt = (
                answers_table.update()
                .where(answers_table.c.id == answer.id)
                .values(content=answer.content, updated_at=answer.updated_at)
                .returning(answers_table)
            )
        else:
            stmt = answers_table.insert().values(**answer_dict).returning(answers_table)

        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_answer(row._asdict())

    async def delete(self, answer_id: AnswerId) -> bool:
        """Delete an answer."""
        stmt = answers_table.delete().where(answers_table.c.id == answer_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def set_accepted(
        self, question_id: QuestionId, answer_id: Optional[AnswerId]
    ) -> None:
        """Accept one answer of a question and clear the rest in one statement."""
        accepted = (
            answers_table.c.id == answer_id if answer_id is not None else False
        )
        stmt = (
            answers_table.update()
            .where(answers_table.c.question_id == question_id)
            .values(is_accepted=accepted)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def rename_author(self, author_id: UserId, username: Username) -> None:
        """Refresh the denormalized author username."""
        stmt = (
            answers_table.update()
            .where(answers_table.c.author_id == author_id)
            .values(author_username=username.root)
        )
        await self.session.execute(stmt)
        await self.session.flush()
