"""PostgreSQL implementation of Question repository."""

from typing import List, Optional

import logfire
from sqlalchemy import Select, desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.domain.model import Question
from stackit.domain.repository import QuestionFilter, QuestionRepository
from stackit.domain.value import AnswerId, QuestionId, TagName, UserId, Username
from stackit.persistence.mappers import question_to_dict, row_to_question
from stackit.persistence.tables import questions_table


class PostgresQuestionRepository(QuestionRepository):
    """PostgreSQL implementation of QuestionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _apply_filters(
        self,
        stmt: Select,
        filter: QuestionFilter,
        search: Optional[str],
        tag: Optional[TagName],
    ) -> Select:
        if filter == QuestionFilter.UNANSWERED:
            stmt = stmt.where(questions_table.c.answer_count == 0)
        if search:
            stmt = stmt.where(
                or_(
                    questions_table.c.title.icontains(search, autoescape=True),
                    questions_table.c.description.icontains(search, autoescape=True),
                )
            )
        if tag:
            stmt = stmt.where(questions_table.c.tags.any(tag.root))
        return stmt

    async def find_by_id(self, question_id: QuestionId) -> Optional[Question]:
        """Find a question by ID."""
        stmt = select(questions_table).where(questions_table.c.id == question_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_question(row._asdict()) if row else None

    async def find_all(
        self,
        filter: QuestionFilter = QuestionFilter.ALL,
        search: Optional[str] = None,
        tag: Optional[TagName] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Question]:
        """Find questions with filtering and pagination."""
        with logfire.span(
            "question_repository.find_all",
            filter=filter.value,
            has_search=bool(search),
            tag=tag.root if tag else None,
            limit=limit,
            offset=offset,
        ):
            stmt = self._apply_filters(select(questions_table), filter, search, tag)

            if filter == QuestionFilter.POPULAR:
                stmt = stmt.order_by(
                    desc(questions_table.c.score), desc(questions_table.c.created_at)
                )
            else:
                stmt = stmt.order_by(desc(questions_table.c.created_at))

            # Stable paging when timestamps tie
            stmt = stmt.order_by(questions_table.c.id).limit(limit).offset(offset)

            result = await self.session.execute(stmt)
            return [row_to_question(row._asdict()) for row in result.fetchall()]

    async def count(
        self,
        filter: QuestionFilter = QuestionFilter.ALL,
        search: Optional[str] = None,
        tag: Optional[TagName] = None,
    ) -> int:
        """Count questions matching the given filters."""
        stmt = self._apply_filters(
            select(func.count()).select_from(questions_table), filter, search, tag
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def save(self, question: Question) -> Question:
        """Save a question (create, or update its editable content)."""
        question_dict = question_to_dict(question)
        existing = await self.find_by_id(question.id)

        if existing:
            values = {
                k: v for k, v in question_dict.items() if k not in ("id", "created_at")
            }
            stmt = (
                questions_table.update()
                .where(questions_table.c.id == question.id)
                .values(**values)
                .returning(questions_table)
            )
        else:
            stmt = questions_table.insert().values(**question_dict).returning(questions_table)

        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_question(row._asdict())

    async def delete(self, question_id: QuestionId) -> bool:
        """Delete a question (answers cascade)."""
        stmt = questions_table.delete().where(questions_table.c.id == question_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def adjust_answer_count(self, question_id: QuestionId, delta: int) -> None:
        """Atomically adjust answer count using SQL-level arithmetic."""
        stmt = (
            questions_table.update()
            .where(questions_table.c.id == question_id)
            .values(answer_count=questions_table.c.answer_count + delta)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def set_accepted_answer(
        self, question_id: QuestionId, answer_id: Optional[AnswerId]
    ) -> None:
        """Record the accepted answer."""
        stmt = (
            questions_table.update()
            .where(questions_table.c.id == question_id)
            .values(accepted_answer_id=answer_id)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def rename_author(self, author_id: UserId, username: Username) -> None:
        """Refresh the denormalized author username."""
        stmt = (
            questions_table.update()
            .where(questions_table.c.author_id == author_id)
            .values(author_username=username.root)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def tag_counts(self, limit: int = 20) -> list[tuple[TagName, int]]:
        """Count tag usage across questions."""
        tags = select(func.unnest(questions_table.c.tags).label("tag")).subquery()
        usage = func.count().label("usage")
        stmt = (
            select(tags.c.tag, usage)
            .group_by(tags.c.tag)
            .order_by(usage.desc(), tags.c.tag)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [(TagName(row.tag), row.usage) for row in result.fetchall()]
