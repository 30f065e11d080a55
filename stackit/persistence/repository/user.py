"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.domain.model import User
from stackit.domain.repository import UserRepository
from stackit.domain.value import UserId, Username
from stackit.persistence.mappers import row_to_user, user_to_dict
from stackit.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a profile by user ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_user(row._asdict()) if row else None

    async def find_by_username(self, username: Username) -> Optional[User]:
        """Find a profile by username."""
        stmt = select(users_table).where(users_table.c.username == username.root)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_user(row._asdict()) if row else None

    async def save(self, user: User) -> User:
        """Save a profile (create or update)."""
        user_dict = user_to_dict(user)
        existing = await self.find_by_id(user.id)

        if existing:
            values = {k: v for k, v in user_dict.items() if k not in ("id", "created_at")}
            stmt = (
                users_table.update()
                .where(users_table.c.id == user.id)
                .values(**values)
                .returning(users_table)
            )
        else:
            stmt = users_table.insert().values(**user_dict).returning(users_table)

        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_user(row._asdict())
