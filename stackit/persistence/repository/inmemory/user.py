"""In-memory user repository for testing."""

from typing import Optional

from stackit.domain.error import ConflictError
from stackit.domain.model import User
from stackit.domain.repository import UserRepository
from stackit.domain.value import UserId, Username

from .store import InMemoryStore


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a profile by user ID."""
        return self.store.users.get(user_id)

    async def find_by_username(self, username: Username) -> Optional[User]:
        """Find a profile by username."""
        for user in self.store.users.values():
            if user.username == username:
                return user
        return None

    async def save(self, user: User) -> User:
        """Save a profile, enforcing unique usernames."""
        holder = await self.find_by_username(user.username)
        if holder and holder.id != user.id:
            raise ConflictError("Username already taken")
        existing = self.store.users.get(user.id)
        if existing:
            user = user.model_copy(update={"created_at": existing.created_at})
        self.store.users[user.id] = user
        return user
