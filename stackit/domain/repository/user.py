"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from stackit.domain.model.user import User
from stackit.domain.value import UserId, Username


class UserRepository(ABC):
    """Repository for User profiles."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a profile by user ID.

        Args:
            user_id: The identity provider's user ID

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_username(self, username: Username) -> Optional[User]:
        """Find a profile by username.

        Args:
            username: The public username

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a profile (create or update).

        Args:
            user: The profile to save

        Returns:
            The saved profile

        Raises:
            ConflictError: If the username is held by another profile
        """
        pass
