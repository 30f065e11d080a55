"""User profile domain service."""

from datetime import datetime

import logfire
from pydantic import ValidationError

from stackit.domain.error import ConflictError, InvalidArgumentError, NotFoundError
from stackit.domain.model import User
from stackit.domain.repository import (
    AnswerRepository,
    QuestionRepository,
    TransactionManager,
    UserRepository,
)
from stackit.domain.value import UserId, Username

from .base import Service


class UserService(Service):
    """Domain service for user profile operations."""

    def __init__(
        self,
        user_repository: UserRepository,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        transaction_manager: TransactionManager,
    ) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            question_repository: Question repository (author names)
            answer_repository: Answer repository (author names)
            transaction_manager: Transaction manager
        """
        self.user_repository = user_repository
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.transaction_manager = transaction_manager

    async def get_by_id(self, user_id: UserId) -> User:
        """Get a profile by user ID.

        Raises:
            NotFoundError: If no profile exists
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("user", str(user_id))
            return user

    async def get_by_username(self, username: str) -> User:
        """Get a profile by username.

        Raises:
            NotFoundError: If no profile has this username
        """
        with logfire.span("user_service.get_by_username", username=username):
            try:
                parsed = Username(username)
            except ValidationError:
                raise NotFoundError("user", username)
            user = await self.user_repository.find_by_username(parsed)
            if not user:
                logfire.warn("User not found", username=username)
                raise NotFoundError("user", username)
            return user

    async def ensure_profile(self, user_id: UserId, username_hint: str | None = None) -> User:
        """Return the caller's profile, provisioning it on first access.

        The username comes from the identity provider's metadata when it is
        valid and free, otherwise it defaults to `user_<first 8 chars of id>`.

        Args:
            user_id: Identity provider user ID
            username_hint: Username the user picked at sign-up, if any

        Returns:
            The existing or newly created profile
        """
        existing = await self.user_repository.find_by_id(user_id)
        if existing:
            return existing

        with logfire.span("user_service.ensure_profile", user_id=str(user_id)):
            username = await self._pick_username(user_id, username_hint)
            now = datetime.now()
            user = User(id=user_id, username=username, created_at=now, updated_at=now)
            try:
                async with self.transaction_manager.atomic():
                    saved = await self.user_repository.save(user)
            except ConflictError:
                # A concurrent first request provisioned the same profile
                raced = await self.user_repository.find_by_id(user_id)
                if raced is None:
                    raise
                return raced

            logfire.info(
                "Profile provisioned", user_id=str(user_id), username=saved.username.root
            )
            return saved

    async def update_profile(
        self,
        user_id: UserId,
        username: str | None = None,
        avatar_url: str | None = None,
    ) -> User:
        """Update a profile's username and/or avatar.

        Args:
            user_id: Profile owner
            username: New username
            avatar_url: New avatar URL (empty string clears it)

        Returns:
            Updated profile

        Raises:
            NotFoundError: If the profile does not exist
            InvalidArgumentError: If the username is malformed or taken
        """
        with logfire.span("user_service.update_profile", user_id=str(user_id)):
            user = await self.get_by_id(user_id)
            updates: dict = {"updated_at": datetime.now()}

            renamed = False
            if username is not None and username != user.username.root:
                try:
                    new_username = Username(username)
                except ValidationError as e:
                    raise InvalidArgumentError(
                        e.errors()[0]["msg"], field="username"
                    )
                holder = await self.user_repository.find_by_username(new_username)
                if holder and holder.id != user_id:
                    raise InvalidArgumentError("Username already taken", field="username")
                updates["username"] = new_username
                renamed = True

            if avatar_url is not None:
                updates["avatar_url"] = avatar_url or None

            async with self.transaction_manager.atomic():
                saved = await self.user_repository.save(user.model_copy(update=updates))
                if renamed:
                    await self.question_repository.rename_author(user_id, saved.username)
                    await self.answer_repository.rename_author(user_id, saved.username)

            logfire.info("Profile updated", user_id=str(user_id), renamed=renamed)
            return saved

    async def _pick_username(self, user_id: UserId, hint: str | None) -> Username:
        if hint:
            try:
                candidate = Username(hint)
            except ValidationError:
                logfire.info("Ignoring invalid username hint", user_id=str(user_id))
            else:
                if not await self.user_repository.find_by_username(candidate):
                    return candidate

        default = Username(f"user_{str(user_id)[:8]}")
        if not await self.user_repository.find_by_username(default):
            return default
        return Username(f"user_{user_id.hex}")
