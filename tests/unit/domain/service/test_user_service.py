"""Unit tests for UserService."""

from uuid import uuid4

import pytest

from stackit.domain.error import InvalidArgumentError, NotFoundError
from stackit.domain.repository import AnswerRepository, QuestionRepository
from stackit.domain.service import UserService
from stackit.domain.value import UserId
from tests.conftest import make_answer, make_question, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestEnsureProfile:
    """Tests for first-access profile provisioning."""

    @pytest.mark.asyncio
    async def test_uses_username_hint(self, unit_env):
        user_service = await unit_env.get(UserService)
        user_id = UserId(uuid4())

        user = await user_service.ensure_profile(user_id, "ada.lovelace")

        assert user.id == user_id
        assert user.username.root == "ada.lovelace"

    @pytest.mark.asyncio
    async def test_defaults_to_id_prefix(self, unit_env):
        user_service = await unit_env.get(UserService)
        user_id = UserId(uuid4())

        user = await user_service.ensure_profile(user_id)

        assert user.username.root == f"user_{str(user_id)[:8]}"

    @pytest.mark.asyncio
    async def test_invalid_or_taken_hint_falls_back(self, unit_env):
        user_service = await unit_env.get(UserService)
        await make_user(unit_env, "taken")
        first_id = UserId(uuid4())
        second_id = UserId(uuid4())

        first = await user_service.ensure_profile(first_id, "taken")
        second = await user_service.ensure_profile(second_id, "no spaces allowed")

        assert first.username.root == f"user_{str(first_id)[:8]}"
        assert second.username.root == f"user_{str(second_id)[:8]}"

    @pytest.mark.asyncio
    async def test_existing_profile_is_returned_unchanged(self, unit_env):
        user_service = await unit_env.get(UserService)
        user_id = UserId(uuid4())
        created = await user_service.ensure_profile(user_id, "grace")

        again = await user_service.ensure_profile(user_id, "someone_else")

        assert again == created


class TestGetProfile:
    @pytest.mark.asyncio
    async def test_get_by_username(self, unit_env):
        user_service = await unit_env.get(UserService)
        user = await make_user(unit_env, "linus")

        assert (await user_service.get_by_username("linus")).id == user.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("username", ["nobody", "x"])
    async def test_unknown_or_malformed_username_raises_not_found(self, unit_env, username):
        user_service = await unit_env.get(UserService)

        with pytest.raises(NotFoundError):
            await user_service.get_by_username(username)

    @pytest.mark.asyncio
    async def test_get_by_id_missing_raises_not_found(self, unit_env):
        user_service = await unit_env.get(UserService)

        with pytest.raises(NotFoundError):
            await user_service.get_by_id(UserId(uuid4()))


class TestUpdateProfile:
    """Tests for update_profile method."""

    @pytest.mark.asyncio
    async def test_rename_updates_authored_content(self, unit_env):
        # Arrange
        user_service = await unit_env.get(UserService)
        question_repo = await unit_env.get(QuestionRepository)
        answer_repo = await unit_env.get(AnswerRepository)
        user = await make_user(unit_env, "oldname")
        question = await make_question(unit_env, user)
        answer = await make_answer(unit_env, question, user)

        # Act
        updated = await user_service.update_profile(user.id, username="newname")

        # Assert
        assert updated.username.root == "newname"
        assert (await question_repo.find_by_id(question.id)).author_username.root == "newname"
        assert (await answer_repo.find_by_id(answer.id)).author_username.root == "newname"

    @pytest.mark.asyncio
    async def test_taken_username_is_rejected(self, unit_env):
        user_service = await unit_env.get(UserService)
        await make_user(unit_env, "alice")
        bob = await make_user(unit_env, "bob")

        with pytest.raises(InvalidArgumentError, match="Username already taken"):
            await user_service.update_profile(bob.id, username="alice")

    @pytest.mark.asyncio
    async def test_malformed_username_is_rejected(self, unit_env):
        user_service = await unit_env.get(UserService)
        user = await make_user(unit_env)

        with pytest.raises(InvalidArgumentError) as exc_info:
            await user_service.update_profile(user.id, username="a b")

        assert exc_info.value.field == "username"

    @pytest.mark.asyncio
    async def test_avatar_set_and_cleared(self, unit_env):
        user_service = await unit_env.get(UserService)
        user = await make_user(unit_env)

        with_avatar = await user_service.update_profile(
            user.id, avatar_url="https://example.com/a.png"
        )
        cleared = await user_service.update_profile(user.id, avatar_url="")

        assert with_avatar.avatar_url == "https://example.com/a.png"
        assert cleared.avatar_url is None
        assert cleared.username == user.username
