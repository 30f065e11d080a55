"""Unit tests for UpdateUserProfileUseCase."""

import pytest

from stackit.application.usecase.user import (
    UpdateUserProfileRequest,
    UpdateUserProfileUseCase,
)
from stackit.domain.error import InvalidArgumentError
from stackit.domain.service import QuestionService
from tests.conftest import make_question, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestUpdateUserProfileUseCase:
    """Tests for UpdateUserProfileUseCase."""

    @pytest.mark.asyncio
    async def test_rename_is_reflected_on_content(self, unit_env):
        # Arrange
        use_case = await unit_env.get(UpdateUserProfileUseCase)
        question_service = await unit_env.get(QuestionService)
        user = await make_user(unit_env, "old_name")
        question = await make_question(unit_env, user)

        # Act
        response = await use_case.execute(
            UpdateUserProfileRequest(
                user_id=str(user.id),
                username="new_name",
                avatar_url="https://example.com/me.png",
            )
        )

        # Assert
        assert response.username.root == "new_name"
        assert response.avatar_url == "https://example.com/me.png"
        reloaded = await question_service.get_question(question.id)
        assert reloaded.author_username.root == "new_name"

    @pytest.mark.asyncio
    async def test_empty_avatar_clears_it(self, unit_env):
        use_case = await unit_env.get(UpdateUserProfileUseCase)
        user = await make_user(unit_env)
        await use_case.execute(
            UpdateUserProfileRequest(user_id=str(user.id), avatar_url="https://example.com/a.png")
        )

        response = await use_case.execute(
            UpdateUserProfileRequest(user_id=str(user.id), avatar_url="")
        )

        assert response.avatar_url is None

    @pytest.mark.asyncio
    async def test_taken_username_is_rejected(self, unit_env):
        use_case = await unit_env.get(UpdateUserProfileUseCase)
        await make_user(unit_env, "taken_name")
        user = await make_user(unit_env)

        with pytest.raises(InvalidArgumentError) as exc_info:
            await use_case.execute(
                UpdateUserProfileRequest(user_id=str(user.id), username="taken_name")
            )

        assert exc_info.value.field == "username"
