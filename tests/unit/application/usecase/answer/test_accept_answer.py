"""Unit tests for AcceptAnswerUseCase."""

import pytest

from stackit.application.usecase.answer import AcceptAnswerRequest, AcceptAnswerUseCase
from stackit.domain.error import InvalidArgumentError, NotAuthorizedError
from tests.conftest import make_answer, make_question, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestAcceptAnswerUseCase:
    """Tests for AcceptAnswerUseCase."""

    @pytest.mark.asyncio
    async def test_accept_then_withdraw(self, unit_env):
        # Arrange
        use_case = await unit_env.get(AcceptAnswerUseCase)
        asker = await make_user(unit_env)
        helper = await make_user(unit_env)
        question = await make_question(unit_env, asker)
        answer = await make_answer(unit_env, question, helper)
        request = AcceptAnswerRequest(answer_id=str(answer.id), user_id=str(asker.id))

        # Act
        accepted = await use_case.execute(request)
        withdrawn = await use_case.execute(request)

        # Assert
        assert accepted.answer_id == str(answer.id)
        assert accepted.question_id == str(question.id)
        assert accepted.is_accepted is True
        assert withdrawn.is_accepted is False

    @pytest.mark.asyncio
    async def test_only_asker_may_accept(self, unit_env):
        use_case = await unit_env.get(AcceptAnswerUseCase)
        asker = await make_user(unit_env)
        helper = await make_user(unit_env)
        question = await make_question(unit_env, asker)
        answer = await make_answer(unit_env, question, helper)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                AcceptAnswerRequest(answer_id=str(answer.id), user_id=str(helper.id))
            )

    @pytest.mark.asyncio
    async def test_malformed_answer_id(self, unit_env):
        use_case = await unit_env.get(AcceptAnswerUseCase)
        asker = await make_user(unit_env)

        with pytest.raises(InvalidArgumentError):
            await use_case.execute(
                AcceptAnswerRequest(answer_id="123", user_id=str(asker.id))
            )
