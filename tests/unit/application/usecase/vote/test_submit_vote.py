"""Unit tests for the vote use cases."""

import pytest

from stackit.application.usecase.vote import (
    GetUserVoteRequest,
    GetUserVoteUseCase,
    PurgeUserVotesRequest,
    PurgeUserVotesUseCase,
    ReconcileScoresUseCase,
    SubmitVoteRequest,
    SubmitVoteUseCase,
)
from stackit.domain.error import InvalidArgumentError, UnauthenticatedError
from stackit.domain.repository import VotableRepository
from stackit.domain.service import VoteService
from stackit.domain.value import TargetKind, VoteAction, VoteState
from tests.conftest import make_answer, make_question, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestSubmitVoteUseCase:
    """Tests for SubmitVoteUseCase."""

    @pytest.mark.asyncio
    async def test_vote_response_reports_state_and_score(self, unit_env):
        # Arrange
        vote_service = await unit_env.get(VoteService)
        use_case = SubmitVoteUseCase(vote_service=vote_service)
        author = await make_user(unit_env)
        voter = await make_user(unit_env)
        question = await make_question(unit_env, author)

        request = SubmitVoteRequest(
            target_id=str(question.id),
            target_type="question",
            vote_type="upvote",
            user_id=str(voter.id),
        )

        # Act
        response = await use_case.execute(request)

        # Assert
        assert response.success is True
        assert response.target_id == str(question.id)
        assert response.target_type == "question"
        assert response.state == VoteState.UPVOTE
        assert response.action == VoteAction.CREATED
        assert response.score == 1

    @pytest.mark.asyncio
    async def test_anonymous_request_is_unauthenticated(self, unit_env):
        use_case = await unit_env.get(SubmitVoteUseCase)

        with pytest.raises(UnauthenticatedError):
            await use_case.execute(
                SubmitVoteRequest(target_type="question", vote_type="upvote")
            )

    @pytest.mark.asyncio
    async def test_missing_fields_are_invalid(self, unit_env):
        use_case = await unit_env.get(SubmitVoteUseCase)
        voter = await make_user(unit_env)

        with pytest.raises(InvalidArgumentError):
            await use_case.execute(SubmitVoteRequest(user_id=str(voter.id)))


class TestGetUserVoteUseCase:
    @pytest.mark.asyncio
    async def test_reports_none_then_current_vote(self, unit_env):
        submit = await unit_env.get(SubmitVoteUseCase)
        get_vote = await unit_env.get(GetUserVoteUseCase)
        author = await make_user(unit_env)
        voter = await make_user(unit_env)
        question = await make_question(unit_env, author)
        answer = await make_answer(unit_env, question, author)
        request = GetUserVoteRequest(
            target_id=str(answer.id), target_type="answer", user_id=str(voter.id)
        )

        before = await get_vote.execute(request)
        await submit.execute(
            SubmitVoteRequest(
                target_id=str(answer.id),
                target_type="answer",
                vote_type="down",
                user_id=str(voter.id),
            )
        )
        after = await get_vote.execute(request)

        assert before.state == VoteState.NONE
        assert after.state == VoteState.DOWNVOTE


class TestPurgeUserVotesUseCase:
    @pytest.mark.asyncio
    async def test_reports_removed_count(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        use_case = await unit_env.get(PurgeUserVotesUseCase)
        author = await make_user(unit_env)
        voter = await make_user(unit_env)
        question = await make_question(unit_env, author)
        answer = await make_answer(unit_env, question, author)
        await vote_service.submit_vote(voter.id, question.id, "question", "upvote")
        await vote_service.submit_vote(voter.id, answer.id, "answer", "upvote")

        response = await use_case.execute(PurgeUserVotesRequest(user_id=str(voter.id)))

        assert response.removed == 2


class TestReconcileScoresUseCase:
    @pytest.mark.asyncio
    async def test_reports_corrections(self, unit_env):
        use_case = await unit_env.get(ReconcileScoresUseCase)
        votable_repo = await unit_env.get(VotableRepository)
        author = await make_user(unit_env)
        question = await make_question(unit_env, author)
        answer = await make_answer(unit_env, question, author)
        await votable_repo.set_score(TargetKind.ANSWER, answer.id, -3)

        response = await use_case.execute()

        assert len(response.corrected) == 1
        correction = response.corrected[0]
        assert correction.target_type == "answer"
        assert correction.target_id == str(answer.id)
        assert (correction.previous, correction.current) == (-3, 0)
