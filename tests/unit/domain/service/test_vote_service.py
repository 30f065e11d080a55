"""Unit tests for VoteService."""

import asyncio
import random
from uuid import uuid4

import pytest

from stackit.config import VotingSettings
from stackit.domain.error import (
    InvalidArgumentError,
    NotFoundError,
    StoreUnavailableError,
    UnauthenticatedError,
)
from stackit.domain.repository import (
    AnswerRepository,
    QuestionRepository,
    TransactionManager,
    VotableRepository,
    VoteRepository,
)
from stackit.domain.service import CounterMaintainer, VoteLedger, VoteService
from stackit.domain.value import TargetKind, VoteAction, VoteDirection, VoteState
from tests.conftest import make_answer, make_question, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


async def question_score(env, question_id) -> int:
    question_repo = await env.get(QuestionRepository)
    return (await question_repo.find_by_id(question_id)).score


class TestSubmitVote:
    """Tests for the vote toggle semantics."""

    @pytest.mark.asyncio
    async def test_first_upvote_creates_vote_and_increments_score(self, unit_env):
        """Voter A submits Up on Q1 at score 0 -> score 1, vote is Up."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        author = await make_user(unit_env)
        voter = await make_user(unit_env)
        question = await make_question(unit_env, author)

        # Act
        outcome = await vote_service.submit_vote(voter.id, question.id, "question", "upvote")

        # Assert
        assert outcome.action == VoteAction.CREATED
        assert outcome.state == VoteState.UPVOTE
        assert outcome.score == 1
        assert await question_score(unit_env, question.id) == 1

        vote = await vote_repo.find_by_voter_and_target(
            voter.id, TargetKind.QUESTION, question.id
        )
        assert vote is not None
        assert vote.direction == VoteDirection.UP

    @pytest.mark.asyncio
    async def test_repeating_same_direction_retracts_vote(self, unit_env):
        """Voter A submits Up on Q1 again -> vote removed, score 0."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        author = await make_user(unit_env)
        voter = await make_user(unit_env)
        question = await make_question(unit_env, author)
        await vote_service.submit_vote(voter.id, question.id, "question", "upvote")

        # Act
        outcome = await vote_service.submit_vote(voter.id, question.id, "question", "upvote")

        # Assert
        assert outcome.action == VoteAction.RETRACTED
        assert outcome.state == VoteState.NONE
        assert outcome.score == 0
        assert await question_score(unit_env, question.id) == 0
        assert (
            await vote_repo.find_by_voter_and_target(
                voter.id, TargetKind.QUESTION, question.id
            )
            is None
        )

    @pytest.mark.asyncio
    async def test_votes_from_two_voters_sum(self, unit_env):
        """A submits Up, B submits Down on Q1 -> score 1 + (-1) = 0."""
        vote_service = await unit_env.get(VoteService)
        author = await make_user(unit_env)
        voter_a = await make_user(unit_env)
        voter_b = await make_user(unit_env)
        question = await make_question(unit_env, author)

        first = await vote_service.submit_vote(voter_a.id, question.id, "question", "upvote")
        second = await vote_service.submit_vote(
            voter_b.id, question.id, "question", "downvote"
        )

        assert first.score == 1
        assert second.score == 0
        assert second.state == VoteState.DOWNVOTE
        assert await question_score(unit_env, question.id) == 0

    @pytest.mark.asyncio
    async def test_switching_direction_moves_score_by_two(self, unit_env):
        """A (currently Up on Q1) submits Down -> score drops by 2."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        author = await make_user(unit_env)
        voter = await make_user(unit_env)
        other = await make_user(unit_env)
        question = await make_question(unit_env, author)
        await vote_service.submit_vote(other.id, question.id, "question", "upvote")
        before = await vote_service.submit_vote(voter.id, question.id, "question", "upvote")
        original = await vote_repo.find_by_voter_and_target(
            voter.id, TargetKind.QUESTION, question.id
        )

        # Act
        outcome = await vote_service.submit_vote(voter.id, question.id, "question", "downvote")

        # Assert
        assert before.score == 2
        assert outcome.action == VoteAction.CHANGED
        assert outcome.state == VoteState.DOWNVOTE
        assert outcome.score == before.score - 2

        # Flipped in place, not replaced
        flipped = await vote_repo.find_by_voter_and_target(
            voter.id, TargetKind.QUESTION, question.id
        )
        assert flipped.id == original.id
        assert flipped.direction == VoteDirection.DOWN

    @pytest.mark.asyncio
    async def test_switching_back_up_moves_score_by_two(self, unit_env):
        """Down then Up -> -1 then +1."""
        vote_service = await unit_env.get(VoteService)
        author = await make_user(unit_env)
        voter = await make_user(unit_env)
        question = await make_question(unit_env, author)

        down = await vote_service.submit_vote(voter.id, question.id, "question", "downvote")
        up = await vote_service.submit_vote(voter.id, question.id, "question", "upvote")

        assert down.score == -1
        assert up.score == 1
        assert up.action == VoteAction.CHANGED

    @pytest.mark.asyncio
    async def test_unauthenticated_vote_changes_nothing(self, unit_env):
        """No caller identity -> Unauthenticated; ledger and score unchanged."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        author = await make_user(unit_env)
        question = await make_question(unit_env, author)

        # Act & Assert
        with pytest.raises(UnauthenticatedError):
            await vote_service.submit_vote(None, question.id, "question", "upvote")

        assert await question_score(unit_env, question.id) == 0
        assert await vote_repo.find_by_target(TargetKind.QUESTION, question.id) == []

    @pytest.mark.asyncio
    async def test_vote_on_answer_updates_answer_score_only(self, unit_env):
        """Answer votes are counted on the answer, not its question."""
        vote_service = await unit_env.get(VoteService)
        answer_repo = await unit_env.get(AnswerRepository)
        author = await make_user(unit_env)
        voter = await make_user(unit_env)
        question = await make_question(unit_env, author)
        answer = await make_answer(unit_env, question, author)

        outcome = await vote_service.submit_vote(voter.id, answer.id, "answer", "downvote")

        assert outcome.target_kind == TargetKind.ANSWER
        assert outcome.score == -1
        assert (await answer_repo.find_by_id(answer.id)).score == -1
        assert await question_score(unit_env, question.id) == 0

    @pytest.mark.asyncio
    async def test_short_direction_aliases_are_accepted(self, unit_env):
        """'up' and 'down' behave like 'upvote' and 'downvote'."""
        vote_service = await unit_env.get(VoteService)
        author = await make_user(unit_env)
        voter = await make_user(unit_env)
        question = await make_question(unit_env, author)

        up = await vote_service.submit_vote(voter.id, str(question.id), "QUESTION", "up")
        down = await vote_service.submit_vote(voter.id, str(question.id), "question", "down")

        assert up.state == VoteState.UPVOTE
        assert down.state == VoteState.DOWNVOTE
        assert down.score == -1

    @pytest.mark.asyncio
    async def test_self_vote_allowed_by_default(self, unit_env):
        """Authors may vote on their own content unless disabled."""
        vote_service = await unit_env.get(VoteService)
        author = await make_user(unit_env)
        question = await make_question(unit_env, author)

        outcome = await vote_service.submit_vote(author.id, question.id, "question", "upvote")

        assert outcome.score == 1


class TestSubmitVoteRejections:
    """Tests for rejected vote intents."""

    @pytest.mark.asyncio
    async def test_nonexistent_target_raises_not_found(self, unit_env):
        """Voting on a missing target fails and records nothing."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        voter = await make_user(unit_env)
        missing_id = uuid4()

        with pytest.raises(NotFoundError):
            await vote_service.submit_vote(voter.id, missing_id, "question", "upvote")

        assert await vote_repo.find_by_voter(voter.id) == []

    @pytest.mark.asyncio
    async def test_answer_id_with_question_kind_raises_not_found(self, unit_env):
        """The kind selects the table: an answer ID is not a question."""
        vote_service = await unit_env.get(VoteService)
        author = await make_user(unit_env)
        voter = await make_user(unit_env)
        question = await make_question(unit_env, author)
        answer = await make_answer(unit_env, question, author)

        with pytest.raises(NotFoundError):
            await vote_service.submit_vote(voter.id, answer.id, "question", "upvote")

    @pytest.mark.asyncio
    async def test_unauthenticated_is_reported_before_malformed_input(self, unit_env):
        """Missing identity wins over every other problem."""
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(UnauthenticatedError):
            await vote_service.submit_vote(None, "not-a-uuid", "comment", "sideways")

    @pytest.mark.asyncio
    async def test_kind_checked_before_direction_and_id(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        voter = await make_user(unit_env)

        with pytest.raises(InvalidArgumentError) as exc_info:
            await vote_service.submit_vote(voter.id, "not-a-uuid", "comment", "sideways")

        assert exc_info.value.field == "target_type"

    @pytest.mark.asyncio
    async def test_direction_checked_before_id(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        voter = await make_user(unit_env)

        with pytest.raises(InvalidArgumentError) as exc_info:
            await vote_service.submit_vote(voter.id, "not-a-uuid", "answer", "sideways")

        assert exc_info.value.field == "vote_type"

    @pytest.mark.asyncio
    async def test_malformed_id_raises_invalid_argument(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        voter = await make_user(unit_env)

        with pytest.raises(InvalidArgumentError) as exc_info:
            await vote_service.submit_vote(voter.id, "not-a-uuid", "answer", "upvote")

        assert exc_info.value.field == "target_id"

    @pytest.mark.asyncio
    async def test_self_vote_rejected_when_disabled(self, unit_env):
        """With self-votes disabled, voting on your own question fails."""
        # Arrange - same dependencies, different voting rules
        vote_service = VoteService(
            vote_repository=await unit_env.get(VoteRepository),
            votable_repository=await unit_env.get(VotableRepository),
            vote_ledger=await unit_env.get(VoteLedger),
            counter_maintainer=await unit_env.get(CounterMaintainer),
            transaction_manager=await unit_env.get(TransactionManager),
            voting_settings=VotingSettings(allow_self_vote=False),
        )
        author = await make_user(unit_env)
        other = await make_user(unit_env)
        question = await make_question(unit_env, author)

        # Act & Assert
        with pytest.raises(InvalidArgumentError, match="own question"):
            await vote_service.submit_vote(author.id, question.id, "question", "upvote")

        assert await question_score(unit_env, question.id) == 0

        # Other users are unaffected
        outcome = await vote_service.submit_vote(other.id, question.id, "question", "upvote")
        assert outcome.score == 1


class TestSubmitVoteAtomicity:
    """Tests for all-or-nothing vote application."""

    @pytest.mark.asyncio
    async def test_score_failure_after_ledger_write_rolls_back_vote(
        self, unit_env, monkeypatch
    ):
        """If the score update fails, the ledger write is undone too."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        votable_repo = await unit_env.get(VotableRepository)
        author = await make_user(unit_env)
        voter = await make_user(unit_env)
        question = await make_question(unit_env, author)

        async def failing_apply(kind, target_id, delta):
            raise StoreUnavailableError("Database is unavailable")

        monkeypatch.setattr(votable_repo, "apply_score_delta", failing_apply)

        # Act
        with pytest.raises(StoreUnavailableError) as exc_info:
            await vote_service.submit_vote(voter.id, question.id, "question", "upvote")

        # Assert
        assert exc_info.value.retryable is True
        assert await question_score(unit_env, question.id) == 0
        assert (
            await vote_repo.find_by_voter_and_target(
                voter.id, TargetKind.QUESTION, question.id
            )
            is None
        )

    @pytest.mark.asyncio
    async def test_failed_flip_keeps_previous_direction(self, unit_env, monkeypatch):
        """A failed direction change leaves the old vote and score in place."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        votable_repo = await unit_env.get(VotableRepository)
        author = await make_user(unit_env)
        voter = await make_user(unit_env)
        question = await make_question(unit_env, author)
        await vote_service.submit_vote(voter.id, question.id, "question", "upvote")

        async def failing_apply(kind, target_id, delta):
            raise StoreUnavailableError("Database is unavailable")

        monkeypatch.setattr(votable_repo, "apply_score_delta", failing_apply)

        with pytest.raises(StoreUnavailableError):
            await vote_service.submit_vote(voter.id, question.id, "question", "downvote")

        vote = await vote_repo.find_by_voter_and_target(
            voter.id, TargetKind.QUESTION, question.id
        )
        assert vote.direction == VoteDirection.UP
        assert await question_score(unit_env, question.id) == 1


class TestSubmitVoteConcurrency:
    """Tests for concurrent vote intents."""

    @pytest.mark.asyncio
    async def test_concurrent_voters_are_all_counted(self, unit_env):
        """No increment is lost when many voters vote at once."""
        vote_service = await unit_env.get(VoteService)
        author = await make_user(unit_env)
        question = await make_question(unit_env, author)
        voters = [await make_user(unit_env) for _ in range(10)]

        outcomes = await asyncio.gather(
            *(
                vote_service.submit_vote(v.id, question.id, "question", "upvote")
                for v in voters
            )
        )

        assert all(o.action == VoteAction.CREATED for o in outcomes)
        assert sorted(o.score for o in outcomes) == list(range(1, 11))
        assert await question_score(unit_env, question.id) == 10

    @pytest.mark.asyncio
    async def test_concurrent_intents_from_one_voter_keep_single_vote(self, unit_env):
        """Simultaneous intents from one voter are applied one after another."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        author = await make_user(unit_env)
        voter = await make_user(unit_env)
        question = await make_question(unit_env, author)

        outcomes = await asyncio.gather(
            vote_service.submit_vote(voter.id, question.id, "question", "upvote"),
            vote_service.submit_vote(voter.id, question.id, "question", "upvote"),
            vote_service.submit_vote(voter.id, question.id, "question", "upvote"),
        )

        # create, retract, create
        assert sorted(o.action.value for o in outcomes) == [
            "created",
            "created",
            "retracted",
        ]
        votes = await vote_repo.find_by_target(TargetKind.QUESTION, question.id)
        assert len(votes) == 1
        assert await question_score(unit_env, question.id) == 1


class TestScoreInvariant:
    """Score always equals (#up - #down) over the ledger."""

    @pytest.mark.asyncio
    async def test_random_vote_sequence_keeps_scores_consistent(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        votable_repo = await unit_env.get(VotableRepository)
        author = await make_user(unit_env)
        question = await make_question(unit_env, author)
        answer = await make_answer(unit_env, question, author)
        voters = [await make_user(unit_env) for _ in range(4)]
        targets = [(TargetKind.QUESTION, question.id), (TargetKind.ANSWER, answer.id)]
        rng = random.Random(1234)

        for _ in range(60):
            voter = rng.choice(voters)
            kind, target_id = rng.choice(targets)
            direction = rng.choice(["upvote", "downvote"])

            outcome = await vote_service.submit_vote(
                voter.id, target_id, kind.value, direction
            )

            tally = await vote_repo.tally(kind, target_id)
            locked = await votable_repo.lock(kind, target_id)
            assert outcome.score == tally.score
            assert locked.score == tally.score


class TestGetUserVotes:
    """Tests for reading a voter's votes."""

    @pytest.mark.asyncio
    async def test_get_user_vote_returns_direction_or_none(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        author = await make_user(unit_env)
        voter = await make_user(unit_env)
        question = await make_question(unit_env, author)

        assert await vote_service.get_user_vote(voter.id, question.id, "question") is None

        await vote_service.submit_vote(voter.id, question.id, "question", "downvote")

        assert (
            await vote_service.get_user_vote(voter.id, question.id, "question")
            == VoteDirection.DOWN
        )

    @pytest.mark.asyncio
    async def test_get_user_votes_batches_lookup(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        author = await make_user(unit_env)
        voter = await make_user(unit_env)
        question = await make_question(unit_env, author)
        first = await make_answer(unit_env, question, author, "First answer")
        second = await make_answer(unit_env, question, author, "Second answer")
        await vote_service.submit_vote(voter.id, first.id, "answer", "upvote")

        votes = await vote_service.get_user_votes(
            voter.id, TargetKind.ANSWER, [first.id, second.id]
        )

        assert votes == {first.id: VoteDirection.UP}
        assert await vote_service.get_user_votes(voter.id, TargetKind.ANSWER, []) == {}


class TestAdministrativeOperations:
    """Tests for purge and reconcile."""

    @pytest.mark.asyncio
    async def test_purge_votes_by_voter_reverts_their_contribution(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        author = await make_user(unit_env)
        leaving = await make_user(unit_env)
        staying = await make_user(unit_env)
        question = await make_question(unit_env, author)
        answer = await make_answer(unit_env, question, author)
        await vote_service.submit_vote(leaving.id, question.id, "question", "upvote")
        await vote_service.submit_vote(leaving.id, answer.id, "answer", "downvote")
        await vote_service.submit_vote(staying.id, question.id, "question", "upvote")

        removed = await vote_service.purge_votes_by_voter(leaving.id)

        assert removed == 2
        assert await vote_repo.find_by_voter(leaving.id) == []
        assert await question_score(unit_env, question.id) == 1
        answer_repo = await unit_env.get(AnswerRepository)
        assert (await answer_repo.find_by_id(answer.id)).score == 0

    @pytest.mark.asyncio
    async def test_reconcile_scores_repairs_drift(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        votable_repo = await unit_env.get(VotableRepository)
        author = await make_user(unit_env)
        voter = await make_user(unit_env)
        question = await make_question(unit_env, author)
        answer = await make_answer(unit_env, question, author)
        await vote_service.submit_vote(voter.id, question.id, "question", "upvote")

        # Simulate drift (e.g. a manual database edit)
        await votable_repo.set_score(TargetKind.QUESTION, question.id, 7)

        corrected = await vote_service.reconcile_scores()

        assert len(corrected) == 1
        assert corrected[0].target_id == question.id
        assert corrected[0].previous == 7
        assert corrected[0].current == 1
        assert await question_score(unit_env, question.id) == 1

        # Consistent scores are left alone
        assert await vote_service.reconcile_scores() == []
        assert (await votable_repo.lock(TargetKind.ANSWER, answer.id)).score == 0
