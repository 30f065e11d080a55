"""Vote domain service."""

from uuid import UUID

import logfire

from stackit.config import VotingSettings
from stackit.domain.error import InvalidArgumentError, NotFoundError, UnauthenticatedError
from stackit.domain.model import ScoreReconciliation, VoteOutcome
from stackit.domain.repository import TransactionManager, VotableRepository, VoteRepository
from stackit.domain.value import (
    TargetKind,
    UserId,
    VoteAction,
    VoteDirection,
    VoteState,
    parse_identifier,
)

from .base import Service
from .counter_maintainer import CounterMaintainer
from .vote_ledger import VoteLedger


class VoteService(Service):
    """Domain service for vote operations.

    Turns a vote intent into exactly one ledger mutation:

    - no existing vote: insert it
    - same direction as the existing vote: retract it
    - opposite direction: flip it in place
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        votable_repository: VotableRepository,
        vote_ledger: VoteLedger,
        counter_maintainer: CounterMaintainer,
        transaction_manager: TransactionManager,
        voting_settings: VotingSettings,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository (reads)
            votable_repository: Score storage for questions and answers
            vote_ledger: Ledger mutations
            counter_maintainer: Score maintainer (reconciliation)
            transaction_manager: Transaction manager
            voting_settings: Voting rules
        """
        self.vote_repository = vote_repository
        self.votable_repository = votable_repository
        self.vote_ledger = vote_ledger
        self.counter_maintainer = counter_maintainer
        self.transaction_manager = transaction_manager
        self.voting_settings = voting_settings

    async def submit_vote(
        self,
        voter_id: UserId | None,
        target_id: UUID | str,
        target_kind: TargetKind | str,
        direction: VoteDirection | str,
    ) -> VoteOutcome:
        """Apply a vote intent.

        Args:
            voter_id: Authenticated caller (None if unauthenticated)
            target_id: Question or answer ID
            target_kind: "question" or "answer"
            direction: "upvote"/"downvote" (or "up"/"down")

        Returns:
            The voter's resulting vote state and the target's new score

        Raises:
            UnauthenticatedError: If there is no caller
            InvalidArgumentError: If kind, direction or ID is malformed, or a
                self-vote is attempted while self-votes are disabled
            NotFoundError: If the target does not exist
            ConflictError: If a concurrent change prevented the commit (retryable)
            StoreUnavailableError: If the store is unreachable (retryable)
        """
        if voter_id is None:
            raise UnauthenticatedError("Authentication required to vote")
        kind = TargetKind.parse(target_kind)
        new_direction = VoteDirection.parse(direction)
        target_uuid = parse_identifier(target_id, "target_id")

        with logfire.span(
            "vote_service.submit_vote",
            voter_id=str(voter_id),
            target_kind=kind.value,
            target_id=str(target_uuid),
            direction=new_direction.value,
        ):
            async with self.transaction_manager.atomic():
                # Competing intents on this target queue here
                target = await self.votable_repository.lock(kind, target_uuid)
                if target is None:
                    logfire.warn(
                        "Vote on non-existent target",
                        target_kind=kind.value,
                        target_id=str(target_uuid),
                    )
                    raise NotFoundError(kind.value, str(target_uuid))

                if not self.voting_settings.allow_self_vote and target.author_id == voter_id:
                    raise InvalidArgumentError(f"You cannot vote on your own {kind.value}")

                existing = await self.vote_repository.find_by_voter_and_target(
                    voter_id, kind, target_uuid
                )

                if existing is None:
                    vote = self.vote_ledger.new_vote(voter_id, kind, target_uuid, new_direction)
                    score = await self.vote_ledger.insert(vote)
                    action = VoteAction.CREATED
                    state = VoteState.of(new_direction)
                elif existing.direction == new_direction:
                    score = await self.vote_ledger.retract(existing)
                    action = VoteAction.RETRACTED
                    state = VoteState.NONE
                else:
                    _, score = await self.vote_ledger.change_direction(existing, new_direction)
                    action = VoteAction.CHANGED
                    state = VoteState.of(new_direction)

            logfire.info(
                "Vote applied",
                voter_id=str(voter_id),
                target_id=str(target_uuid),
                action=action.value,
                state=state.value,
                score=score,
            )
            return VoteOutcome(
                target_kind=kind,
                target_id=target_uuid,
                state=state,
                action=action,
                score=score,
            )

    async def get_user_vote(
        self, voter_id: UserId, target_id: UUID | str, target_kind: TargetKind | str
    ) -> VoteDirection | None:
        """Get a voter's current vote on a target.

        Returns:
            The vote direction, or None if the voter has not voted

        Raises:
            InvalidArgumentError: If kind or ID is malformed
        """
        kind = TargetKind.parse(target_kind)
        target_uuid = parse_identifier(target_id, "target_id")
        vote = await self.vote_repository.find_by_voter_and_target(voter_id, kind, target_uuid)
        return vote.direction if vote else None

    async def get_user_votes(
        self, voter_id: UserId, target_kind: TargetKind, target_ids: list[UUID]
    ) -> dict[UUID, VoteDirection]:
        """Get a voter's votes on several targets of one kind.

        Args:
            voter_id: Voter ID
            target_kind: Kind of the targets
            target_ids: Targets to check

        Returns:
            Mapping of target ID to direction, for targets the voter voted on
        """
        if not target_ids:
            return {}

        # Batch query to fetch all votes at once (avoid N+1)
        votes = await self.vote_repository.find_by_voter_and_targets(
            voter_id, target_kind, target_ids
        )
        return {vote.target_id: vote.direction for vote in votes}

    async def purge_votes_by_voter(self, voter_id: UserId) -> int:
        """Remove all of a user's votes, keeping scores consistent.

        Returns:
            Number of votes removed
        """
        return await self.vote_ledger.purge_voter(voter_id)

    async def reconcile_scores(self) -> list[ScoreReconciliation]:
        """Recompute every stored score from the ledger.

        Each target is reconciled in its own atomic block so a long run does
        not hold locks on every row at once.

        Returns:
            Reconciliations where the stored score was wrong
        """
        with logfire.span("vote_service.reconcile_scores"):
            corrected: list[ScoreReconciliation] = []
            checked = 0
            for kind in TargetKind:
                for target_id in await self.votable_repository.list_ids(kind):
                    try:
                        async with self.transaction_manager.atomic():
                            result = await self.counter_maintainer.reconcile(kind, target_id)
                    except NotFoundError:
                        # Deleted since it was listed
                        continue
                    checked += 1
                    if result.corrected:
                        corrected.append(result)

            logfire.info(
                "Scores reconciled", checked=checked, corrected=len(corrected)
            )
            return corrected
