"""Domain layer DI providers."""

from dishka import Scope, provide

from stackit.config import AuthSettings, PaginationSettings, VotingSettings
from stackit.domain.repository import (
    AnswerRepository,
    QuestionRepository,
    TransactionManager,
    UserRepository,
    VotableRepository,
    VoteRepository,
)
from stackit.domain.service import (
    AnswerService,
    CounterMaintainer,
    JWTService,
    QuestionService,
    TagService,
    UserService,
    VoteLedger,
    VoteService,
)
from stackit.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances sharing one transaction manager.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(
        self,
        user_repository: UserRepository,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        transaction_manager: TransactionManager,
    ) -> UserService:
        """Provide user domain service."""
        return UserService(
            user_repository=user_repository,
            question_repository=question_repository,
            answer_repository=answer_repository,
            transaction_manager=transaction_manager,
        )

    @provide
    def get_counter_maintainer(
        self, votable_repository: VotableRepository, vote_repository: VoteRepository
    ) -> CounterMaintainer:
        """Provide counter maintainer."""
        return CounterMaintainer(
            votable_repository=votable_repository, vote_repository=vote_repository
        )

    @provide
    def get_vote_ledger(
        self,
        vote_repository: VoteRepository,
        counter_maintainer: CounterMaintainer,
        transaction_manager: TransactionManager,
    ) -> VoteLedger:
        """Provide vote ledger."""
        return VoteLedger(
            vote_repository=vote_repository,
            counter_maintainer=counter_maintainer,
            transaction_manager=transaction_manager,
        )

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        votable_repository: VotableRepository,
        vote_ledger: VoteLedger,
        counter_maintainer: CounterMaintainer,
        transaction_manager: TransactionManager,
        voting_settings: VotingSettings,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            votable_repository=votable_repository,
            vote_ledger=vote_ledger,
            counter_maintainer=counter_maintainer,
            transaction_manager=transaction_manager,
            voting_settings=voting_settings,
        )

    @provide
    def get_question_service(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        votable_repository: VotableRepository,
        vote_ledger: VoteLedger,
        transaction_manager: TransactionManager,
        pagination_settings: PaginationSettings,
    ) -> QuestionService:
        """Provide question domain service."""
        return QuestionService(
            question_repository=question_repository,
            answer_repository=answer_repository,
            votable_repository=votable_repository,
            vote_ledger=vote_ledger,
            transaction_manager=transaction_manager,
            pagination_settings=pagination_settings,
        )

    @provide
    def get_answer_service(
        self,
        answer_repository: AnswerRepository,
        question_repository: QuestionRepository,
        votable_repository: VotableRepository,
        vote_ledger: VoteLedger,
        transaction_manager: TransactionManager,
    ) -> AnswerService:
        """Provide answer domain service."""
        return AnswerService(
            answer_repository=answer_repository,
            question_repository=question_repository,
            votable_repository=votable_repository,
            vote_ledger=vote_ledger,
            transaction_manager=transaction_manager,
        )

    @provide
    def get_tag_service(self, question_repository: QuestionRepository) -> TagService:
        """Provide tag domain service."""
        return TagService(question_repository=question_repository)
