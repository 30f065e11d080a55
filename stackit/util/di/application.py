"""Application layer DI providers."""

from dishka import Scope, provide

from stackit.application.usecase.answer import (
    AcceptAnswerUseCase,
    CreateAnswerUseCase,
    DeleteAnswerUseCase,
    UpdateAnswerUseCase,
)
from stackit.application.usecase.auth import GetCurrentUserUseCase
from stackit.application.usecase.question import (
    CreateQuestionUseCase,
    DeleteQuestionUseCase,
    GetQuestionUseCase,
    ListQuestionsUseCase,
    UpdateQuestionUseCase,
)
from stackit.application.usecase.tag import ListPopularTagsUseCase
from stackit.application.usecase.user import (
    GetUserProfileUseCase,
    UpdateUserProfileUseCase,
)
from stackit.application.usecase.vote import (
    GetUserVoteUseCase,
    PurgeUserVotesUseCase,
    ReconcileScoresUseCase,
    SubmitVoteUseCase,
)
from stackit.domain.service import (
    AnswerService,
    JWTService,
    QuestionService,
    TagService,
    UserService,
    VoteService,
)
from stackit.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self, jwt_service: JWTService, user_service: UserService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(jwt_service=jwt_service, user_service=user_service)

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_get_user_profile_use_case(
        self, user_service: UserService
    ) -> GetUserProfileUseCase:
        """Provide get user profile use case."""
        return GetUserProfileUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_update_user_profile_use_case(
        self, user_service: UserService
    ) -> UpdateUserProfileUseCase:
        """Provide update user profile use case."""
        return UpdateUserProfileUseCase(user_service=user_service)

    # Question use cases
    @provide(scope=Scope.REQUEST)
    def get_create_question_use_case(
        self, question_service: QuestionService, user_service: UserService
    ) -> CreateQuestionUseCase:
        """Provide create question use case."""
        return CreateQuestionUseCase(
            question_service=question_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_get_question_use_case(
        self,
        question_service: QuestionService,
        answer_service: AnswerService,
        vote_service: VoteService,
    ) -> GetQuestionUseCase:
        """Provide get question use case."""
        return GetQuestionUseCase(
            question_service=question_service,
            answer_service=answer_service,
            vote_service=vote_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_questions_use_case(
        self, question_service: QuestionService, vote_service: VoteService
    ) -> ListQuestionsUseCase:
        """Provide list questions use case."""
        return ListQuestionsUseCase(
            question_service=question_service, vote_service=vote_service
        )

    @provide(scope=Scope.REQUEST)
    def get_update_question_use_case(
        self, question_service: QuestionService
    ) -> UpdateQuestionUseCase:
        """Provide update question use case."""
        return UpdateQuestionUseCase(question_service=question_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_question_use_case(
        self, question_service: QuestionService
    ) -> DeleteQuestionUseCase:
        """Provide delete question use case."""
        return DeleteQuestionUseCase(question_service=question_service)

    # Answer use cases
    @provide(scope=Scope.REQUEST)
    def get_create_answer_use_case(
        self, answer_service: AnswerService, user_service: UserService
    ) -> CreateAnswerUseCase:
        """Provide create answer use case."""
        return CreateAnswerUseCase(answer_service=answer_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_update_answer_use_case(
        self, answer_service: AnswerService
    ) -> UpdateAnswerUseCase:
        """Provide update answer use case."""
        return UpdateAnswerUseCase(answer_service=answer_service)

    @provide(scope=Scope.REQUEST)
    def get_accept_answer_use_case(
        self, answer_service: AnswerService
    ) -> AcceptAnswerUseCase:
        """Provide accept answer use case."""
        return AcceptAnswerUseCase(answer_service=answer_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_answer_use_case(
        self, answer_service: AnswerService
    ) -> DeleteAnswerUseCase:
        """Provide delete answer use case."""
        return DeleteAnswerUseCase(answer_service=answer_service)

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_submit_vote_use_case(self, vote_service: VoteService) -> SubmitVoteUseCase:
        """Provide submit vote use case."""
        return SubmitVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_get_user_vote_use_case(self, vote_service: VoteService) -> GetUserVoteUseCase:
        """Provide get user vote use case."""
        return GetUserVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_purge_user_votes_use_case(
        self, vote_service: VoteService
    ) -> PurgeUserVotesUseCase:
        """Provide purge user votes use case."""
        return PurgeUserVotesUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_reconcile_scores_use_case(
        self, vote_service: VoteService
    ) -> ReconcileScoresUseCase:
        """Provide reconcile scores use case."""
        return ReconcileScoresUseCase(vote_service=vote_service)

    # Tag use cases
    @provide(scope=Scope.REQUEST)
    def get_list_popular_tags_use_case(
        self, tag_service: TagService
    ) -> ListPopularTagsUseCase:
        """Provide list popular tags use case."""
        return ListPopularTagsUseCase(tag_service=tag_service)
