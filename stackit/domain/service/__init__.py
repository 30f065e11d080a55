"""Domain services."""

from .answer_service import AnswerService
from .base import Service
from .counter_maintainer import CounterMaintainer
from .jwt_service import JWTService
from .question_service import QuestionService
from .tag_service import TagService
from .user_service import UserService
from .vote_ledger import VoteLedger
from .vote_service import VoteService

__all__ = [
    "AnswerService",
    "CounterMaintainer",
    "JWTService",
    "QuestionService",
    "Service",
    "TagService",
    "UserService",
    "VoteLedger",
    "VoteService",
]
