"""Repository interfaces for StackIt domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from stackit.domain.repository.answer import AnswerRepository
from stackit.domain.repository.question import QuestionFilter, QuestionRepository
from stackit.domain.repository.transaction import TransactionManager
from stackit.domain.repository.user import UserRepository
from stackit.domain.repository.votable import VotableRepository
from stackit.domain.repository.vote import VoteRepository

__all__ = [
    "UserRepository",
    "QuestionFilter",
    "QuestionRepository",
    "AnswerRepository",
    "VoteRepository",
    "VotableRepository",
    "TransactionManager",
]
