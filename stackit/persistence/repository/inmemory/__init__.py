"""In-memory repository implementations for testing."""

from .answer import InMemoryAnswerRepository
from .question import InMemoryQuestionRepository
from .store import InMemoryStore
from .transaction import InMemoryTransactionManager
from .user import InMemoryUserRepository
from .votable import InMemoryVotableRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryAnswerRepository",
    "InMemoryQuestionRepository",
    "InMemoryStore",
    "InMemoryTransactionManager",
    "InMemoryUserRepository",
    "InMemoryVotableRepository",
    "InMemoryVoteRepository",
]
