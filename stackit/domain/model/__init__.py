"""Domain model entities for StackIt."""

from stackit.domain.model.answer import Answer
from stackit.domain.model.question import Question
from stackit.domain.model.user import User
from stackit.domain.model.vote import ScoreReconciliation, Vote, VoteOutcome

__all__ = [
    "User",
    "Question",
    "Answer",
    "Vote",
    "VoteOutcome",
    "ScoreReconciliation",
]
