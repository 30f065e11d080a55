"""Domain value objects for StackIt."""

from stackit.domain.value.identifiers import AnswerId, QuestionId, UserId, VoteId
from stackit.domain.value.types import (
    TagName,
    TargetKind,
    Username,
    VotableRef,
    VoteAction,
    VoteDirection,
    VoteState,
    VoteTally,
    parse_identifier,
)

__all__ = [
    # Identifiers
    "UserId",
    "QuestionId",
    "AnswerId",
    "VoteId",
    # Types
    "TagName",
    "TargetKind",
    "Username",
    "VotableRef",
    "VoteAction",
    "VoteDirection",
    "VoteState",
    "VoteTally",
    "parse_identifier",
]
