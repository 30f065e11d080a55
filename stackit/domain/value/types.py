"""Domain value objects for StackIt.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and the parsing of untrusted input.
"""

import re
from enum import Enum
from uuid import UUID

from pydantic import field_validator

from stackit.domain.error import InvalidArgumentError
from stackit.domain.value.common import RootValueObject, ValueObject


class VoteDirection(str, Enum):
    """Direction of a vote."""

    UP = "upvote"
    DOWN = "downvote"

    @property
    def opposite(self) -> "VoteDirection":
        return VoteDirection.DOWN if self is VoteDirection.UP else VoteDirection.UP

    @classmethod
    def parse(cls, value: "VoteDirection | str | None") -> "VoteDirection":
        """Parse a vote direction from caller input.

        Accepts the canonical values plus the short aliases `up` and `down`.

        Raises:
            InvalidArgumentError: If the value names no direction
        """
        if isinstance(value, VoteDirection):
            return value
        normalized = value.strip().lower() if isinstance(value, str) else ""
        direction = _DIRECTION_ALIASES.get(normalized)
        if direction is None:
            raise InvalidArgumentError(
                "Invalid vote type, expected 'upvote' or 'downvote'", field="vote_type"
            )
        return direction


_DIRECTION_ALIASES = {
    "upvote": VoteDirection.UP,
    "up": VoteDirection.UP,
    "downvote": VoteDirection.DOWN,
    "down": VoteDirection.DOWN,
}


class TargetKind(str, Enum):
    """Kind of content a vote can target."""

    QUESTION = "question"
    ANSWER = "answer"

    @classmethod
    def parse(cls, value: "TargetKind | str | None") -> "TargetKind":
        """Parse a target kind from caller input.

        Raises:
            InvalidArgumentError: If the value is not a votable kind
        """
        if isinstance(value, TargetKind):
            return value
        try:
            return cls(value.strip().lower() if isinstance(value, str) else "")
        except ValueError:
            raise InvalidArgumentError(
                "Invalid target type, expected 'question' or 'answer'",
                field="target_type",
            )


class VoteState(str, Enum):
    """A voter's effective vote on a target."""

    NONE = "none"
    UPVOTE = "upvote"
    DOWNVOTE = "downvote"

    @classmethod
    def of(cls, direction: VoteDirection | None) -> "VoteState":
        if direction is None:
            return cls.NONE
        return cls(direction.value)


class VoteAction(str, Enum):
    """Ledger mutation a vote intent resolved to."""

    CREATED = "created"
    RETRACTED = "retracted"
    CHANGED = "changed"


class TagName(RootValueObject[str]):
    """Tag name for categorizing questions.

    Normalized to lowercase. 1-30 characters, starting with a letter or
    digit; `+`, `#`, `.` and `-` are allowed after that so names like
    'c++', 'c#' and 'node.js' work.
    """

    @field_validator("root", mode="before")
    @classmethod
    def normalize(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("root")
    @classmethod
    def validate_tag_name(cls, v: str) -> str:
        """Validate tag name format."""
        if not re.match(r"^[a-z0-9][a-z0-9+#.-]{0,29}$", v):
            raise ValueError(
                "Tag name must be 1-30 characters: letters, digits, '+', '#', '.' or '-'"
            )
        return v


class Username(RootValueObject[str]):
    """Public username of a profile.

    3-50 characters: letters, digits, underscore, dot or hyphen.
    """

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username format."""
        if not re.match(r"^[A-Za-z0-9_.-]{3,50}$", v):
            raise ValueError(
                "Username must be 3-50 characters: letters, digits, '_', '.' or '-'"
            )
        return v


class VotableRef(ValueObject):
    """A locked votable row: what a vote needs to know about its target."""

    kind: TargetKind
    id: UUID
    author_id: UUID
    score: int


class VoteTally(ValueObject):
    """Vote counts for one target, computed from the ledger."""

    up: int = 0
    down: int = 0

    @property
    def score(self) -> int:
        return self.up - self.down


def parse_identifier(value: UUID | str | None, field: str) -> UUID:
    """Parse an entity identifier from caller input.

    Args:
        value: UUID or its string form
        field: Argument name reported on failure

    Returns:
        Parsed UUID

    Raises:
        InvalidArgumentError: If the value is not a UUID
    """
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value).strip())
    except (TypeError, ValueError, AttributeError):
        raise InvalidArgumentError(f"Invalid {field}: expected a UUID", field=field)
