"""Question aggregate root."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from stackit.domain.model.common import DomainModel
from stackit.domain.value import AnswerId, QuestionId, TagName, UserId, Username


class Question(DomainModel):
    """Question aggregate root.

    `score` is derived from the vote ledger and `answer_count` from the
    answers table; both are maintained with atomic increments and never
    written through `QuestionRepository.save`.
    """

    id: QuestionId
    title: str = Field(min_length=1, max_length=300)
    description: str = Field(min_length=1, max_length=20000)
    author_id: UserId
    author_username: Username
    tags: list[TagName] = Field(min_length=1, max_length=5)
    score: int = 0
    answer_count: int = Field(default=0, ge=0)
    accepted_answer_id: Optional[AnswerId] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
