"""Answer entity."""

from datetime import datetime

from pydantic import Field

from stackit.domain.model.common import DomainModel
from stackit.domain.value import AnswerId, QuestionId, UserId, Username


class Answer(DomainModel):
    """Answer to a question.

    Business rules:
    - At most one accepted answer per question, chosen by the question's author
    - `score` is derived from the vote ledger
    """

    id: AnswerId
    question_id: QuestionId
    author_id: UserId
    author_username: Username
    content: str = Field(min_length=1, max_length=20000)
    score: int = 0
    is_accepted: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
