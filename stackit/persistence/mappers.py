"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM mapping.
"""

from typing import Any, Dict
from uuid import UUID

from stackit.domain.model import Answer, Question, User, Vote
from stackit.domain.value import (
    AnswerId,
    QuestionId,
    TagName,
    TargetKind,
    UserId,
    Username,
    VoteDirection,
    VoteId,
)


def _uuid(value: Any) -> UUID:
    return value if isinstance(value, UUID) else UUID(str(value))


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model."""
    return User(
        id=UserId(_uuid(row["id"])),
        username=Username(row["username"]),
        avatar_url=row.get("avatar_url"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return {
        "id": user.id,
        "username": user.username.root,
        "avatar_url": user.avatar_url,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def row_to_question(row: Dict[str, Any]) -> Question:
    """Convert database row to Question domain model."""
    accepted = row.get("accepted_answer_id")
    return Question(
        id=QuestionId(_uuid(row["id"])),
        title=row["title"],
        description=row["description"],
        author_id=UserId(_uuid(row["author_id"])),
        author_username=Username(row["author_username"]),
        tags=[TagName(tag) for tag in row["tags"] or []],
        score=row["score"],
        answer_count=row["answer_count"],
        accepted_answer_id=AnswerId(_uuid(accepted)) if accepted else None,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def question_to_dict(question: Question) -> Dict[str, Any]:
    """Convert Question domain model to database dict.

    Derived columns (score, answer_count, accepted_answer_id) are left out;
    they have their own atomic update paths.
    """
    return {
        "id": question.id,
        "title": question.title,
        "description": question.description,
        "author_id": question.author_id,
        "author_username": question.author_username.root,
        "tags": [tag.root for tag in question.tags],
        "created_at": question.created_at,
        "updated_at": question.updated_at,
    }


def row_to_answer(row: Dict[str, Any]) -> Answer:
    """Convert database row to Answer domain model."""
    return Answer(
        id=AnswerId(_uuid(row["id"])),
        question_id=QuestionId(_uuid(row["question_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        author_username=Username(row["author_username"]),
        content=row["content"],
        score=row["score"],
        is_accepted=row["is_accepted"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def answer_to_dict(answer: Answer) -> Dict[str, Any]:
    """Convert Answer domain model to database dict (score and acceptance excluded)."""
    return {
        "id": answer.id,
        "question_id": answer.question_id,
        "author_id": answer.author_id,
        "author_username": answer.author_username.root,
        "content": answer.content,
        "created_at": answer.created_at,
        "updated_at": answer.updated_at,
    }


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        id=VoteId(_uuid(row["id"])),
        voter_id=UserId(_uuid(row["voter_id"])),
        target_kind=TargetKind(row["target_kind"]),
        target_id=_uuid(row["target_id"]),
        direction=VoteDirection(row["direction"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    return {
        "id": vote.id,
        "voter_id": vote.voter_id,
        "target_kind": vote.target_kind.value,
        "target_id": vote.target_id,
        "direction": vote.direction.value,
        "created_at": vote.created_at,
        "updated_at": vote.updated_at,
    }
