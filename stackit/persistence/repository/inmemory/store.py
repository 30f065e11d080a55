"""Shared in-memory store backing the in-memory repositories."""

import asyncio
from contextvars import ContextVar
from typing import Any
from uuid import UUID

from stackit.domain.model import Answer, Question, User, Vote

_TABLES = ("users", "questions", "answers", "votes")


class InMemoryStore:
    """Tables held as dicts keyed by entity ID.

    One store is shared by every repository of a container so that writes
    made through one repository are visible to the others, as they are in
    the database. Entities are immutable, so a snapshot only needs to copy
    the dicts.
    """

    def __init__(self) -> None:
        self.users: dict[UUID, User] = {}
        self.questions: dict[UUID, Question] = {}
        self.answers: dict[UUID, Answer] = {}
        self.votes: dict[UUID, Vote] = {}
        self.lock = asyncio.Lock()
        self.active: ContextVar[bool] = ContextVar(f"inmemory_store_{id(self)}", default=False)

    def snapshot(self) -> dict[str, dict[UUID, Any]]:
        """Copy every table."""
        return {name: dict(getattr(self, name)) for name in _TABLES}

    def restore(self, snapshot: dict[str, dict[UUID, Any]]) -> None:
        """Put back the tables captured by `snapshot`."""
        for name, rows in snapshot.items():
            setattr(self, name, rows)
