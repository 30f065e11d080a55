"""SQLAlchemy Core table definitions.

Rows are mapped to domain models by hand (see mappers.py). The schema itself
is owned by the Alembic migrations; these definitions must stay in step.

Profiles are never removed by cascade: the foreign keys from content and
votes to `users` restrict deletion, so a user's votes can only disappear
through the vote ledger, which keeps scores in step.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()


def _timestamps() -> list[Column]:
    return [
        Column("created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"),
        Column("updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"),
    ]


def _user_ref(name: str) -> Column:
    return Column(name, UUID, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)


users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True),  # Identity provider user id
    Column("username", String(50), nullable=False),
    Column("avatar_url", Text, nullable=True),
    *_timestamps(),
    UniqueConstraint("username", name="uq_users_username"),
)

questions_table = Table(
    "questions",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("title", String(300), nullable=False),
    Column("description", Text, nullable=False),
    _user_ref("author_id"),
    Column("author_username", String(50), nullable=False),  # Denormalized
    Column("tags", postgresql.ARRAY(String(30)), nullable=False, server_default="{}"),
    Column("score", Integer, nullable=False, server_default="0"),
    Column("answer_count", Integer, nullable=False, server_default="0"),
    Column("accepted_answer_id", UUID, nullable=True),
    *_timestamps(),
    CheckConstraint("answer_count >= 0", name="ck_questions_answer_count"),
)

Index("idx_questions_created_at", questions_table.c.created_at.desc())
Index(
    "idx_questions_score",
    questions_table.c.score.desc(),
    questions_table.c.created_at.desc(),
)
Index("idx_questions_author_id", questions_table.c.author_id)
Index("idx_questions_tags", questions_table.c.tags, postgresql_using="gin")

answers_table = Table(
    "answers",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "question_id",
        UUID,
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
    ),
    _user_ref("author_id"),
    Column("author_username", String(50), nullable=False),  # Denormalized
    Column("content", Text, nullable=False),
    Column("score", Integer, nullable=False, server_default="0"),
    Column("is_accepted", Boolean, nullable=False, server_default="false"),
    *_timestamps(),
)

Index("idx_answers_question_id", answers_table.c.question_id)
Index("idx_answers_author_id", answers_table.c.author_id)

# The vote ledger: one row per (voter, target)
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    _user_ref("voter_id"),
    Column(
        "target_kind",
        Enum("question", "answer", name="vote_target_kind", create_type=False),
        nullable=False,
    ),
    Column("target_id", UUID, nullable=False),
    Column(
        "direction",
        Enum("upvote", "downvote", name="vote_direction", create_type=False),
        nullable=False,
    ),
    *_timestamps(),
    UniqueConstraint("voter_id", "target_id", "target_kind", name="uq_votes_voter_target"),
)

Index("idx_votes_voter_id", votes_table.c.voter_id)
Index("idx_votes_target", votes_table.c.target_kind, votes_table.c.target_id)
