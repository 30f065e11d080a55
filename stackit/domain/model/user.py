"""User profile.

Identity lives with the external identity provider; a profile is the local
record of a user (public username and avatar) keyed by the provider's id.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from stackit.domain.model.common import DomainModel
from stackit.domain.value import UserId, Username


class User(DomainModel):
    """User profile aggregate root."""

    id: UserId
    username: Username
    avatar_url: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
