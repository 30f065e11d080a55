"""Tag domain service."""

import logfire

from stackit.domain.error import InvalidArgumentError
from stackit.domain.repository import QuestionRepository
from stackit.domain.value import TagName

from .base import Service

MAX_POPULAR_TAGS = 100


class TagService(Service):
    """Domain service for tag queries."""

    def __init__(self, question_repository: QuestionRepository) -> None:
        """Initialize tag service.

        Args:
            question_repository: Question repository (tags live on questions)
        """
        self.question_repository = question_repository

    async def popular_tags(self, limit: int = 20) -> list[tuple[TagName, int]]:
        """Most used tags with their question counts.

        Args:
            limit: Number of tags to return (1-100)

        Returns:
            (tag, count) pairs, most used first, ties broken by name

        Raises:
            InvalidArgumentError: If limit is out of range
        """
        if not 1 <= limit <= MAX_POPULAR_TAGS:
            raise InvalidArgumentError(
                f"limit must be between 1 and {MAX_POPULAR_TAGS}", field="limit"
            )
        with logfire.span("tag_service.popular_tags", limit=limit):
            counts = await self.question_repository.tag_counts(limit)
            logfire.info("Popular tags fetched", count=len(counts))
            return counts
