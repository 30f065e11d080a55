"""List popular tags use case."""

from pydantic import BaseModel

from stackit.domain.service import TagService


class TagItem(BaseModel):
    """Tag with its question count."""

    name: str
    count: int


class ListPopularTagsRequest(BaseModel):
    """List popular tags request."""

    limit: int = 20


class ListPopularTagsResponse(BaseModel):
    """Popular tags response."""

    tags: list[TagItem]


class ListPopularTagsUseCase:
    """Use case for listing the most used tags."""

    def __init__(self, tag_service: TagService) -> None:
        """Initialize list popular tags use case.

        Args:
            tag_service: Tag domain service
        """
        self.tag_service = tag_service

    async def execute(self, request: ListPopularTagsRequest) -> ListPopularTagsResponse:
        """Execute list popular tags flow.

        Raises:
            InvalidArgumentError: If limit is out of range
        """
        counts = await self.tag_service.popular_tags(request.limit)
        return ListPopularTagsResponse(
            tags=[TagItem(name=tag.root, count=count) for tag, count in counts]
        )
