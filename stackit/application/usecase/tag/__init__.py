"""Tag use cases."""

from .list_popular_tags import (
    ListPopularTagsRequest,
    ListPopularTagsResponse,
    ListPopularTagsUseCase,
    TagItem,
)

__all__ = [
    "ListPopularTagsRequest",
    "ListPopularTagsResponse",
    "ListPopularTagsUseCase",
    "TagItem",
]
