"""Tag routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from stackit.application.usecase.tag import (
    ListPopularTagsRequest,
    ListPopularTagsResponse,
    ListPopularTagsUseCase,
)

router = APIRouter(
    prefix="/tags",
    tags=["tags"],
    route_class=DishkaRoute,
)


@router.get(
    "/popular",
    response_model=ListPopularTagsResponse,
    summary="List the most used tags",
    description="Get tag names with the number of questions using them, most used first.",
)
async def list_popular_tags(
    use_case: FromDishka[ListPopularTagsUseCase],
    limit: int = 20,
) -> ListPopularTagsResponse:
    """List the most used tags.

    Args:
        use_case: List popular tags use case (injected)
        limit: Maximum number of tags to return (1-100)

    Example:
        GET /tags/popular?limit=10
    """
    with logfire.span("api.list_popular_tags", limit=limit):
        return await use_case.execute(ListPopularTagsRequest(limit=limit))
