"""Unit tests for TagService."""

import pytest

from stackit.domain.error import InvalidArgumentError
from stackit.domain.service import TagService
from tests.conftest import make_question, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestPopularTags:
    """Tests for popular_tags method."""

    @pytest.mark.asyncio
    async def test_most_used_first_ties_by_name(self, unit_env):
        tag_service = await unit_env.get(TagService)
        author = await make_user(unit_env)
        await make_question(unit_env, author, tags=["python", "django"])
        await make_question(unit_env, author, tags=["python", "asyncio"])
        await make_question(unit_env, author, tags=["rust"])

        tags = await tag_service.popular_tags(limit=3)

        assert [(tag.root, count) for tag, count in tags] == [
            ("python", 2),
            ("asyncio", 1),
            ("django", 1),
        ]

    @pytest.mark.asyncio
    async def test_no_questions_no_tags(self, unit_env):
        tag_service = await unit_env.get(TagService)

        assert await tag_service.popular_tags() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [0, 101])
    async def test_limit_out_of_range_is_rejected(self, unit_env, limit):
        tag_service = await unit_env.get(TagService)

        with pytest.raises(InvalidArgumentError):
            await tag_service.popular_tags(limit=limit)
