"""Unit tests for caller identity resolution."""

from uuid import uuid4

import pytest

from stackit.application.usecase.auth import GetCurrentUserUseCase
from stackit.config import AuthSettings
from stackit.domain.error import UnauthenticatedError
from stackit.interface.api.identity import extract_token, optional_user, require_user
from stackit.interface.error import MissingCredentialsError
from stackit.util.jwt import create_token
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestExtractToken:
    def test_bearer_header(self):
        assert extract_token("Bearer abc.def.ghi", None) == "abc.def.ghi"

    def test_scheme_is_case_insensitive(self):
        assert extract_token("bearer abc", None) == "abc"

    def test_header_wins_over_cookie(self):
        assert extract_token("Bearer from-header", "from-cookie") == "from-header"

    def test_cookie_fallback(self):
        assert extract_token(None, "from-cookie") == "from-cookie"

    def test_no_credentials(self):
        with pytest.raises(MissingCredentialsError):
            extract_token(None, None)

    @pytest.mark.parametrize("header", ["Basic dXNlcjpwYXNz", "Bearer", "Bearer   "])
    def test_malformed_header(self, header):
        with pytest.raises(UnauthenticatedError):
            extract_token(header, None)


class TestResolveUser:
    @pytest.mark.asyncio
    async def test_require_user_rejects_anonymous(self, unit_env):
        use_case = await unit_env.get(GetCurrentUserUseCase)

        with pytest.raises(UnauthenticatedError):
            await require_user(use_case, None, None)

    @pytest.mark.asyncio
    async def test_optional_user_allows_anonymous(self, unit_env):
        use_case = await unit_env.get(GetCurrentUserUseCase)

        assert await optional_user(use_case, None, None) is None

    @pytest.mark.asyncio
    async def test_optional_user_still_rejects_bad_tokens(self, unit_env):
        use_case = await unit_env.get(GetCurrentUserUseCase)

        with pytest.raises(UnauthenticatedError):
            await optional_user(use_case, "Bearer garbage", None)

    @pytest.mark.asyncio
    async def test_cookie_identifies_caller(self, unit_env):
        use_case = await unit_env.get(GetCurrentUserUseCase)
        auth_settings = await unit_env.get(AuthSettings)
        user_id = str(uuid4())
        token = create_token(user_id, auth_settings, username="cookie_user")

        user = await require_user(use_case, None, token)

        assert user.user_id == user_id
        assert user.username.root == "cookie_user"
