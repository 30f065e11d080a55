"""Caller identity resolution for routes.

Identity comes from a bearer token in the `Authorization` header or, for the
browser client, the `auth_token` cookie. The header wins when both are sent.
"""

from stackit.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
)
from stackit.domain.error import UnauthenticatedError
from stackit.interface.error import MissingCredentialsError


def extract_token(authorization: str | None, auth_token: str | None) -> str:
    """Pick the caller's token from the request.

    Args:
        authorization: `Authorization` header value
        auth_token: `auth_token` cookie value

    Returns:
        The raw JWT

    Raises:
        MissingCredentialsError: If neither carries a token
        UnauthenticatedError: If the header is not a bearer token
    """
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise UnauthenticatedError("Expected a Bearer token")
        return token.strip()
    if auth_token:
        return auth_token
    raise MissingCredentialsError()


async def require_user(
    use_case: GetCurrentUserUseCase,
    authorization: str | None,
    auth_token: str | None,
) -> GetCurrentUserResponse:
    """Resolve the authenticated caller.

    Raises:
        UnauthenticatedError: If no valid token was supplied
    """
    try:
        token = extract_token(authorization, auth_token)
    except MissingCredentialsError:
        raise UnauthenticatedError("Authentication required")
    return await use_case.execute(GetCurrentUserRequest(token=token))


async def optional_user(
    use_case: GetCurrentUserUseCase,
    authorization: str | None,
    auth_token: str | None,
) -> GetCurrentUserResponse | None:
    """Resolve the caller if credentials were sent.

    Returns:
        The caller, or None for anonymous requests

    Raises:
        UnauthenticatedError: If credentials were sent but are invalid
    """
    try:
        token = extract_token(authorization, auth_token)
    except MissingCredentialsError:
        return None
    return await use_case.execute(GetCurrentUserRequest(token=token))
