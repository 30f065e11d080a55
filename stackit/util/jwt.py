"""JWT token utilities.

Tokens follow the identity provider's (Supabase) claim layout: `sub` is the
user id, `user_metadata.username` the username chosen at sign-up, and `aud`
is "authenticated" for signed-in users.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from pydantic import BaseModel

from stackit.config import AuthSettings


class TokenPayload(BaseModel):
    """JWT token payload."""

    sub: str
    exp: datetime
    email: str | None = None
    role: str | None = None
    user_metadata: dict[str, Any] = {}

    @property
    def user_id(self) -> str:
        return self.sub

    @property
    def username(self) -> str | None:
        value = self.user_metadata.get("username")
        return value if isinstance(value, str) and value else None


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    user_id: str,
    settings: AuthSettings,
    username: str | None = None,
    email: str | None = None,
) -> str:
    """Create a JWT token shaped like the identity provider's.

    Used by local tooling and tests; production tokens come from the
    identity provider.

    Args:
        user_id: User ID (`sub`)
        settings: Authentication settings
        username: Username placed in `user_metadata`
        email: Email claim

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days)

    payload: dict[str, Any] = {
        "sub": user_id,
        "exp": expiry,
        "role": "authenticated",
        "user_metadata": {"username": username} if username else {},
    }
    if settings.jwt_audience:
        payload["aud"] = settings.jwt_audience
    if email:
        payload["email"] = email

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options={
                "require": ["sub", "exp"],
                "verify_aud": settings.jwt_audience is not None,
            },
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")
    except ValueError:
        # Signature checked out but the claims have the wrong shape
        raise JWTError("Invalid token payload")
