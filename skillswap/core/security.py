"""
Bearer token verification.

Tokens are HS256 JWTs whose "sub" claim carries the user id. Issuance
belongs to the identity provider; create_access_token exists for
tooling and tests.

Dependencies: PyJWT, skillswap.configs
System role: Shared identity check for HTTP and WebSocket callers
"""

from datetime import datetime, timedelta, timezone

import jwt

from skillswap.configs import get_settings
from skillswap.core.exceptions import AuthenticationError


def create_access_token(user_id: int, expires_in: timedelta | None = None) -> str:
    """
    Sign an access token for a user.

    Args:
        user_id: Subject user id
        expires_in: Lifetime override (defaults to AUTH_ACCESS_TOKEN_TTL_MINUTES)

    Returns:
        str: Encoded JWT
    """
    auth = get_settings().auth
    lifetime = expires_in or timedelta(minutes=auth.access_token_ttl_minutes)
    now = datetime.now(timezone.utc)
    payload = {"sub": str(user_id), "iat": now, "exp": now + lifetime}
    return jwt.encode(payload, auth.jwt_secret, algorithm=auth.jwt_algorithm)


def decode_access_token(token: str) -> int:
    """
    Verify a token and return its user id.

    Args:
        token: Encoded JWT

    Returns:
        int: User id from the "sub" claim

    Raises:
        AuthenticationError: If the token is expired, tampered or lacks a numeric subject
    """
    auth = get_settings().auth
    try:
        payload = jwt.decode(
            token,
            auth.jwt_secret,
            algorithms=[auth.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise AuthenticationError("Invalid token", {"reason": str(e)})

    try:
        return int(payload["sub"])
    except (TypeError, ValueError):
        raise AuthenticationError("Token subject is not a user id")
