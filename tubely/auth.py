"""
Bearer token handling

Access tokens are HS256 JWTs whose subject is the user id.
"""
from datetime import datetime, timedelta, timezone
from typing import Mapping
from uuid import UUID

import jwt

from tubely.errors import UnauthorizedError

TOKEN_ISSUER = "tubely-access"
TOKEN_ALGORITHM = "HS256"


def get_bearer_token(headers: Mapping[str, str]) -> str:
    """
    Extract the token from an ``Authorization: Bearer <token>`` header.

    Raises:
        UnauthorizedError: header missing or not a bearer credential
    """
    auth_header = headers.get("authorization")
    if not auth_header:
        raise UnauthorizedError("Missing Authorization header")

    scheme, _, token = auth_header.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise UnauthorizedError("Malformed Authorization header")

    return token


def validate_jwt(token: str, secret: str) -> UUID:
    """
    Verify a token and return the user id it was issued for.

    Raises:
        UnauthorizedError: bad signature, expired, wrong issuer or bad subject
    """
    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=[TOKEN_ALGORITHM],
            issuer=TOKEN_ISSUER,
            options={"require": ["exp", "sub", "iss"]},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise UnauthorizedError(f"Invalid token: {e}")

    try:
        return UUID(claims["sub"])
    except (TypeError, ValueError):
        raise UnauthorizedError("Invalid user ID in token")


def make_jwt(user_id: UUID, secret: str, expires_in: timedelta = timedelta(hours=1)) -> str:
    """Issue an access token for ``user_id``."""
    now = datetime.now(timezone.utc)
    claims = {
        "iss": TOKEN_ISSUER,
        "sub": str(user_id),
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(claims, secret, algorithm=TOKEN_ALGORITHM)
