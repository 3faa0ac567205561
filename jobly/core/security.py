"""
Security utilities for JWT bearer credentials.

Tokens are signed with HS256 using SECRET_KEY and carry two claims:
"username" and "isAdmin". Issuing tokens for real users happens outside
this service; create_access_token() exists for operators and tests.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from jobly.core.config import settings
from jobly.core.errors import UnauthorizedError


@dataclass(frozen=True)
class TokenClaims:
    """Already-authenticated request context extracted from a bearer token."""
    username: str
    is_admin: bool = False


class TokenVerifier:
    """Decodes and validates bearer tokens signed with a shared secret."""

    def __init__(self, secret_key: str, algorithm: str = "HS256"):
        self.secret_key = secret_key
        self.algorithm = algorithm

    def verify(self, token: str) -> TokenClaims:
        """
        Decode a JWT and return its claims.

        Raises:
            UnauthorizedError: If the token is invalid, expired or has no username
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            raise UnauthorizedError("Could not validate credentials")

        username = payload.get("username")
        if not username:
            raise UnauthorizedError("Could not validate credentials")

        return TokenClaims(username=username, is_admin=bool(payload.get("isAdmin", False)))


def create_access_token(
    username: str,
    is_admin: bool = False,
    expires_delta: Optional[timedelta] = None,
    secret_key: Optional[str] = None,
    algorithm: Optional[str] = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        username: Value of the "username" claim
        is_admin: Value of the "isAdmin" claim
        expires_delta: Optional expiration time delta (default: ACCESS_TOKEN_EXPIRE_MINUTES)
        secret_key: Signing key (default: settings.SECRET_KEY)
        algorithm: Signing algorithm (default: settings.ALGORITHM)

    Returns:
        Encoded JWT token as a string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "username": username,
        "isAdmin": is_admin,
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(
        to_encode,
        secret_key or settings.SECRET_KEY,
        algorithm=algorithm or settings.ALGORITHM,
    )
