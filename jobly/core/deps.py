"""
FastAPI dependencies for authentication and authorization.

These dependencies are used to protect mutation endpoints. The token
verifier is read from the application object, so each app built by
create_app() can carry its own.
"""

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional

from jobly.core.errors import UnauthorizedError
from jobly.core.security import TokenClaims

# HTTP Bearer token scheme (Authorization: Bearer <token>)
# auto_error is off so a missing header is reported as 401, not 403
security = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> TokenClaims:
    """
    Ensure the request carries a valid bearer token.

    Raises:
        UnauthorizedError: If the token is missing or invalid
    """
    if credentials is None:
        raise UnauthorizedError("Authentication required")

    return request.app.state.token_verifier.verify(credentials.credentials)


async def get_admin_user(
    user: TokenClaims = Depends(get_current_user),
) -> TokenClaims:
    """
    Ensure the current user carries the admin claim.

    Raises:
        UnauthorizedError: If the user is not an admin
    """
    if not user.is_admin:
        raise UnauthorizedError("Admin privileges required")

    return user
