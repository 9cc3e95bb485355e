"""
API Dependencies.

Shared dependencies for API routes (authentication, service access).
"""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request

from src.matching.errors import AuthenticationFailedError
from src.matching.service import MatchingService
from src.modules.users import IdentityProvider


def parse_bearer(authorization: str | None) -> str:
    """
    Extract the token from an Authorization header.

    Args:
        authorization: Raw header value

    Returns:
        Token string

    Raises:
        HTTPException: If the header is missing or malformed
    """
    if not authorization:
        raise HTTPException(
            status_code=401,
            detail="No authorization header provided",
            headers={"WWW-Authenticate": "Bearer"},
        )

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer" or parts[1] in ("null", "undefined"):
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization header format. Expected: Bearer <token>",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return parts[1]


def get_identity_provider(request: Request) -> IdentityProvider:
    """Get the identity provider built at startup."""
    return request.app.state.identity


def get_matching_service(request: Request) -> MatchingService:
    """Get the matching service built at startup."""
    return request.app.state.matching


async def get_current_uid(
    identity: Annotated[IdentityProvider, Depends(get_identity_provider)],
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """
    Get current authenticated user ID from JWT token.

    Args:
        identity: Identity provider
        authorization: Authorization header (Bearer token)

    Returns:
        Authenticated user ID

    Raises:
        HTTPException: If not authenticated
    """
    token = parse_bearer(authorization)
    try:
        return identity.verify(token)
    except AuthenticationFailedError as e:
        raise HTTPException(
            status_code=401,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from None


# Type aliases for dependency injection
CurrentUid = Annotated[str, Depends(get_current_uid)]
Matching = Annotated[MatchingService, Depends(get_matching_service)]
