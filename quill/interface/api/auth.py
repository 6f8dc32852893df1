"""Bearer token handling for routes."""

from typing import Optional

from quill.domain.error import AuthenticationError
from quill.domain.service import IdentityService
from quill.domain.value import Principal


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an `Authorization: Bearer <token>` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def require_principal(
    identity_service: IdentityService, authorization: Optional[str]
) -> Principal:
    """Authenticate the request.

    Raises:
        AuthenticationError: If the header is missing or the token is invalid
    """
    return await identity_service.authenticate(bearer_token(authorization))


async def optional_principal(
    identity_service: IdentityService, authorization: Optional[str]
) -> Optional[Principal]:
    """Authenticate the request if it carries a usable token.

    Invalid or expired tokens are treated as anonymous.
    """
    token = bearer_token(authorization)
    if token is None:
        return None
    try:
        return await identity_service.authenticate(token)
    except AuthenticationError:
        return None
