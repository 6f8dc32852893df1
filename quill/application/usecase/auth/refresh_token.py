"""Refresh token use case."""

from typing import Optional

from pydantic import BaseModel

from quill.application.usecase.auth.common import AuthTokens
from quill.domain.service import IdentityService


class RefreshTokenRequest(BaseModel):
    """Refresh token request."""

    refresh_token: Optional[str] = None


class RefreshTokenUseCase:
    """Use case for rotating a refresh token."""

    def __init__(self, identity_service: IdentityService) -> None:
        self.identity_service = identity_service

    async def execute(self, request: RefreshTokenRequest) -> AuthTokens:
        """Exchange a refresh token for a new pair; the old one stops working.

        Raises:
            AuthenticationError: If the token is missing, revoked or expired
        """
        tokens = await self.identity_service.refresh(request.refresh_token)
        return AuthTokens(
            access_token=tokens.access_token, refresh_token=tokens.refresh_token
        )
