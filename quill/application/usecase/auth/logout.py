"""Logout use case."""

from typing import Optional

from pydantic import BaseModel

from quill.domain.service import IdentityService


class LogoutRequest(BaseModel):
    """Logout request."""

    refresh_token: Optional[str] = None


class LogoutUseCase:
    """Use case for revoking a refresh token."""

    def __init__(self, identity_service: IdentityService) -> None:
        self.identity_service = identity_service

    async def execute(self, request: LogoutRequest) -> None:
        await self.identity_service.logout(request.refresh_token)
