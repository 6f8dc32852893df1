"""Get current user use case."""

from pydantic import BaseModel

from quill.application.usecase.auth.common import UserProfile, to_profile
from quill.domain.service import IdentityService
from quill.domain.value import Principal


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    principal: Principal


class GetCurrentUserUseCase:
    """Use case for loading the authenticated user's profile."""

    def __init__(self, identity_service: IdentityService) -> None:
        """Initialize get current user use case.

        Args:
            identity_service: Identity domain service
        """
        self.identity_service = identity_service

    async def execute(self, request: GetCurrentUserRequest) -> UserProfile:
        """Execute get current user flow.

        Args:
            request: Authenticated principal

        Returns:
            The principal's profile

        Raises:
            NotFoundError: If the user was deleted
        """
        user = await self.identity_service.get_user(request.principal.id)
        return to_profile(user)
