"""Login use case."""

from typing import Optional

from pydantic import BaseModel

from quill.application.usecase.auth.common import AuthSession, to_session
from quill.domain.error import ValidationError
from quill.domain.service import IdentityService


class LoginRequest(BaseModel):
    """Login request."""

    email: Optional[str] = None
    password: Optional[str] = None


class LoginUseCase:
    """Use case for signing in with email and password."""

    def __init__(self, identity_service: IdentityService) -> None:
        self.identity_service = identity_service

    async def execute(self, request: LoginRequest) -> AuthSession:
        """Verify credentials and issue tokens.

        Raises:
            ValidationError: If email or password is missing
            AuthenticationError: If the credentials are wrong
        """
        if not request.email or not request.password:
            raise ValidationError(
                "Please provide both email and password", fields=["email", "password"]
            )
        user, tokens = await self.identity_service.login(
            request.email, request.password
        )
        return to_session(user, tokens)
