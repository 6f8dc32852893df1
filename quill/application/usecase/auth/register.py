"""Register use case."""

from typing import Optional

import logfire
from pydantic import BaseModel

from quill.application.usecase.auth.common import AuthSession, to_session
from quill.domain.error import ValidationError
from quill.domain.service import IdentityService

MIN_PASSWORD_LENGTH = 6


class RegisterRequest(BaseModel):
    """Register request."""

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class RegisterUseCase:
    """Use case for creating an account."""

    def __init__(self, identity_service: IdentityService) -> None:
        """Initialize register use case.

        Args:
            identity_service: Identity domain service
        """
        self.identity_service = identity_service

    async def execute(self, request: RegisterRequest) -> AuthSession:
        """Execute registration flow.

        Args:
            request: Name, email and password

        Returns:
            The new user with access and refresh tokens

        Raises:
            ValidationError: If a field is missing or malformed
            ConflictError: If the email is already registered
        """
        name = (request.name or "").strip()
        email = (request.email or "").strip()
        password = request.password or ""

        supplied = (("name", name), ("email", email), ("password", password))
        missing = [field for field, value in supplied if not value]
        if missing:
            raise ValidationError("All fields are required", fields=missing)

        if "@" not in email:
            raise ValidationError("Email address is invalid", fields=["email"])
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                fields=["password"],
            )

        with logfire.span("register.execute"):
            user, tokens = await self.identity_service.register(
                name, email, password
            )
            return to_session(user, tokens)
