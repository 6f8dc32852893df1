"""JWT token domain service."""

import logfire

from quill.config import AuthSettings
from quill.util.jwt import (
    TokenPayload,
    create_access_token,
    create_refresh_token,
    verify_token,
)

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_access_token(self, user_id: str, role: str) -> str:
        """Create an access token for a user."""
        with logfire.span("jwt_service.create_access_token", user_id=user_id):
            return create_access_token(user_id, role, self.auth_settings)

    def create_refresh_token(self, user_id: str) -> str:
        """Create a refresh token for a user."""
        with logfire.span("jwt_service.create_refresh_token", user_id=user_id):
            return create_refresh_token(user_id, self.auth_settings)

    def verify_access_token(self, token: str) -> TokenPayload:
        """Verify an access token and extract its payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_access_token"):
            try:
                return verify_token(token, self.auth_settings, "access")
            except Exception as e:
                logfire.warn("Access token verification failed", error=str(e))
                raise

    def verify_refresh_token(self, token: str) -> TokenPayload:
        """Verify a refresh token and extract its payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_refresh_token"):
            try:
                return verify_token(token, self.auth_settings, "refresh")
            except Exception as e:
                logfire.warn("Refresh token verification failed", error=str(e))
                raise
