"""Identity domain service: credentials in, principals out."""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

import logfire
from pydantic import BaseModel

from quill.domain.error import AuthenticationError, ConflictError, NotFoundError
from quill.domain.model.user import User
from quill.domain.repository import UserRepository
from quill.domain.value import Principal, UserId
from quill.util.jwt import JWTError
from quill.util.password import hash_password, verify_password

from .base import Service
from .jwt_service import JWTService


class TokenPair(BaseModel):
    """Access and refresh tokens issued together."""

    access_token: str
    refresh_token: str


class IdentityService(Service):
    """Issues and validates credentials.

    Access tokens authenticate requests; refresh tokens are single-use and
    stored on the user so logout can revoke them.
    """

    def __init__(
        self, user_repository: UserRepository, jwt_service: JWTService
    ) -> None:
        """Initialize identity service.

        Args:
            user_repository: User repository
            jwt_service: JWT token service
        """
        self.user_repository = user_repository
        self.jwt_service = jwt_service

    async def authenticate(self, token: Optional[str]) -> Principal:
        """Turn a bearer token into a principal.

        Role and premium status are read from the user record, not the
        token, so changes apply immediately.

        Raises:
            AuthenticationError: If the token is missing, invalid or its user is gone
        """
        if not token:
            raise AuthenticationError("No token, authorization denied")
        try:
            payload = self.jwt_service.verify_access_token(token)
        except JWTError as e:
            raise AuthenticationError("Invalid or expired token") from e

        user = await self.user_repository.find_by_id(UserId(UUID(payload.user_id)))
        if user is None:
            logfire.warn("Token for unknown user", user_id=payload.user_id)
            raise AuthenticationError("Invalid or expired token")

        return Principal(id=user.id, role=user.role, is_premium=user.is_premium)

    async def register(
        self, name: str, email: str, password: str
    ) -> tuple[User, TokenPair]:
        """Create an account and sign it in.

        Raises:
            ConflictError: If the email is already registered
        """
        normalized_email = email.strip().lower()
        with logfire.span("identity_service.register", email=normalized_email):
            if await self.user_repository.find_by_email(normalized_email):
                raise ConflictError("User already exists")

            user = User(
                id=UserId(uuid4()),
                name=name.strip(),
                email=normalized_email,
                username=await self._unique_username(normalized_email),
                password_hash=hash_password(password),
            )
            user, tokens = await self._issue_tokens(user)
            logfire.info(
                "User registered", user_id=str(user.id), username=user.username
            )
            return user, tokens

    async def login(self, email: str, password: str) -> tuple[User, TokenPair]:
        """Verify credentials and issue tokens.

        Raises:
            AuthenticationError: If the email or password is wrong
        """
        normalized_email = email.strip().lower()
        with logfire.span("identity_service.login", email=normalized_email):
            user = await self.user_repository.find_by_email(normalized_email)
            if user is None or not verify_password(user.password_hash, password):
                logfire.warn("Login failed", email=normalized_email)
                raise AuthenticationError("Invalid email or password")
            user, tokens = await self._issue_tokens(user)
            logfire.info("User logged in", user_id=str(user.id))
            return user, tokens

    async def refresh(self, refresh_token: Optional[str]) -> TokenPair:
        """Exchange a refresh token for a new token pair.

        Raises:
            AuthenticationError: If the refresh token is missing, revoked or expired
        """
        if not refresh_token:
            raise AuthenticationError("Missing refresh token")
        with logfire.span("identity_service.refresh"):
            user = await self.user_repository.find_by_refresh_token(refresh_token)
            if user is None:
                raise AuthenticationError("Invalid refresh token")
            try:
                self.jwt_service.verify_refresh_token(refresh_token)
            except JWTError as e:
                raise AuthenticationError("Token expired or invalid") from e
            _, tokens = await self._issue_tokens(user)
            return tokens

    async def logout(self, refresh_token: Optional[str]) -> None:
        """Revoke a refresh token. Unknown tokens are ignored."""
        if not refresh_token:
            return
        with logfire.span("identity_service.logout"):
            user = await self.user_repository.find_by_refresh_token(refresh_token)
            if user is not None:
                await self.user_repository.save(
                    user.model_copy(
                        update={"refresh_token": None, "updated_at": datetime.now()}
                    )
                )
                logfire.info("User logged out", user_id=str(user.id))

    async def get_user(self, user_id: UserId) -> User:
        """Get a user by ID.

        Raises:
            NotFoundError: If user not found
        """
        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User", str(user_id))
        return user

    async def _issue_tokens(self, user: User) -> tuple[User, TokenPair]:
        tokens = TokenPair(
            access_token=self.jwt_service.create_access_token(
                str(user.id), user.role.value
            ),
            refresh_token=self.jwt_service.create_refresh_token(str(user.id)),
        )
        saved = await self.user_repository.save(
            user.model_copy(
                update={
                    "refresh_token": tokens.refresh_token,
                    "updated_at": datetime.now(),
                }
            )
        )
        return saved, tokens

    async def _unique_username(self, email: str) -> str:
        base = email.split("@")[0] or "user"
        username = base
        counter = 1
        while await self.user_repository.username_exists(username):
            username = f"{base}{counter}"
            counter += 1
        return username
