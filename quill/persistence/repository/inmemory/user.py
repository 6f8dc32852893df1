"""In-memory user repository for testing."""

from typing import Optional

from quill.domain.error import ConflictError
from quill.domain.model.user import User
from quill.domain.repository.user import UserRepository
from quill.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        """Find multiple users by ID."""
        return [self._users[i] for i in user_ids if i in self._users]

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email."""
        for user in self._users.values():
            if user.email == email.lower():
                return user
        return None

    async def username_exists(self, username: str) -> bool:
        """Check whether a username is taken."""
        return any(user.username == username for user in self._users.values())

    async def find_by_refresh_token(self, refresh_token: str) -> Optional[User]:
        """Find the user holding a refresh token."""
        for user in self._users.values():
            if user.refresh_token == refresh_token:
                return user
        return None

    async def save(self, user: User) -> User:
        """Save or update a user."""
        for other in self._users.values():
            if other.id != user.id and (
                other.email == user.email or other.username == user.username
            ):
                raise ConflictError("User already exists")
        self._users[user.id] = user
        return user
