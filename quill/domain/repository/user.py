"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from quill.domain.model.user import User
from quill.domain.value import UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        """Find multiple users by ID in a single query.

        Args:
            user_ids: User identifiers

        Returns:
            Found users (may be fewer than requested)
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their (lower-cased) email.

        Args:
            email: The user's email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def username_exists(self, username: str) -> bool:
        """Check whether a username is taken.

        Args:
            username: Username to check

        Returns:
            True if a user has this username
        """
        pass

    @abstractmethod
    async def find_by_refresh_token(self, refresh_token: str) -> Optional[User]:
        """Find the user holding a refresh token.

        Args:
            refresh_token: Refresh token string

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass
