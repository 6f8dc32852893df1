"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from quill.domain.error import ConflictError
from quill.domain.model import User
from quill.domain.repository import UserRepository
from quill.domain.value import UserId
from quill.persistence.mappers import row_to_user, user_to_dict
from quill.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        """Find multiple users by ID in a single query."""
        if not user_ids:
            return []
        stmt = select(users_table).where(users_table.c.id.in_(user_ids))
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email.

        Args:
            email: Email to search for

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.email == email.lower())
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def username_exists(self, username: str) -> bool:
        """Check whether a username is taken."""
        stmt = (
            select(func.count())
            .select_from(users_table)
            .where(users_table.c.username == username)
        )
        result = await self.session.execute(stmt)
        return (result.scalar() or 0) > 0

    async def find_by_refresh_token(self, refresh_token: str) -> Optional[User]:
        """Find the user currently holding a refresh token."""
        stmt = select(users_table).where(users_table.c.refresh_token == refresh_token)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user

        Raises:
            ConflictError: If the email or username is already taken
        """
        # Check if user exists
        existing = await self.find_by_id(user.id)

        user_dict = user_to_dict(user)

        try:
            async with self.session.begin_nested():
                if existing:
                    stmt = (
                        users_table.update()
                        .where(users_table.c.id == user.id)
                        .values(**user_dict)
                    )
                else:
                    stmt = users_table.insert().values(**user_dict)
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise ConflictError("User already exists") from e

        await self.session.flush()
        return user
