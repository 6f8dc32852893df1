"""User aggregate root."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from quill.domain.model.common import DomainModel
from quill.domain.value import Role, UserId


class User(DomainModel):
    """User aggregate root.

    Authors posts; premium users may read premium posts; admins may read and
    modify everything.
    """

    id: UserId
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=255)  # Stored lower-cased
    username: str = Field(min_length=1, max_length=100)
    password_hash: str
    role: Role = Role.USER
    is_premium: bool = False
    refresh_token: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
