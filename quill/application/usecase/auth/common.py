"""Shared auth response models."""

from datetime import datetime

from quill.application.usecase.base import CamelModel
from quill.domain.model import User
from quill.domain.service import TokenPair


class UserProfile(CamelModel):
    """User as returned by the API; never carries secrets."""

    id: str
    name: str
    email: str
    username: str
    role: str
    is_premium: bool
    created_at: datetime


class AuthTokens(CamelModel):
    """Access and refresh tokens."""

    access_token: str
    refresh_token: str


class AuthSession(CamelModel):
    """A signed-in user with fresh tokens."""

    user: UserProfile
    access_token: str
    refresh_token: str


def to_profile(user: User) -> UserProfile:
    return UserProfile(
        id=str(user.id),
        name=user.name,
        email=user.email,
        username=user.username,
        role=user.role.value,
        is_premium=user.is_premium,
        created_at=user.created_at,
    )


def to_session(user: User, tokens: TokenPair) -> AuthSession:
    return AuthSession(
        user=to_profile(user),
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
    )
