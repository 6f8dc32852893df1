"""Auth use cases."""

from .common import AuthSession, AuthTokens, UserProfile
from .get_current_user import GetCurrentUserRequest, GetCurrentUserUseCase
from .login import LoginRequest, LoginUseCase
from .logout import LogoutRequest, LogoutUseCase
from .refresh_token import RefreshTokenRequest, RefreshTokenUseCase
from .register import RegisterRequest, RegisterUseCase

__all__ = [
    "AuthSession",
    "AuthTokens",
    "GetCurrentUserRequest",
    "GetCurrentUserUseCase",
    "LoginRequest",
    "LoginUseCase",
    "LogoutRequest",
    "LogoutUseCase",
    "RefreshTokenRequest",
    "RefreshTokenUseCase",
    "RegisterRequest",
    "RegisterUseCase",
    "UserProfile",
]
