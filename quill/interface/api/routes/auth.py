"""Auth routes: email/password sign-in with JWT access and refresh tokens."""

from typing import Optional

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, status

from quill.application.usecase.auth import (
    AuthSession,
    AuthTokens,
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
    LoginRequest,
    LoginUseCase,
    LogoutRequest,
    LogoutUseCase,
    RefreshTokenRequest,
    RefreshTokenUseCase,
    RegisterRequest,
    RegisterUseCase,
    UserProfile,
)
from quill.application.usecase.base import CamelModel
from quill.domain.service import IdentityService
from quill.interface.api.auth import require_principal
from quill.interface.api.schemas import ApiResponse

router = APIRouter(prefix="/auth", tags=["auth"], route_class=DishkaRoute)


class RegisterAPIRequest(CamelModel):
    """API request for registering."""

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginAPIRequest(CamelModel):
    """API request for logging in."""

    email: Optional[str] = None
    password: Optional[str] = None


class RefreshTokenAPIRequest(CamelModel):
    """API request carrying a refresh token."""

    refresh_token: Optional[str] = None


class SessionResponse(AuthSession):
    """Signed-in user and tokens at the top level of the body."""

    success: bool = True


class TokensResponse(AuthTokens):
    """Fresh tokens at the top level of the body."""

    success: bool = True


@router.post(
    "/register", response_model=SessionResponse, status_code=status.HTTP_201_CREATED
)
async def register(
    request: RegisterAPIRequest,
    register_use_case: FromDishka[RegisterUseCase],
) -> SessionResponse:
    """Create an account and sign it in."""
    session = await register_use_case.execute(
        RegisterRequest(
            name=request.name, email=request.email, password=request.password
        )
    )
    return SessionResponse(**session.model_dump())


@router.post("/login", response_model=SessionResponse)
async def login(
    request: LoginAPIRequest,
    login_use_case: FromDishka[LoginUseCase],
) -> SessionResponse:
    """Sign in with email and password."""
    session = await login_use_case.execute(
        LoginRequest(email=request.email, password=request.password)
    )
    return SessionResponse(**session.model_dump())


@router.post("/refresh", response_model=TokensResponse)
async def refresh(
    refresh_token_use_case: FromDishka[RefreshTokenUseCase],
    request: Optional[RefreshTokenAPIRequest] = None,
) -> TokensResponse:
    """Exchange a refresh token for a new token pair."""
    tokens = await refresh_token_use_case.execute(
        RefreshTokenRequest(refresh_token=request.refresh_token if request else None)
    )
    return TokensResponse(**tokens.model_dump())


@router.post("/logout", response_model=ApiResponse[None])
async def logout(
    logout_use_case: FromDishka[LogoutUseCase],
    request: Optional[RefreshTokenAPIRequest] = None,
) -> ApiResponse[None]:
    """Revoke a refresh token."""
    await logout_use_case.execute(
        LogoutRequest(refresh_token=request.refresh_token if request else None)
    )
    return ApiResponse(message="Logged out successfully")


@router.get("/me", response_model=ApiResponse[UserProfile])
async def me(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[UserProfile]:
    """Get the authenticated user's profile."""
    principal = await require_principal(identity_service, authorization)
    profile = await get_current_user_use_case.execute(
        GetCurrentUserRequest(principal=principal)
    )
    return ApiResponse(data=profile)
