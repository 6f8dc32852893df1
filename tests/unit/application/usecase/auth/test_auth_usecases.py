"""Unit tests for auth use cases."""

import pytest

from quill.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
    LoginRequest,
    LoginUseCase,
    RefreshTokenRequest,
    RefreshTokenUseCase,
    RegisterRequest,
    RegisterUseCase,
)
from quill.domain.error import AuthenticationError, ValidationError
from quill.domain.service import IdentityService
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestRegisterUseCase:
    """Tests for RegisterUseCase."""

    @pytest.mark.asyncio
    async def test_register_returns_profile_and_tokens(self, unit_env):
        use_case = await unit_env.get(RegisterUseCase)

        session = await use_case.execute(
            RegisterRequest(
                name="Alice", email="alice@example.com", password="secret123"
            )
        )

        assert session.user.email == "alice@example.com"
        assert session.user.role == "user"
        assert session.access_token
        assert session.refresh_token
        assert "password_hash" not in session.user.model_dump()

    @pytest.mark.asyncio
    async def test_register_requires_every_field(self, unit_env):
        use_case = await unit_env.get(RegisterUseCase)

        with pytest.raises(
            ValidationError, match="All fields are required"
        ) as exc_info:
            await use_case.execute(RegisterRequest(email="alice@example.com"))

        assert exc_info.value.fields == ["name", "password"]

    @pytest.mark.asyncio
    async def test_register_rejects_short_password(self, unit_env):
        use_case = await unit_env.get(RegisterUseCase)

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(
                RegisterRequest(name="Alice", email="alice@example.com", password="123")
            )

        assert exc_info.value.fields == ["password"]


class TestLoginUseCase:
    """Tests for LoginUseCase."""

    @pytest.mark.asyncio
    async def test_login_requires_both_fields(self, unit_env):
        use_case = await unit_env.get(LoginUseCase)

        with pytest.raises(
            ValidationError, match="Please provide both email and password"
        ):
            await use_case.execute(LoginRequest(email="alice@example.com"))

    @pytest.mark.asyncio
    async def test_login_after_register(self, unit_env):
        identity_service = await unit_env.get(IdentityService)
        use_case = await unit_env.get(LoginUseCase)
        await identity_service.register("Alice", "alice@example.com", "secret123")

        session = await use_case.execute(
            LoginRequest(email="ALICE@example.com", password="secret123")
        )

        assert session.user.name == "Alice"


class TestRefreshAndMe:
    @pytest.mark.asyncio
    async def test_refresh_then_me(self, unit_env):
        # Arrange
        identity_service = await unit_env.get(IdentityService)
        refresh_use_case = await unit_env.get(RefreshTokenUseCase)
        me_use_case = await unit_env.get(GetCurrentUserUseCase)
        user, tokens = await identity_service.register(
            "Alice", "alice@example.com", "secret123"
        )

        # Act
        refreshed = await refresh_use_case.execute(
            RefreshTokenRequest(refresh_token=tokens.refresh_token)
        )
        principal = await identity_service.authenticate(refreshed.access_token)
        profile = await me_use_case.execute(GetCurrentUserRequest(principal=principal))

        # Assert
        assert profile.id == str(user.id)
        assert profile.username == "alice"

    @pytest.mark.asyncio
    async def test_refresh_with_unknown_token(self, unit_env):
        refresh_use_case = await unit_env.get(RefreshTokenUseCase)

        with pytest.raises(AuthenticationError):
            await refresh_use_case.execute(RefreshTokenRequest(refresh_token="bogus"))
