"""JWT token utilities."""

from datetime import datetime, timedelta, timezone
from typing import Literal
from uuid import uuid4

import jwt
from pydantic import BaseModel

from quill.config import AuthSettings

TokenType = Literal["access", "refresh"]


class TokenPayload(BaseModel):
    """JWT token payload."""

    user_id: str
    type: TokenType
    exp: datetime
    role: str | None = None  # Access tokens only


class JWTError(Exception):
    """JWT-related error."""

    pass


def _secret_for(token_type: TokenType, settings: AuthSettings) -> str:
    if token_type == "refresh":
        return settings.refresh_secret
    return settings.jwt_secret


def create_access_token(user_id: str, role: str, settings: AuthSettings) -> str:
    """Create a short-lived access token.

    Args:
        user_id: User ID
        role: User role at issuance (informational, re-read on authentication)
        settings: Authentication settings

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(
        minutes=settings.access_token_expiry_minutes
    )
    payload = {
        "user_id": user_id,
        "role": role,
        "type": "access",
        "exp": expiry,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def create_refresh_token(user_id: str, settings: AuthSettings) -> str:
    """Create a long-lived refresh token.

    Args:
        user_id: User ID
        settings: Authentication settings

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(
        days=settings.refresh_token_expiry_days
    )
    payload = {
        "user_id": user_id,
        "type": "refresh",
        "exp": expiry,
        # Distinguishes refresh tokens issued within the same second
        "iat": datetime.now(timezone.utc),
        "jti": uuid4().hex,
    }
    return jwt.encode(
        payload, settings.refresh_secret, algorithm=settings.jwt_algorithm
    )


def verify_token(
    token: str, settings: AuthSettings, token_type: TokenType = "access"
) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings
        token_type: Expected token type

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid, expired or of the wrong type
    """
    try:
        payload = jwt.decode(
            token,
            _secret_for(token_type, settings),
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")

    if payload.get("type") != token_type:
        raise JWTError("Invalid token")

    return TokenPayload(
        user_id=payload["user_id"],
        type=payload["type"],
        exp=payload["exp"],
        role=payload.get("role"),
    )
