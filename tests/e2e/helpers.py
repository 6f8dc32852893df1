"""Shared helpers for end-to-end API tests."""

from dishka import AsyncContainer
import httpx

from quill.domain.repository import UserRepository
from quill.domain.value import Role


async def register(client: httpx.AsyncClient, name: str) -> dict:
    """Register a user through the API; returns the response body."""
    response = await client.post(
        "/auth/register",
        json={
            "name": name,
            "email": f"{name.lower()}@example.com",
            "password": "secret123",
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


def auth(session: dict) -> dict[str, str]:
    """Authorization header for a registered session."""
    return {"Authorization": f"Bearer {session['accessToken']}"}


async def promote(
    container: AsyncContainer,
    session: dict,
    role: Role | None = None,
    is_premium: bool | None = None,
) -> None:
    """Change a registered user's role or subscription directly in the store."""
    user_repo = await container.get(UserRepository)
    user = await user_repo.find_by_email(session["user"]["email"])
    update: dict = {}
    if role is not None:
        update["role"] = role
    if is_premium is not None:
        update["is_premium"] = is_premium
    await user_repo.save(user.model_copy(update=update))


async def create_post(
    client: httpx.AsyncClient, session: dict, **fields
) -> httpx.Response:
    return await client.post("/posts", json=fields, headers=auth(session))
