import pytest
from httpx import AsyncClient

from tests.fixtures.api_helpers import (
    ACCOUNT_URL,
    bearer,
    create_account,
    create_confirmed_account,
    login,
)


@pytest.mark.asyncio
async def test_successful_login(client: AsyncClient, test_data):
    alice = test_data.get_copy("alice")
    created = await create_confirmed_account(client, alice)

    data = await login(client, alice)

    assert data["account"]["id"] == created["id"]
    assert data["account"]["is_confirmed"] is True
    assert data["access_token"]
    assert data["refresh_token"]
    assert data["session_id"]


@pytest.mark.asyncio
async def test_login_invalid_credentials(client: AsyncClient, test_data):
    alice = test_data.get_copy("alice")
    await create_confirmed_account(client, alice)

    response = await client.post(
        f"{ACCOUNT_URL}/login", json={"email": alice["email"], "password": "Wrong#1234"}
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_login_nonexistent_account(client: AsyncClient):
    response = await client.post(
        f"{ACCOUNT_URL}/login", json={"email": "nobody@example.com", "password": "Secret#123"}
    )

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_login_before_confirmation(client: AsyncClient, test_data):
    alice = test_data.get_copy("alice")
    await create_account(client, alice)

    response = await client.post(
        f"{ACCOUNT_URL}/login", json={"email": alice["email"], "password": alice["password"]}
    )

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Account email not confirmed"


@pytest.mark.asyncio
async def test_protected_route_without_token(client: AsyncClient):
    response = await client.delete(f"{ACCOUNT_URL}/delete")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_protected_route_with_garbage_token(client: AsyncClient):
    response = await client.delete(f"{ACCOUNT_URL}/delete", headers=bearer("garbage"))

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_overlong_password_is_unauthorized(client: AsyncClient):
    response = await client.post(
        f"{ACCOUNT_URL}/login",
        json={"email": "nobody@example.com", "password": "Aa1!" + "x" * 80},
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"
