import pytest
from httpx import AsyncClient

from tests.fixtures.api_helpers import ACCOUNT_URL, create_account


@pytest.mark.asyncio
async def test_create_account(client: AsyncClient, test_data, notifier):
    """Registration returns the new, unconfirmed account and sends a confirmation email"""
    alice = test_data.get_copy("alice")

    response = await client.post(f"{ACCOUNT_URL}/create-account", json=alice)

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "alice@example.com"
    assert data["username"] == "alice"
    assert data["is_confirmed"] is False
    assert "password" not in data
    assert "password_hash" not in data
    assert len(notifier.confirmations) == 1
    email, account_id = notifier.confirmations[0]
    assert email == "alice@example.com"
    assert str(account_id) == data["id"]


@pytest.mark.asyncio
async def test_create_account_duplicate(client: AsyncClient, test_data):
    alice = test_data.get_copy("alice")
    await create_account(client, alice)

    response = await client.post(f"{ACCOUNT_URL}/create-account", json=alice)

    assert response.status_code == 409
    error = response.json()["error"]
    assert error["code"] == "CONFLICT"
    assert error["details"]["fields"] == ["email", "username"]


@pytest.mark.asyncio
async def test_create_account_duplicate_username_only(client: AsyncClient, test_data):
    await create_account(client, test_data.get_copy("alice"))

    response = await client.post(
        f"{ACCOUNT_URL}/create-account",
        json={"email": "alice2@example.com", "username": "alice", "password": "Secret#123"},
    )

    assert response.status_code == 409
    assert response.json()["error"]["details"]["fields"] == ["username"]


@pytest.mark.asyncio
async def test_create_account_weak_password(client: AsyncClient):
    response = await client.post(
        f"{ACCOUNT_URL}/create-account",
        json={"email": "alice@example.com", "username": "alice", "password": "password"},
    )

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"]["field"] == "password"


@pytest.mark.asyncio
async def test_create_account_invalid_username(client: AsyncClient):
    response = await client.post(
        f"{ACCOUNT_URL}/create-account",
        json={"email": "alice@example.com", "username": "a b", "password": "Secret#123"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_create_account_malformed_email(client: AsyncClient):
    response = await client.post(
        f"{ACCOUNT_URL}/create-account",
        json={"email": "not-an-email", "username": "alice", "password": "Secret#123"},
    )

    assert response.status_code == 422
