import pytest
from httpx import AsyncClient

from src.app.services.identity_verifier import ExternalIdentity
from tests.fixtures.api_helpers import ACCOUNT_URL, bearer, create_account

EXTERNAL_URL = f"{ACCOUNT_URL}/create-account-from-external"


@pytest.mark.asyncio
async def test_external_login_creates_account(client: AsyncClient, identity_verifier):
    identity_verifier.identities["provider-token"] = ExternalIdentity(
        email="carol@example.com", username="carol", verified=True
    )

    first = await client.post(EXTERNAL_URL, json={"external_token": "provider-token"})
    second = await client.post(EXTERNAL_URL, json={"external_token": "provider-token"})

    assert first.status_code == 200
    assert first.json()["is_new_account"] is True
    assert first.json()["account"]["is_confirmed"] is True
    assert second.json()["is_new_account"] is False
    assert second.json()["account"]["id"] == first.json()["account"]["id"]

    # Issued session token is usable like any other
    response = await client.post(
        f"{ACCOUNT_URL}/logout", headers=bearer(second.json()["access_token"])
    )
    assert response.status_code == 204


@pytest.mark.asyncio
async def test_external_account_cannot_use_password_login(client: AsyncClient, identity_verifier):
    identity_verifier.identities["provider-token"] = ExternalIdentity(
        email="carol@example.com", username="carol", verified=True
    )
    await client.post(EXTERNAL_URL, json={"external_token": "provider-token"})

    response = await client.post(
        f"{ACCOUNT_URL}/login", json={"email": "carol@example.com", "password": "Secret#123"}
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_external_login_links_existing_account(client: AsyncClient, test_data, identity_verifier):
    created = await create_account(client, test_data.get_copy("alice"))
    identity_verifier.identities["provider-token"] = ExternalIdentity(
        email="alice@example.com", username="alice_idp", verified=True
    )

    response = await client.post(EXTERNAL_URL, json={"external_token": "provider-token"})

    assert response.status_code == 200
    assert response.json()["account"]["id"] == created["id"]
    assert response.json()["account"]["username"] == "alice"
    assert response.json()["account"]["is_confirmed"] is True


@pytest.mark.asyncio
async def test_external_token_rejected(client: AsyncClient):
    response = await client.post(EXTERNAL_URL, json={"external_token": "unknown"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "EXTERNAL_AUTH_ERROR"


@pytest.mark.asyncio
async def test_external_login_with_taken_username(client: AsyncClient, test_data, identity_verifier):
    await create_account(client, test_data.get_copy("alice"))
    identity_verifier.identities["provider-token"] = ExternalIdentity(
        email="alice.other@example.com", username="alice", verified=True
    )

    response = await client.post(EXTERNAL_URL, json={"external_token": "provider-token"})

    assert response.status_code == 200
    assert response.json()["is_new_account"] is True
    assert response.json()["account"]["username"] == "alice_1"


@pytest.mark.asyncio
async def test_external_login_with_unusable_username(client: AsyncClient, identity_verifier):
    identity_verifier.identities["provider-token"] = ExternalIdentity(
        email="john@example.com", username="john+tag", verified=True
    )

    response = await client.post(EXTERNAL_URL, json={"external_token": "provider-token"})

    assert response.status_code == 200
    assert response.json()["account"]["username"] == "john_tag"
