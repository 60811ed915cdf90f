import pytest
from unittest.mock import AsyncMock, MagicMock

from src.adapter.services.jwt_token_signer import JwtTokenSigner
from src.app.services.token_service import TokenService
from tests.fixtures.in_memory_uow import InMemoryUnitOfWork


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork; lookups return None unless a test says otherwise"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.accounts = MagicMock()
    uow.accounts.get_by_id = AsyncMock(return_value=None)
    uow.accounts.get_by_email = AsyncMock(return_value=None)
    uow.accounts.get_by_username = AsyncMock(return_value=None)
    uow.accounts.create = AsyncMock(side_effect=lambda account: account)
    uow.accounts.update = AsyncMock(side_effect=lambda account: account)
    uow.accounts.delete = AsyncMock()

    uow.sessions = MagicMock()
    uow.sessions.get_by_id = AsyncMock(return_value=None)
    uow.sessions.get_by_refresh_token_hash = AsyncMock(return_value=None)
    uow.sessions.create = AsyncMock(side_effect=lambda session: session)
    uow.sessions.rotate_refresh_token = AsyncMock(return_value=True)
    uow.sessions.revoke_by_id = AsyncMock(return_value=True)
    uow.sessions.revoke_all_by_account_id = AsyncMock(return_value=0)
    uow.sessions.revoke_all_except_session = AsyncMock(return_value=0)
    uow.sessions.delete_all_by_account_id = AsyncMock(return_value=0)

    uow.reset_codes = MagicMock()
    uow.reset_codes.get_by_email = AsyncMock(return_value=None)
    uow.reset_codes.replace = AsyncMock(side_effect=lambda code: code)
    uow.reset_codes.consume = AsyncMock(return_value=True)
    uow.reset_codes.delete_by_account_id = AsyncMock(return_value=0)
    return uow


@pytest.fixture
def hasher():
    hasher = MagicMock()
    hasher.hash = MagicMock(side_effect=lambda plaintext: f"hashed:{plaintext}")
    hasher.verify = MagicMock(
        side_effect=lambda plaintext, password_hash: password_hash == f"hashed:{plaintext}"
    )
    return hasher


@pytest.fixture
def notifier():
    notifier = MagicMock()
    notifier.send_reset_code = AsyncMock()
    notifier.send_email_confirmation = AsyncMock()
    return notifier


@pytest.fixture
def signer():
    return JwtTokenSigner("unit-test-secret")


@pytest.fixture
def memory_uow():
    return InMemoryUnitOfWork()


@pytest.fixture
def memory_tokens(memory_uow, signer):
    return TokenService(memory_uow, signer)
