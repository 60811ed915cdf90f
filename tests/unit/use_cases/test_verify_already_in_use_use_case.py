import pytest

from src.app.use_cases.accounts import VerifyAlreadyInUseUseCase
from tests.fixtures.factories import make_account


@pytest.mark.asyncio
async def test_nothing_in_use(mock_uow):
    result = await VerifyAlreadyInUseUseCase(mock_uow).execute("new@example.com", "newbie")

    assert result.is_ok()
    assert result.value.available is True
    mock_uow.accounts.get_by_email.assert_awaited_once_with("new@example.com")
    mock_uow.accounts.get_by_username.assert_awaited_once_with("newbie")


@pytest.mark.asyncio
async def test_email_in_use(mock_uow):
    mock_uow.accounts.get_by_email.return_value = make_account()

    result = await VerifyAlreadyInUseUseCase(mock_uow).execute("alice@example.com", "newbie")

    assert result.is_err()
    assert result.error.code == "CONFLICT"
    assert result.error.details == {"fields": ["email"]}


@pytest.mark.asyncio
async def test_username_in_use(mock_uow):
    mock_uow.accounts.get_by_username.return_value = make_account()

    result = await VerifyAlreadyInUseUseCase(mock_uow).execute("new@example.com", "alice")

    assert result.is_err()
    assert result.error.details == {"fields": ["username"]}


@pytest.mark.asyncio
async def test_own_account_is_not_a_conflict(mock_uow):
    account = make_account()
    mock_uow.accounts.get_by_email.return_value = account
    mock_uow.accounts.get_by_username.return_value = account

    result = await VerifyAlreadyInUseUseCase(mock_uow).execute(
        "alice@example.com", "alice", exclude_account_id=account.id
    )

    assert result.is_ok()


@pytest.mark.asyncio
async def test_malformed_email(mock_uow):
    result = await VerifyAlreadyInUseUseCase(mock_uow).execute("not-an-email", "alice")

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
