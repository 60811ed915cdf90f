from typing import List, Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork


async def find_conflicting_fields(
    uow: UnitOfWork,
    email: Optional[str],
    username: Optional[str],
    exclude_account_id: Optional[UUID] = None,
) -> List[str]:
    """
    Names of the fields already used by an account other than exclude_account_id.

    Must run inside an entered unit of work.
    """
    conflicts = []

    if email is not None:
        owner = await uow.accounts.get_by_email(email)
        if owner is not None and owner.id != exclude_account_id:
            conflicts.append("email")

    if username is not None:
        owner = await uow.accounts.get_by_username(username)
        if owner is not None and owner.id != exclude_account_id:
            conflicts.append("username")

    return conflicts
