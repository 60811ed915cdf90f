"""
Account Entity

Represents a person who can authenticate against the service.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class Account(SQLModel, table=True):
    """
    Account entity - the root of every authentication artifact.

    Business Rules:
    - Email and username must be unique across all accounts
    - Email confirmation required before password login
    - Password stored as bcrypt hash; None only for federated accounts
    - id never changes after creation
    """

    __tablename__ = "accounts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    username: str = Field(unique=True, index=True, max_length=255)
    password_hash: Optional[str] = Field(default=None, max_length=60)  # Bcrypt output

    is_confirmed: bool = Field(default=False)
    is_application_admin: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_account_is_confirmed", "is_confirmed"),)
