"""
ResetCode Entity

Single-use password reset codes.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class ResetCode(SQLModel, table=True):
    """
    ResetCode entity - short-lived proof of control over an email address.

    Business Rules:
    - At most one row per email; issuing a new code overwrites it
    - Code is stored as SHA-256 hash, never in plain text
    - Consumed at most once, only before expires_at
    """

    __tablename__ = "reset_codes"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    account_id: UUID = Field(foreign_key="accounts.id", index=True)
    email: str = Field(unique=True, index=True, max_length=255)
    code_hash: str = Field(max_length=64)  # SHA-256 output

    consumed: bool = Field(default=False)

    # Timestamps
    issued_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (Index("idx_reset_code_expires_at", "expires_at"),)
