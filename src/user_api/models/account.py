"""Account model owned by a user.

This module defines the Account SQLModel holding the banking details that
travel with every user, including the account number that must stay unique
across all users.
"""

from decimal import Decimal
from typing import Optional

from sqlmodel import SQLModel, Field, Column, String, Numeric


class Account(SQLModel, table=True):
    """Account model for database storage.

    Attributes:
        id: Primary key (auto-generated)
        number: Account number, unique across all users
        agency: Optional agency/branch code
        balance: Current balance (non-negative)
        credit_limit: Credit limit granted on the account (non-negative)
    """

    __tablename__ = "accounts"

    id: Optional[int] = Field(
        default=None,
        primary_key=True,
        description="Primary key (auto-generated)"
    )

    # Unique constraint backs up the service-level duplicate check
    number: str = Field(
        max_length=30,
        description="Account number (unique across all users)",
        sa_column=Column(String(30), unique=True, nullable=False)
    )

    agency: Optional[str] = Field(
        default=None,
        max_length=10,
        description="Agency/branch code"
    )

    balance: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Account balance",
        sa_column=Column(Numeric(13, 2), nullable=False)
    )

    credit_limit: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Credit limit granted on the account",
        sa_column=Column(Numeric(13, 2), nullable=False)
    )
