"""User schemas for create operations and API responses.

This module defines Pydantic schemas for the user endpoints. Request schemas
validate incoming payloads; response schemas read straight from the ORM
models through ``from_attributes``.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AccountCreate(BaseModel):
    """Schema for the account submitted with a new user."""

    number: str = Field(
        ...,
        min_length=1,
        max_length=30,
        description="Account number (must be unique across all users)",
        examples=["00000000-1"],
    )
    agency: str | None = Field(
        default=None,
        max_length=10,
        description="Agency/branch code",
        examples=["0001"],
    )
    balance: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        max_digits=13,
        decimal_places=2,
        description="Opening balance",
    )
    credit_limit: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        max_digits=13,
        decimal_places=2,
        description="Credit limit granted on the account",
    )

    @field_validator("number")
    @classmethod
    def validate_number(cls, v: str) -> str:
        """Strip surrounding whitespace from the account number."""
        v = v.strip()
        if not v:
            raise ValueError("Account number cannot be empty or whitespace only")
        return v


class UserCreate(BaseModel):
    """Schema for creating a new user together with its account."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="User's display name",
        examples=["Ada Lovelace"],
    )
    account: AccountCreate = Field(..., description="Account owned by the user")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Collapse repeated whitespace in the user name."""
        v = " ".join(v.split())
        if not v:
            raise ValueError("User name cannot be empty or whitespace only")
        return v


class AccountResponse(BaseModel):
    """Schema for account data in API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    number: str
    agency: str | None = None
    balance: Decimal
    credit_limit: Decimal


class UserResponse(BaseModel):
    """Schema for user API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="User ID")
    name: str = Field(description="User's display name")
    account: AccountResponse = Field(description="Account owned by the user")
