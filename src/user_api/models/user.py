"""User model with its associated account.

This module defines the User SQLModel. Every user owns exactly one Account,
created together with the user and loaded eagerly with it.
"""

from typing import Optional, TYPE_CHECKING

from sqlmodel import SQLModel, Field, Relationship

if TYPE_CHECKING:
    from .account import Account


class User(SQLModel, table=True):
    """User model for database storage.

    Attributes:
        id: Primary key (auto-generated, immutable after creation)
        name: User's display name
        account_id: Foreign key to the user's account
        account: Relationship to the Account model
    """

    __tablename__ = "users"

    id: Optional[int] = Field(
        default=None,
        primary_key=True,
        description="Primary key (auto-generated)"
    )

    name: str = Field(
        max_length=100,
        description="User's display name"
    )

    account_id: Optional[int] = Field(
        default=None,
        foreign_key="accounts.id",
        unique=True,
        description="ID of the account owned by this user"
    )

    # One-to-one: the account is saved through the user and loaded with it
    account: Optional["Account"] = Relationship(sa_relationship_kwargs={"lazy": "joined"})
