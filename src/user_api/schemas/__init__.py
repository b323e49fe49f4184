"""Pydantic schemas for API validation and serialization."""

from .user_schemas import (
    AccountCreate,
    AccountResponse,
    UserCreate,
    UserResponse,
)

__all__ = [
    "AccountCreate",
    "AccountResponse",
    "UserCreate",
    "UserResponse",
]
