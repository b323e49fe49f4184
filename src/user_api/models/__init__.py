"""SQLModel data models.

This module exports all database models for the user API.
Import models from here to ensure proper initialization and relationships.
"""

from .account import Account
from .user import User

__all__ = [
    "Account",
    "User",
]
