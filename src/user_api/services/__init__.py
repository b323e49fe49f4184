"""Business logic layer.

This module provides the business logic services for the user API.
"""

from .user_service import DUPLICATE_ACCOUNT_MESSAGE, UserService

__all__ = [
    "UserService",
    "DUPLICATE_ACCOUNT_MESSAGE",
]
