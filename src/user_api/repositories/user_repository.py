"""User repository for database operations.

This module provides the data access layer the user service relies on:
lookup by ID, persisting a user with its account, and the account number
existence check.
"""

import time
from typing import Optional, Protocol

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from ..logging_config import log_database_operation
from ..models.account import Account
from ..models.user import User


class UserRepositoryError(Exception):
    """Base exception for user repository errors."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        self.message = message
        self.original_error = original_error
        super().__init__(self.message)


class AccountNumberConflictError(UserRepositoryError):
    """Exception raised when a save collides with an existing account number."""
    pass


class UserGateway(Protocol):
    """Operations the user service needs from storage."""

    async def find_by_id(self, user_id: int) -> Optional[User]: ...

    async def save(self, user: User) -> User: ...

    async def exists_by_account_number(self, number: str) -> bool: ...


class UserRepository:
    """Repository for user database operations.

    Backed by a SQLModel session. Reads never raise on a miss; database
    failures are wrapped in ``UserRepositoryError``.
    """

    def __init__(self, session: Session) -> None:
        """Initialize user repository with database session.

        Args:
            session: SQLModel database session
        """
        self.session = session

    async def find_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID.

        Args:
            user_id: User ID to search for

        Returns:
            User if found, None otherwise

        Raises:
            UserRepositoryError: If database operation fails
        """
        try:
            statement = select(User).where(User.id == user_id)
            result = self.session.exec(statement)
            return result.first()
        except SQLAlchemyError as e:
            raise UserRepositoryError(
                f"Failed to get user by ID {user_id}: {str(e)}",
                original_error=e
            ) from e

    async def save(self, user: User) -> User:
        """Persist a new or updated user together with its account.

        Args:
            user: User to persist

        Returns:
            The persisted user with server-assigned fields populated

        Raises:
            AccountNumberConflictError: If the account number is already taken
            UserRepositoryError: If database operation fails
        """
        start_time = time.time()
        operation = "UPDATE" if user.id is not None else "INSERT"
        try:
            self.session.add(user)
            self.session.commit()
            self.session.refresh(user)
        except IntegrityError as e:
            self.session.rollback()
            log_database_operation(operation, "users", success=False, error=str(e.orig))
            raise AccountNumberConflictError(
                "User violates a uniqueness constraint",
                original_error=e
            ) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            log_database_operation(operation, "users", success=False, error=str(e))
            raise UserRepositoryError(
                f"Failed to save user: {str(e)}",
                original_error=e
            ) from e

        log_database_operation(
            operation,
            "users",
            duration=round(time.time() - start_time, 4),
            user_id=user.id,
        )
        return user

    async def exists_by_account_number(self, number: str) -> bool:
        """Check whether any user owns an account with the given number.

        Args:
            number: Account number to check

        Returns:
            True if a user with that account number exists, False otherwise

        Raises:
            UserRepositoryError: If database operation fails
        """
        try:
            statement = (
                select(User.id)
                .join(Account, User.account_id == Account.id)
                .where(Account.number == number)
            )
            result = self.session.exec(statement)
            return result.first() is not None
        except SQLAlchemyError as e:
            raise UserRepositoryError(
                f"Failed to check user existence for account number {number}: {str(e)}",
                original_error=e
            ) from e
