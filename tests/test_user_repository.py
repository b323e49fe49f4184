"""Unit tests for UserRepository.

This module contains unit tests for the UserRepository class against an
in-memory database, including error handling.
"""

from decimal import Decimal
from unittest.mock import patch

import pytest
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from user_api.models import Account, User
from user_api.repositories.user_repository import (
    AccountNumberConflictError,
    UserRepository,
    UserRepositoryError,
)


class TestUserRepository:
    """Test cases for UserRepository."""

    @pytest.fixture
    def user_repository(self, test_session: Session) -> UserRepository:
        """Create UserRepository instance for testing."""
        return UserRepository(test_session)

    @pytest.mark.asyncio
    async def test_find_by_id_success(
        self, user_repository: UserRepository, test_user: User
    ):
        """Test successful user retrieval by ID."""
        result = await user_repository.find_by_id(test_user.id)

        assert result is not None
        assert result.id == test_user.id
        assert result.name == "Ada Lovelace"
        assert result.account.number == "123"
        assert result.account.agency == "0001"
        assert result.account.balance == Decimal("100.00")
        assert result.account.credit_limit == Decimal("500.00")

    @pytest.mark.asyncio
    async def test_find_by_id_not_found(self, user_repository: UserRepository):
        """Test user retrieval by ID when user not found."""
        result = await user_repository.find_by_id(99999)

        assert result is None

    @pytest.mark.asyncio
    async def test_find_by_id_database_error(self, user_repository: UserRepository):
        """Test user retrieval by ID with database error."""
        with patch.object(user_repository.session, "exec") as mock_exec:
            mock_exec.side_effect = SQLAlchemyError("Database error")

            with pytest.raises(UserRepositoryError) as exc_info:
                await user_repository.find_by_id(1)

        assert "Failed to get user by ID" in str(exc_info.value)
        assert isinstance(exc_info.value.original_error, SQLAlchemyError)

    @pytest.mark.asyncio
    async def test_save_assigns_ids(
        self, user_repository: UserRepository, db_state_checker
    ):
        """Test saving a new user persists the user and its account."""
        user = User(name="Grace Hopper", account=Account(number="456"))

        result = await user_repository.save(user)

        assert result.id is not None
        assert result.account_id is not None
        assert result.account.id == result.account_id
        assert result.account.number == "456"
        assert result.account.balance == Decimal("0")
        assert db_state_checker.count_users() == 1
        assert db_state_checker.count_accounts() == 1

    @pytest.mark.asyncio
    async def test_save_then_find_round_trip(self, user_repository: UserRepository):
        """Test a saved user is found with identical fields."""
        saved = await user_repository.save(
            User(
                name="Grace Hopper",
                account=Account(number="456", agency="0042", credit_limit=Decimal("10.50")),
            )
        )

        found = await user_repository.find_by_id(saved.id)

        assert found is not None
        assert found.name == "Grace Hopper"
        assert found.account.number == "456"
        assert found.account.agency == "0042"
        assert found.account.credit_limit == Decimal("10.50")

    @pytest.mark.asyncio
    async def test_save_duplicate_account_number(
        self, user_repository: UserRepository, test_user: User, db_state_checker
    ):
        """Test the unique constraint on account number surfaces as a conflict."""
        duplicate = User(name="Someone Else", account=Account(number="123"))

        with pytest.raises(AccountNumberConflictError) as exc_info:
            await user_repository.save(duplicate)

        assert exc_info.value.original_error is not None
        assert db_state_checker.count_users() == 1

    @pytest.mark.asyncio
    async def test_save_database_error(self, user_repository: UserRepository):
        """Test saving a user with database error."""
        with patch.object(user_repository.session, "commit") as mock_commit:
            mock_commit.side_effect = SQLAlchemyError("Database error")

            with pytest.raises(UserRepositoryError) as exc_info:
                await user_repository.save(User(name="Grace", account=Account(number="9")))

        assert not isinstance(exc_info.value, AccountNumberConflictError)
        assert "Failed to save user" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_exists_by_account_number_true(
        self, user_repository: UserRepository, test_user: User
    ):
        """Test existence check for a stored account number."""
        assert await user_repository.exists_by_account_number("123") is True

    @pytest.mark.asyncio
    async def test_exists_by_account_number_false(
        self, user_repository: UserRepository, test_user: User
    ):
        """Test existence check for an unknown account number."""
        assert await user_repository.exists_by_account_number("999") is False

    @pytest.mark.asyncio
    async def test_exists_by_account_number_ignores_orphan_accounts(
        self, user_repository: UserRepository, test_session: Session
    ):
        """Test an account not owned by any user does not count."""
        test_session.add(Account(number="777"))
        test_session.commit()

        assert await user_repository.exists_by_account_number("777") is False

    @pytest.mark.asyncio
    async def test_exists_by_account_number_database_error(
        self, user_repository: UserRepository
    ):
        """Test existence check with database error."""
        with patch.object(user_repository.session, "exec") as mock_exec:
            mock_exec.side_effect = SQLAlchemyError("Database error")

            with pytest.raises(UserRepositoryError) as exc_info:
                await user_repository.exists_by_account_number("123")

        assert "account number 123" in str(exc_info.value)
