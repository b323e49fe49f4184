"""Test configuration and fixtures.

This module provides test configuration, an in-memory database per test,
a TestClient bound to that database, and user test data.
"""

import os

# Settings are read at import time; point them at a throwaway database first
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["ENVIRONMENT"] = "testing"

from decimal import Decimal
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session, create_engine, select
from sqlmodel.pool import StaticPool

from user_api.database import get_session
from user_api.main import app
from user_api.models import Account, User
from user_api.schemas.user_schemas import AccountCreate, UserCreate


TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with in-memory SQLite."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    SQLModel.metadata.create_all(engine)

    yield engine

    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_session(test_engine) -> Generator[Session, None, None]:
    """Create test database session."""
    with Session(test_engine) as session:
        yield session


@pytest.fixture(scope="function")
def client(test_session: Session) -> Generator[TestClient, None, None]:
    """Create test client with test database session."""

    def get_test_session():
        return test_session

    app.dependency_overrides[get_session] = get_test_session

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def sample_user_data() -> UserCreate:
    """Create sample user data for testing."""
    return UserCreate(
        name="Ada Lovelace",
        account=AccountCreate(
            number="123",
            agency="0001",
            balance=Decimal("100.00"),
            credit_limit=Decimal("500.00"),
        ),
    )


@pytest.fixture(scope="function")
def test_user(test_session: Session, sample_user_data: UserCreate) -> User:
    """Create a test user with its account in the database."""
    user = User(
        name=sample_user_data.name,
        account=Account(**sample_user_data.account.model_dump()),
    )
    test_session.add(user)
    test_session.commit()
    test_session.refresh(user)
    return user


@pytest.fixture(scope="function")
def user_payload() -> dict:
    """JSON payload for POST /users."""
    return {
        "name": "Ada Lovelace",
        "account": {
            "number": "123",
            "agency": "0001",
            "balance": "100.00",
            "credit_limit": "500.00",
        },
    }


@pytest.fixture(scope="function")
def db_state_checker(test_session: Session):
    """Utility for checking database state in tests."""
    class DatabaseStateChecker:
        def __init__(self, session: Session):
            self.session = session

        def count_users(self) -> int:
            return len(self.session.exec(select(User)).all())

        def count_accounts(self) -> int:
            return len(self.session.exec(select(Account)).all())

    return DatabaseStateChecker(test_session)
