"""FastAPI dependencies for database access and service instances.

This module wires the request-scoped database session into the user
repository and the repository into the user service.
"""

from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from .config import Settings, get_settings
from .database import get_session
from .repositories.user_repository import UserRepository
from .services.user_service import UserService


def get_app_settings() -> Settings:
    """Get application settings.

    Returns:
        Settings: Application configuration
    """
    return get_settings()


def get_user_repository(session: Annotated[Session, Depends(get_session)]) -> UserRepository:
    """Get user repository bound to the request's database session.

    Args:
        session: Database session

    Returns:
        UserRepository: User repository instance
    """
    return UserRepository(session)


def get_user_service(
    repository: Annotated[UserRepository, Depends(get_user_repository)],
) -> UserService:
    """Get user service instance.

    Args:
        repository: User repository

    Returns:
        UserService: User service instance
    """
    return UserService(repository)
