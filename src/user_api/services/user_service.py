"""User service for business logic operations.

This module provides business logic for user management: retrieval by ID
and creation guarded by the account number uniqueness rule.
"""

from ..exceptions import BusinessLogicException, NotFoundException
from ..logging_config import get_logger
from ..models.account import Account
from ..models.user import User
from ..repositories.user_repository import AccountNumberConflictError, UserGateway
from ..schemas.user_schemas import UserCreate, UserResponse

logger = get_logger("services.user")

DUPLICATE_ACCOUNT_MESSAGE = "This Account ID already exists."


class UserService:
    """Service for user business logic operations.

    Errors other than the two domain exceptions are left to propagate to
    the request boundary untouched.
    """

    def __init__(self, repository: UserGateway) -> None:
        """Initialize user service with its persistence gateway.

        Args:
            repository: Gateway used to read and write users
        """
        self.repository = repository

    async def find_by_id(self, user_id: int) -> UserResponse:
        """Get user by ID.

        Args:
            user_id: User ID to search for

        Returns:
            UserResponse for the stored user

        Raises:
            NotFoundException: If no user has that ID
        """
        user = await self.repository.find_by_id(user_id)
        if user is None:
            logger.debug(f"User {user_id} not found")
            raise NotFoundException("User", user_id)

        return UserResponse.model_validate(user)

    async def create(self, user_data: UserCreate) -> UserResponse:
        """Create a new user with its account.

        Args:
            user_data: User creation data

        Returns:
            Created user response

        Raises:
            BusinessLogicException: If the account number is already taken
        """
        number = user_data.account.number
        if await self.repository.exists_by_account_number(number):
            logger.info(
                "Rejected user creation for duplicate account number",
                extra={"account_number": number},
            )
            raise BusinessLogicException(DUPLICATE_ACCOUNT_MESSAGE, rule="unique_account_number")

        user = User(
            name=user_data.name,
            account=Account(**user_data.account.model_dump()),
        )

        try:
            user = await self.repository.save(user)
        except AccountNumberConflictError as e:
            # A concurrent request stored the same number between check and save
            raise BusinessLogicException(
                DUPLICATE_ACCOUNT_MESSAGE, rule="unique_account_number"
            ) from e

        logger.info(f"Created user {user.id}", extra={"user_id": user.id})
        return UserResponse.model_validate(user)
