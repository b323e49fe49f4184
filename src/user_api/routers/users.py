"""Users router for user lookup and creation.

Errors raised by the service are not handled here; the global exception
handlers turn them into responses.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from ..dependencies import get_user_service
from ..schemas.user_schemas import UserCreate, UserResponse
from ..services.user_service import UserService

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={
        404: {"description": "Resource ID not found."},
        422: {"description": "Business rule violation or invalid payload"},
        500: {"description": "Unexpected server error, see the logs."},
    },
)


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get a user by ID",
)
async def find_by_id(
    user_id: Annotated[int, Path(description="User ID")],
    user_service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Get a user and its account by ID.

    Example:
        GET /users/1

        Response:
        {
            "id": 1,
            "name": "Ada Lovelace",
            "account": {"id": 1, "number": "123", "agency": "0001", ...}
        }
    """
    return await user_service.find_by_id(user_id)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
    description="Create a user with its account; the account number must be unique",
)
async def create(
    user_data: UserCreate,
    response: Response,
    user_service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Create a new user.

    The ``Location`` header of the response points at the created user.

    Example:
        POST /users
        {
            "name": "Ada Lovelace",
            "account": {"number": "123", "agency": "0001"}
        }
    """
    user = await user_service.create(user_data)
    response.headers["Location"] = f"{router.prefix}/{user.id}"
    return user
