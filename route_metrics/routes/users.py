"""
User Routes

Parameterized endpoint used to show route-template labels.

Author: Development Team
Version: 1.0.0
"""

from fastapi import APIRouter, HTTPException, status
from route_metrics.models import ErrorResponse, UserResponse

router = APIRouter(tags=["Users"])

# In-memory fixture data
USERS = {
    1: UserResponse(id=1, name="Ada Lovelace", email="ada@example.com"),
    2: UserResponse(id=2, name="Alan Turing"),
}


@router.get(
    "/users/{user_id}",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get user",
    responses={404: {"model": ErrorResponse, "description": "Unknown user"}},
)
async def get_user(user_id: int):
    """
    Look up a user by id.

    Every id is recorded under the ``/users/{user_id}`` handler label.
    """
    user = USERS.get(user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User {user_id} not found",
        )
    return user
