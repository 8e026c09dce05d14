"""
User API routes.
"""

from fastapi import APIRouter

from api.dependencies import CurrentUser
from api.schemas.user import UserResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: CurrentUser):
    """Profile of the authenticated user."""
    return current_user
