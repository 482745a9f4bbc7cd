"""
User endpoints.
"""

from fastapi import APIRouter, Depends

from rental_premises.models.user import User
from rental_premises.schemas.user import CurrentUserResponse
from rental_premises.utils.dependencies import get_current_user

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "/me",
    response_model=CurrentUserResponse,
    summary="Current user",
    description="The caller's account and audit log. Anonymous callers get an empty default user."
)
async def read_current_user(current_user: User = Depends(get_current_user)) -> CurrentUserResponse:
    data = current_user.to_dict(include_logs=True)
    data["anonymous"] = current_user.is_anonymous
    return CurrentUserResponse.model_validate(data)
