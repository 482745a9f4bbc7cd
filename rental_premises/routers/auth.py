"""
Authentication API endpoints for registration and login.
"""

from fastapi import APIRouter, Depends, status

from rental_premises.config import settings
from rental_premises.services.auth import AuthService
from rental_premises.schemas.auth import RegisterRequest, LoginRequest, LoginResponse
from rental_premises.schemas.user import UserResponse
from rental_premises.utils.dependencies import get_auth_service


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create a regular user account"
)
async def register(
    register_data: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> UserResponse:
    user = await auth_service.register(register_data.username, register_data.password)
    return UserResponse.model_validate(user.to_dict())


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="User login",
    description="Authenticate with username and password, returns a JWT bearer token"
)
async def login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> LoginResponse:
    """
    Authenticate user and return a JWT token.

    Raises:
        InvalidCredentialsError: If credentials are invalid
    """
    user, access_token = await auth_service.login(
        username=login_data.username,
        password=login_data.password
    )

    return LoginResponse(
        user=UserResponse.model_validate(user.to_dict()),
        access_token=access_token,
        token_type="bearer",
        expires_in=settings.access_token_expire_minutes * 60
    )
