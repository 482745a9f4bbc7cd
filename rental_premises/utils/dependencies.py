"""
FastAPI dependency injection utilities for authentication and services.
Provides reusable dependencies for caller identity and route protection.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from rental_premises.database import get_db
from rental_premises.models.user import User
from rental_premises.services.auth import AuthService
from rental_premises.services.building import BuildingService
from rental_premises.utils.exceptions import (
    UnauthorizedError,
    InactiveUserError,
    InsufficientPermissionsError
)


# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


async def get_building_service(db: AsyncSession = Depends(get_db)) -> BuildingService:
    return BuildingService(db)


async def get_current_username(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[str]:
    """
    Username of the caller, or None.

    A missing, malformed or expired token is treated as an anonymous caller.
    """
    if not credentials:
        return None
    return AuthService.username_from_token(credentials.credentials)


async def get_current_user(
    username: Optional[str] = Depends(get_current_username),
    building_service: BuildingService = Depends(get_building_service)
) -> User:
    """
    Current user; an unsaved default ``User()`` for anonymous or unknown callers.
    """
    return await building_service.resolve_current_user(username)


async def get_current_admin_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    building_service: BuildingService = Depends(get_building_service)
) -> User:
    """
    Current user with admin role.

    Raises:
        UnauthorizedError: If no valid token is provided or the user is unknown
        InactiveUserError: If the account is inactive
        InsufficientPermissionsError: If the user is not an admin
    """
    if not credentials:
        raise UnauthorizedError("Authentication token required")

    username = AuthService.require_username(credentials.credentials)
    user = await building_service.resolve_current_user(username)

    if user.is_anonymous:
        raise UnauthorizedError("Unknown user")

    if not user.is_active:
        raise InactiveUserError()

    if not user.is_admin:
        raise InsufficientPermissionsError("review premises")

    return user
