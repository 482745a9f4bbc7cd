"""
Pydantic schemas for request/response validation and serialization.
"""

from rental_premises.schemas.auth import RegisterRequest, LoginRequest, LoginResponse
from rental_premises.schemas.building import BuildingResponse, BuildingListResponse, ImageResponse
from rental_premises.schemas.user import UserResponse, CurrentUserResponse, AuditLogEntryResponse

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "LoginResponse",
    "BuildingResponse",
    "BuildingListResponse",
    "ImageResponse",
    "UserResponse",
    "CurrentUserResponse",
    "AuditLogEntryResponse",
]
