"""
Pydantic schemas for registration and login.
"""

from pydantic import BaseModel, Field, field_validator
from rental_premises.schemas.user import UserResponse


class RegisterRequest(BaseModel):
    """Registration payload."""

    username: str = Field(..., min_length=3, max_length=100, examples=["owner1"])
    password: str = Field(..., min_length=8, max_length=128, examples=["secret-password"])

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        """Validate and clean username."""
        if not v or not v.strip():
            raise ValueError("Username cannot be empty")
        return v.strip()


class LoginRequest(BaseModel):
    """Login credentials."""

    username: str = Field(..., min_length=1, examples=["owner1"])
    password: str = Field(..., min_length=1, examples=["secret-password"])


class LoginResponse(BaseModel):
    """Login result with a bearer token."""

    user: UserResponse
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field("bearer", description="Token type")
    expires_in: int = Field(..., description="Token lifetime in seconds")
