"""
Pydantic schemas for user responses and the audit log.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime
from rental_premises.models.user import UserRole


class AuditLogEntryResponse(BaseModel):
    """Single audit log entry."""

    model_config = ConfigDict(from_attributes=True)

    message: str = Field(..., description="Action description")
    created_at: Optional[datetime] = Field(None, description="When the action was recorded")


class UserResponse(BaseModel):
    """Public user information. Anonymous callers have no id and no username."""

    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = Field(None, description="User ID")
    username: Optional[str] = Field(None, description="Login name", examples=["owner1"])
    role: Optional[UserRole] = Field(None, description="User role")
    is_active: bool = Field(True, description="Whether the account is active")


class CurrentUserResponse(UserResponse):
    """Current user with the audit log."""

    anonymous: bool = Field(..., description="True when the caller is not a stored user")
    logs: List[AuditLogEntryResponse] = Field(default_factory=list, description="Audit log, oldest first")
