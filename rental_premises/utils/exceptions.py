"""
Exception hierarchy for the Rental Premises API.

Each class fixes its HTTP status and machine-readable error code; the
ErrorHandlerService turns any of them into the JSON error envelope.
"""

from typing import Any, Dict, Optional
from fastapi import HTTPException, status


class APIException(HTTPException):
    """Base API exception class."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class ValidationError(APIException):
    """Input rejected by a service (422)."""

    def __init__(self, detail: str):
        super().__init__(status.HTTP_422_UNPROCESSABLE_ENTITY, detail, "VALIDATION_ERROR")


class NotFoundError(APIException):
    """
    A looked-up resource does not exist (404).

    ``resource_id`` is kept so callers can tell which id was missing.
    """

    def __init__(self, resource: str, resource_id: Optional[Any] = None):
        detail = f"{resource} not found"
        if resource_id is not None:
            detail = f"{detail} with ID: {resource_id}"
        super().__init__(status.HTTP_404_NOT_FOUND, detail, "NOT_FOUND")
        self.resource = resource
        self.resource_id = resource_id


class UnauthorizedError(APIException):
    """The caller is not a stored user (401)."""

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(
            status.HTTP_401_UNAUTHORIZED,
            detail,
            "UNAUTHORIZED",
            headers={"WWW-Authenticate": "Bearer"}
        )


class ForbiddenError(APIException):
    """The caller is known but not allowed to do this (403)."""

    def __init__(self, detail: str = "Access forbidden"):
        super().__init__(status.HTTP_403_FORBIDDEN, detail, "FORBIDDEN")


class ConflictError(APIException):
    """The write clashes with existing data (409)."""

    def __init__(self, detail: str):
        super().__init__(status.HTTP_409_CONFLICT, detail, "CONFLICT")


# Authentication
class InvalidCredentialsError(UnauthorizedError):
    def __init__(self):
        super().__init__("Invalid username or password")


class InvalidTokenError(UnauthorizedError):
    def __init__(self, reason: str = "Invalid token"):
        super().__init__(reason)


class InactiveUserError(ForbiddenError):
    def __init__(self):
        super().__init__("User account is inactive")


class InsufficientPermissionsError(ForbiddenError):
    def __init__(self, action: str):
        super().__init__(f"Insufficient permissions to {action}")


class DuplicateResourceError(ConflictError):
    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} with identifier '{identifier}' already exists")


# Listings
class BuildingNotFoundError(NotFoundError):
    def __init__(self, building_id: int):
        super().__init__("Building", building_id)


class ImageNotFoundError(NotFoundError):
    def __init__(self, image_id: int):
        super().__init__("Image", image_id)
