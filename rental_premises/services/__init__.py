"""
Service layer for business logic implementation.
Contains services for listings, authentication and error handling.
"""

from .auth import AuthService
from .building import BuildingService
from .error_handler import ErrorHandlerService

__all__ = [
    "AuthService",
    "BuildingService",
    "ErrorHandlerService"
]
