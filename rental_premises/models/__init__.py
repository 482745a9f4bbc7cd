"""
Database models for the Rental Premises API.
Includes User, AuditLogEntry, Building and Image models with relationships.
"""

from rental_premises.models.user import User, UserRole, AuditLogEntry
from rental_premises.models.building import Building
from rental_premises.models.image import Image

# Export all models for easy importing
__all__ = [
    "User",
    "UserRole",
    "AuditLogEntry",
    "Building",
    "Image",
]
