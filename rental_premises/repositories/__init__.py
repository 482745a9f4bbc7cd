"""
Repository layer for data access operations.
"""

from rental_premises.repositories.base import BaseRepository
from rental_premises.repositories.building import BuildingRepository, BuildingFilters
from rental_premises.repositories.image import ImageRepository
from rental_premises.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "BuildingRepository",
    "BuildingFilters",
    "ImageRepository",
    "UserRepository"
]
