"""
Image repository for reading stored building photos.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import undefer
from rental_premises.repositories.base import BaseRepository
from rental_premises.models.image import Image
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class ImageRepository(BaseRepository[Image]):
    """Repository for images; writes go through the owning building."""

    def __init__(self, db: AsyncSession):
        super().__init__(Image, db)

    async def get_with_data(self, image_id: int) -> Optional[Image]:
        """
        Load one image including its payload.

        ``Image.data`` is deferred everywhere else, so listings and the
        owner's buildings never pull photo bytes into memory.
        """
        query = (
            select(Image)
            .options(undefer(Image.data))
            .where(Image.id == image_id)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.db.execute(query)
        except Exception as e:
            logger.error(f"Failed to load image {image_id}: {e}")
            raise
        return result.scalar_one_or_none()
