"""
Generic async repository shared by users, buildings, images and log entries.

Repositories never commit. Writes are flushed so generated ids become
available, and the surrounding ``transaction()`` decides whether they stick.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import Select, select, func
from rental_premises.database import Base
from typing import TypeVar, Generic, Optional, List, Dict, Any, Type
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Save, lookup, equality filtering, counting and deletion for one model."""

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    @property
    def _name(self) -> str:
        return self.model.__name__

    def _where_equal(self, query: Select, filters: Optional[Dict[str, Any]]) -> Select:
        """Narrow ``query`` by ``column == value`` (or ``IN`` for list values)."""
        for field, value in (filters or {}).items():
            if field not in self.model.__table__.columns:
                raise ValueError(f"Field '{field}' does not exist on {self._name}")
            column = getattr(self.model, field)
            query = query.where(column.in_(value) if isinstance(value, list) else column == value)
        return query

    async def save(self, db_obj: ModelType) -> ModelType:
        """
        Add a new or changed instance to the session and flush it.

        Returns:
            The same instance with generated fields (id, timestamps) populated
        """
        try:
            self.db.add(db_obj)
            await self.db.flush()
        except Exception as e:
            logger.error(f"Failed to save {self._name}: {e}")
            raise
        logger.debug(f"Saved {self._name} {db_obj.id}")
        return db_obj

    async def create(self, obj_in: Dict[str, Any]) -> ModelType:
        return await self.save(self.model(**obj_in))

    async def get_by_id(self, id: int) -> Optional[ModelType]:
        """Primary-key lookup; None when absent."""
        try:
            obj = await self.db.get(self.model, id)
        except Exception as e:
            logger.error(f"Failed to get {self._name} {id}: {e}")
            raise
        logger.debug(f"{self._name} {id} {'found' if obj else 'not found'}")
        return obj

    async def get_multi(self, filters: Optional[Dict[str, Any]] = None) -> List[ModelType]:
        """All rows matching ``filters``, in id order."""
        query = self._where_equal(select(self.model), filters).order_by(self.model.id)
        try:
            result = await self.db.execute(query)
        except Exception as e:
            logger.error(f"Failed to list {self._name} records: {e}")
            raise
        return list(result.scalars().all())

    async def get_by_field(self, field: str, value: Any) -> Optional[ModelType]:
        """Single row whose ``field`` equals ``value``; None when absent."""
        query = self._where_equal(select(self.model), {field: value})
        try:
            result = await self.db.execute(query)
        except Exception as e:
            logger.error(f"Failed to get {self._name} by {field}: {e}")
            raise
        return result.scalar_one_or_none()

    async def delete_by_id(self, id: int) -> bool:
        """
        Delete through the session so ORM cascades (a building's images) apply.

        Returns:
            True if a row was deleted, False if the id was unknown
        """
        obj = await self.get_by_id(id)
        if obj is None:
            return False

        try:
            await self.db.delete(obj)
            await self.db.flush()
        except Exception as e:
            logger.error(f"Failed to delete {self._name} {id}: {e}")
            raise
        logger.debug(f"Deleted {self._name} {id}")
        return True

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        query = self._where_equal(select(func.count(self.model.id)), filters)
        try:
            result = await self.db.execute(query)
        except Exception as e:
            logger.error(f"Failed to count {self._name} records: {e}")
            raise
        return result.scalar_one()
