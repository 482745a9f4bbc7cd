"""
Building repository for listing storage and filtered listing queries.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from rental_premises.repositories.base import BaseRepository
from rental_premises.models.building import Building
from typing import Optional, List, Tuple, Any
import operator
import logging

logger = logging.getLogger(__name__)

# (field, operator, value)
Predicate = Tuple[str, str, Any]

OPERATORS = {
    "eq": operator.eq,
    "le": operator.le,
}


class BuildingFilters:
    """Optional listing criteria; every supplied criterion narrows the result."""

    def __init__(
        self,
        name: Optional[str] = None,
        location: Optional[str] = None,
        max_price: Optional[int] = None,
        approved: Optional[bool] = None
    ):
        self.name = name
        self.location = location
        self.max_price = max_price
        self.approved = approved

    def to_predicates(self) -> List[Predicate]:
        """
        Turn the supplied criteria into ``(field, operator, value)`` tuples.

        Empty strings count as "not supplied" for name and location. The
        tuples are combined with AND by the repository.
        """
        predicates: List[Predicate] = []
        if self.name:
            predicates.append(("name", "eq", self.name))
        if self.location:
            predicates.append(("location", "eq", self.location))
        if self.max_price is not None:
            predicates.append(("price", "le", self.max_price))
        if self.approved is not None:
            predicates.append(("approved", "eq", self.approved))
        return predicates

    def __repr__(self) -> str:
        return f"<BuildingFilters({self.to_predicates()})>"


class BuildingRepository(BaseRepository[Building]):
    """Repository for building listings."""

    def __init__(self, db: AsyncSession):
        super().__init__(Building, db)

    async def delete_by_id(self, id: int) -> bool:
        """
        Delete a building and, by cascade, its images.

        Returns:
            True if the building existed, False otherwise
        """
        building = await self.get_by_id(id)
        if building is None:
            logger.debug(f"Building with id {id} not found for deletion")
            return False

        owner = building.owner
        deleted = await super().delete_by_id(id)

        # The flush does not touch the owner's loaded collection
        if owner is not None:
            self.db.expire(owner, ["buildings"])

        return deleted

    async def find_by_predicates(self, predicates: List[Predicate]) -> List[Building]:
        """
        Select buildings matching all predicates.

        Args:
            predicates: ``(field, operator, value)`` tuples; operators are
                        "eq" and "le"

        Returns:
            Matching buildings in storage order; every building when the
            list is empty

        Raises:
            ValueError: On an unknown field or operator
        """
        query = select(Building)

        for field, op, value in predicates:
            if field not in Building.__table__.columns:
                raise ValueError(f"Unknown building field: {field}")
            if op not in OPERATORS:
                raise ValueError(f"Unsupported operator: {op}")
            query = query.where(OPERATORS[op](getattr(Building, field), value))

        try:
            result = await self.db.execute(query)
            buildings = list(result.scalars().all())
            logger.debug(f"Building query with {len(predicates)} predicates returned {len(buildings)} rows")
            return buildings
        except Exception as e:
            logger.error(f"Failed to query buildings: {e}")
            raise

    async def search(self, filters: BuildingFilters) -> List[Building]:
        return await self.find_by_predicates(filters.to_predicates())
