"""Generic async repository shared by the domain repositories."""

from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.base import BaseModel

ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Read helpers common to every integer-keyed model.

    Writes go through the owning service's session (``db.add`` followed by a
    commit) so a service controls its own transaction boundary.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    async def get_by_id(self, id: int) -> Optional[ModelType]:
        """
        Retrieve an entity by its ID.

        Args:
            id: The integer ID of the entity

        Returns:
            The entity if found, None otherwise
        """
        result = await self.db.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        order_by: Optional[Any] = None,
    ) -> List[ModelType]:
        """
        Retrieve a page of entities.

        Args:
            skip: Number of records to skip (offset)
            limit: Maximum number of records to return
            order_by: Ordering clause (defaults to id)
        """
        stmt = (
            select(self.model)
            .order_by(order_by if order_by is not None else self.model.id)
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def exists(self, id: int) -> bool:
        result = await self.db.execute(
            select(self.model.id).where(self.model.id == id)
        )
        return result.scalar_one_or_none() is not None

    async def count(self, **filters: Any) -> int:
        """
        Count entities whose columns equal the given values.

        Unknown column names are ignored.
        """
        stmt = select(func.count(self.model.id))
        for column, value in filters.items():
            if hasattr(self.model, column):
                stmt = stmt.where(getattr(self.model, column) == value)

        result = await self.db.execute(stmt)
        return result.scalar_one()
