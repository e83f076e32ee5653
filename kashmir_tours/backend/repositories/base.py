"""
Base Repository.

Primary-key lookups and writes shared by every entity repository.
Writes flush but never commit; the request or CLI session owns the
transaction.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kashmir_tours.backend.core.exceptions import NotFoundError
from kashmir_tours.backend.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Repository over one mapped class.

        class TourRepository(BaseRepository[Tour]):
            model = Tour
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, id: str) -> ModelType:
        """
        Load a row by primary key.

        Raises:
            NotFoundError: No row with this key ("Tour not found", ...)
        """
        instance = await self.get_by_id_or_none(id)
        if instance is None:
            raise NotFoundError(f"{self.model.__name__} not found")
        return instance

    async def get_by_id_or_none(self, id: str) -> ModelType | None:
        result = await self.session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def create(self, **fields: Any) -> ModelType:
        """Insert a row and reload it so server defaults are populated."""
        instance = self.model(**fields)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, id: str, **fields: Any) -> ModelType:
        """
        Assign the given columns on an existing row.

        Keys that are not attributes of the model are ignored.

        Raises:
            NotFoundError: No row with this key
        """
        instance = await self.get_by_id(id)
        for name, value in fields.items():
            if hasattr(instance, name):
                setattr(instance, name, value)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, id: str) -> None:
        """
        Hard-delete a row.

        Raises:
            NotFoundError: No row with this key
        """
        instance = await self.get_by_id(id)
        await self.session.delete(instance)
        await self.session.flush()
