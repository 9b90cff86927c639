"""Base repository: owner-scoped reads plus generic create/update/delete."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class OwnerScopedRepository(Generic[ModelType]):
    """Base repository whose reads always filter on owner_id.

    The owner filter is applied even though Postgres RLS enforces the same
    rule, so a misconfigured role (e.g. one with BYPASSRLS) still cannot read
    another identity's rows through this class.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_owned(self, entity_id: str, owner_id: str) -> ModelType | None:
        """Return the record with this primary key owned by owner_id, or None."""
        model: Any = self.model
        result = await self.db.execute(
            select(self.model).where(model.id == entity_id, model.owner_id == owner_id)
        )
        return result.scalar_one_or_none()

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and load server-side defaults."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def update(self, obj: ModelType) -> ModelType:
        """Flush changes on an attached record and reload it."""
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        await self.db.delete(obj)
        await self.db.flush()
