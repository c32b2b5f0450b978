"""Generic persistence access for the condominium entities."""

import uuid
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from backend.condo.db.context import RequestContext
from backend.condo.db.models import Base
from backend.condo.errors import NotFound

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """Table access keyed by the generated UUID primary key.

    Args:
        session: Async database session
        model: ORM class backing the table
        owner_column: Column holding the owning user, used for listing scope
        label: Human-readable entity name for NotFound messages
    """

    def __init__(
        self,
        session: AsyncSession,
        model: type[ModelT],
        *,
        owner_column: InstrumentedAttribute[Any] | None = None,
        label: str | None = None,
    ) -> None:
        self._session = session
        self._model = model
        self._owner_column = owner_column
        self._label = label or model.__name__

    async def get(self, entity_id: uuid.UUID) -> ModelT | None:
        return await self._session.get(self._model, entity_id)

    async def get_or_raise(self, entity_id: uuid.UUID) -> ModelT:
        """Fetch by id.

        Raises:
            NotFound: If no row has this id
        """
        entity = await self.get(entity_id)
        if entity is None:
            raise NotFound(f"{self._label} not found")
        return entity

    def select_scoped(self, ctx: RequestContext) -> Select[tuple[ModelT]]:
        """Select all rows for admins, only the caller's rows otherwise."""
        query = select(self._model)
        if self._owner_column is not None and not ctx.is_admin:
            query = query.where(self._owner_column == ctx.user_id)
        return query

    async def all(self, query: Select[tuple[ModelT]]) -> list[ModelT]:
        result = await self._session.execute(query)
        return list(result.scalars().all())

    async def add(self, entity: ModelT) -> ModelT:
        """Stage a new row and flush so constraint violations surface here."""
        self._session.add(entity)
        await self._session.flush()
        return entity

    async def delete(self, entity: ModelT) -> None:
        await self._session.delete(entity)
        await self._session.flush()
