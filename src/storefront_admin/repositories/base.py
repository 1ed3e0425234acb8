"""Generic async repository over a single ORM model."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import Base

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """Create/find/update/delete/count over ``model`` within one session."""

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session

    def query(self) -> Select[tuple[ModelT]]:
        return select(self.model)

    async def find(self, id: int) -> ModelT | None:
        return await self.session.get(self.model, id)

    async def fetch(
        self, stmt: Select[tuple[ModelT]], limit: int | None = None, offset: int = 0
    ) -> Sequence[ModelT]:
        stmt = stmt.order_by(self.model.id)  # type: ignore[attr-defined]
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(self.model))
        return int(result.scalar_one())

    async def create(self, data: Mapping[str, Any]) -> ModelT:
        obj = self.model(**data)
        self.session.add(obj)
        await self.session.flush()
        await self.session.refresh(obj)
        return obj

    async def update(self, data: Mapping[str, Any], id: int) -> ModelT:
        obj = await self.find(id)
        if obj is None:
            raise LookupError(f"{self.model.__name__} {id} not found")

        for key, value in data.items():
            setattr(obj, key, value)

        await self.session.flush()
        await self.session.refresh(obj)
        return obj

    async def delete(self, id: int) -> bool:
        obj = await self.find(id)
        if obj is None:
            return False

        await self.session.delete(obj)
        await self.session.flush()
        return True
