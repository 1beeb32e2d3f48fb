"""
Record Store
Thin async create/find/update layer over SQLAlchemy models.
"""

from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from imf_api.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class RecordStore(Generic[ModelT]):
    """
    Generic record store for a single model.

    Every method is one round trip to the database. Nothing here holds a
    transaction open across calls, so find-then-update sequences are not
    atomic against concurrent writers.
    """

    def __init__(self, session: AsyncSession, model: Type[ModelT]):
        self.session = session
        self.model = model

    async def create(self, **data: Any) -> ModelT:
        record = self.model(**data)
        self.session.add(record)
        await self.session.commit()
        await self.session.refresh(record)
        return record

    async def find_unique(self, **where: Any) -> Optional[ModelT]:
        stmt = select(self.model).filter_by(**where)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_many(self, **where: Any) -> List[ModelT]:
        """Return records matching every equality filter, oldest first."""
        stmt = select(self.model).filter_by(**where)
        if hasattr(self.model, "created_at"):
            stmt = stmt.order_by(self.model.created_at)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, record_id: str, **data: Any) -> Optional[ModelT]:
        record = await self.session.get(self.model, record_id)
        if record is None:
            return None
        for key, value in data.items():
            setattr(record, key, value)
        await self.session.commit()
        await self.session.refresh(record)
        return record
