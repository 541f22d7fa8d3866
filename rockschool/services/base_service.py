# rockschool/services/base_service.py
"""Base service with common lookups shared by the comment store and profiles."""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from typing import Type, Any, List, Optional, TypeVar, Generic
import logging

from ..core.exceptions import PersistenceError

logger = logging.getLogger(__name__)

# Define generic type
T = TypeVar('T')

class BaseService(Generic[T]):
    def __init__(self, model: Type[T], db: AsyncSession):
        self.model = model
        self.db = db

    async def _scalar(self, stmt, operation: str):
        try:
            result = await self.db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error during %s on %s: %s", operation, self.model.__name__, e)
            raise PersistenceError(str(e), operation=operation) from e

    async def get(self, id: Any, *options) -> Optional[T]:
        stmt = select(self.model).where(self.model.id == id)
        if options:
            stmt = stmt.options(*options)
        return await self._scalar(stmt, "get")

    async def exists(self, id: Any) -> bool:
        if id is None:
            return False
        stmt = select(self.model.id).where(self.model.id == id)
        return await self._scalar(stmt, "exists") is not None

    async def get_multi(self, *criteria, order_by=None, options=(), join=None, limit: int = 100) -> List[T]:
        """Rows matching criteria; join is an optional outer join target for filtering"""
        stmt = select(self.model)
        if join is not None:
            stmt = stmt.outerjoin(join)
        if criteria:
            stmt = stmt.where(*criteria)
        if options:
            stmt = stmt.options(*options)
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        stmt = stmt.limit(limit)
        try:
            result = await self.db.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error during get_multi on %s: %s", self.model.__name__, e)
            raise PersistenceError(str(e), operation="get_multi") from e
