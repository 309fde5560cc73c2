"""
Shared CRUD base for the workspace models.

Model-specific CRUD singletons subclass BaseCRUD and add their own
queries. Every method flushes so generated ids and defaults are visible,
but none commits; the caller owns the transaction.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from datetime import datetime
from typing import Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import ColumnElement, and_, delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from workbench.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


def active_at(model, now: datetime) -> ColumnElement[bool]:
    """
    WHERE clause selecting time-bounded rows valid at ``now``.

    A row is active when ``start_at <= now`` and ``end_at`` is null or
    strictly after ``now``.
    """
    return and_(
        model.start_at <= now,
        or_(model.end_at.is_(None), model.end_at > now),
    )


class BaseCRUD(Generic[ModelT]):
    """
    Primary-key operations for one model class.

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """
        Insert one row and return it with generated id and timestamps.

        Args:
            session: Async database session
            **kwargs: Model field values
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def bulk_create(self, session: AsyncSession, rows: list[dict]) -> list[ModelT]:
        """Insert several rows in a single flush, preserving input order."""
        instances = [self.model(**row) for row in rows]
        session.add_all(instances)
        await session.flush()
        return instances

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        """Row with the given primary key, or None."""
        result = await session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def get_all(
        self,
        session: AsyncSession,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[ModelT]:
        """
        Every row of the table, optionally paginated.

        Args:
            session: Async database session
            limit: Maximum number of rows (None for all)
            offset: Number of rows to skip
        """
        stmt = select(self.model).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_by_id(self, session: AsyncSession, id: UUID) -> bool:
        """
        Delete a row by primary key.

        Returns:
            True if a row was deleted, False if none matched
        """
        result = await session.execute(delete(self.model).where(self.model.id == id))
        return result.rowcount > 0
