"""
Base CRUD operations for SQLAlchemy models.

Provides generic Create, Read, Update operations that can be
inherited and extended by model-specific CRUD classes.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Any, Generic, TypeVar, Sequence

from sqlalchemy import ColumnElement, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Generic base class for CRUD operations.

    Provides standard database operations that work with any SQLAlchemy model.
    Subclasses should specify the model class and can override or extend
    these methods for model-specific behavior.

    Reads use populate_existing so an entity already in the session's
    identity map is refreshed from the row instead of served stale after
    a conditional UPDATE.

    Type Parameters:
        ModelT: SQLAlchemy model class inheriting from Base

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        """
        Initialize CRUD with target model.

        Args:
            model: SQLAlchemy model class for database operations
        """
        self.model = model

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """
        Create a new record in the database.

        Args:
            session: Async database session
            **kwargs: Model field values

        Returns:
            Created model instance with generated ID and timestamps
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: int) -> ModelT | None:
        """
        Retrieve a single record by primary key.

        Args:
            session: Async database session
            id: Integer primary key

        Returns:
            Model instance if found, None otherwise
        """
        stmt = (
            select(self.model)
            .where(self.model.id == id)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_many(self, session: AsyncSession, ids: Sequence[int]) -> dict[int, ModelT]:
        """
        Retrieve several records keyed by id.

        Args:
            session: Async database session
            ids: Primary keys (duplicates allowed)

        Returns:
            dict mapping id to instance for the ids that exist
        """
        if not ids:
            return {}
        stmt = select(self.model).where(self.model.id.in_(set(ids)))
        result = await session.execute(stmt)
        return {row.id: row for row in result.scalars().all()}

    async def update_where(
        self,
        session: AsyncSession,
        id: int,
        *conditions: ColumnElement[bool],
        **values: Any,
    ) -> bool:
        """
        Conditionally update a record (compare-and-set).

        The UPDATE only applies when every extra condition holds at write
        time, so two concurrent writers that observed the same prior state
        cannot both succeed.

        Args:
            session: Async database session
            id: Integer primary key
            *conditions: Additional WHERE criteria
            **values: Column values or SQL expressions to set

        Returns:
            True if a row was updated, False otherwise
        """
        stmt = (
            update(self.model)
            .where(self.model.id == id, *conditions)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def update_by_id(
        self,
        session: AsyncSession,
        id: int,
        **kwargs,
    ) -> ModelT | None:
        """
        Update a record by primary key.

        Args:
            session: Async database session
            id: Integer primary key
            **kwargs: Fields to update with new values

        Returns:
            Updated model instance if found, None otherwise
        """
        if not await self.update_where(session, id, **kwargs):
            return None
        return await self.get_by_id(session, id)

    async def exists(self, session: AsyncSession, id: int) -> bool:
        """
        Check if a record exists by primary key.

        Args:
            session: Async database session
            id: Integer primary key

        Returns:
            True if record exists, False otherwise
        """
        stmt = select(self.model.id).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None
