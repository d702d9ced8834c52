"""
Base Repository Class - Async Repository Pattern

This module provides the generic base repository implementing CRUD operations
and common query patterns for all domain repositories.

Design Pattern:
    - Generic[T]: Type variable for model class
    - CRUD: Create, Read, Update, Delete operations
    - Batch lookup: get_many by primary keys
    - Error handling: Custom exceptions with context
"""

import logging
from collections.abc import Iterable, Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from careerpath.src.common.models.base import Base


logger = logging.getLogger(__name__)

# Type variable for model classes
T = TypeVar("T", bound=Base)


class RepositoryException(Exception):
    """Base exception for repository operations."""

    pass


class EntityNotFound(RepositoryException):
    """Raised when entity is not found."""

    pass


class DuplicateEntity(RepositoryException):
    """Raised when duplicate entity creation is attempted."""

    pass


class RepositoryError(RepositoryException):
    """Generic repository operation error."""

    pass


class BaseRepository(Generic[T]):
    """
    Generic repository implementing async CRUD operations.

    Attributes:
        model: SQLAlchemy ORM model class
        session: SQLAlchemy AsyncSession for database operations

    Example:
        >>> class UserRepository(BaseRepository[User]):
        ...     def __init__(self, session: AsyncSession) -> None:
        ...         super().__init__(User, session)
        >>>
        >>> async with engine.get_session() as session:
        ...     repo = UserRepository(session)
        ...     user = await repo.get(1)
    """

    def __init__(self, model: type[T], session: AsyncSession) -> None:
        if session is None:
            raise ValueError("AsyncSession cannot be None")

        self.model = model
        self.session: AsyncSession = session

    # ===== CRUD Operations =====

    async def create(self, obj_in: T | dict) -> T:
        """
        Create and persist a new entity.

        Args:
            obj_in: Model instance or dictionary with field values

        Returns:
            Created model instance with auto-generated id

        Raises:
            DuplicateEntity: If unique constraint violation occurs
            RepositoryError: On database operation failure
        """
        db_obj = self.model.from_dict(obj_in) if isinstance(obj_in, dict) else obj_in

        try:
            self.session.add(db_obj)
            await self.session.flush()  # Flush to get auto-generated id
        except IntegrityError as e:
            await self.session.rollback()
            if "unique" in str(e).lower():
                logger.error(f"Duplicate entity: {e}")
                raise DuplicateEntity(f"Entity already exists: {e}") from e
            raise RepositoryError(f"Database integrity error: {e}") from e
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error creating {self.model.__name__}: {e}")
            raise RepositoryError(f"Failed to create entity: {e}") from e

        logger.debug(f"Created {self.model.__name__} with id {db_obj.id}")
        return db_obj

    async def get(self, id: Any) -> T | None:
        """
        Retrieve entity by primary key.

        Returns:
            Model instance or None if not found
        """
        try:
            return await self.session.get(self.model, id)
        except Exception as e:
            logger.error(f"Error retrieving {self.model.__name__} by id {id}: {e}")
            raise RepositoryError(f"Failed to retrieve entity: {e}") from e

    async def get_many(self, ids: Iterable[Any]) -> Sequence[T]:
        """
        Retrieve entities whose primary key is in ``ids`` (order not guaranteed).
        """
        id_list = list(ids)
        if not id_list:
            return []

        stmt = select(self.model).where(self.model.id.in_(id_list))
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def update(self, id: Any, obj_in: dict[str, Any]) -> T:
        """
        Update an existing entity.

        Args:
            id: Primary key of entity to update
            obj_in: Dictionary of fields to update

        Returns:
            Updated model instance

        Raises:
            EntityNotFound: If entity with id not found
            RepositoryError: On database operation failure
        """
        db_obj = await self.get(id)
        if db_obj is None:
            raise EntityNotFound(f"{self.model.__name__} with id {id} not found")

        try:
            for key, value in obj_in.items():
                if hasattr(db_obj, key):
                    setattr(db_obj, key, value)

            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            if "unique" in str(e).lower():
                raise DuplicateEntity(f"Entity already exists: {e}") from e
            raise RepositoryError(f"Database integrity error: {e}") from e
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error updating {self.model.__name__} with id {id}: {e}")
            raise RepositoryError(f"Failed to update entity: {e}") from e

        logger.debug(f"Updated {self.model.__name__} with id {id}")
        return db_obj

    async def delete(self, id: Any) -> bool:
        """
        Delete an entity by primary key (hard delete).

        Returns:
            True if entity was deleted, False if not found
        """
        db_obj = await self.get(id)
        if db_obj is None:
            logger.debug(f"{self.model.__name__} with id {id} not found for deletion")
            return False

        try:
            await self.session.delete(db_obj)
            await self.session.flush()
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error deleting {self.model.__name__} with id {id}: {e}")
            raise RepositoryError(f"Failed to delete entity: {e}") from e

        logger.debug(f"Deleted {self.model.__name__} with id {id}")
        return True


__all__ = [
    "BaseRepository",
    "RepositoryException",
    "EntityNotFound",
    "DuplicateEntity",
    "RepositoryError",
]
