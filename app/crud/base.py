"""
Base CRUD operations.

This module contains read helpers shared by the model-specific CRUD
classes, plus the error translation every write goes through.
"""

from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.database import Base
from app.exceptions import StoreError
from app.utils.logging_config import get_logger

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class CRUDBase(Generic[ModelType]):
    """
    Base CRUD operations class.

    Provides generic operations that can be used by specific model CRUD classes.
    """

    def __init__(self, model: Type[ModelType]):
        """
        Initialize CRUD operations for a specific model.

        Args:
            model: The SQLAlchemy model class
        """
        self.model = model

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        """
        Get a single record by ID.

        Args:
            db: Database session
            id: Record ID

        Returns:
            Model instance or None if not found

        Raises:
            StoreError: If the query fails
        """
        try:
            result = await db.execute(select(self.model).where(self.model.id == id))
        except SQLAlchemyError as e:
            await self._rollback(db, f"Failed to load {self.model.__name__} {id}", e)
            raise StoreError(f"Failed to load {self.model.__name__} {id}: {e}") from e
        return result.scalars().first()

    async def _rollback(self, db: AsyncSession, message: str, exc: Exception) -> None:
        """Log a failed statement and roll back the session."""
        logger.error(f"{message}: {exc}")
        await db.rollback()
