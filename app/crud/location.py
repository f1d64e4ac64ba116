"""
Location CRUD operations.

Every query is scoped to the owning user id so one user can never see or
delete another user's rows.
"""

from typing import List

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.crud.base import CRUDBase
from app.exceptions import StoreError
from app.models.location import Location


class CRUDLocation(CRUDBase[Location]):
    """CRUD operations for saved locations."""

    async def add(self, db: AsyncSession, *, user_id: int, name: str) -> Location:
        """
        Save a location name for a user.

        Returns:
            Created location (its id is the new location id)
        """
        db_obj = Location(user_id=user_id, name=name)
        db.add(db_obj)
        try:
            await db.commit()
            await db.refresh(db_obj)
        except SQLAlchemyError as e:
            await self._rollback(db, "Failed to add location", e)
            raise StoreError(f"Failed to add location: {e}") from e
        return db_obj

    async def list_for_user(self, db: AsyncSession, *, user_id: int) -> List[Location]:
        """
        Get a user's locations in the order they were added.
        """
        try:
            result = await db.execute(
                select(Location)
                .where(Location.user_id == user_id)
                .order_by(Location.id)
            )
        except SQLAlchemyError as e:
            await self._rollback(db, "Failed to fetch locations", e)
            raise StoreError(f"Failed to fetch locations: {e}") from e
        return list(result.scalars().all())

    async def delete_for_user(self, db: AsyncSession, *, location_id: int, user_id: int) -> bool:
        """
        Delete a location if it exists and belongs to user_id.

        Returns:
            True if a row was deleted, False otherwise (not an error)
        """
        try:
            result = await db.execute(
                delete(Location).where(
                    Location.id == location_id,
                    Location.user_id == user_id,
                )
            )
            await db.commit()
        except SQLAlchemyError as e:
            await self._rollback(db, "Failed to delete location", e)
            raise StoreError(f"Failed to delete location: {e}") from e
        return result.rowcount > 0


location = CRUDLocation(Location)
