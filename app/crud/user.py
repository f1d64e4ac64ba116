"""
User CRUD operations.

This module is the credential store: it creates users from a username and
an already computed password hash, and looks them up.
"""

from typing import Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.crud.base import CRUDBase
from app.exceptions import DuplicateUsernameError, StoreError
from app.models.user import User


class CRUDUser(CRUDBase[User]):
    """
    CRUD operations for User model.
    """

    async def create(self, db: AsyncSession, *, username: str, password_hash: str) -> User:
        """
        Create a new user.

        Args:
            db: Database session
            username: Unique username
            password_hash: Salted hash of the user's password

        Returns:
            Created user instance

        Raises:
            DuplicateUsernameError: If the username is already taken
            StoreError: On any other database failure
        """
        db_obj = User(username=username, hashed_password=password_hash)
        db.add(db_obj)
        try:
            await db.commit()
            await db.refresh(db_obj)
        except IntegrityError as e:
            await db.rollback()
            raise DuplicateUsernameError(username) from e
        except SQLAlchemyError as e:
            await self._rollback(db, "Failed to create user", e)
            raise StoreError(f"Failed to create user: {e}") from e
        return db_obj

    async def get_by_username(self, db: AsyncSession, *, username: str) -> Optional[User]:
        """
        Get user by username.

        Args:
            db: Database session
            username: Username to look up

        Returns:
            User instance or None if not found
        """
        try:
            result = await db.execute(select(User).where(User.username == username))
        except SQLAlchemyError as e:
            await self._rollback(db, "Failed to look up user", e)
            raise StoreError(f"Failed to look up user: {e}") from e
        return result.scalars().first()


# Create instance of CRUDUser
user = CRUDUser(User)
