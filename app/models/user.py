"""
User database model.

This module contains the User model backing the credential store.
"""

from sqlalchemy import Column, String

from app.models.base import BaseModel


class User(BaseModel):
    """
    User model for login.

    Only the salted password hash is stored; rows are never updated
    after registration.
    """

    __tablename__ = "users"

    username = Column(String(150), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"
