"""
Authentication schemas.

This module contains Pydantic schemas for registration, login and
session check requests and responses.
"""

from typing import Optional
from pydantic import BaseModel, Field

from app.schemas.base import BaseSchema


class UserCredentials(BaseModel):
    """Username/password pair sent to register and login."""
    username: str = Field(..., min_length=1, max_length=150)
    password: str = Field(..., min_length=1)


class UserCreate(UserCredentials):
    """Schema for registering a new user."""


class UserPublic(BaseSchema):
    """User fields safe to return to clients."""
    id: int
    username: str


class TokenPayload(BaseModel):
    """Claims carried by an access token."""
    sub: str
    iat: Optional[int] = None
    exp: int


class RegisterResponse(BaseModel):
    success: bool = True


class LoginResponse(BaseModel):
    """Successful login: bearer token plus the user it identifies."""
    success: bool = True
    token: str
    user: UserPublic


class CheckAuthResponse(BaseModel):
    loggedIn: bool = True
    user: UserPublic
