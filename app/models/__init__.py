# Database models package

from app.models.base import BaseModel
from app.models.user import User
from app.models.location import Location

__all__ = [
    "BaseModel",
    "User",
    "Location",
]
