# CRUD operations package

from app.crud.base import CRUDBase
from app.crud.user import CRUDUser, user
from app.crud.location import CRUDLocation, location

__all__ = [
    "CRUDBase",
    "CRUDUser", "user",
    "CRUDLocation", "location",
]
