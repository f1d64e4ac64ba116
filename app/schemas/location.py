"""
Location schemas.
"""

from pydantic import BaseModel, Field

from app.schemas.base import BaseSchema, IDSchema


class LocationCreate(BaseModel):
    """Body of POST /locations; the field is named as the web client sends it."""
    location: str = Field(..., min_length=1, max_length=200)


class LocationSummary(IDSchema):
    name: str


class Location(LocationSummary):
    """Stored location as listed to its owner."""
    user_id: int


class LocationCreatedResponse(BaseSchema):
    success: bool = True
    location: LocationSummary


class SuccessResponse(BaseModel):
    success: bool = True
