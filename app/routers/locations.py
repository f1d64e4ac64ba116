"""
Locations router.

Saved locations and their current weather. Every endpoint runs behind the
auth gate and only ever touches the caller's own rows.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.location import location as location_crud
from app.database import get_db
from app.dependencies.auth import get_current_user_id
from app.exceptions import WeatherAppError
from app.schemas.location import (
    Location,
    LocationCreate,
    LocationCreatedResponse,
    LocationSummary,
    SuccessResponse,
)
from app.schemas.weather import WeatherObservation
from app.services.weather import WeatherAggregator, get_weather_aggregator
from app.utils.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(
    prefix="/locations",
    tags=["locations"],
    responses={
        401: {"description": "Missing bearer token"},
        403: {"description": "Invalid or expired bearer token"},
        500: {"description": "Store or weather provider failure"},
    },
)


def _server_error(error: str, details: Optional[str] = None) -> JSONResponse:
    content = {"error": error}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


@router.get("", response_model=List[Location])
async def list_locations(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Get the caller's saved locations in the order they were added."""
    try:
        return await location_crud.list_for_user(db, user_id=user_id)
    except WeatherAppError:
        return _server_error("Failed to fetch locations")


@router.get("/weather", response_model=List[WeatherObservation])
async def get_locations_weather(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    aggregator: WeatherAggregator = Depends(get_weather_aggregator),
):
    """
    Get current weather for every saved location.

    All locations are looked up concurrently. If any single lookup fails
    (unknown place, provider error, malformed response) the whole request
    fails with 500 and no partial results.
    """
    try:
        locations = await location_crud.list_for_user(db, user_id=user_id)
        return await aggregator.fetch_weather(locations)
    except WeatherAppError as e:
        return _server_error("Failed to fetch weather data for locations", e.message)


@router.post("", response_model=LocationCreatedResponse)
async def add_location(
    location_in: LocationCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Save a new location name for the caller."""
    try:
        db_obj = await location_crud.add(db, user_id=user_id, name=location_in.location)
    except WeatherAppError:
        return _server_error("Failed to add location")

    return LocationCreatedResponse(location=LocationSummary(id=db_obj.id, name=db_obj.name))


@router.delete("/{location_id}", response_model=SuccessResponse)
async def delete_location(
    location_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Delete one of the caller's locations.

    Reports success whether or not a row matched; other users' locations
    are never affected.
    """
    try:
        deleted = await location_crud.delete_for_user(db, location_id=location_id, user_id=user_id)
    except WeatherAppError:
        return _server_error("Failed to delete location")

    if not deleted:
        logger.debug(f"No location {location_id} owned by user {user_id}; nothing deleted")
    return SuccessResponse()
