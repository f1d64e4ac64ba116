# Pydantic schemas package

from app.schemas.base import BaseSchema, IDSchema
from app.schemas.auth import (
    UserCredentials, UserCreate, UserPublic, TokenPayload,
    RegisterResponse, LoginResponse, CheckAuthResponse
)
from app.schemas.location import (
    LocationCreate, LocationSummary, Location,
    LocationCreatedResponse, SuccessResponse
)
from app.schemas.weather import (
    GeocodeMatch, CurrentWeatherPayload, WeatherObservation
)

__all__ = [
    # Base schemas
    "BaseSchema", "IDSchema",

    # Auth schemas
    "UserCredentials", "UserCreate", "UserPublic", "TokenPayload",
    "RegisterResponse", "LoginResponse", "CheckAuthResponse",

    # Location schemas
    "LocationCreate", "LocationSummary", "Location",
    "LocationCreatedResponse", "SuccessResponse",

    # Weather schemas
    "GeocodeMatch", "CurrentWeatherPayload", "WeatherObservation",
]
