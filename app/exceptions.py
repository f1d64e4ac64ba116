"""
Application exceptions and their HTTP rendering.

Every failure the API can report derives from WeatherAppError. Route
handlers translate store and provider failures into endpoint-specific
bodies; anything that escapes a route (notably the auth gate) is rendered
by the handler registered in app.main.
"""

from typing import Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse


class WeatherAppError(Exception):
    """Base exception carrying a message and the HTTP status it maps to."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {"success": False, "error": self.message}


# =============================================================================
# Authentication
# =============================================================================

class Unauthenticated(WeatherAppError):
    """No bearer credential was supplied."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class Forbidden(WeatherAppError):
    """A credential was supplied but is invalid or expired."""

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class TokenError(Exception):
    """Raised by the token service when a token cannot be verified."""


class TokenExpired(TokenError):
    pass


class TokenInvalid(TokenError):
    pass


# =============================================================================
# Persistence
# =============================================================================

class NotFoundError(WeatherAppError):
    status_code = status.HTTP_404_NOT_FOUND


class DuplicateUsernameError(WeatherAppError):
    """Raised when registering a username that already exists."""

    def __init__(self, username: str):
        super().__init__(f"Username already registered: {username}")
        self.username = username


class StoreError(WeatherAppError):
    """Generic persistence failure."""


# =============================================================================
# Weather aggregation
# =============================================================================

class AggregationError(WeatherAppError):
    """A single location's lookup failed, failing the whole aggregation."""

    def __init__(self, location_name: str, message: str):
        super().__init__(message)
        self.location_name = location_name


class LocationNotFound(AggregationError):
    """Geocoding returned no match for a location name."""

    def __init__(self, location_name: str):
        super().__init__(
            location_name,
            f"Could not find coordinates for location: {location_name}",
        )


async def weather_app_exception_handler(request: Request, exc: WeatherAppError) -> JSONResponse:
    """Render an uncaught application error as a JSON body with a success flag."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
