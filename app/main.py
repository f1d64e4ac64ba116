"""
Main FastAPI application for the Weather Locations API.

This module builds the application: logging, exception handlers,
routers and the static entry page fallback.
"""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import FileResponse, JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from app.config import settings
from app.database import check_database_connection
from app.exceptions import WeatherAppError, weather_app_exception_handler
from app.routers.auth import router as auth_router
from app.routers.locations import router as locations_router
from app.utils.logging_config import setup_logging, get_logger

# Import all models so they are registered with Base.metadata
import app.models  # noqa: F401

# Initialize logging
setup_logging()
logger = get_logger(__name__)

# Initialize rate limiter
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Handles startup and shutdown events.

    Note: Database tables are managed through Alembic migrations.
    Run `alembic upgrade head` to create/update database tables.
    """
    logger.info("=" * 60)
    logger.info(f"{settings.PROJECT_NAME} - Application starting up")
    logger.info(f"Environment: {'Development' if settings.DEBUG else 'Production'}")
    logger.info(f"Database: {settings.SQLALCHEMY_DATABASE_URI.split('://')[0]}")
    logger.info("=" * 60)
    if not settings.OPENWEATHER_API_KEY:
        logger.warning("OPENWEATHER_API_KEY is not set; weather lookups will be rejected by the provider")

    await check_database_connection()

    yield

    logger.info("=" * 60)
    logger.info(f"{settings.PROJECT_NAME} - Application shutting down")
    logger.info("=" * 60)


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Per-user saved locations with current weather from OpenWeatherMap",
    version="1.0.0",
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(WeatherAppError, weather_app_exception_handler)

# Set up CORS
if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.get("/health")
@limiter.limit(settings.HEALTH_RATE_LIMIT)
async def health_check(request: Request):
    """
    Health check endpoint.
    """
    return {"status": "healthy"}


# Include routers
app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(locations_router, prefix=settings.API_PREFIX)


# Registered last so it never shadows an API route
@app.get("/{full_path:path}", include_in_schema=False)
async def index_page(full_path: str):
    """Serve the single-page client's entry point for any other path."""
    index_file = Path(settings.STATIC_DIR) / "index.html"
    if not index_file.is_file():
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"success": False, "error": "Not found"},
        )
    return FileResponse(index_file)


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description=(
            "Register, log in, save locations and fetch their current weather.\n\n"
            "Log in via `POST /api/login`, then send the returned token as "
            "`Authorization: Bearer <token>` on every other `/api` endpoint. "
            "Tokens expire after one hour."
        ),
        routes=app.routes,
    )

    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "BearerAuth": {
            "type": "apiKey",
            "in": "header",
            "name": "Authorization",
            "description": "Enter `Bearer <token>` with a token from /api/login",
        }
    }

    openapi_schema["tags"] = [
        {"name": "authentication", "description": "Registration, login and session checks"},
        {"name": "locations", "description": "Saved locations and their current weather"},
    ]

    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
