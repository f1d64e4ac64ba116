"""
Application configuration using Pydantic settings.

This module contains all configuration settings for the application,
loaded from environment variables with sensible defaults.
"""

import os
import secrets
from typing import List, Optional, Union

from pydantic import Field, field_validator, ValidationInfo, ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden with environment variables.
    """

    # API Configuration
    PROJECT_NAME: str = "Weather Locations API"
    API_PREFIX: str = "/api"
    SECRET_KEY: str = Field(
        default_factory=lambda: os.getenv("SECRET_KEY") or secrets.token_urlsafe(32),
        description="Secret key for JWT signing. MUST be set via SECRET_KEY environment variable in production!"
    )
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Server Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    DEBUG: bool = False
    STATIC_DIR: str = "public"

    # CORS Configuration
    # Note: Using Union[str, List] to avoid pydantic-settings JSON parsing of list fields
    BACKEND_CORS_ORIGINS: Union[str, List[str]] = "http://localhost:3000,http://localhost:5173"

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(
        cls, v: Union[str, List[str]]
    ) -> List[str]:
        """
        Parse CORS origins from environment variable.

        Supports:
        - Comma-separated string: "http://localhost,http://example.com"
        - Already parsed list: ["http://localhost"]
        - Empty string: returns empty list
        """
        if v is None or v == "":
            return []
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, list):
            return v
        raise ValueError(f"Invalid CORS origins format: {v}")

    # Database Configuration
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "weather_user"
    POSTGRES_PASSWORD: str = "weather_password"
    POSTGRES_DB: str = "weather_locations"
    POSTGRES_PORT: int = 5432

    SQLALCHEMY_DATABASE_URI: Optional[str] = None

    @field_validator("SQLALCHEMY_DATABASE_URI", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info: ValidationInfo) -> str:
        """Assemble database connection string from individual components."""
        if isinstance(v, str) and v:
            return v

        # DATABASE_URL (Render/Railway/Heroku style)
        database_url = os.getenv("DATABASE_URL")
        if database_url:
            if database_url.startswith("postgres://"):
                database_url = database_url.replace("postgres://", "postgresql+asyncpg://", 1)
            elif database_url.startswith("postgresql://"):
                database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
            return database_url

        values = info.data
        db_name = values.get("POSTGRES_DB")

        if db_name and db_name.endswith(".db"):
            return f"sqlite+aiosqlite:///{db_name}"

        return (
            f"postgresql+asyncpg://{values.get('POSTGRES_USER')}:"
            f"{values.get('POSTGRES_PASSWORD')}@"
            f"{values.get('POSTGRES_SERVER')}:"
            f"{values.get('POSTGRES_PORT')}/"
            f"{db_name}"
        )

    # Rate limiting for credential endpoints (register/login) and /health
    RATE_LIMIT_ENABLED: bool = True
    AUTH_RATE_LIMIT: str = "10/minute"
    HEALTH_RATE_LIMIT: str = "60/minute"

    # OpenWeatherMap Configuration
    OPENWEATHER_API_KEY: Optional[str] = None
    OPENWEATHER_GEOCODE_URL: str = "https://api.openweathermap.org/geo/1.0/direct"
    OPENWEATHER_WEATHER_URL: str = "https://api.openweathermap.org/data/2.5/weather"
    OPENWEATHER_UNITS: str = "metric"
    WEATHER_HTTP_TIMEOUT: float = 10.0  # seconds

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    model_config = ConfigDict(
        env_file=".env",
        case_sensitive=True,
    )


# Create global settings instance
settings = Settings()
