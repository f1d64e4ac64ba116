"""
Shared pytest fixtures.

Tests run against a file-backed SQLite database recreated for every test
and a fake OpenWeatherMap served through httpx.MockTransport.
"""

import os

# Must be set before the application modules read their settings
os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite+aiosqlite:///./test_app.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("OPENWEATHER_API_KEY", "test-openweather-key")
os.environ.setdefault("LOG_DIR", "./logs")
os.environ["RATE_LIMIT_ENABLED"] = "false"

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from app.database import Base, get_db
from app.main import app
from app.services.weather import WeatherAggregator, get_weather_aggregator
from fakes import FakeOpenWeather

SYNC_TEST_DATABASE_URL = "sqlite:///./test_app.db"
ASYNC_TEST_DATABASE_URL = "sqlite+aiosqlite:///./test_app.db"

# NullPool: TestClient may drive each request from a different event loop
async_engine = create_async_engine(ASYNC_TEST_DATABASE_URL, poolclass=NullPool)
TestingSessionLocal = sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def fake_weather():
    """Fake provider; tests may mutate it before making requests."""
    return FakeOpenWeather()


@pytest.fixture
def db_engine():
    """Create the schema before a test and drop it afterwards."""
    engine = create_engine(SYNC_TEST_DATABASE_URL)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def client(db_engine, fake_weather):
    """TestClient with the database and weather provider overridden."""

    async def _override_get_db():
        async with TestingSessionLocal() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def _override_weather_aggregator():
        async with httpx.AsyncClient(transport=httpx.MockTransport(fake_weather)) as http_client:
            yield WeatherAggregator(http_client, api_key="test-openweather-key")

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_weather_aggregator] = _override_weather_aggregator
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register_and_login(client):
    """Return a helper that registers a user, logs in and returns the login JSON."""

    def _register_and_login(username: str, password: str = "password123") -> dict:
        response = client.post("/api/register", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        response = client.post("/api/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return response.json()

    return _register_and_login


@pytest.fixture
def auth_headers(register_and_login):
    """Authorization headers for a freshly registered user."""
    data = register_and_login("alice")
    return {"Authorization": f"Bearer {data['token']}"}
