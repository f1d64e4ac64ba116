"""
Weather aggregation service.

Resolves saved location names to current conditions with OpenWeatherMap:
each name is geocoded (best match only) and the resulting coordinates are
queried for current weather in metric units. Locations are processed
concurrently, results come back in input order, and any single failure
fails the whole batch.
"""

import asyncio
from typing import AsyncIterator, List, Optional, Protocol, Sequence, Tuple

import httpx
from pydantic import ValidationError

from app.config import settings
from app.exceptions import AggregationError, LocationNotFound
from app.schemas.weather import CurrentWeatherPayload, GeocodeMatch, WeatherObservation
from app.utils.logging_config import get_logger

logger = get_logger(__name__)


class NamedLocation(Protocol):
    """Anything with a location name, e.g. a stored Location row."""

    name: str


class WeatherAggregator:
    """
    Fetch current weather for a batch of locations.

    The HTTP client is owned by the caller; the aggregator only issues
    requests through it.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: Optional[str],
        geocode_url: str = "https://api.openweathermap.org/geo/1.0/direct",
        weather_url: str = "https://api.openweathermap.org/data/2.5/weather",
        units: str = "metric",
    ):
        self.client = client
        self.api_key = api_key
        self.geocode_url = geocode_url
        self.weather_url = weather_url
        self.units = units

    async def fetch_weather(self, locations: Sequence[NamedLocation]) -> List[WeatherObservation]:
        """
        Fetch current conditions for every location.

        Args:
            locations: Locations in the order results should be returned

        Returns:
            One observation per location, in input order

        Raises:
            LocationNotFound: A location name could not be geocoded
            AggregationError: Any other lookup failed; no partial results are returned
        """
        names = [location.name for location in locations]
        logger.info(f"Fetching weather for {len(names)} location(s)")

        tasks = [asyncio.ensure_future(self.fetch_one(name)) for name in names]
        try:
            # gather keeps input order and raises the first failure
            observations = await asyncio.gather(*tasks)
        except AggregationError as e:
            logger.warning(f"Weather aggregation failed on '{e.location_name}': {e.message}")
            raise
        finally:
            # Lookups still running after a failure are abandoned
            for task in tasks:
                if not task.done():
                    task.cancel()

        logger.info(f"Fetched weather for {len(observations)} location(s)")
        return list(observations)

    async def fetch_one(self, name: str) -> WeatherObservation:
        """Geocode one location name, then fetch its current weather."""
        lat, lon = await self.geocode(name)

        payload = await self._get_json(
            name,
            self.weather_url,
            {"lat": lat, "lon": lon, "appid": self.api_key, "units": self.units},
        )
        try:
            current = CurrentWeatherPayload.model_validate(payload)
        except ValidationError as e:
            raise AggregationError(name, f"Malformed weather response for location: {name}") from e

        condition = current.weather[0]
        return WeatherObservation(
            location=name,
            temperature=current.main.temp,
            condition=condition.description,
            icon=condition.icon,
        )

    async def geocode(self, name: str) -> Tuple[float, float]:
        """
        Resolve a location name to its best (latitude, longitude) match.

        Raises:
            LocationNotFound: The provider returned no match
        """
        payload = await self._get_json(
            name,
            self.geocode_url,
            {"q": name, "limit": 1, "appid": self.api_key},
        )
        if not isinstance(payload, list):
            raise AggregationError(name, f"Malformed geocoding response for location: {name}")
        if len(payload) == 0:
            raise LocationNotFound(name)

        try:
            match = GeocodeMatch.model_validate(payload[0])
        except ValidationError as e:
            raise AggregationError(name, f"Malformed geocoding response for location: {name}") from e
        return match.lat, match.lon

    async def _get_json(self, name: str, url: str, params: dict):
        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise AggregationError(
                name,
                f"Weather provider returned {e.response.status_code} for location: {name}",
            ) from e
        except httpx.HTTPError as e:
            raise AggregationError(name, f"Weather provider request failed for location {name}: {e}") from e
        except ValueError as e:
            # Body was not JSON
            raise AggregationError(name, f"Invalid JSON from weather provider for location: {name}") from e


async def get_weather_aggregator() -> AsyncIterator[WeatherAggregator]:
    """
    Dependency yielding an aggregator backed by a short-lived HTTP client.
    """
    async with httpx.AsyncClient(timeout=settings.WEATHER_HTTP_TIMEOUT) as client:
        yield WeatherAggregator(
            client,
            api_key=settings.OPENWEATHER_API_KEY,
            geocode_url=settings.OPENWEATHER_GEOCODE_URL,
            weather_url=settings.OPENWEATHER_WEATHER_URL,
            units=settings.OPENWEATHER_UNITS,
        )
