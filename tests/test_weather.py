"""
Tests for the weather aggregator service.
"""

from types import SimpleNamespace

import httpx
import pytest

from app.exceptions import AggregationError, LocationNotFound
from app.services.weather import WeatherAggregator
from fakes import FakeOpenWeather


def _locations(*names):
    return [SimpleNamespace(id=i, name=name) for i, name in enumerate(names, start=1)]


@pytest.fixture
def provider():
    return FakeOpenWeather()


@pytest.fixture
async def aggregator(provider):
    async with httpx.AsyncClient(transport=httpx.MockTransport(provider)) as client:
        yield WeatherAggregator(client, api_key="abc123")


@pytest.mark.asyncio
async def test_fetch_weather_returns_one_observation_per_location(aggregator):
    observations = await aggregator.fetch_weather(_locations("Paris", "London", "Tokyo"))

    assert len(observations) == 3
    paris = observations[0]
    assert paris.location == "Paris"
    assert paris.temperature == pytest.approx(18.4)
    assert paris.condition == "scattered clouds"
    assert paris.icon == "03d"


@pytest.mark.asyncio
async def test_fetch_weather_preserves_input_order(aggregator, provider):
    # Later locations answer first
    provider.delays = {"Paris": 0.15, "London": 0.05, "Tokyo": 0}

    observations = await aggregator.fetch_weather(_locations("Paris", "London", "Tokyo"))

    assert [obs.location for obs in observations] == ["Paris", "London", "Tokyo"]


@pytest.mark.asyncio
async def test_fetch_weather_runs_lookups_concurrently(aggregator, provider):
    provider.delays = {"Paris": 0.1, "London": 0.1, "Tokyo": 0.1}

    await aggregator.fetch_weather(_locations("Paris", "London", "Tokyo"))

    assert provider.max_in_flight == 3


@pytest.mark.asyncio
async def test_unknown_location_fails_whole_batch(aggregator):
    with pytest.raises(LocationNotFound) as exc_info:
        await aggregator.fetch_weather(_locations("Paris", "Nowhereville"))

    assert exc_info.value.location_name == "Nowhereville"
    assert "Nowhereville" in str(exc_info.value)


@pytest.mark.asyncio
async def test_empty_location_list(aggregator, provider):
    assert await aggregator.fetch_weather([]) == []
    assert provider.requests == []


@pytest.mark.asyncio
async def test_requests_use_best_match_and_metric_units(aggregator, provider):
    await aggregator.fetch_weather(_locations("Tokyo"))

    geocode, weather = provider.requests
    assert geocode.url.params["q"] == "Tokyo"
    assert geocode.url.params["limit"] == "1"
    assert geocode.url.params["appid"] == "abc123"
    assert weather.url.params["units"] == "metric"
    assert float(weather.url.params["lat"]) == pytest.approx(35.6828)
    assert float(weather.url.params["lon"]) == pytest.approx(139.7595)


@pytest.mark.asyncio
async def test_observation_uses_stored_name_not_provider_name(provider):
    provider.places = {"paris, fr": (48.8589, 2.3200, 18.4, "scattered clouds", "03d")}

    async def renaming_handler(request):
        response = await provider(request)
        if request.url.path == "/geo/1.0/direct":
            body = response.json()
            body[0]["name"] = "Paris"
            return httpx.Response(200, json=body)
        return response

    async with httpx.AsyncClient(transport=httpx.MockTransport(renaming_handler)) as client:
        observations = await WeatherAggregator(client, api_key="abc123").fetch_weather(_locations("paris, fr"))

    assert observations[0].location == "paris, fr"


@pytest.mark.asyncio
async def test_provider_error_status_fails_batch(aggregator, provider):
    provider.weather_status = 500

    with pytest.raises(AggregationError) as exc_info:
        await aggregator.fetch_weather(_locations("Paris", "London"))

    assert not isinstance(exc_info.value, LocationNotFound)
    assert "500" in exc_info.value.message


@pytest.mark.asyncio
async def test_malformed_weather_payload_fails_batch(aggregator, provider):
    provider.weather_body = {"weather": []}

    with pytest.raises(AggregationError) as exc_info:
        await aggregator.fetch_weather(_locations("Paris"))

    assert exc_info.value.location_name == "Paris"


@pytest.mark.asyncio
async def test_transport_error_fails_batch():
    def failing_handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(failing_handler)) as client:
        aggregator = WeatherAggregator(client, api_key="abc123")
        with pytest.raises(AggregationError) as exc_info:
            await aggregator.fetch_weather(_locations("Paris"))

    assert "connection refused" in exc_info.value.message
