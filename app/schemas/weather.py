"""
Weather schemas.

Provider payload models validate the two OpenWeatherMap responses the
aggregator consumes; WeatherObservation is what the API returns.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


class GeocodeMatch(BaseModel):
    """One entry of the geocoding API's JSON array."""
    name: Optional[str] = None
    lat: float
    lon: float
    country: Optional[str] = None


class ProviderMain(BaseModel):
    temp: float


class ProviderCondition(BaseModel):
    description: str
    icon: str


class CurrentWeatherPayload(BaseModel):
    """Subset of the current weather response used by the aggregator."""
    main: ProviderMain
    weather: List[ProviderCondition] = Field(..., min_length=1)


class WeatherObservation(BaseModel):
    """Current conditions for one saved location."""
    location: str = Field(..., description="Location name as stored by the user")
    temperature: float = Field(..., description="Temperature in degrees Celsius")
    condition: str = Field(..., description="Human readable condition description")
    icon: str = Field(..., description="Provider icon identifier")
