"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional


class LocationSource(str, Enum):
    """How a session's location was obtained."""

    voice = "voice"
    geolocation = "geolocation"


@dataclass(frozen=True, slots=True)
class SessionLocation:
    """Where weather should be fetched for.

    Coordinates take precedence over the city name when both are present.
    """

    city: str
    source: LocationSource = LocationSource.voice
    country: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lng is not None


@dataclass(frozen=True, slots=True)
class WeatherReading:
    """Snapshot of current conditions, in metric units."""

    location: str
    temperature: int
    feels_like: int
    description: str
    humidity: int
    wind_speed: int
    icon: str
    country: Optional[str] = None


@dataclass(frozen=True, slots=True)
class RawIntervalReading:
    """A single 3-hour forecast sample parsed from the provider payload."""

    timestamp: datetime
    date_key: str
    temperature: float
    description: str
    icon: str


@dataclass(frozen=True, slots=True)
class DailyForecast:
    """Summary of one calendar day of forecast samples."""

    date: date
    day_name: str
    high: int
    low: int
    description: str
    icon: str
    position: int
