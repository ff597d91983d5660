from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Sequence, Union

import pytest

from models.records import RawIntervalReading, SessionLocation, WeatherReading
from services.display import ScreenBuffer
from services.session import WeatherSession


def make_reading(location: str = "Tokyo", temperature: int = 21, icon: str = "01d") -> WeatherReading:
    return WeatherReading(
        location=location,
        country="JP",
        temperature=temperature,
        feels_like=temperature - 1,
        description="clear sky",
        humidity=40,
        wind_speed=11,
        icon=icon,
    )


def make_interval(
    date_key: str,
    temperature: float,
    description: str = "clear sky",
    icon: str = "01d",
    hour: int = 12,
) -> RawIntervalReading:
    timestamp = datetime.fromisoformat(f"{date_key}T{hour:02d}:00:00").replace(tzinfo=timezone.utc)
    return RawIntervalReading(
        timestamp=timestamp,
        date_key=date_key,
        temperature=temperature,
        description=description,
        icon=icon,
    )


class FakeFetcher:
    """In-memory weather source recording every request."""

    def __init__(self) -> None:
        self.current: Union[WeatherReading, Exception] = make_reading()
        self.forecast: Union[Sequence[RawIntervalReading], Exception] = [
            make_interval("2024-01-01", 10.0),
            make_interval("2024-01-01", 15.0, hour=15),
            make_interval("2024-01-02", 8.0, description="light rain", icon="10d"),
        ]
        self.calls: List[tuple[str, SessionLocation]] = []
        self.closed = False

    async def fetch_current(self, location: SessionLocation) -> WeatherReading:
        self.calls.append(("current", location))
        if isinstance(self.current, Exception):
            raise self.current
        return self.current

    async def fetch_forecast_raw(self, location: SessionLocation) -> Sequence[RawIntervalReading]:
        self.calls.append(("forecast", location))
        if isinstance(self.forecast, Exception):
            raise self.forecast
        return list(self.forecast)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture()
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture()
def screen() -> ScreenBuffer:
    return ScreenBuffer()


@pytest.fixture()
def session(fetcher: FakeFetcher, screen: ScreenBuffer) -> WeatherSession:
    weather_session = WeatherSession(session_id="session-1", fetcher=fetcher, display=screen)
    weather_session.start()
    return weather_session
