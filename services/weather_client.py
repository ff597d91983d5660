"""OpenWeatherMap client producing domain records."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Dict, List

import httpx

from models.records import RawIntervalReading, SessionLocation, WeatherReading
from services.aggregator import round_half_up
from services.errors import FetchFailed, LocationNotFound
from settings import get_settings

logger = logging.getLogger(__name__)

_MS_TO_KMH = 3.6


class OpenWeatherClient:
    """Async client for the OpenWeatherMap 2.5 current and forecast endpoints."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openweathermap.org/data/2.5",
        timeout: float = 10.0,
    ) -> None:
        if not api_key:
            raise ValueError("OpenWeatherMap API key is required.")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    async def close(self) -> None:
        await self._client.aclose()

    async def fetch_current(self, location: SessionLocation) -> WeatherReading:
        payload = await self._get_json("/weather", location)
        try:
            return _parse_current(payload)
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise FetchFailed("Malformed current weather payload.") from exc

    async def fetch_forecast_raw(self, location: SessionLocation) -> List[RawIntervalReading]:
        payload = await self._get_json("/forecast", location)
        try:
            return [_parse_interval(item) for item in payload["list"]]
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise FetchFailed("Malformed forecast payload.") from exc

    def _params(self, location: SessionLocation) -> Dict[str, Any]:
        params: Dict[str, Any] = {"appid": self.api_key, "units": "metric"}
        if location.has_coordinates:
            params["lat"] = location.lat
            params["lon"] = location.lng
        else:
            params["q"] = f"{location.city},{location.country}" if location.country else location.city
        return params

    async def _get_json(self, path: str, location: SessionLocation) -> Dict[str, Any]:
        try:
            response = await self._client.get(path, params=self._params(location))
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            logger.warning(
                "OpenWeatherMap request failed",
                extra={"location": location.city, "status_code": status_code},
            )
            if status_code == 404:
                raise LocationNotFound(location.city) from exc
            raise FetchFailed(f"Weather provider returned status {status_code}.") from exc
        except httpx.RequestError as exc:
            logger.warning(
                "OpenWeatherMap unreachable",
                extra={"location": location.city, "reason": str(exc) or type(exc).__name__},
            )
            raise FetchFailed("Weather provider is unreachable.") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise FetchFailed("Weather provider returned invalid JSON.") from exc
        if not isinstance(payload, dict):
            raise FetchFailed("Weather provider returned an unexpected payload.")
        return payload


def _parse_current(data: Dict[str, Any]) -> WeatherReading:
    main = data["main"]
    condition = data["weather"][0]
    return WeatherReading(
        location=data["name"],
        country=(data.get("sys") or {}).get("country") or None,
        temperature=round_half_up(float(main["temp"])),
        feels_like=round_half_up(float(main["feels_like"])),
        description=condition["description"],
        humidity=int(main["humidity"]),
        wind_speed=round_half_up(float(data["wind"]["speed"]) * _MS_TO_KMH),
        icon=condition["icon"],
    )


def _parse_interval(item: Dict[str, Any]) -> RawIntervalReading:
    stamp = item["dt_txt"]
    condition = item["weather"][0]
    timestamp = datetime.strptime(stamp, "%Y-%m-%d %H:%M:%S").replace(tzinfo=timezone.utc)
    return RawIntervalReading(
        timestamp=timestamp,
        date_key=stamp.split(" ")[0],
        temperature=float(item["main"]["temp"]),
        description=condition["description"],
        icon=condition["icon"],
    )


@lru_cache
def build_default_weather_client() -> OpenWeatherClient:
    settings = get_settings()
    return OpenWeatherClient(
        api_key=settings.openweather_api_key,
        base_url=settings.openweather_base_url,
        timeout=settings.request_timeout,
    )
