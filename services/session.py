"""Per-session command handling for the wearable weather display."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, Sequence, Tuple

from models.records import (
    DailyForecast,
    LocationSource,
    RawIntervalReading,
    SessionLocation,
    WeatherReading,
)
from services import formatters
from services.aggregator import ForecastAggregator
from services.errors import FetchFailed, LocationNotFound, NoLocationSet, WeatherError
from services.intent import Intent, detect_intent, parse_location

logger = logging.getLogger(__name__)

GEOLOCATION_CITY = "Current Location"
TEMPERATURE_UNITS = ("C", "F")


class WeatherFetcher(Protocol):
    async def fetch_current(self, location: SessionLocation) -> WeatherReading: ...

    async def fetch_forecast_raw(self, location: SessionLocation) -> Sequence[RawIntervalReading]: ...

    async def close(self) -> None: ...


class Display(Protocol):
    def show_text(self, text: str) -> None: ...


class SessionView(str, Enum):
    idle = "idle"
    has_location = "has_location"
    showing_current = "showing_current"
    showing_forecast = "showing_forecast"


@dataclass
class SessionState:
    """Mutable navigation state for one session.

    ``showing_forecast`` is only ever set together with ``forecast``.
    """

    location: Optional[SessionLocation] = None
    showing_forecast: bool = False
    current_weather: Optional[WeatherReading] = None
    forecast: Optional[Tuple[DailyForecast, ...]] = None
    request_seq: int = 0

    @property
    def view(self) -> SessionView:
        if self.showing_forecast:
            return SessionView.showing_forecast
        if self.current_weather is not None:
            return SessionView.showing_current
        if self.location is not None:
            return SessionView.has_location
        return SessionView.idle


class WeatherSession:
    """Interprets transcript, button and location events for a single session."""

    def __init__(
        self,
        session_id: str,
        fetcher: WeatherFetcher,
        display: Display,
        aggregator: Optional[ForecastAggregator] = None,
        temperature_unit: str = "C",
    ) -> None:
        self.session_id = session_id
        self.fetcher = fetcher
        self.display = display
        self.aggregator = aggregator or ForecastAggregator()
        unit = temperature_unit.upper()
        if unit not in TEMPERATURE_UNITS:
            raise ValueError(f"Unsupported temperature unit {temperature_unit!r}.")
        self.temperature_unit = unit
        self.state = SessionState()
        self._lock = asyncio.Lock()

    def start(self) -> None:
        self._show(formatters.WELCOME_TEXT)
        logger.info("Weather session started", extra={"session_id": self.session_id})

    def end(self) -> None:
        # Results of fetches still in flight are dropped.
        self.state.request_seq += 1
        logger.info("Weather session ended", extra={"session_id": self.session_id})

    async def handle_transcript(self, text: str, is_final: bool = True) -> None:
        if not is_final:
            return
        normalized = text.lower().strip()
        if not normalized:
            return

        async with self._lock:
            intent = detect_intent(normalized)
            logger.info(
                "Voice command received",
                extra={"session_id": self.session_id, "intent": intent.value},
            )
            try:
                await self._dispatch(intent, normalized)
            except NoLocationSet as exc:
                self._show(exc.prompt)

    async def handle_button(self, button: str, action: str = "press") -> None:
        if action != "press":
            return

        async with self._lock:
            name = button.lower()
            state = self.state
            logger.debug("Button pressed", extra={"session_id": self.session_id, "button": name})
            if name in ("forward", "select"):
                if state.location is None:
                    return
                if state.showing_forecast:
                    await self._show_current(state.location, use_cache=True)
                elif state.current_weather is not None:
                    await self._show_forecast(state.location)
            elif name == "back":
                state.showing_forecast = False
                self._show(formatters.WELCOME_SHORT_TEXT)

    async def handle_location_update(self, lat: float, lng: float) -> None:
        """Seed the session from the device location if nothing was set yet."""
        async with self._lock:
            if self.state.location is not None:
                return
            location = SessionLocation(
                city=GEOLOCATION_CITY,
                source=LocationSource.geolocation,
                lat=lat,
                lng=lng,
            )
            logger.info(
                "Auto-detected location",
                extra={"session_id": self.session_id, "has_coordinates": True},
            )
            await self._show_current(location, use_cache=False)

    async def _dispatch(self, intent: Intent, text: str) -> None:
        if intent is Intent.current_weather:
            city = parse_location(text)
            if city is not None:
                target = SessionLocation(city=city)
            else:
                target = self._require_location(formatters.NEED_LOCATION_TEXT)
            await self._show_current(target, use_cache=False)
        elif intent is Intent.forecast:
            await self._show_forecast(self._require_location(formatters.NEED_LOCATION_FOR_FORECAST_TEXT))
        elif intent is Intent.show_current:
            target = self._require_location(formatters.NEED_LOCATION_FOR_CURRENT_TEXT)
            await self._show_current(target, use_cache=True)
        elif intent is Intent.location_info:
            target = self._require_location(formatters.NO_LOCATION_INFO_TEXT)
            self._show(formatters.format_location_info(target))
        elif intent is Intent.help:
            self._show(formatters.HELP_TEXT)
        else:
            logger.debug("Ignoring transcript without a command", extra={"session_id": self.session_id})

    def _require_location(self, prompt: str) -> SessionLocation:
        if self.state.location is None:
            raise NoLocationSet(prompt)
        return self.state.location

    async def _show_current(self, location: SessionLocation, use_cache: bool) -> None:
        state = self.state
        if use_cache and state.current_weather is not None and location == state.location:
            state.showing_forecast = False
            self._show(self._render_current(state.current_weather, location))
            return

        seq = self._begin_request()
        self._show(formatters.FETCHING_CURRENT_TEXT)
        try:
            weather = await self.fetcher.fetch_current(location)
        except WeatherError as exc:
            self._report_failure(exc, location, seq)
            return
        except Exception as exc:
            self._report_failure(_unexpected_failure(exc), location, seq)
            return
        if self._is_stale(seq):
            return

        text = self._render_current(weather, location)
        if location != state.location:
            state.location = location
            state.forecast = None
        state.current_weather = weather
        state.showing_forecast = False
        self._show(text)
        logger.info(
            "Weather data displayed",
            extra={
                "session_id": self.session_id,
                "location": location.city,
                "temperature": weather.temperature,
                "has_coordinates": location.has_coordinates,
            },
        )

    async def _show_forecast(self, location: SessionLocation) -> None:
        state = self.state
        seq = self._begin_request()
        self._show(formatters.FETCHING_FORECAST_TEXT)
        try:
            raw_readings = await self.fetcher.fetch_forecast_raw(location)
        except WeatherError as exc:
            self._report_failure(exc, location, seq)
            return
        except Exception as exc:
            self._report_failure(_unexpected_failure(exc), location, seq)
            return
        if self._is_stale(seq):
            return

        days = self.aggregator.aggregate(raw_readings)
        state.forecast = days
        state.showing_forecast = True
        self._show(
            formatters.format_forecast(
                days,
                formatters.location_label(location),
                coordinates=_coordinates(location),
                unit=self.temperature_unit,
            )
        )
        logger.info(
            "Forecast displayed",
            extra={
                "session_id": self.session_id,
                "location": location.city,
                "days": len(days),
                "has_coordinates": location.has_coordinates,
            },
        )

    def _render_current(self, weather: WeatherReading, location: SessionLocation) -> str:
        return formatters.format_current_weather(
            weather,
            coordinates=_coordinates(location),
            unit=self.temperature_unit,
        )

    def _begin_request(self) -> int:
        self.state.request_seq += 1
        return self.state.request_seq

    def _is_stale(self, seq: int) -> bool:
        if seq == self.state.request_seq:
            return False
        logger.info(
            "Discarding stale weather result",
            extra={"session_id": self.session_id, "request_seq": seq},
        )
        return True

    def _report_failure(self, exc: WeatherError, location: SessionLocation, seq: int) -> None:
        logger.error(
            "Failed to get weather data",
            extra={"session_id": self.session_id, "location": location.city, "reason": str(exc)},
        )
        if self._is_stale(seq):
            return
        if isinstance(exc, LocationNotFound):
            self._show(formatters.location_not_found_text(exc.city))
        else:
            self._show(formatters.FETCH_FAILED_TEXT)

    def _show(self, text: str) -> None:
        self.display.show_text(text)


def _unexpected_failure(exc: Exception) -> FetchFailed:
    logger.exception("Unexpected error while fetching weather data")
    failure = FetchFailed("Weather lookup failed unexpectedly.")
    failure.__cause__ = exc
    return failure


def _coordinates(location: SessionLocation) -> Optional[Tuple[float, float]]:
    if location.has_coordinates:
        return location.lat, location.lng  # type: ignore[return-value]
    return None
