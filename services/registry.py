"""Ownership of live sessions, keyed by session identifier."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Dict, List, Optional
from uuid import uuid4

from services.aggregator import ForecastAggregator
from services.display import ScreenBuffer
from services.session import WeatherFetcher, WeatherSession
from services.weather_client import build_default_weather_client
from settings import get_settings

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Creates a session on start and forgets it on end.

    Each entry is only ever touched by its own session's event path.
    """

    def __init__(
        self,
        fetcher: WeatherFetcher,
        aggregator: Optional[ForecastAggregator] = None,
        temperature_unit: str = "C",
        history_size: int = 20,
    ) -> None:
        self.fetcher = fetcher
        self.aggregator = aggregator or ForecastAggregator()
        self.temperature_unit = temperature_unit
        self.history_size = history_size
        self._sessions: Dict[str, WeatherSession] = {}

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def session_ids(self) -> List[str]:
        return sorted(self._sessions)

    def start(self, session_id: Optional[str] = None) -> WeatherSession:
        """Register a new session and show its welcome screen."""
        session_id = session_id or str(uuid4())
        if session_id in self._sessions:
            raise ValueError(f"Session {session_id!r} is already active.")

        session = WeatherSession(
            session_id=session_id,
            fetcher=self.fetcher,
            display=ScreenBuffer(history_size=self.history_size),
            aggregator=self.aggregator,
            temperature_unit=self.temperature_unit,
        )
        self._sessions[session_id] = session
        session.start()
        return session

    def get(self, session_id: str) -> WeatherSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id!r} not found.")
        return session

    def end(self, session_id: str, reason: str | None = None) -> None:
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise KeyError(f"Session {session_id!r} not found.")
        session.end()
        if reason:
            logger.info("Session stopped", extra={"session_id": session_id, "reason": reason})

    async def shutdown(self) -> None:
        """End every session and release the weather client."""
        for session_id in list(self._sessions):
            self.end(session_id, reason="shutdown")
        await self.fetcher.close()


@lru_cache
def build_default_registry() -> SessionRegistry:
    """Factory that wires the registry with the OpenWeatherMap client."""
    settings = get_settings()
    return SessionRegistry(
        fetcher=build_default_weather_client(),
        temperature_unit=settings.temperature_unit,
        history_size=settings.display_history_size,
    )
