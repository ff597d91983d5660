"""Errors raised while resolving weather for a session."""

from __future__ import annotations


class WeatherError(Exception):
    """Base class for failures that are reported to the wearer."""


class LocationNotFound(WeatherError):
    """The provider does not know the requested place."""

    def __init__(self, city: str) -> None:
        super().__init__(f"City {city!r} not found.")
        self.city = city


class FetchFailed(WeatherError):
    """Any other provider or network failure."""


class NoLocationSet(WeatherError):
    """A command needs a location and the session has none yet."""

    def __init__(self, prompt: str) -> None:
        super().__init__(prompt)
        self.prompt = prompt
