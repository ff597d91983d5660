from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


_API_KEY_ENV = "OPENWEATHER_API_KEY"
_BASE_URL_ENV = "OPENWEATHER_BASE_URL"
_TIMEOUT_ENV = "WEATHER_REQUEST_TIMEOUT"
_UNIT_ENV = "TEMPERATURE_UNIT"
_HISTORY_SIZE_ENV = "DISPLAY_HISTORY_SIZE"
_LOG_LEVEL_ENV = "LOG_LEVEL"

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"
_SUPPORTED_UNITS = {"C", "F"}


@dataclass(frozen=True)
class Settings:
    openweather_api_key: str
    openweather_base_url: str
    request_timeout: float
    temperature_unit: str
    display_history_size: int
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_positive_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_positive_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_temperature_unit(default: str) -> str:
    candidate = _read_str_env(_UNIT_ENV, default).upper()
    return candidate if candidate in _SUPPORTED_UNITS else default


def _read_log_level(default: str) -> str:
    return _read_str_env(_LOG_LEVEL_ENV, default).upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        openweather_api_key=_read_str_env(_API_KEY_ENV, ""),
        openweather_base_url=_read_str_env(_BASE_URL_ENV, DEFAULT_BASE_URL).rstrip("/"),
        request_timeout=_read_positive_float(_TIMEOUT_ENV, 10.0),
        temperature_unit=_read_temperature_unit("C"),
        display_history_size=_read_positive_int(_HISTORY_SIZE_ENV, 20),
        log_level=_read_log_level("INFO"),
    )
