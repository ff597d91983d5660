"""Plain-text screens for the wearable display."""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from models.records import DailyForecast, LocationSource, SessionLocation, WeatherReading
from services.aggregator import round_half_up
from services.intent import title_case

DEFAULT_GLYPH = "🌤️"

# Keyed by OpenWeatherMap icon codes (day "d" / night "n" variants).
WEATHER_GLYPHS = {
    "01d": "☀️", "01n": "🌙",
    "02d": "⛅", "02n": "☁️",
    "03d": "☁️", "03n": "☁️",
    "04d": "☁️", "04n": "☁️",
    "09d": "🌧️", "09n": "🌧️",
    "10d": "🌦️", "10n": "🌧️",
    "11d": "⛈️", "11n": "⛈️",
    "13d": "❄️", "13n": "❄️",
    "50d": "🌫️", "50n": "🌫️",
}

_SOURCE_GLYPHS = {
    LocationSource.voice: "🏙️",
    LocationSource.geolocation: "🎯",
}

WELCOME_TEXT = "\n".join(
    [
        f"{DEFAULT_GLYPH} Weather Assistant",
        "",
        'Say "weather" or ask about weather in any city!',
        "",
        "Examples:",
        '• "Weather in New York"',
        "• \"What's the weather like?\"",
        '• "Show forecast"',
    ]
)

WELCOME_SHORT_TEXT = "\n".join(
    [
        f"{DEFAULT_GLYPH} Weather Assistant",
        "",
        'Say "weather" or ask about weather in any city!',
    ]
)

HELP_TEXT = "\n".join(
    [
        f"{DEFAULT_GLYPH} Weather Commands:",
        "",
        '• "Weather in [city]"',
        '• "Show forecast"',
        '• "Current weather"',
        '• "Where am I?"',
        '• "Help"',
    ]
)

FETCHING_CURRENT_TEXT = "🔄 Getting weather data..."
FETCHING_FORECAST_TEXT = "🔄 Getting forecast..."

NEED_LOCATION_TEXT = '📍 Please specify a location, like "weather in London" or enable location access.'
NEED_LOCATION_FOR_FORECAST_TEXT = "📍 Please ask for weather in a specific city first."
NEED_LOCATION_FOR_CURRENT_TEXT = "📍 Please specify a location first."
NO_LOCATION_INFO_TEXT = "📍 No location set. Ask for weather in a city first."

FETCH_FAILED_TEXT = "❌ Sorry, I couldn't get the weather data. Please try again."


def weather_glyph(icon: str) -> str:
    return WEATHER_GLYPHS.get(icon, DEFAULT_GLYPH)


def location_glyph(source: LocationSource) -> str:
    return _SOURCE_GLYPHS[source]


def location_label(location: SessionLocation) -> str:
    """Display name for a location, prefixed with the glyph for its source."""
    return f"{location_glyph(location.source)} {location.city}"


def location_not_found_text(city: str) -> str:
    return f'❌ Couldn\'t find "{city}". Please try a different city.'


def format_coordinates(lat: float, lng: float) -> str:
    lat_dir = "N" if lat >= 0 else "S"
    lng_dir = "E" if lng >= 0 else "W"
    return f"{abs(lat):.4f}°{lat_dir}, {abs(lng):.4f}°{lng_dir}"


def convert_temperature(temp: float, from_unit: str, to_unit: str) -> int:
    """Convert between Celsius and Fahrenheit, rounding half up."""
    from_unit = from_unit.upper()
    to_unit = to_unit.upper()
    if from_unit == to_unit:
        return round_half_up(temp)
    if from_unit == "C" and to_unit == "F":
        return round_half_up(temp * 9 / 5 + 32)
    if from_unit == "F" and to_unit == "C":
        return round_half_up((temp - 32) * 5 / 9)
    raise ValueError(f"Unsupported temperature conversion {from_unit!r} -> {to_unit!r}.")


def format_temperature(celsius: float, unit: str = "C", with_unit: bool = True) -> str:
    value = convert_temperature(celsius, "C", unit)
    if with_unit:
        return f"{value}°{unit.upper()}"
    return f"{value}°"


def format_current_weather(
    weather: WeatherReading,
    coordinates: Optional[Tuple[float, float]] = None,
    unit: str = "C",
) -> str:
    place = f"{weather.location}, {weather.country}" if weather.country else weather.location
    lines = [f"{weather_glyph(weather.icon)} {place}"]
    if coordinates is not None:
        lines.append(f"📍 {format_coordinates(*coordinates)}")
    lines.extend(
        [
            "",
            format_temperature(weather.temperature, unit),
            f"Feels like {format_temperature(weather.feels_like, unit)}",
            "",
            title_case(weather.description),
            f"Humidity: {weather.humidity}%",
            f"Wind: {weather.wind_speed} km/h",
            "",
            '🔄 Say "forecast" for 5-day',
        ]
    )
    return "\n".join(lines)


def format_forecast(
    days: Iterable[DailyForecast],
    location: str,
    coordinates: Optional[Tuple[float, float]] = None,
    unit: str = "C",
) -> str:
    lines = ["📅 5-Day Forecast", location]
    if coordinates is not None:
        lines.append(f"📍 {format_coordinates(*coordinates)}")
    lines.append("")
    for day in days:
        high = format_temperature(day.high, unit, with_unit=False)
        low = format_temperature(day.low, unit, with_unit=False)
        lines.append(f"{weather_glyph(day.icon)} {day.day_name}: {high}/{low}")
    lines.extend(["", '🔄 Say "current" to go back'])
    return "\n".join(lines)


def format_location_info(location: SessionLocation) -> str:
    lines = ["📍 Current Location:", "", location_label(location)]
    if location.country:
        lines.append(location.country)
    if location.has_coordinates:
        lines.extend(["", "Coordinates:", format_coordinates(location.lat, location.lng)])  # type: ignore[arg-type]
    lines.extend(["", '🔄 Say "weather" to continue'])
    return "\n".join(lines)
