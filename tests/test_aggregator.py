"""Unit tests for the daily forecast aggregation."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from models.records import RawIntervalReading
from services.aggregator import ForecastAggregator, most_common, round_half_up, weekday_name


def _reading(
    date_key: str,
    temperature: float,
    description: str = "clear sky",
    icon: str = "01d",
) -> RawIntervalReading:
    """Helper to build deterministic interval readings."""

    return RawIntervalReading(
        timestamp=datetime.fromisoformat(f"{date_key}T00:00:00").replace(tzinfo=timezone.utc),
        date_key=date_key,
        temperature=temperature,
        description=description,
        icon=icon,
    )


def test_aggregate_empty_iterable_returns_empty_tuple() -> None:
    assert ForecastAggregator().aggregate([]) == ()


def test_aggregate_computes_daily_high_and_low() -> None:
    readings = [
        _reading("2024-03-04", 10.0),
        _reading("2024-03-04", 15.0),
        _reading("2024-03-04", 12.0),
    ]

    (day,) = ForecastAggregator().aggregate(readings)

    assert day.high == 15
    assert day.low == 10
    assert day.date == date(2024, 3, 4)
    assert day.day_name == "Mon"
    assert day.position == 0


def test_single_reading_day_has_equal_high_and_low() -> None:
    (day,) = ForecastAggregator().aggregate([_reading("2024-03-05", 7.4)])

    assert day.high == day.low == 7


def test_temperatures_round_half_up() -> None:
    (day,) = ForecastAggregator().aggregate(
        [_reading("2024-03-05", 2.5), _reading("2024-03-05", -2.5)]
    )

    assert day.high == 3
    assert day.low == -2


def test_representative_condition_prefers_most_frequent_then_first_seen() -> None:
    readings = [
        _reading("2024-03-04", 10.0, description="clear", icon="01d"),
        _reading("2024-03-04", 11.0, description="cloudy", icon="04d"),
        _reading("2024-03-04", 12.0, description="clear", icon="01d"),
        _reading("2024-03-05", 9.0, description="rain", icon="10d"),
        _reading("2024-03-05", 9.5, description="mist", icon="50d"),
    ]

    first, second = ForecastAggregator().aggregate(readings)

    assert (first.description, first.icon) == ("clear", "01d")
    assert (second.description, second.icon) == ("rain", "10d")


def test_aggregate_caps_at_five_days_in_encounter_order() -> None:
    start = date(2024, 3, 4)
    readings = []
    for offset in range(7):
        day_key = (start + timedelta(days=offset)).isoformat()
        readings.append(_reading(day_key, float(offset)))
        readings.append(_reading(day_key, float(offset) + 5))

    days = ForecastAggregator().aggregate(readings)

    assert len(days) == 5
    assert [day.date for day in days] == [start + timedelta(days=offset) for offset in range(5)]
    assert [day.day_name for day in days] == ["Mon", "Tue", "Wed", "Thu", "Fri"]
    assert [day.position for day in days] == [0, 1, 2, 3, 4]


def test_groups_keep_first_seen_order_for_interleaved_dates() -> None:
    readings = [
        _reading("2024-03-06", 1.0),
        _reading("2024-03-05", 2.0),
        _reading("2024-03-06", 3.0),
    ]

    days = ForecastAggregator().aggregate(readings)

    assert [day.date.isoformat() for day in days] == ["2024-03-06", "2024-03-05"]
    assert days[0].high == 3


def test_max_days_is_configurable() -> None:
    readings = [_reading("2024-03-04", 1.0), _reading("2024-03-05", 2.0)]

    assert len(ForecastAggregator(max_days=1).aggregate(readings)) == 1
    with pytest.raises(ValueError):
        ForecastAggregator(max_days=0)


def test_helpers() -> None:
    assert round_half_up(0.5) == 1
    assert round_half_up(-0.5) == 0
    assert round_half_up(1.49) == 1
    assert most_common(["b", "a", "a", "b"]) == "b"
    assert weekday_name("2024-03-10") == "Sun"
    with pytest.raises(ValueError):
        most_common([])
