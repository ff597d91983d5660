"""Aggregation of 3-hour forecast samples into daily summaries."""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Tuple

from models.records import DailyForecast, RawIntervalReading

_DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def most_common(values: Iterable[str]) -> str:
    """Return the most frequent value; the first one seen wins ties."""
    counts = Counter(values)
    if not counts:
        raise ValueError("most_common() requires at least one value.")
    # Counter preserves insertion order and max() keeps the first maximum.
    return max(counts, key=counts.__getitem__)


def weekday_name(date_key: str) -> str:
    return _DAY_NAMES[date.fromisoformat(date_key).weekday()]


@dataclass
class _DayBucket:
    date_key: str
    temperatures: List[float] = field(default_factory=list)
    descriptions: List[str] = field(default_factory=list)
    icons: List[str] = field(default_factory=list)


class ForecastAggregator:
    """Pure aggregation component that can be unit tested in isolation."""

    def __init__(self, max_days: int = 5) -> None:
        if max_days <= 0:
            raise ValueError("max_days must be positive.")
        self.max_days = max_days

    def aggregate(self, readings: Iterable[RawIntervalReading]) -> Tuple[DailyForecast, ...]:
        buckets: Dict[str, _DayBucket] = {}

        for reading in readings:
            bucket = buckets.get(reading.date_key)
            if bucket is None:
                bucket = buckets[reading.date_key] = _DayBucket(date_key=reading.date_key)
            bucket.temperatures.append(reading.temperature)
            bucket.descriptions.append(reading.description)
            bucket.icons.append(reading.icon)

        days: list[DailyForecast] = []
        for position, bucket in enumerate(buckets.values()):
            if position >= self.max_days:
                break
            days.append(
                DailyForecast(
                    date=date.fromisoformat(bucket.date_key),
                    day_name=weekday_name(bucket.date_key),
                    high=round_half_up(max(bucket.temperatures)),
                    low=round_half_up(min(bucket.temperatures)),
                    description=most_common(bucket.descriptions),
                    icon=most_common(bucket.icons),
                    position=position,
                )
            )
        return tuple(days)
