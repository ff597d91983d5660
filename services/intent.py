"""Keyword intent detection and location extraction for voice transcripts."""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional, Pattern, Tuple

STOP_WORDS = frozenset({"the", "today", "now", "like", "there", "here"})

# A single word; the first non-letter ends the location.
_LOCATION = r"([a-z]+)"

# Words that open a question or request rather than a place name.
_LEADING_NON_PLACES = (
    "what", "whats", "how", "hows", "is", "will", "does", "do", "show", "tell",
    "give", "get", "can", "could", "would", "please", "i", "let", "may",
)

# Order matters: the first pattern yielding a usable location wins.
_LOCATION_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"weather in " + _LOCATION),
    re.compile(r"weather for " + _LOCATION),
    # "<place> weather": up to three words opening the utterance.
    re.compile(
        r"^(?!(?:" + "|".join(_LEADING_NON_PLACES) + r")\b)"
        r"([a-z]+(?:\s+[a-z]+){0,2}?)\s+weather\b"
    ),
    re.compile(r"what.*weather.*\bin " + _LOCATION),
    re.compile(r"how.*weather.*\bin " + _LOCATION),
)


class Intent(str, Enum):
    current_weather = "current_weather"
    forecast = "forecast"
    show_current = "show_current"
    location_info = "location_info"
    help = "help"
    unknown = "unknown"


_INTENT_KEYWORDS: Tuple[Tuple[Intent, Pattern[str]], ...] = (
    (Intent.current_weather, re.compile(r"\bweather\b")),
    (Intent.forecast, re.compile(r"\bforecast\b")),
    (Intent.show_current, re.compile(r"\b(?:current|now)\b")),
    (Intent.location_info, re.compile(r"\b(?:location|where)\b")),
    (Intent.help, re.compile(r"\bhelp\b")),
)


def title_case(text: str) -> str:
    """Capitalize the first letter of every word and lower-case the rest."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split())


def detect_intent(text: str) -> Intent:
    lowered = text.lower()
    for intent, pattern in _INTENT_KEYWORDS:
        if pattern.search(lowered):
            return intent
    return Intent.unknown


def _clean_location(captured: str) -> Optional[str]:
    words = captured.split()
    while words and words[-1] in STOP_WORDS:
        words.pop()
    if not words:
        return None
    return " ".join(words)


def parse_location(text: str) -> Optional[str]:
    """Extract a place name from a transcript.

    Returns the title-cased name, or ``None`` when no pattern produced
    something other than filler words. ``None`` is a normal outcome: callers
    fall back to the session's last location or prompt for one.
    """
    lowered = text.lower().strip()
    for pattern in _LOCATION_PATTERNS:
        match = pattern.search(lowered)
        if match is None:
            continue
        location = _clean_location(match.group(1))
        if location is not None:
            return title_case(location)
    return None
