"""In-memory screen for a session, read back by the transport."""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional


class ScreenBuffer:
    """Holds the text currently shown on a session's display plus recent history."""

    def __init__(self, history_size: int = 20) -> None:
        self._history: Deque[str] = deque(maxlen=history_size)

    @property
    def current(self) -> Optional[str]:
        return self._history[-1] if self._history else None

    def show_text(self, text: str) -> None:
        self._history.append(text)

    def history(self) -> List[str]:
        """Oldest first."""
        return list(self._history)
