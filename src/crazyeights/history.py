"""Bounded undo history of game-state snapshots."""

from __future__ import annotations

from collections import deque
from typing import Optional

from crazyeights.state import GameState

HISTORY_LIMIT = 10


class HistoryManager:
    """Keeps the most recent snapshots for single-step undo.

    ``GameState`` is immutable, so the state object itself is the snapshot.
    Once the limit is reached the oldest entry is evicted.
    """

    def __init__(self, limit: int = HISTORY_LIMIT) -> None:
        self._entries: deque[GameState] = deque(maxlen=limit)

    def record(self, state: GameState) -> None:
        self._entries.append(state)

    def undo(self) -> Optional[GameState]:
        """Pop the most recent snapshot, or None when empty."""
        if not self._entries:
            return None
        return self._entries.pop()

    def clear(self) -> None:
        self._entries.clear()

    @property
    def limit(self) -> int:
        return self._entries.maxlen or 0

    def __len__(self) -> int:
        return len(self._entries)
