"""Minimal progress reporter for long-running census phases."""

from __future__ import annotations

import logging
from collections import deque

logger = logging.getLogger(__name__)

MAX_BUFFERED_NOTES = 20


class Progress:
    def __init__(self, enabled: bool) -> None:
        self.enabled = enabled
        self._notes: deque[str] = deque(maxlen=MAX_BUFFERED_NOTES)

    def note(self, message: str) -> None:
        if not self.enabled:
            return
        self._notes.append(message)
        logger.info("progress: %s", message)

    def drain(self) -> list[str]:
        """Return buffered notes (oldest first) and clear the buffer."""
        drained = list(self._notes)
        self._notes.clear()
        return drained
