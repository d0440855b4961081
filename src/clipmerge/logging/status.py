"""Ephemeral status messages for the user-facing log area."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from clipmerge.logging.audit import utc_timestamp

DEFAULT_STATUS_CAPACITY = 200


@dataclass(slots=True, frozen=True)
class StatusMessage:
    timestamp: str
    message: str


class StatusLog:
    """Bounded in-memory status sink; oldest messages fall off first."""

    def __init__(self, capacity: int = DEFAULT_STATUS_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1.")
        self._messages: deque[StatusMessage] = deque(maxlen=capacity)

    def log(self, message: str) -> None:
        self._messages.append(StatusMessage(timestamp=utc_timestamp(), message=message))

    def messages(self) -> list[StatusMessage]:
        return list(self._messages)

    def drain(self) -> list[StatusMessage]:
        """Return and forget all buffered messages."""
        drained = list(self._messages)
        self._messages.clear()
        return drained
