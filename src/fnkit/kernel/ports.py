"""Port protocols for fnkit - pure abstractions."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol


class TimerHandle(Protocol):
    """Handle for a callback scheduled on a TimerPort."""

    def cancel(self) -> None:
        """Prevent the callback from running. No-op if it already ran."""
        ...


class TimerPort(Protocol):
    """Host timer facility.

    Callbacks run later on the same thread that scheduled them.
    """

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        """Schedule callback to run after delay_ms milliseconds."""
        ...
