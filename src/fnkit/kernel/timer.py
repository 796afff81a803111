"""Default TimerPort backed by the running asyncio event loop."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from fnkit.kernel.ports import TimerHandle


class LoopTimer:
    """Schedule callbacks with loop.call_later.

    If no loop is given, the loop running at scheduling time is used, so
    scheduling outside a running loop raises RuntimeError.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000, callback)
