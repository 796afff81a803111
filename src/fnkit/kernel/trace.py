"""Runtime trace infrastructure - separate from combinator state.

This module captures what wrapped functions decide at call time: which calls
reached the target, which were skipped, which timers were scheduled or
cancelled. Tracing never changes what a wrapped function does.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True)
class Evidence:
    """A single decision or invocation captured at runtime."""

    action: str
    id: int = 0
    parent_id: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    info: dict[str, Any] = field(default_factory=dict)
    duration_ms: float | None = None


class Trace:
    """Ordered log of wrapped function events.

    Events recorded inside nested(event_id) get event_id as their parent,
    so calls made by a running target show up as its children. Meant for
    a single thread (event loop callbacks included). A disabled trace
    records nothing and costs one flag check per event.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._events: list[Evidence] = []
        self._parents: list[int] = []

    @property
    def events(self) -> tuple[Evidence, ...]:
        return tuple(self._events)

    def record(
        self,
        action: str,
        info: dict[str, Any] | None = None,
        parent_id: int | None = None,
        duration_ms: float | None = None,
    ) -> int | None:
        """Append an event and return its id (None when disabled).

        Without an explicit parent_id, the innermost nested() event is used.
        """
        if not self.enabled:
            return None

        if parent_id is None and self._parents:
            parent_id = self._parents[-1]

        event = Evidence(
            action=action,
            id=len(self._events),
            parent_id=parent_id,
            info=info or {},
            duration_ms=duration_ms,
        )
        self._events.append(event)
        return event.id

    @contextmanager
    def nested(self, event_id: int | None) -> Iterator[None]:
        """Parent events recorded in the block under event_id.

        A None id (disabled trace) leaves nesting unchanged.
        """
        if event_id is None:
            yield
            return
        self._parents.append(event_id)
        try:
            yield
        finally:
            self._parents.pop()

    def find_all(self, action: str | None = None, **info: Any) -> list[Evidence]:
        """Find recorded events by action and info values.

        Example:
            trace.find_all("when.fire", target="log")
        """
        return [
            ev
            for ev in self._events
            if (action is None or ev.action == action)
            and all(ev.info.get(k) == v for k, v in info.items())
        ]

    def actions(self) -> list[str]:
        return [ev.action for ev in self._events]

    def as_tree(self) -> dict[int | None, list[int]]:
        """Map each parent id (None for roots) to its child ids."""
        tree: dict[int | None, list[int]] = {}
        for ev in self._events:
            tree.setdefault(ev.parent_id, []).append(ev.id)
        return tree

    def __len__(self) -> int:
        return len(self._events)

    def clear(self) -> None:
        self._events.clear()
        self._parents.clear()
