"""Wrapped function types shared by every combinator."""

from __future__ import annotations

import asyncio
import inspect
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from fnkit.kernel.ports import TimerHandle, TimerPort
from fnkit.kernel.trace import Trace

Predicate = Callable[[], object]


def describe(target: Any) -> str:
    """Readable name for a target, used in traces and reprs."""
    return getattr(target, "__qualname__", None) or getattr(target, "__name__", None) or repr(target)


class Wrapped(ABC):
    """Callable returned by a combinator factory.

    Subclasses implement _call(receiver, args, kwargs), where receiver is
    either () or a 1-tuple holding the instance the wrapped function was
    looked up on. Bound arguments go after the receiver and before the
    call-time arguments.

    Attributes:
        op: Combinator name, used as the trace action prefix.
    """

    op: str = "wrapped"

    def __init__(
        self,
        target: Any,
        bound_args: tuple[Any, ...] = (),
        trace: Trace | None = None,
    ) -> None:
        self._target = target
        self._bound_args = bound_args
        self._trace = trace
        self.__wrapped__ = target
        self.__name__ = self.__qualname__ = f"{self.op}({describe(target)})"

    @property
    def target(self) -> Any:
        return self._target

    @property
    def bound_args(self) -> tuple[Any, ...]:
        return self._bound_args

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._call((), args, kwargs)

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        """Bind as a method: the instance is forwarded to the target."""
        if instance is None:
            return self
        return BoundWrapped(self, instance)

    @abstractmethod
    def _call(self, receiver: tuple[Any, ...], args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        """Run one call; receiver is () or (instance,)."""

    def _record(
        self,
        event: str,
        info: dict[str, Any] | None = None,
        parent_id: int | None = None,
        duration_ms: float | None = None,
    ) -> int | None:
        if self._trace is None:
            return None
        return self._trace.record(
            f"{self.op}.{event}",
            info={"target": describe(self._target), **(info or {})},
            parent_id=parent_id,
            duration_ms=duration_ms,
        )

    def _fire(
        self,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        info: dict[str, Any] | None = None,
        parent_id: int | None = None,
    ) -> Any:
        """Call the target once.

        With tracing on, records <op>.fire before the call, then <op>.end
        (with duration) or <op>.error. Events recorded while the target runs
        are nested under the fire event. Target errors are re-raised as is.
        """
        trace = self._trace
        if trace is None:
            return self._target(*args, **kwargs)

        event_id = self._record("fire", info, parent_id=parent_id)
        start_time = time.perf_counter()
        with trace.nested(event_id):
            try:
                result = self._target(*args, **kwargs)
            except Exception as exc:
                self._record("error", {"error": str(exc)}, parent_id=event_id)
                raise
        duration_ms = (time.perf_counter() - start_time) * 1000

        self._record("end", parent_id=event_id, duration_ms=duration_ms)
        return result

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.__name__}>"


class BoundWrapped:
    """A wrapped function looked up through an instance.

    Calls forward the instance as the receiver. Every other attribute
    (calls, pending, cancel, target, ...) is read from the wrapped function,
    whose state is shared by all instances.
    """

    def __init__(self, wrapped: Wrapped, receiver: Any) -> None:
        self.__func__ = wrapped
        self.__self__ = receiver

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.__func__._call((self.__self__,), args, kwargs)

    def __getattr__(self, name: str) -> Any:
        return getattr(self.__func__, name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoundWrapped):
            return NotImplemented
        return self.__func__ is other.__func__ and self.__self__ is other.__self__

    def __hash__(self) -> int:
        return hash((id(self.__func__), id(self.__self__)))

    def __repr__(self) -> str:
        return f"<bound {self.__func__.__name__} of {self.__self__!r}>"


class Conditional(Wrapped):
    """Calls the target only when the predicate holds.

    The predicate is evaluated exactly once per call, with no arguments,
    before anything else happens. A false call returns None.
    """

    op = "when"

    def __init__(
        self,
        predicate: Predicate,
        target: Any,
        bound_args: tuple[Any, ...] = (),
        trace: Trace | None = None,
    ) -> None:
        self._predicate = predicate
        super().__init__(target, bound_args, trace)

    @property
    def predicate(self) -> Predicate:
        return self._predicate

    def _call(self, receiver: tuple[Any, ...], args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        if self._predicate():
            return self._fire((*receiver, *self._bound_args, *args), kwargs)
        self._record("skip")
        return None


class Gate(Conditional):
    """Conditional driven by a counting predicate (debounce, counts)."""

    def __init__(
        self,
        op: str,
        predicate: Predicate,
        target: Any,
        bound_args: tuple[Any, ...] = (),
        trace: Trace | None = None,
    ) -> None:
        self.op = op
        super().__init__(predicate, target, bound_args, trace)

    @property
    def calls(self) -> int:
        """Calls counted by the predicate so far."""
        return self._predicate.calls  # type: ignore[attr-defined]


class Bound(Wrapped):
    """Calls the target with bound arguments ahead of call arguments."""

    op = "arglock"

    def _call(self, receiver: tuple[Any, ...], args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        return self._fire((*receiver, *self._bound_args, *args), kwargs)


class Repeated(Wrapped):
    """Calls the target `count` times per call and returns the results.

    Call-time arguments are accepted and ignored; only bound arguments
    reach the target.
    """

    op = "times"

    def __init__(
        self,
        count: int,
        target: Any,
        bound_args: tuple[Any, ...] = (),
        trace: Trace | None = None,
    ) -> None:
        self._count = count
        super().__init__(target, bound_args, trace)

    @property
    def count(self) -> int:
        return self._count

    def _call(self, receiver: tuple[Any, ...], args: tuple[Any, ...], kwargs: dict[str, Any]) -> list[Any]:
        call_args = (*receiver, *self._bound_args)
        return [
            self._fire(call_args, {}, {"repeat": i})
            for i in range(1, self._count + 1)
        ]


class Cancel:
    """Cancellation handle for one scheduled rate_limit invocation.

    Calling it before the invocation fires cancels it. Calling it again, or
    after the invocation fired, does nothing.
    """

    def __init__(self, owner: RateLimited, event_id: int | None = None) -> None:
        self._owner = owner
        self._event_id = event_id
        self._timer_handle: TimerHandle | None = None
        self.cancelled = False
        self.fired = False

    @property
    def done(self) -> bool:
        return self.cancelled or self.fired

    def __call__(self) -> None:
        self._cancel("cancel")

    def _cancel(self, reason: str) -> None:
        if self.done:
            return
        self.cancelled = True
        if self._timer_handle is not None:
            self._timer_handle.cancel()
        self._owner._release(self)
        self._owner._record(reason, parent_id=self._event_id)

    def __repr__(self) -> str:
        state = "fired" if self.fired else "cancelled" if self.cancelled else "pending"
        return f"<Cancel {self._owner.__name__} {state}>"


class RateLimited(Wrapped):
    """Delays the target; every call supersedes the one still pending.

    States are Idle (pending is None) and Pending. A call cancels the
    pending invocation, if any, schedules its own on the timer and returns
    its Cancel handle. At most one invocation is pending at any time.
    """

    op = "rate_limit"

    def __init__(
        self,
        wait_ms: float,
        target: Any,
        bound_args: tuple[Any, ...],
        timer: TimerPort,
        trace: Trace | None = None,
    ) -> None:
        self._wait_ms = wait_ms
        self._timer = timer
        self._pending: Cancel | None = None
        self._tasks: set[asyncio.Future[Any]] = set()
        super().__init__(target, bound_args, trace)

    @property
    def wait_ms(self) -> float:
        return self._wait_ms

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def cancel(self) -> None:
        """Cancel the pending invocation, if any."""
        if self._pending is not None:
            self._pending()

    def _call(self, receiver: tuple[Any, ...], args: tuple[Any, ...], kwargs: dict[str, Any]) -> Cancel:
        # The previous invocation is only dropped once the new one is on the timer.
        call_args = (*receiver, *self._bound_args, *args)
        handle = Cancel(self)
        handle._timer_handle = self._timer.call_later(
            self._wait_ms, lambda: self._run(handle, call_args, kwargs)
        )

        if self._pending is not None:
            self._pending._cancel("supersede")
        handle._event_id = self._record("schedule", {"wait_ms": self._wait_ms})
        if not handle.done:
            self._pending = handle
        return handle

    def _release(self, handle: Cancel) -> None:
        if self._pending is handle:
            self._pending = None

    def _run(self, handle: Cancel, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        if handle.done:
            return
        handle.fired = True
        self._release(handle)

        result = self._fire(args, kwargs, parent_id=handle._event_id)
        if inspect.isawaitable(result):
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                if inspect.iscoroutine(result):
                    result.close()
                raise
            task = asyncio.ensure_future(result, loop=loop)
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
