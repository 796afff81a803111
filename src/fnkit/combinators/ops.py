"""Combinator primitives: when, debounce, counts, arglock, times, rate_limit."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fnkit.kernel.config import CountLimitConfig, DelayConfig, PeriodicConfig, RepeatConfig
from fnkit.kernel.errors import ConstructionError
from fnkit.kernel.ports import TimerPort
from fnkit.kernel.timer import LoopTimer
from fnkit.kernel.trace import Trace

from .types import Bound, Conditional, Gate, Predicate, RateLimited, Repeated


class EveryNth:
    """Predicate that holds on every n-th evaluation.

    The count goes up on every evaluation and is never reset.
    """

    def __init__(self, every: int) -> None:
        self.every = every
        self.calls = 0

    def __call__(self) -> bool:
        self.calls += 1
        return self.calls % self.every == 0


class FirstN:
    """Predicate that holds on the first n evaluations only.

    Once the limit is reached the count stops moving.
    """

    def __init__(self, limit: int) -> None:
        self.limit = limit
        self.calls = 0

    def __call__(self) -> bool:
        if self.calls >= self.limit:
            return False
        self.calls += 1
        return True


def when(
    predicate: Predicate,
    target: Callable[..., Any],
    *bound_args: Any,
    trace: Trace | None = None,
) -> Conditional:
    """Call target only when predicate() is truthy.

    Semantics:
        - predicate is called with no arguments, exactly once per call
        - truthy: returns target(*bound_args, *args, **kwargs)
        - falsy: target is not called, returns None
        - target is not checked here; a non-callable fails at call time

    Example:
        >>> do_log = False
        >>> def toggle():
        ...     global do_log
        ...     do_log = not do_log
        ...     return do_log
        >>> log_every_other = when(toggle, print, "Hello World")
        >>> log_every_other("boom")
        Hello World boom
        >>> log_every_other("bam")

    Args:
        predicate: Zero-argument callable deciding whether to call target.
        target: Callable to invoke when the predicate holds.
        *bound_args: Arguments placed before the call-time arguments.
        trace: Optional trace recording fire/skip events.

    Returns:
        Conditional: The wrapped function.
    """
    return Conditional(predicate, target, bound_args, trace)


def debounce(
    every: int,
    target: Callable[..., Any],
    *bound_args: Any,
    trace: Trace | None = None,
) -> Gate:
    """Call target on every `every`-th call: calls every, 2*every, ...

    Built on when() with a counting predicate. Every call counts,
    including the ones that do not reach the target.

    Example:
        >>> log_every_4 = debounce(4, print, "Log!")
        >>> for _ in range(3):
        ...     log_every_4("Hi")
        >>> log_every_4("Hi")
        Log! Hi

    Raises:
        ConstructionError: If every is not a positive integer.
    """
    config = PeriodicConfig.build(every=every)
    return Gate("debounce", EveryNth(config.every), target, bound_args, trace)


def counts(
    limit: int,
    target: Callable[..., Any],
    *bound_args: Any,
    trace: Trace | None = None,
) -> Gate:
    """Call target on the first `limit` calls, never afterwards.

    Raises:
        ConstructionError: If limit is not a non-negative integer.
    """
    config = CountLimitConfig.build(limit=limit)
    return Gate("counts", FirstN(config.limit), target, bound_args, trace)


def arglock(*args: Any, trace: Trace | None = None) -> Bound:
    """Pre-bind leading arguments: arglock(f, a)(b) == f(a, b).

    Called as arglock(target, *bound_args). Unlike the other combinators
    the target is checked immediately.

    Raises:
        ConstructionError: If no target is given or it is not callable.
    """
    if not args:
        raise ConstructionError("first argument must be a function")
    target, *bound_args = args
    if not callable(target):
        raise ConstructionError("first argument must be a function", target)
    return Bound(target, tuple(bound_args), trace)


def times(
    count: int,
    target: Callable[..., Any],
    *bound_args: Any,
    trace: Trace | None = None,
) -> Repeated:
    """Call target(*bound_args) `count` times per call, returning the results.

    Arguments passed to the wrapped function are ignored. If target raises,
    the remaining repetitions are skipped and the error propagates.

    Example:
        >>> greet = times(3, str.upper, "hi")
        >>> greet()
        ['HI', 'HI', 'HI']

    Raises:
        ConstructionError: If count is not a non-negative integer.
    """
    config = RepeatConfig.build(count=count)
    return Repeated(config.count, target, bound_args, trace)


def rate_limit(
    wait_ms: float,
    target: Callable[..., Any],
    *bound_args: Any,
    timer: TimerPort | None = None,
    trace: Trace | None = None,
) -> RateLimited:
    """Delay target by wait_ms; a new call cancels the one still waiting.

    Semantics:
        - Each call cancels the pending invocation, if any
        - Schedules target(*bound_args, *args, **kwargs) after wait_ms
        - Returns a Cancel handle; calling it before firing cancels
          this invocation, afterwards it does nothing
        - Awaitable results are scheduled as tasks and not awaited

    The default timer uses the running asyncio loop, so the wrapped
    function must be called from inside one.

    Example:
        >>> log = rate_limit(100, print, "Hello")
        >>> cancel = log("World!")
        # after 100 ms unless cancel() is called
        # => Hello World!

    Args:
        wait_ms: Delay in milliseconds.
        target: Callable to invoke once the delay passes.
        *bound_args: Arguments placed before the call-time arguments.
        timer: Timer facility, LoopTimer() by default.
        trace: Optional trace recording schedule/cancel/fire events.

    Raises:
        ConstructionError: If wait_ms is negative or not a number.
    """
    config = DelayConfig.build(wait_ms=wait_ms)
    return RateLimited(config.wait_ms, target, bound_args, timer or LoopTimer(), trace)


rateLimit = rate_limit
