from .combinators import (
    Cancel,
    Wrapped,
    arglock,
    counts,
    debounce,
    rate_limit,
    rateLimit,
    times,
    when,
)
from .kernel import ConstructionError, Evidence, LoopTimer, Trace, TimerPort

__all__ = [
    # Combinators
    "when",
    "debounce",
    "counts",
    "arglock",
    "times",
    "rate_limit",
    "rateLimit",
    # Wrapped functions
    "Wrapped",
    "Cancel",
    # Errors
    "ConstructionError",
    # Tracing
    "Trace",
    "Evidence",
    # Timers
    "TimerPort",
    "LoopTimer",
]
