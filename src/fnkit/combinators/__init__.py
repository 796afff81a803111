"""Combinators - policy wrappers around a target callable."""

from .ops import (
    EveryNth,
    FirstN,
    arglock,
    counts,
    debounce,
    rate_limit,
    rateLimit,
    times,
    when,
)
from .types import (
    Bound,
    BoundWrapped,
    Cancel,
    Conditional,
    Gate,
    Predicate,
    RateLimited,
    Repeated,
    Wrapped,
)

__all__ = [
    # Combinators
    "when",
    "debounce",
    "counts",
    "arglock",
    "times",
    "rate_limit",
    "rateLimit",
    # Predicates
    "EveryNth",
    "FirstN",
    # Wrapped functions
    "Wrapped",
    "Conditional",
    "Gate",
    "Bound",
    "BoundWrapped",
    "Repeated",
    "RateLimited",
    "Cancel",
    "Predicate",
]
