"""Error types raised while building wrapped functions."""

from __future__ import annotations


class ConstructionError(Exception):
    """Error raised when a combinator factory rejects its arguments.

    This error preserves the rejected value for debugging purposes.
    Failures of the target itself are never wrapped in this type.
    """

    def __init__(self, message: str, value: object = None) -> None:
        self.value = value
        super().__init__(message)

    def __repr__(self) -> str:
        return f"ConstructionError({super().__repr__()}, value={self.value!r})"
