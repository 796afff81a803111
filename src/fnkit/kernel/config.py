"""Configuration models for combinator factories."""

from __future__ import annotations

from typing import Any, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    NonNegativeFloat,
    NonNegativeInt,
    PositiveInt,
    ValidationError,
)

from fnkit.kernel.errors import ConstructionError


class CombinatorConfig(BaseModel):
    """Base for factory configuration.

    Strict: numbers are not parsed from strings and bools are rejected.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    @classmethod
    def build(cls, **values: Any) -> Self:
        """Validate values, raising ConstructionError on failure."""
        try:
            return cls(**values)
        except ValidationError as exc:
            error = exc.errors()[0]
            name = str(error["loc"][0]) if error["loc"] else cls.__name__
            value = values.get(name)
            raise ConstructionError(
                f"invalid {name}={value!r}: {error['msg']}", value
            ) from exc


class PeriodicConfig(CombinatorConfig):
    """debounce: fire on every `every`-th call."""
    every: PositiveInt


class CountLimitConfig(CombinatorConfig):
    """counts: fire on the first `limit` calls."""
    limit: NonNegativeInt


class RepeatConfig(CombinatorConfig):
    """times: call the target `count` times per invocation."""
    count: NonNegativeInt


class DelayConfig(CombinatorConfig):
    """rate_limit: wait `wait_ms` milliseconds before firing."""
    wait_ms: NonNegativeFloat
