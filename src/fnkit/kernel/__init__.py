"""Kernel layer - pure building blocks for fnkit."""

from fnkit.kernel.config import (
    CombinatorConfig,
    CountLimitConfig,
    DelayConfig,
    PeriodicConfig,
    RepeatConfig,
)
from fnkit.kernel.errors import ConstructionError
from fnkit.kernel.ports import TimerHandle, TimerPort
from fnkit.kernel.timer import LoopTimer
from fnkit.kernel.trace import Evidence, Trace

__all__ = [
    "ConstructionError",
    # Config
    "CombinatorConfig",
    "PeriodicConfig",
    "CountLimitConfig",
    "RepeatConfig",
    "DelayConfig",
    # Tracing
    "Evidence",
    "Trace",
    # Ports
    "TimerPort",
    "TimerHandle",
    "LoopTimer",
]
