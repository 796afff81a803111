"""Synchronous combinators chained together."""

from __future__ import annotations

from fnkit import Trace, arglock, counts, debounce, times, when


class Sensor:
    def __init__(self, name: str) -> None:
        self.name = name
        self.enabled = True

    def _report(self, level: str, reading: float) -> None:
        print(f"[{level}] {self.name}: {reading:.1f}")

    # Shared by every Sensor: one report per 3 readings, across all of them
    report = debounce(3, _report, "INFO")


def main() -> None:
    trace = Trace()
    sensor = Sensor("boiler")
    for reading in (20.0, 20.5, 21.0, 21.5, 22.0, 22.5):
        sensor.report(reading)

    warn = arglock(print, "[WARN]")
    warn_twice = counts(2, warn, trace=trace)
    for i in range(4):
        warn_twice(f"threshold exceeded ({i})")

    enabled = when(lambda: sensor.enabled, print, "[DEBUG]")
    enabled("visible")
    sensor.enabled = False
    enabled("hidden")

    print(times(3, str.upper, "ok")())
    print(trace.actions())


if __name__ == "__main__":
    main()
