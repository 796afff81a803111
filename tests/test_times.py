import pytest

from fnkit import ConstructionError, times
from fakes import Recorder


def test_returns_one_result_per_repetition() -> None:
    target = Recorder()
    log = times(3, target, "x")

    assert log() == [1, 2, 3]
    assert target.calls == [("x",), ("x",), ("x",)]


def test_call_arguments_are_ignored() -> None:
    target = Recorder()
    log = times(2, target, "Hello")

    log("World!", end="")

    assert target.calls == [("Hello",), ("Hello",)]
    assert target.kwargs == [{}, {}]


def test_zero_count_returns_empty_list() -> None:
    target = Recorder()
    assert times(0, target)() == []
    assert target.count == 0


def test_each_call_returns_fresh_list() -> None:
    wrapped = times(2, lambda: "x")
    first = wrapped()
    second = wrapped()

    assert first == second == ["x", "x"]
    assert first is not second


def test_error_aborts_remaining_repetitions() -> None:
    attempts: list[int] = []

    def target() -> int:
        attempts.append(len(attempts) + 1)
        if len(attempts) == 2:
            raise RuntimeError("second call fails")
        return len(attempts)

    with pytest.raises(RuntimeError, match="second call fails"):
        times(5, target)()
    assert attempts == [1, 2]


def test_receiver_forwarded() -> None:
    class Counter:
        def __init__(self) -> None:
            self.value = 0

        def _bump(self, step: int) -> int:
            self.value += step
            return self.value

        bump_thrice = times(3, _bump, 2)

    counter = Counter()
    assert counter.bump_thrice() == [2, 4, 6]


@pytest.mark.parametrize("count", [-1, 2.5, "3"])
def test_rejects_invalid_count(count: object) -> None:
    with pytest.raises(ConstructionError):
        times(count, Recorder())  # type: ignore[arg-type]
