import pytest

from fnkit import ConstructionError, arglock
from fakes import Recorder


def test_bound_args_come_first() -> None:
    target = Recorder()
    log = arglock(target, "a", "b")

    assert log("c", "d") == 1
    assert target.calls == [("a", "b", "c", "d")]


def test_no_bound_args() -> None:
    target = Recorder()
    arglock(target)(1)
    assert target.calls == [(1,)]


def test_kwargs_forwarded() -> None:
    def join(*parts: str, sep: str = " ") -> str:
        return sep.join(parts)

    assert arglock(join, "Test")("1", sep=":") == "Test:1"


def test_missing_target_raises() -> None:
    with pytest.raises(ConstructionError, match="first argument must be a function"):
        arglock()


def test_non_callable_target_raises() -> None:
    with pytest.raises(ConstructionError) as info:
        arglock(42)
    assert info.value.value == 42


def test_receiver_forwarded() -> None:
    def scale(self: "Vector", factor: int, offset: int) -> tuple[int, int]:
        return (self.x * factor + offset, self.y * factor + offset)

    class Vector:
        def __init__(self, x: int, y: int) -> None:
            self.x = x
            self.y = y

        double_plus = arglock(scale, 2)

    assert Vector(1, 3).double_plus(1) == (3, 7)


def test_target_error_propagates_unmodified() -> None:
    error = KeyError("missing")

    def target(*_: object) -> None:
        raise error

    with pytest.raises(KeyError) as info:
        arglock(target, 1)(2)
    assert info.value is error


def test_wrapped_metadata() -> None:
    def greet(name: str) -> str:
        return f"hi {name}"

    wrapped = arglock(greet, "bob")

    assert wrapped.__wrapped__ is greet
    assert wrapped.target is greet
    assert wrapped.bound_args == ("bob",)
    assert "arglock" in repr(wrapped)
