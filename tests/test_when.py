import pytest

from fnkit import Wrapped, when
from fakes import Recorder


def test_fires_when_predicate_holds() -> None:
    target = Recorder()
    wrapped = when(lambda: True, target)

    assert wrapped("a", "b") == 1
    assert target.calls == [("a", "b")]


def test_skips_when_predicate_fails() -> None:
    target = Recorder()
    wrapped = when(lambda: False, target)

    assert wrapped("a") is None
    assert target.calls == []


def test_falsy_values_skip() -> None:
    target = Recorder()
    for value in (0, "", None, [], {}):
        when(lambda value=value: value, target)()
    assert target.count == 0


def test_predicate_evaluated_once_per_call() -> None:
    evaluations = 0

    def predicate() -> bool:
        nonlocal evaluations
        evaluations += 1
        return evaluations % 2 == 0

    target = Recorder()
    wrapped = when(predicate, target)
    for _ in range(5):
        wrapped()

    assert evaluations == 5
    assert target.count == 2


def test_predicate_receives_no_arguments() -> None:
    seen: list[tuple] = []

    def predicate(*args: object) -> bool:
        seen.append(args)
        return True

    when(predicate, Recorder())(1, 2, 3)
    assert seen == [()]


def test_bound_args_go_first() -> None:
    target = Recorder()
    wrapped = when(lambda: True, target, "Hello World")

    wrapped("foo", "bar", sep="-")

    assert target.calls == [("Hello World", "foo", "bar")]
    assert target.kwargs == [{"sep": "-"}]


def test_toggle_logs_every_other_call() -> None:
    do_log = False

    def toggle() -> bool:
        nonlocal do_log
        do_log = not do_log
        return do_log

    target = Recorder()
    log_every_other = when(toggle, target, "Hello World")

    log_every_other("boom")
    log_every_other("bam")
    log_every_other("foo", "bar")

    assert target.calls == [("Hello World", "boom"), ("Hello World", "foo", "bar")]


def test_target_not_checked_until_called() -> None:
    wrapped = when(lambda: False, 42)
    assert wrapped() is None

    firing = when(lambda: True, 42)
    with pytest.raises(TypeError):
        firing()


def test_target_error_propagates() -> None:
    error = ValueError("boom")

    def target() -> None:
        raise error

    with pytest.raises(ValueError) as info:
        when(lambda: True, target)()
    assert info.value is error


def test_receiver_forwarded_as_first_argument() -> None:
    class Greeter:
        def __init__(self, name: str) -> None:
            self.name = name

        def _greet(self, greeting: str, punctuation: str) -> str:
            return f"{greeting}, {self.name}{punctuation}"

        greet = when(lambda: True, _greet, "Hello")

    assert Greeter("Ada").greet("!") == "Hello, Ada!"


def test_class_access_returns_wrapped() -> None:
    wrapped = when(lambda: True, Recorder())

    class Holder:
        method = wrapped

    assert Holder.method is wrapped


def test_wrapped_base_is_abstract() -> None:
    with pytest.raises(TypeError):
        Wrapped(Recorder())  # type: ignore[abstract]


def test_bound_views_compare_equal() -> None:
    class Holder:
        method = when(lambda: True, Recorder())

    holder = Holder()
    assert holder.method == holder.method
    assert holder.method != Holder().method
