"""Tests for miniship.core.result module."""

from miniship.core.result import Err, Ok, Result


class TestOk:
    def test_value(self) -> None:
        assert Ok(42).value == 42

    def test_equality_and_repr(self) -> None:
        assert Ok(1) == Ok(1)
        assert Ok(1) != Err(1)
        assert repr(Ok("a")) == "Ok('a')"


class TestErr:
    def test_error(self) -> None:
        assert Err("boom").error == "boom"

    def test_repr(self) -> None:
        assert repr(Err("boom")) == "Err('boom')"


def test_isinstance_narrowing() -> None:
    def double(result: Result[int, str]) -> Result[int, str]:
        if isinstance(result, Err):
            return result
        return Ok(result.value * 2)

    assert double(Ok(21)) == Ok(42)
    assert double(Err("no")) == Err("no")


def test_pattern_matching() -> None:
    def describe(result: Result[int, str]) -> str:
        match result:
            case Ok(value):
                return f"ok {value}"
            case Err(error):
                return f"err {error}"

    assert describe(Ok(3)) == "ok 3"
    assert describe(Err("x")) == "err x"
