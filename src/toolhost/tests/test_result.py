"""Tests for Result implementation.

Validates:
- Functor and monad laws
- Value extraction
- Fail-fast traverse used by argument binding
"""

from __future__ import annotations

from typing import Callable

import pytest

from toolhost.foundation.errors import Err, Ok, Result, traverse


# ═════════════════════════════════════════════════════════════════════════════
# Property Tests - Functor Laws
# ═════════════════════════════════════════════════════════════════════════════


def test_functor_identity() -> None:
    """Functor law: fmap id = id"""
    result: Result[int, str] = Ok(42)
    assert result.map(lambda x: x) == result

    err_result: Result[int, str] = Err("fail")
    assert err_result.map(lambda x: x) == err_result


def test_functor_composition() -> None:
    """Functor law: fmap (f . g) = fmap f . fmap g"""
    f: Callable[[int], int] = lambda x: x + 1
    g: Callable[[int], int] = lambda x: x * 2

    result: Result[int, str] = Ok(5)
    assert result.map(lambda x: f(g(x))) == result.map(g).map(f)


# ═════════════════════════════════════════════════════════════════════════════
# Property Tests - Monad Laws
# ═════════════════════════════════════════════════════════════════════════════


def test_monad_left_identity() -> None:
    """Monad law: return a >>= f = f a"""
    f: Callable[[int], Result[int, str]] = lambda x: Ok(x * 2)
    assert Ok(42).flat_map(f) == f(42)


def test_monad_right_identity() -> None:
    """Monad law: m >>= return = m"""
    m: Result[int, str] = Ok(42)
    assert m.flat_map(lambda x: Ok(x)) == m


def test_monad_associativity() -> None:
    """Monad law: (m >>= f) >>= g = m >>= (\\x -> f x >>= g)"""
    m: Result[int, str] = Ok(5)
    f: Callable[[int], Result[int, str]] = lambda x: Ok(x + 1)
    g: Callable[[int], Result[int, str]] = lambda x: Ok(x * 2)
    assert m.flat_map(f).flat_map(g) == m.flat_map(lambda x: f(x).flat_map(g))


# ═════════════════════════════════════════════════════════════════════════════
# Unit Tests
# ═════════════════════════════════════════════════════════════════════════════


def test_ok_construction() -> None:
    result: Result[int, str] = Ok(42)
    assert result.is_ok()
    assert not result.is_err()
    assert result.unwrap() == 42
    assert result.ok() == 42
    assert result.err() is None


def test_err_construction() -> None:
    result: Result[int, str] = Err("error")
    assert result.is_err()
    assert result.unwrap_err() == "error"
    assert result.ok() is None
    assert result.err() == "error"


def test_unwrap_on_err_raises() -> None:
    with pytest.raises(RuntimeError, match="unwrap"):
        Err("boom").unwrap()
    with pytest.raises(RuntimeError, match="unwrap_err"):
        Ok(1).unwrap_err()


def test_map_err() -> None:
    assert Err("fail").map_err(str.upper) == Err("FAIL")
    assert Ok(1).map_err(str.upper) == Ok(1)


def test_flat_map_ok_to_err() -> None:
    result: Result[int, str] = Ok(5).flat_map(lambda x: Err(f"rejected {x}"))
    assert result.unwrap_err() == "rejected 5"


def test_flat_map_err_short_circuits() -> None:
    called = []
    result: Result[int, str] = Err("first").flat_map(lambda x: called.append(x) or Ok(x))
    assert result == Err("first")
    assert called == []


def test_unwrap_or() -> None:
    assert Ok(1).unwrap_or(0) == 1
    assert Err("x").unwrap_or(0) == 0


def test_match() -> None:
    assert Ok(2).match(ok=lambda v: f"ok {v}", err=lambda e: f"err {e}") == "ok 2"
    assert Err("x").match(ok=lambda v: f"ok {v}", err=lambda e: f"err {e}") == "err x"


def test_truthiness_and_repr() -> None:
    assert Ok(0)
    assert not Err("x")
    assert repr(Ok(1)) == "Ok(1)"
    assert repr(Err("x")) == "Err('x')"


def test_equality() -> None:
    assert Ok(1) == Ok(1)
    assert Ok(1) != Err(1)
    assert Err("a") != Err("b")
    assert hash(Ok(1)) == hash(Ok(1))


def test_iteration() -> None:
    assert list(Ok(5)) == [5]
    assert list(Err("x")) == []


def test_structural_pattern_matching() -> None:
    match Ok(3):
        case Result(value):
            assert value == 3


# ═════════════════════════════════════════════════════════════════════════════
# traverse
# ═════════════════════════════════════════════════════════════════════════════


def _parse_int(s: str) -> Result[int, str]:
    return Ok(int(s)) if s.lstrip("-").isdigit() else Err(f"not a number: {s}")


def test_traverse_all_ok() -> None:
    assert traverse(["1", "2", "3"], _parse_int) == Ok([1, 2, 3])


def test_traverse_empty() -> None:
    assert traverse([], _parse_int) == Ok([])


def test_traverse_fails_fast() -> None:
    seen: list[str] = []

    def parse(s: str) -> Result[int, str]:
        seen.append(s)
        return _parse_int(s)

    assert traverse(["1", "x", "y"], parse) == Err("not a number: x")
    assert seen == ["1", "x"]
