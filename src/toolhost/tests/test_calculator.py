"""Tests for the calculator tools."""

from __future__ import annotations

import math

import pytest

from toolhost.runtime import Dispatcher
from toolhost.tools.prebuilt.calculator import (
    add,
    divide,
    format_number,
    modulo,
    multiply,
    percentage,
    power,
    square_root,
    subtract,
)


def test_format_number() -> None:
    assert format_number(10) == "10"
    assert format_number(5.0) == "5"
    assert format_number(-3.0) == "-3"
    assert format_number(2.5) == "2.5"
    assert format_number(float("inf")) == "inf"


@pytest.mark.parametrize("fn,a,b,result,expression,operation", [
    (add, 5, 3, 8, "5 + 3", "Addition"),
    (subtract, 10, 4, 6, "10 - 4", "Subtraction"),
    (multiply, 6, 7, 42, "6 × 7", "Multiplication"),
    (divide, 15, 3, 5, "15 ÷ 3", "Division"),
    (power, 2, 10, 1024, "2 ^ 10", "Power"),
    (percentage, 25, 200, 12.5, "(25 / 200) × 100", "Percentage"),
    (modulo, 17, 5, 2, "17 mod 5", "Modulo"),
])
def test_binary_operations(fn, a: float, b: float, result: float, expression: str, operation: str) -> None:
    calc = fn(a, b)
    assert calc.result == pytest.approx(result)
    assert calc.expression == expression
    assert calc.operation == operation
    assert not calc.is_error


def test_square_root() -> None:
    calc = square_root(16)
    assert calc.result == 4
    assert calc.expression == "√16"
    assert calc.operation == "Square Root"


@pytest.mark.parametrize("calc,label", [
    (divide(10, 0), "Division Error: Cannot divide by zero"),
    (modulo(10, 0), "Modulo Error: Cannot divide by zero"),
    (percentage(5, 0), "Percentage Error: Cannot divide by zero"),
    (square_root(-4), "Square Root Error: Cannot calculate square root of negative number"),
])
def test_arithmetic_errors_are_nan_results(calc, label: str) -> None:
    assert math.isnan(calc.result)
    assert calc.is_error
    assert calc.operation == label


def test_modulo_follows_dividend_sign() -> None:
    assert modulo(-7, 3).result == -1
    assert modulo(7, -3).result == 1


def test_power_edge_cases() -> None:
    assert math.isnan(power(-8, 0.5).result)
    assert power(10, 1000).result == math.inf
    assert power(0, -1).result == math.inf
    assert power(2, -1).result == 0.5


@pytest.mark.parametrize("a,b", [(7.5, 2.5), (-12, 4), (1e10, 3), (0.1, 0.7)])
def test_divide_then_multiply_recovers_dividend(a: float, b: float) -> None:
    assert multiply(divide(a, b).result, b).result == pytest.approx(a)


def test_calculator_through_dispatcher(dispatcher: Dispatcher) -> None:
    envelope = dispatcher.dispatch("Divide", {"a": "10", "b": 0})
    assert not envelope.is_error
    value = envelope.first.value
    assert value["result"] == "NaN"
    assert value["expression"] == "10 ÷ 0"
    assert value["operation"] == "Division Error: Cannot divide by zero"


def test_power_uses_base_number_parameter(dispatcher: Dispatcher) -> None:
    envelope = dispatcher.dispatch("Power", {"baseNumber": 3, "exponent": 2})
    assert envelope.first.value["result"] == 9.0


def test_integer_inputs_are_accepted() -> None:
    calc = divide(10, 0)
    assert calc.expression == "10 ÷ 0"
    assert math.isnan(calc.result)
    assert add(2, 3).expression == "2 + 3"
