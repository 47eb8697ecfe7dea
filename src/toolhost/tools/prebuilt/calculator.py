"""Arithmetic tools.

Stateless; every operand is a float. Division, percentage and modulo by
zero and the square root of a negative number do not raise: they return a
CalculationResult whose result is NaN and whose operation names the error.
"""

from __future__ import annotations

import math

from toolhost.foundation.core import ParamKind, param
from toolhost.foundation.registry import ToolRegistry
from toolhost.records import CalculationResult

NAN = float("nan")


def format_number(x: float) -> str:
    """Render integral floats without a trailing '.0' (5.0 → '5')."""
    return str(int(x)) if math.isfinite(x) and float(x).is_integer() else repr(x)


def _calc(expression: str, result: float, operation: str) -> CalculationResult:
    return CalculationResult(expression=expression, result=result, operation=operation)


def add(a: float, b: float) -> CalculationResult:
    return _calc(f"{format_number(a)} + {format_number(b)}", a + b, "Addition")


def subtract(a: float, b: float) -> CalculationResult:
    return _calc(f"{format_number(a)} - {format_number(b)}", a - b, "Subtraction")


def multiply(a: float, b: float) -> CalculationResult:
    return _calc(f"{format_number(a)} × {format_number(b)}", a * b, "Multiplication")


def divide(a: float, b: float) -> CalculationResult:
    expr = f"{format_number(a)} ÷ {format_number(b)}"
    if b == 0:
        return _calc(expr, NAN, "Division Error: Cannot divide by zero")
    return _calc(expr, a / b, "Division")


def power(base_number: float, exponent: float) -> CalculationResult:
    try:
        result = math.pow(base_number, exponent)
    except ValueError:
        # 0 ** negative, or negative base with fractional exponent
        result = math.inf if base_number == 0 else NAN
    except OverflowError:
        result = math.inf
    return _calc(f"{format_number(base_number)} ^ {format_number(exponent)}", result, "Power")


def square_root(number: float) -> CalculationResult:
    expr = f"√{format_number(number)}"
    if number < 0:
        return _calc(expr, NAN, "Square Root Error: Cannot calculate square root of negative number")
    return _calc(expr, math.sqrt(number), "Square Root")


def percentage(part: float, whole: float) -> CalculationResult:
    if whole == 0:
        return _calc(f"{format_number(part)} / {format_number(whole)} × 100", NAN, "Percentage Error: Cannot divide by zero")
    return _calc(f"({format_number(part)} / {format_number(whole)}) × 100", part / whole * 100, "Percentage")


def modulo(a: float, b: float) -> CalculationResult:
    expr = f"{format_number(a)} mod {format_number(b)}"
    if b == 0:
        return _calc(expr, NAN, "Modulo Error: Cannot divide by zero")
    # Sign follows the dividend, unlike Python's %
    return _calc(expr, math.fmod(a, b), "Modulo")


def register_calculator_tools(registry: ToolRegistry) -> None:
    a = param("a", ParamKind.FLOAT, "The first number")
    b = param("b", ParamKind.FLOAT, "The second number")
    reg = lambda name, desc, fn, *ps: registry.add(name, desc, fn, *ps, category="calculator")  # noqa: E731

    reg("Add", "Adds two numbers together and returns the sum.", add, a, b)
    reg("Subtract", "Subtracts the second number from the first number.", subtract, a, b)
    reg("Multiply", "Multiplies two numbers together and returns the product.", multiply, a, b)
    reg("Divide", "Divides the first number by the second number. Returns an error result if dividing by zero.", divide,
        param("a", ParamKind.FLOAT, "The dividend (number to be divided)"),
        param("b", ParamKind.FLOAT, "The divisor (number to divide by)"))
    reg("Power", "Raises a base number to an exponent power.", power,
        param("baseNumber", ParamKind.FLOAT, "The base number"),
        param("exponent", ParamKind.FLOAT, "The exponent"))
    reg("SquareRoot", "Calculates the square root of a non-negative number.", square_root,
        param("number", ParamKind.FLOAT, "The number to find the square root of (must be non-negative)"))
    reg("Percentage", "Calculates what percentage one number is of another.", percentage,
        param("part", ParamKind.FLOAT, "The partial value"),
        param("whole", ParamKind.FLOAT, "The whole value"))
    reg("Modulo", "Calculates the remainder when dividing two numbers.", modulo,
        param("a", ParamKind.FLOAT, "The dividend"),
        param("b", ParamKind.FLOAT, "The divisor"))
