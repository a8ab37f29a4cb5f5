"""Built-in procedures for the slisp runtime environment.

Arithmetic, comparison, boolean logic and math functions. Every function
receives the payloads of already evaluated, already type-checked operands
(see slisp.types.procedure.Builtin) and returns a raw Python value.
"""
from __future__ import annotations

import math

from slisp.errors import DivisionByZeroError, InterpreterSemanticError
from slisp.types.atom import AtomType
from slisp.types.procedure import Builtin

NUMBER = AtomType.NUMBER
BOOLEAN = AtomType.BOOLEAN


# -------------------------------
# Arithmetic
# -------------------------------
def add(args: list[float]) -> float:
    """Sum of all arguments; overflow gives an infinite result, not an error."""
    return sum(args)


def sub(args: list[float]) -> float:
    """Unary negation for one argument, subtraction for two."""
    if len(args) == 1:
        return -args[0]
    return args[0] - args[1]


def mul(args: list[float]) -> float:
    return math.prod(args)


def div(args: list[float]) -> float:
    n, d = args
    if d == 0:
        raise DivisionByZeroError("Division by zero")
    return n / d


# -------------------------------
# Comparison
# -------------------------------
def lt(args: list[float]) -> bool:
    return args[0] < args[1]


def lte(args: list[float]) -> bool:
    return args[0] <= args[1]


def gt(args: list[float]) -> bool:
    return args[0] > args[1]


def gte(args: list[float]) -> bool:
    return args[0] >= args[1]


def num_eq(args: list[float]) -> bool:
    return args[0] == args[1]


# -------------------------------
# Boolean logic
# -------------------------------
def logical_not(args: list[bool]) -> bool:
    return not args[0]


def logical_and(args: list[bool]) -> bool:
    return all(args)


def logical_or(args: list[bool]) -> bool:
    return any(args)


# -------------------------------
# Math
# -------------------------------
def _math(name: str, fn, *args: float) -> float:
    try:
        return fn(*args)
    except ValueError:
        raise InterpreterSemanticError(f"{name}: math domain error for {', '.join(map(repr, args))}")


def log10(args: list[float]) -> float:
    return _math("log10", math.log10, args[0])


def power(args: list[float]) -> float:
    base, exponent = args
    try:
        return _math("pow", math.pow, base, exponent)
    except OverflowError:
        # Same as any other float overflow: saturate to infinity
        negative = base < 0 and exponent.is_integer() and int(exponent) % 2 == 1
        return -math.inf if negative else math.inf


def sin(args: list[float]) -> float:
    return _math("sin", math.sin, args[0])


def cos(args: list[float]) -> float:
    return _math("cos", math.cos, args[0])


def arctan(args: list[float]) -> float:
    y, x = args
    return math.atan2(y, x)


BUILTINS: list[Builtin] = [
    Builtin("+", add, 1, None, NUMBER, "Sum of one or more numbers"),
    Builtin("-", sub, 1, 2, NUMBER, "Negate one number or subtract two"),
    Builtin("*", mul, 1, None, NUMBER, "Product of one or more numbers"),
    Builtin("/", div, 2, 2, NUMBER, "Divide two numbers; the divisor must not be zero"),
    Builtin("<", lt, 2, 2, NUMBER, "Strict less-than"),
    Builtin("<=", lte, 2, 2, NUMBER, "Less-than or equal"),
    Builtin(">", gt, 2, 2, NUMBER, "Strict greater-than"),
    Builtin(">=", gte, 2, 2, NUMBER, "Greater-than or equal"),
    Builtin("=", num_eq, 2, 2, NUMBER, "Numeric equality"),
    Builtin("not", logical_not, 1, 1, BOOLEAN, "Logical negation"),
    Builtin("and", logical_and, 1, None, BOOLEAN, "Logical AND of one or more booleans"),
    Builtin("or", logical_or, 1, None, BOOLEAN, "Logical OR of one or more booleans"),
    Builtin("log10", log10, 1, 1, NUMBER, "Base 10 logarithm"),
    Builtin("pow", power, 2, 2, NUMBER, "Raise base to exponent"),
    Builtin("sin", sin, 1, 1, NUMBER, "Sine of an angle in radians"),
    Builtin("cos", cos, 1, 1, NUMBER, "Cosine of an angle in radians"),
    Builtin("arctan", arctan, 2, 2, NUMBER, "Angle of (x, y) in radians: (arctan y x)"),
]
