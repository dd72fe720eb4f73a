"""
Operator application for infixcalc.

Pure functions over the value model. Division, logarithm and exponent follow
IEEE-754 double semantics (signed infinities, NaN) rather than raising the
way Python's float operators do.
"""

from __future__ import annotations

import math
from collections.abc import Callable

from infixcalc.core.errors import (
    NegativeFactorialError,
    NonIntegralFactorialError,
    OperandTypeError,
    UndefinedOperationError,
)
from infixcalc.core.expression_lang.operators import OperatorId, spec_for, symbol_of
from infixcalc.core.ir.values import Boolean, Number, Value

# Exponents outside a 32-bit int take the exp/ln path
_MAX_INTEGRAL_EXPONENT = 2**31 - 1
# Larger integral exponents use math.pow instead of the multiplication loop
_LINEAR_EXPONENT_LIMIT = 2**16


def apply_unary(op: OperatorId, x: Value) -> Value:
    """Apply a unary operator (negation or factorial)."""
    if not spec_for(op).is_unary:
        raise OperandTypeError(f"{symbol_of(op)!r} is not a unary operator")
    operand = _require_number(op, x)
    if op == OperatorId.NEGATION:
        return Number(value=-operand)
    return Number(value=factorial(operand))


def apply_binary(op: OperatorId, x: Value, y: Value) -> Value:
    """Apply a binary operator; ``x`` is the left operand."""
    if not spec_for(op).is_binary:
        raise OperandTypeError(f"{symbol_of(op)!r} is not a binary operator")
    left = _require_number(op, x)
    right = _require_number(op, y)

    if op in _COMPARISONS:
        return Boolean(value=_COMPARISONS[op](left, right))
    return Number(value=_ARITHMETIC[op](left, right))


def _require_number(op: OperatorId, value: Value) -> float:
    if isinstance(value, Number):
        return value.value
    raise OperandTypeError(
        f"{symbol_of(op)!r} requires a number, got {type(value).__name__.lower()} ({value})"
    )


def factorial(x: float) -> float:
    """Iterative product ``1..x`` for a non-negative integral ``x``."""
    if not math.isfinite(x) or not x.is_integer():
        raise NonIntegralFactorialError(f"Factorial arguments must be integral, got {x}")
    if x < 0:
        raise NegativeFactorialError(f"Factorial argument must be non-negative, got {x}")

    value = 1.0
    for i in range(2, int(x) + 1):
        value *= i
        if math.isinf(value):
            break
    return value


def divide(x: float, y: float) -> float:
    """IEEE division: ``x/0`` is a signed infinity, ``0/0`` is NaN."""
    if y == 0:
        if x == 0 or math.isnan(x):
            return math.nan
        return math.copysign(math.inf, x) * math.copysign(1.0, y)
    return x / y


def power(x: float, y: float) -> float:
    """``x`` raised to ``y``.

    Integral exponents use repeated multiplication (reciprocal for negative
    exponents). Above ``2**16`` the loop would run for minutes on a base
    close to 1, so those exponents go through ``math.pow``, which can differ
    from the loop in the last bit. Other exponents use ``exp(y * ln(x))``.

    Raises:
        UndefinedOperationError: For ``0^0``.
    """
    if y.is_integer() and abs(y) <= _MAX_INTEGRAL_EXPONENT:
        return _integral_power(x, int(y))
    return _exp(y * _ln(x))


def _integral_power(x: float, n: int) -> float:
    if n == 0 and x == 0:
        raise UndefinedOperationError("0^0 is undefined")
    if n < 0:
        return divide(1.0, _integral_power(x, -n))
    if abs(x) == 1:
        # the product never leaves {1, -1}
        return -1.0 if x < 0 and n % 2 else 1.0
    if n > _LINEAR_EXPONENT_LIMIT:
        try:
            return math.pow(x, n)
        except OverflowError:
            return -math.inf if x < 0 and n % 2 else math.inf

    value = 1.0
    for remaining in range(n, 0, -1):
        if value == 0 or not math.isfinite(value):
            # further products only flip the sign for a negative base
            if math.copysign(1.0, x) < 0 and remaining % 2:
                value = -value
            break
        value *= x
    return value


def _ln(x: float) -> float:
    if math.isnan(x) or x < 0:
        return math.nan
    if x == 0:
        return -math.inf
    return math.log(x)


def _exp(x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


_ARITHMETIC: dict[OperatorId, Callable[[float, float], float]] = {
    OperatorId.POWER: power,
    OperatorId.MULTIPLICATION: lambda a, b: a * b,
    OperatorId.DIVISION: divide,
    OperatorId.ADDITION: lambda a, b: a + b,
    OperatorId.SUBTRACTION: lambda a, b: a - b,
}

_COMPARISONS: dict[OperatorId, Callable[[float, float], bool]] = {
    OperatorId.GREATER_THAN: lambda a, b: a > b,
    OperatorId.GREATER_THAN_OR_EQUAL_TO: lambda a, b: a >= b,
    OperatorId.LESS_THAN: lambda a, b: a < b,
    OperatorId.LESS_THAN_OR_EQUAL_TO: lambda a, b: a <= b,
    OperatorId.EQUAL_TO: lambda a, b: a == b,
    OperatorId.NOT_EQUAL_TO: lambda a, b: a != b,
}
