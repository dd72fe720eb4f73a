"""
infixcalc - infix arithmetic/boolean expression evaluation.

Evaluates flat expressions such as ``4!-5^2/1*3==-51`` with two independent
evaluators: an operand/operator stack machine and a recursive splitter.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.errors import (
    EmptyInputError,
    InfixCalcError,
    LexError,
    MalformedExpressionError,
    MismatchedParenthesisError,
    NegativeFactorialError,
    NonIntegralFactorialError,
    NumberFormatError,
    OperandTypeError,
    StackUnderflowError,
    UndefinedOperationError,
)
from .core.expression_lang import (
    Strategy,
    evaluate,
    evaluate_recursive,
    evaluate_safely,
    evaluate_stack,
    tokenize,
)
from .core.ir import Boolean, Number, Value

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "Boolean",
    "Number",
    "Value",
    "Strategy",
    "evaluate",
    "evaluate_recursive",
    "evaluate_safely",
    "evaluate_stack",
    "tokenize",
    "InfixCalcError",
    "EmptyInputError",
    "LexError",
    "NumberFormatError",
    "MismatchedParenthesisError",
    "StackUnderflowError",
    "MalformedExpressionError",
    "OperandTypeError",
    "NonIntegralFactorialError",
    "NegativeFactorialError",
    "UndefinedOperationError",
]
