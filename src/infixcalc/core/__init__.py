"""Core infixcalc functionality: value model, expression language, config, batch runs."""

from . import ir
from .batch import BatchReport, calculate_from_file, calculate_lines
from .errors import (
    ArithmeticDomainError,
    ConfigError,
    EmptyInputError,
    ErrorContext,
    EvaluatorMismatchError,
    ExpressionSyntaxError,
    InfixCalcError,
    LexError,
    MalformedExpressionError,
    MismatchedParenthesisError,
    NegativeFactorialError,
    NonIntegralFactorialError,
    NumberFormatError,
    OperandTypeError,
    OverwriteRefusedError,
    StackUnderflowError,
    UndefinedOperationError,
)
from .manifest import CalculatorConfig, default_config, find_config, load_config

__all__ = [
    "ir",
    "ArithmeticDomainError",
    "BatchReport",
    "CalculatorConfig",
    "ConfigError",
    "EmptyInputError",
    "ErrorContext",
    "EvaluatorMismatchError",
    "ExpressionSyntaxError",
    "InfixCalcError",
    "LexError",
    "MalformedExpressionError",
    "MismatchedParenthesisError",
    "NegativeFactorialError",
    "NonIntegralFactorialError",
    "NumberFormatError",
    "OperandTypeError",
    "OverwriteRefusedError",
    "StackUnderflowError",
    "UndefinedOperationError",
    "calculate_from_file",
    "calculate_lines",
    "default_config",
    "find_config",
    "load_config",
]
