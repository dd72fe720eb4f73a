"""
Error types for infixcalc tokenization, evaluation, configuration and batch runs.
"""

from dataclasses import dataclass
from typing import Optional


class InfixCalcError(Exception):
    """Base exception for all infixcalc errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.message}\n{self.context.format()}"
        return self.message

    @property
    def position(self) -> int | None:
        """Index into the stripped expression, when known."""
        return self.context.position if self.context else None


class ExpressionSyntaxError(InfixCalcError):
    """
    Raised when an expression is malformed.

    Examples:
    - Empty input
    - Unknown characters or incomplete operators
    - Unbalanced parentheses
    - Operators without operands
    """

    pass


class EmptyInputError(ExpressionSyntaxError):
    """Raised when the expression is empty after whitespace removal."""

    pass


class LexError(ExpressionSyntaxError):
    """Raised for an unrecognized character or an operator cut off at end of input."""

    pass


class NumberFormatError(ExpressionSyntaxError, ValueError):
    """Raised when numeric token text cannot be parsed as a float (e.g. ``1.2.3``)."""

    pass


class MismatchedParenthesisError(ExpressionSyntaxError):
    """Raised for unbalanced or misordered parentheses."""

    pass


class StackUnderflowError(ExpressionSyntaxError):
    """Raised when an operator's required operand(s) are unavailable."""

    pass


class MalformedExpressionError(ExpressionSyntaxError):
    """Raised when evaluation does not reduce to exactly one value."""

    pass


class OperandTypeError(InfixCalcError, TypeError):
    """
    Raised when an operator receives an operand of the wrong kind.

    Examples:
    - A Boolean fed to an arithmetic or comparison operator
    - An operator left where a value was expected
    - A unary operator with an operand on its forbidden side
    """

    pass


class ArithmeticDomainError(InfixCalcError, ArithmeticError):
    """Raised when an operation is undefined for its (well-typed) operands."""

    pass


class NonIntegralFactorialError(ArithmeticDomainError):
    """Raised when ``!`` is applied to a non-integral number."""

    pass


class NegativeFactorialError(ArithmeticDomainError):
    """Raised when ``!`` is applied to a negative number."""

    pass


class UndefinedOperationError(ArithmeticDomainError):
    """Raised for ``0^0``."""

    pass


class EvaluatorMismatchError(InfixCalcError):
    """Raised when the stack and recursive evaluators disagree on a result."""

    pass


class ConfigError(InfixCalcError):
    """Raised when ``infixcalc.toml`` cannot be loaded or holds invalid values."""

    pass


class OverwriteRefusedError(InfixCalcError):
    """Raised when a batch run would overwrite its own input file."""

    pass


@dataclass
class ErrorContext:
    """
    Location of an error inside an expression.

    Attributes:
        expression: The whitespace-stripped expression being processed
        position: Index (0-based) of the offending character
    """

    expression: str
    position: int

    def format(self) -> str:
        """
        Format error context as the expression with a marker under the error.

        Returns:
            Two lines like "  2+3)" and "     ^"
        """
        marker = " " * (self.position + 2) + "^"
        return f"  {self.expression}\n{marker}"


def make_syntax_error(
    error_type: type[ExpressionSyntaxError],
    message: str,
    expression: str | None = None,
    position: int | None = None,
) -> ExpressionSyntaxError:
    """
    Helper to create a syntax error with optional context.

    Args:
        error_type: Concrete ExpressionSyntaxError subclass to raise
        message: Error description
        expression: Optional stripped expression text
        position: Optional index of the offending character

    Returns:
        Error instance with context if location provided
    """
    if expression is not None and position is not None:
        return error_type(message, ErrorContext(expression=expression, position=position))
    return error_type(message)
