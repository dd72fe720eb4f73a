"""
Operator catalog for the infixcalc expression language.

A constant table maps each operator identity to its attributes, and free
functions resolve operator symbols in an expression and compare evaluation
order. The table is read-only; nothing here holds state.

Precedence (higher binds tighter):
    7  !                 factorial (postfix)
    6  -                 negation (prefix)
    5  ^                 power (right-associative)
    4  * /
    3  + -
    2  < <= > >=
    1  == !=
    0  ( )               groupers
"""

from __future__ import annotations

from enum import IntEnum, StrEnum, auto
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field

from infixcalc.core.errors import LexError, make_syntax_error


class OperatorId(StrEnum):
    """Identities of the fifteen operators and groupers."""

    OPEN_PARENTHESIS = auto()
    CLOSE_PARENTHESIS = auto()
    FACTORIAL = auto()
    NEGATION = auto()
    POWER = auto()
    MULTIPLICATION = auto()
    DIVISION = auto()
    ADDITION = auto()
    SUBTRACTION = auto()
    GREATER_THAN = auto()
    GREATER_THAN_OR_EQUAL_TO = auto()
    LESS_THAN = auto()
    LESS_THAN_OR_EQUAL_TO = auto()
    EQUAL_TO = auto()
    NOT_EQUAL_TO = auto()


class Arity(IntEnum):
    """Number of operands an operator consumes."""

    NONE = 0  # groupers
    UNARY = 1
    BINARY = 2


class Associativity(StrEnum):
    """Grouping of repeated same-precedence operators."""

    LEFT = "left"
    RIGHT = "right"


class Fixity(StrEnum):
    """Where an operator sits relative to its operand(s)."""

    PREFIX = "prefix"
    POSTFIX = "postfix"
    INFIX = "infix"
    GROUPER = "grouper"


class OperatorSpec(BaseModel):
    """Immutable attributes of one operator."""

    symbol: str = Field(description="Source text of the operator")
    precedence: int = Field(description="Binding strength; higher binds tighter")
    arity: Arity
    associativity: Associativity = Associativity.LEFT
    fixity: Fixity = Fixity.INFIX

    model_config = ConfigDict(frozen=True)

    @property
    def is_grouper(self) -> bool:
        return self.fixity == Fixity.GROUPER

    @property
    def is_unary(self) -> bool:
        return self.arity == Arity.UNARY

    @property
    def is_binary(self) -> bool:
        return self.arity == Arity.BINARY


def _binary(symbol: str, precedence: int, associativity: Associativity = Associativity.LEFT) -> OperatorSpec:
    return OperatorSpec(
        symbol=symbol,
        precedence=precedence,
        arity=Arity.BINARY,
        associativity=associativity,
    )


_GROUPER = {"arity": Arity.NONE, "precedence": 0, "fixity": Fixity.GROUPER}

OPERATOR_TABLE: MappingProxyType[OperatorId, OperatorSpec] = MappingProxyType(
    {
        OperatorId.OPEN_PARENTHESIS: OperatorSpec(symbol="(", **_GROUPER),
        OperatorId.CLOSE_PARENTHESIS: OperatorSpec(symbol=")", **_GROUPER),
        OperatorId.FACTORIAL: OperatorSpec(
            symbol="!",
            precedence=7,
            arity=Arity.UNARY,
            associativity=Associativity.LEFT,
            fixity=Fixity.POSTFIX,
        ),
        OperatorId.NEGATION: OperatorSpec(
            symbol="-",
            precedence=6,
            arity=Arity.UNARY,
            associativity=Associativity.RIGHT,
            fixity=Fixity.PREFIX,
        ),
        OperatorId.POWER: _binary("^", 5, Associativity.RIGHT),
        OperatorId.MULTIPLICATION: _binary("*", 4),
        OperatorId.DIVISION: _binary("/", 4),
        OperatorId.ADDITION: _binary("+", 3),
        OperatorId.SUBTRACTION: _binary("-", 3),
        OperatorId.GREATER_THAN: _binary(">", 2),
        OperatorId.GREATER_THAN_OR_EQUAL_TO: _binary(">=", 2),
        OperatorId.LESS_THAN: _binary("<", 2),
        OperatorId.LESS_THAN_OR_EQUAL_TO: _binary("<=", 2),
        OperatorId.EQUAL_TO: _binary("==", 1),
        OperatorId.NOT_EQUAL_TO: _binary("!=", 1),
    }
)

COMPARISON_OPERATORS = frozenset(
    {
        OperatorId.GREATER_THAN,
        OperatorId.GREATER_THAN_OR_EQUAL_TO,
        OperatorId.LESS_THAN,
        OperatorId.LESS_THAN_OR_EQUAL_TO,
        OperatorId.EQUAL_TO,
        OperatorId.NOT_EQUAL_TO,
    }
)

# Characters that make up a numeric token
NUMBER_CHARS = frozenset("0123456789.")

_SINGLE_CHAR: dict[str, OperatorId] = {
    "(": OperatorId.OPEN_PARENTHESIS,
    ")": OperatorId.CLOSE_PARENTHESIS,
    "^": OperatorId.POWER,
    "*": OperatorId.MULTIPLICATION,
    "/": OperatorId.DIVISION,
    "+": OperatorId.ADDITION,
}


def spec_for(op: OperatorId) -> OperatorSpec:
    """Attributes of ``op``."""
    return OPERATOR_TABLE[op]


def symbol_of(op: OperatorId) -> str:
    return OPERATOR_TABLE[op].symbol


def precedence_of(op: OperatorId) -> int:
    return OPERATOR_TABLE[op].precedence


def evaluated_after(op: OperatorId, other: OperatorId) -> bool:
    """Whether incoming ``op`` is evaluated after ``other``.

    True means ``other`` (already on the operator stack) must be applied
    before ``op`` is pushed. For a left-associative ``op`` equal precedence
    counts; for a right-associative ``op`` only strictly higher precedence
    does.
    """
    mine = OPERATOR_TABLE[op]
    theirs = OPERATOR_TABLE[other]
    if mine.associativity == Associativity.LEFT:
        return mine.precedence <= theirs.precedence
    return mine.precedence < theirs.precedence


def follows_operand(expression: str, position: int) -> bool:
    """Whether the character before ``position`` completes an operand.

    An operand ends with a digit or decimal point (a numeric token), a
    closing parenthesis, or a postfix factorial. A ``!`` right before
    ``position`` cannot be the start of ``!=`` because ``position`` itself
    is not ``=``.
    """
    if position <= 0:
        return False
    previous = expression[position - 1]
    if previous in NUMBER_CHARS or previous == ")":
        return True
    return previous == "!" and expression[position] != "="


def resolve(expression: str, position: int) -> tuple[OperatorId, int]:
    """Resolve the operator starting at ``position``.

    Args:
        expression: Whitespace-stripped expression text.
        position: Index of the operator's first character.

    Returns:
        The operator and the number of characters it spans (1 or 2).

    Raises:
        LexError: If the character starts no operator, or a multi-character
            operator is cut off by the end of input.
    """
    c = expression[position]
    following = expression[position + 1 : position + 2]

    if c in _SINGLE_CHAR:
        return _SINGLE_CHAR[c], 1

    if c == "!":
        if following == "=":
            return OperatorId.NOT_EQUAL_TO, 2
        return OperatorId.FACTORIAL, 1

    if c == "-":
        if follows_operand(expression, position):
            return OperatorId.SUBTRACTION, 1
        return OperatorId.NEGATION, 1

    if c in "<>":
        if not following:
            raise make_syntax_error(
                LexError, f"Incomplete operator {c!r} at end of input", expression, position
            )
        if c == "<":
            if following == "=":
                return OperatorId.LESS_THAN_OR_EQUAL_TO, 2
            return OperatorId.LESS_THAN, 1
        if following == "=":
            return OperatorId.GREATER_THAN_OR_EQUAL_TO, 2
        return OperatorId.GREATER_THAN, 1

    if c == "=":
        if following == "=":
            return OperatorId.EQUAL_TO, 2
        raise make_syntax_error(LexError, "'=' must be followed by '='", expression, position)

    raise make_syntax_error(LexError, f"Unexpected character: {c!r}", expression, position)
