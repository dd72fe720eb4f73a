"""
Tokenizer for infixcalc expressions.

Converts an expression string into a sequence of typed tokens.
"""

from __future__ import annotations

import logging
from enum import StrEnum, auto
from typing import Any

from infixcalc.core.errors import EmptyInputError, NumberFormatError, make_syntax_error
from infixcalc.core.expression_lang.operators import (
    NUMBER_CHARS,
    OperatorId,
    follows_operand,
    resolve,
    symbol_of,
)

logger = logging.getLogger(__name__)


class TokenKind(StrEnum):
    """Token types for the expression language."""

    NUMBER = auto()
    OPERATOR = auto()


class Token:
    """A single token: a number or an operator identity.

    Equality ignores ``pos`` and ``text`` so token sequences can be compared
    against hand-built expectations.
    """

    __slots__ = ("kind", "value", "pos", "text")

    def __init__(self, kind: TokenKind, value: float | OperatorId, pos: int = 0, text: str = "") -> None:
        self.kind = kind
        self.value = value
        self.pos = pos
        self.text = text

    @classmethod
    def number(cls, value: float, pos: int = 0, text: str = "") -> Token:
        return cls(TokenKind.NUMBER, float(value), pos, text or repr(float(value)))

    @classmethod
    def operator(cls, op: OperatorId, pos: int = 0) -> Token:
        return cls(TokenKind.OPERATOR, op, pos, symbol_of(op))

    @property
    def is_number(self) -> bool:
        return self.kind == TokenKind.NUMBER

    @property
    def is_operator(self) -> bool:
        return self.kind == TokenKind.OPERATOR

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.kind == other.kind and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.kind, self.value))

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, pos={self.pos})"


def strip_whitespace(expression: str) -> str:
    """Remove every whitespace character from ``expression``."""
    return "".join(expression.split())


def tokenize(expression: str) -> list[Token]:
    """Tokenize an expression string into a list of tokens.

    Raises:
        EmptyInputError: If nothing is left after whitespace removal.
        LexError: On an unknown character or an incomplete operator.
        NumberFormatError: If a numeric run is not a valid float (``1.2.3``).
    """
    source = strip_whitespace(expression)
    if not source:
        raise EmptyInputError("Input expression cannot be empty")

    tokens: list[Token] = []
    i = 0
    n = len(source)

    while i < n:
        if _starts_number(source, i):
            end = _number_end(source, i)
            text = source[i:end]
            try:
                value = float(text)
            except ValueError:
                raise make_syntax_error(
                    NumberFormatError, f"Malformed number: {text!r}", source, i
                ) from None
            tokens.append(Token(TokenKind.NUMBER, value, i, text))
            i = end
            continue

        op, length = resolve(source, i)
        tokens.append(Token(TokenKind.OPERATOR, op, i, source[i : i + length]))
        i += length

    logger.debug(f"Tokenized {source!r} into {len(tokens)} tokens")
    return tokens


def _starts_number(source: str, i: int) -> bool:
    """Whether a numeric literal (possibly negative) starts at ``i``."""
    c = source[i]
    if c in NUMBER_CHARS:
        return True
    if c != "-" or i + 1 >= len(source) or source[i + 1] not in NUMBER_CHARS:
        return False
    if follows_operand(source, i):
        return False
    # "-3!" is -(3!): factorial binds tighter than negation, so the sign
    # stays a NEGATION operator instead of folding into the literal
    end = _number_end(source, i)
    return not (source[end : end + 1] == "!" and source[end + 1 : end + 2] != "=")


def _number_end(source: str, start: int) -> int:
    """Index just past the numeric run beginning at ``start``."""
    end = start + 1
    while end < len(source) and source[end] in NUMBER_CHARS:
        end += 1
    return end
