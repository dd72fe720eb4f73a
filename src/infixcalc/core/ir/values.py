"""
Value types flowing through the infixcalc evaluators.

A value is a tagged union of two frozen models:

- Number: a 64-bit float (arithmetic results, numeric literals)
- Boolean: a truth value (comparison and equality results)

Operators check the kinds of their operands when applied.
"""

from __future__ import annotations

import math
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Value kinds
# ---------------------------------------------------------------------------


class ValueKind(StrEnum):
    """Kinds of value an expression can evaluate to."""

    NUMBER = "number"
    BOOLEAN = "boolean"


# ---------------------------------------------------------------------------
# Value node types
# ---------------------------------------------------------------------------


class Number(BaseModel):
    """A floating point value."""

    value: float = Field(description="The numeric value")

    model_config = ConfigDict(frozen=True)

    @property
    def kind(self) -> ValueKind:
        return ValueKind.NUMBER

    def to_python(self) -> float:
        return self.value

    def __str__(self) -> str:
        return format_number(self.value)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Number):
            return self.value == other.value
        # bool is an int subclass; a Boolean result never equals a number
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            return self.value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash((ValueKind.NUMBER, self.value))


class Boolean(BaseModel):
    """A truth value produced by comparison and equality operators."""

    value: bool = Field(description="The truth value")

    model_config = ConfigDict(frozen=True)

    @property
    def kind(self) -> ValueKind:
        return ValueKind.BOOLEAN

    def to_python(self) -> bool:
        return self.value

    def __str__(self) -> str:
        return "true" if self.value else "false"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Boolean):
            return self.value == other.value
        if isinstance(other, bool):
            return self.value is other
        return NotImplemented

    def __hash__(self) -> int:
        return hash((ValueKind.BOOLEAN, self.value))


Value = Number | Boolean


def format_number(value: float) -> str:
    """Render a float the way a double prints: ``14.0``, ``Infinity``, ``NaN``."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return repr(value)


def make_value(raw: float | bool) -> Value:
    """Wrap a plain Python scalar in the matching value model."""
    if isinstance(raw, bool):
        return Boolean(value=raw)
    return Number(value=float(raw))


# ---------------------------------------------------------------------------
# Evaluation outcome
# ---------------------------------------------------------------------------


class EvaluationOutcome(BaseModel):
    """Result of evaluating one expression without raising.

    Exactly one of ``value`` and ``error`` is set.
    """

    expression: str = Field(description="The expression as given")
    strategy: str = Field(description="Evaluator that produced the outcome")
    value: Number | Boolean | None = Field(default=None, description="Result on success")
    error: str | None = Field(default=None, description="Error message on failure")
    error_type: str | None = Field(default=None, description="Exception class name on failure")

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return self.error is None

    def render(self) -> str:
        """Text written on a batch ``Output:`` line."""
        if self.error is not None:
            return f"Error: {self.error}"
        return str(self.value)
