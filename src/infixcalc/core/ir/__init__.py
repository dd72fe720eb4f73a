"""Value model shared by the infixcalc evaluators."""

from .values import (
    Boolean,
    EvaluationOutcome,
    Number,
    Value,
    ValueKind,
    format_number,
    make_value,
)

__all__ = [
    "Boolean",
    "EvaluationOutcome",
    "Number",
    "Value",
    "ValueKind",
    "format_number",
    "make_value",
]
