"""
Strategy selection over the two infixcalc evaluators.

``evaluate`` runs one evaluator, or both when cross-checking; ``evaluate_safely``
turns failures into an EvaluationOutcome instead of raising.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from enum import StrEnum

from infixcalc.core.errors import EvaluatorMismatchError, InfixCalcError
from infixcalc.core.expression_lang.recursive_evaluator import evaluate_recursive
from infixcalc.core.expression_lang.stack_evaluator import evaluate_stack
from infixcalc.core.expression_lang.tokenizer import Token, tokenize
from infixcalc.core.ir.values import EvaluationOutcome, Number, Value

logger = logging.getLogger(__name__)

# Relative tolerance for Numbers produced by differently ordered float operations
AGREEMENT_REL_TOL = 1e-12


class Strategy(StrEnum):
    """Which evaluator computes the result."""

    STACK = "stack"
    RECURSIVE = "recursive"
    VERIFY = "verify"  # both, cross-checked


_EVALUATORS: dict[Strategy, Callable[[str | Sequence[Token]], Value]] = {
    Strategy.STACK: evaluate_stack,
    Strategy.RECURSIVE: evaluate_recursive,
}


def values_agree(a: Value, b: Value) -> bool:
    """Whether two results are the same kind and (for numbers) equal within tolerance."""
    if a.kind != b.kind:
        return False
    if isinstance(a, Number) and isinstance(b, Number):
        if math.isnan(a.value) or math.isnan(b.value):
            return math.isnan(a.value) and math.isnan(b.value)
        return a.value == b.value or math.isclose(a.value, b.value, rel_tol=AGREEMENT_REL_TOL)
    return a.value == b.value


def evaluate(expression: str, strategy: Strategy | str = Strategy.STACK) -> Value:
    """Evaluate ``expression`` with the given strategy.

    Raises:
        InfixCalcError: On any evaluation failure.
        EvaluatorMismatchError: If ``verify`` finds the evaluators disagree.
    """
    strategy = Strategy(strategy)
    if strategy != Strategy.VERIFY:
        return _EVALUATORS[strategy](expression)

    tokens = tokenize(expression)
    stack_value = evaluate_stack(tokens)
    recursive_value = evaluate_recursive(tokens)
    if not values_agree(stack_value, recursive_value):
        raise EvaluatorMismatchError(
            f"Evaluators disagree: stack gave {stack_value}, recursive gave {recursive_value}"
        )
    return stack_value


def evaluate_safely(expression: str, strategy: Strategy | str = Strategy.STACK) -> EvaluationOutcome:
    """Evaluate ``expression`` and report the result or the error, never raising
    for evaluation failures."""
    strategy = Strategy(strategy)
    try:
        value = evaluate(expression, strategy)
    except InfixCalcError as e:
        logger.debug(f"Evaluation of {expression!r} failed: {e.message}")
        return EvaluationOutcome(
            expression=expression,
            strategy=strategy.value,
            error=e.message,
            error_type=type(e).__name__,
        )
    return EvaluationOutcome(expression=expression, strategy=strategy.value, value=value)
