"""
Recursive divide-and-conquer evaluator for infixcalc expressions.

Works directly on the token sequence, with no explicit stack:

1. A single term is the result.
2. A parenthesized span (first '(' to last ')') is evaluated and replaced by
   its value, and the shorter sequence is evaluated again.
3. Otherwise the sequence is split at the loosest-binding operator, both
   sides are evaluated, and the operator is applied. A run of left-associative
   operators at that level is applied left to right in one pass, so recursion
   depth follows nesting rather than expression length.

The span in step 2 is found by first-open/last-close rather than by pairing
brackets, so two disjoint top-level groups such as ``(1+2)*(3+4)`` are
rejected as mismatched.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from infixcalc.core.errors import (
    EmptyInputError,
    MalformedExpressionError,
    MismatchedParenthesisError,
    OperandTypeError,
    StackUnderflowError,
)
from infixcalc.core.expression_lang.arithmetic import apply_binary, apply_unary
from infixcalc.core.expression_lang.operators import (
    Associativity,
    Fixity,
    OperatorId,
    precedence_of,
    spec_for,
    symbol_of,
)
from infixcalc.core.expression_lang.tokenizer import Token, tokenize
from infixcalc.core.ir.values import Number, Value

logger = logging.getLogger(__name__)

# A term is a value (literal or reduced sub-expression) or a pending operator
Term = Value | OperatorId


def evaluate_recursive(expression: str | Sequence[Token]) -> Value:
    """Evaluate an expression by recursive splitting.

    Args:
        expression: Raw expression text or an already tokenized sequence.

    Returns:
        The resulting Number or Boolean.

    Raises:
        InfixCalcError: Any tokenization, syntax, type or domain error.
    """
    tokens = tokenize(expression) if isinstance(expression, str) else list(expression)
    if not tokens:
        raise EmptyInputError("Input expression cannot be empty")

    terms: list[Term] = [
        Number(value=token.value) if token.is_number else token.value for token in tokens
    ]
    try:
        return _reduce(terms)
    except RecursionError:
        raise MalformedExpressionError(
            f"Malformed expression: too deeply nested to evaluate recursively ({len(terms)} terms)"
        ) from None


def _reduce(terms: list[Term]) -> Value:
    if not terms:
        raise StackUnderflowError("Operator is missing an operand")

    if len(terms) == 1:
        term = terms[0]
        if isinstance(term, OperatorId):
            raise OperandTypeError(f"Expected a value, found operator {symbol_of(term)!r}")
        return term

    open_index = _find_first(terms, OperatorId.OPEN_PARENTHESIS)
    close_index = _find_last(terms, OperatorId.CLOSE_PARENTHESIS)

    if open_index != -1:
        if close_index < open_index:
            raise MismatchedParenthesisError("Mismatched parentheses")
        inner = terms[open_index + 1 : close_index]
        if not inner:
            raise MalformedExpressionError("Malformed expression: empty parentheses")
        reduced = _reduce(inner)
        return _reduce(terms[:open_index] + [reduced] + terms[close_index + 1 :])

    if close_index != -1:
        raise MismatchedParenthesisError("Mismatched parentheses")

    split_points = _split_points(terms)
    if not split_points:
        raise MalformedExpressionError(
            f"Malformed expression: {len(terms)} values without an operator between them"
        )

    spec = spec_for(terms[split_points[0]])
    if spec.associativity == Associativity.RIGHT:
        return _apply_at(terms, split_points[0])
    if spec.fixity == Fixity.INFIX:
        return _fold_left(terms, split_points)
    return _apply_at(terms, split_points[-1])


def _apply_at(terms: list[Term], index: int) -> Value:
    op = terms[index]
    assert isinstance(op, OperatorId)
    left = terms[:index]
    right = terms[index + 1 :]
    fixity = spec_for(op).fixity
    logger.debug(f"Splitting {len(terms)} terms at {symbol_of(op)!r} (index {index})")

    if fixity == Fixity.PREFIX:
        if left:
            raise OperandTypeError(f"Prefix operator {symbol_of(op)!r} cannot take a left operand")
        return apply_unary(op, _reduce(right))

    if fixity == Fixity.POSTFIX:
        if right:
            raise OperandTypeError(f"Postfix operator {symbol_of(op)!r} cannot take a right operand")
        return apply_unary(op, _reduce(left))

    if not left or not right:
        raise StackUnderflowError(f"Operator {symbol_of(op)!r} needs 2 operands")
    return apply_binary(op, _reduce(left), _reduce(right))


def _fold_left(terms: list[Term], indices: list[int]) -> Value:
    """Apply a run of same-level left-associative binary operators left to right.

    Gives the same result, and the same first error, as splitting at the last
    operator over and over, but recursion depth does not grow with the run.
    """
    bounds = [-1, *indices, len(terms)]
    segments = [terms[start + 1 : end] for start, end in zip(bounds, bounds[1:])]
    logger.debug(f"Folding {len(indices)} operators across {len(terms)} terms")

    for k in reversed(range(len(indices))):
        if not segments[k + 1] or (k == 0 and not segments[0]):
            raise StackUnderflowError(f"Operator {symbol_of(terms[indices[k]])!r} needs 2 operands")

    result = _reduce(segments[0])
    for index, segment in zip(indices, segments[1:]):
        op = terms[index]
        assert isinstance(op, OperatorId)
        result = apply_binary(op, result, _reduce(segment))
    return result


def _split_points(terms: list[Term]) -> list[int]:
    """Indices of the loosest-binding operators, in order; empty if there are none.

    For a right-associative level the first one is applied last; for a
    left-associative level the operators apply left to right.
    """
    operators = [(i, t) for i, t in enumerate(terms) if isinstance(t, OperatorId)]
    if not operators:
        return []

    lowest = min(precedence_of(op) for _, op in operators)
    return [i for i, op in operators if precedence_of(op) == lowest]


def _find_first(terms: list[Term], op: OperatorId) -> int:
    for i, term in enumerate(terms):
        if term == op:
            return i
    return -1


def _find_last(terms: list[Term], op: OperatorId) -> int:
    for i in range(len(terms) - 1, -1, -1):
        if terms[i] == op:
            return i
    return -1
