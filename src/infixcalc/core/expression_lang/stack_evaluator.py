"""
Two-stack (shunting-yard style) evaluator for infixcalc expressions.

A single left-to-right pass pushes numbers onto an operand stack and
operators onto an operator stack, applying pending operators whenever an
incoming operator is evaluated after them. Both stacks belong to one call;
there is no module-level evaluator state.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from infixcalc.core.errors import (
    EmptyInputError,
    MalformedExpressionError,
    MismatchedParenthesisError,
    StackUnderflowError,
)
from infixcalc.core.expression_lang.arithmetic import apply_binary, apply_unary
from infixcalc.core.expression_lang.operators import (
    OperatorId,
    evaluated_after,
    spec_for,
    symbol_of,
)
from infixcalc.core.expression_lang.tokenizer import Token, tokenize
from infixcalc.core.ir.values import Number, Value

logger = logging.getLogger(__name__)


@dataclass
class EvaluationStacks:
    """Working state of one stack evaluation."""

    operands: list[Value] = field(default_factory=list)
    operators: list[OperatorId] = field(default_factory=list)

    def apply(self, op: OperatorId) -> None:
        """Pop the operands ``op`` needs, apply it, and push the result."""
        spec = spec_for(op)
        needed = int(spec.arity)
        if len(self.operands) < needed:
            raise StackUnderflowError(
                f"Operator {symbol_of(op)!r} needs {needed} operand(s), "
                f"{len(self.operands)} available"
            )
        if spec.is_unary:
            result = apply_unary(op, self.operands.pop())
        else:
            y = self.operands.pop()
            x = self.operands.pop()
            result = apply_binary(op, x, y)
        logger.debug(f"Applied {symbol_of(op)!r} -> {result}")
        self.operands.append(result)

    def flush_to_lower_precedence(self, incoming: OperatorId) -> None:
        """Apply stacked operators evaluated before ``incoming``, then push it."""
        while self.operators and evaluated_after(incoming, self.operators[-1]):
            self.apply(self.operators.pop())
        self.operators.append(incoming)

    def flush_to_open_parenthesis(self) -> None:
        """Apply operators down to the nearest ``(`` and discard it."""
        while self.operators:
            op = self.operators.pop()
            if op == OperatorId.OPEN_PARENTHESIS:
                return
            self.apply(op)
        raise MismatchedParenthesisError("Mismatched parentheses: ')' without matching '('")

    def flush(self) -> None:
        """Apply every remaining operator."""
        while self.operators:
            op = self.operators.pop()
            if op == OperatorId.OPEN_PARENTHESIS:
                raise MismatchedParenthesisError("Mismatched parentheses: '(' is never closed")
            self.apply(op)

    def result(self) -> Value:
        if len(self.operands) != 1:
            raise MalformedExpressionError(
                f"Malformed expression: {len(self.operands)} values remain after evaluation"
            )
        return self.operands[0]


def evaluate_stack(expression: str | Sequence[Token]) -> Value:
    """Evaluate an expression with the operand/operator stack algorithm.

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

    stacks = EvaluationStacks()
    for token in tokens:
        if token.is_number:
            stacks.operands.append(Number(value=token.value))
        elif token.value == OperatorId.OPEN_PARENTHESIS:
            stacks.operators.append(OperatorId.OPEN_PARENTHESIS)
        elif token.value == OperatorId.CLOSE_PARENTHESIS:
            stacks.flush_to_open_parenthesis()
        else:
            stacks.flush_to_lower_precedence(token.value)
    stacks.flush()

    return stacks.result()
