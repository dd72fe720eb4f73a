"""
infixcalc expression language.

Operator catalog, tokenizer, and two independent evaluators (operand/operator
stacks and recursive splitting) that agree on every valid expression.

Usage:
    from infixcalc.core.expression_lang import evaluate_recursive, evaluate_stack

    evaluate_stack("2+3*4")          # Number(value=14.0)
    evaluate_recursive("4!=4")       # Boolean(value=False)
"""

from infixcalc.core.expression_lang.engine import (
    Strategy,
    evaluate,
    evaluate_safely,
    values_agree,
)
from infixcalc.core.expression_lang.operators import OperatorId, evaluated_after, resolve
from infixcalc.core.expression_lang.recursive_evaluator import evaluate_recursive
from infixcalc.core.expression_lang.stack_evaluator import evaluate_stack
from infixcalc.core.expression_lang.tokenizer import Token, TokenKind, tokenize

__all__ = [
    "OperatorId",
    "Strategy",
    "Token",
    "TokenKind",
    "evaluate",
    "evaluate_recursive",
    "evaluate_safely",
    "evaluate_stack",
    "evaluated_after",
    "resolve",
    "tokenize",
    "values_agree",
]
