"""The stack and recursive evaluators agree on every valid expression."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from infixcalc.core.expression_lang.engine import Strategy, evaluate_safely, values_agree
from infixcalc.core.expression_lang.recursive_evaluator import evaluate_recursive
from infixcalc.core.expression_lang.stack_evaluator import evaluate_stack

VALID_EXPRESSIONS = [
    "42",
    ".5",
    "2+3*4",
    "2*3+4",
    "10-4-3",
    "100/10/5",
    "1+2*3-4/2",
    "2^3^2",
    "2^-1",
    "2^0.5",
    "(2+3)*4",
    "((1+2)*3)",
    "2*(3+(4-1))",
    "-(2+3)",
    "-(-(3))",
    "--3",
    "2*-3",
    "-2^2",
    "-(2)^2",
    "3!",
    "3!!",
    "-3!",
    "2*3!",
    "2^3!",
    "4!-5",
    "0.1+0.2",
    "1/3*3",
    "1/0",
    "0/0",
    "1/0-1/0",
    "5>3",
    "1+1==2",
    "1+1!=2",
    "-3!=4",
    "7/5+10<=9",
    "8*7/9-3!*2^4",
    "5-10",
    "4!-5^2/1*3==-51",
    "(1+2)*3 == 9",
]


@pytest.mark.parametrize("expression", VALID_EXPRESSIONS)
def test_evaluators_agree(expression: str) -> None:
    stack = evaluate_stack(expression)
    recursive = evaluate_recursive(expression)
    assert stack.kind == recursive.kind
    assert values_agree(stack, recursive)


# =============================================================================
# Generated expressions
# =============================================================================

operands = st.one_of(
    st.integers(min_value=-99, max_value=99).map(str),
    st.integers(min_value=0, max_value=6).map(lambda n: f"{n}!"),
    st.floats(min_value=0, max_value=50, allow_nan=False, allow_infinity=False).map(
        lambda x: f"{x:.2f}"
    ),
)
arithmetic_operators = st.sampled_from(["+", "-", "*", "/", "^"])
comparison_operators = st.sampled_from([">", ">=", "<", "<=", "==", "!="])


@st.composite
def flat_expressions(draw: st.DrawFn) -> str:
    terms = draw(st.lists(operands, min_size=1, max_size=5))
    ops = draw(st.lists(arithmetic_operators, min_size=len(terms) - 1, max_size=len(terms) - 1))
    return terms[0] + "".join(op + term for op, term in zip(ops, terms[1:]))


@st.composite
def expressions(draw: st.DrawFn) -> str:
    """Arithmetic with at most one parenthesized group and an optional comparison."""
    text = draw(flat_expressions())
    if draw(st.booleans()):
        group = draw(flat_expressions())
        prefix = draw(st.sampled_from(["", "-"]))
        text = f"{text}{draw(arithmetic_operators)}{prefix}({group})"
    if draw(st.booleans()):
        text = f"{text}{draw(comparison_operators)}{draw(flat_expressions())}"
    return text


class TestGeneratedEquivalence:
    """Invariant: both evaluators give the same value or the same error."""

    @given(expressions())
    @settings(max_examples=300, deadline=None)
    def test_same_outcome(self, expression: str) -> None:
        stack = evaluate_safely(expression, Strategy.STACK)
        recursive = evaluate_safely(expression, Strategy.RECURSIVE)
        assert stack.error_type == recursive.error_type
        if stack.ok:
            assert values_agree(stack.value, recursive.value)

    @given(st.text(alphabet="0123456789.+-*/^!()<>= ", max_size=20))
    @settings(max_examples=300, deadline=None)
    def test_arbitrary_input_never_escapes_as_other_exception(self, expression: str) -> None:
        for strategy in (Strategy.STACK, Strategy.RECURSIVE):
            outcome = evaluate_safely(expression, strategy)
            assert outcome.ok or outcome.error
