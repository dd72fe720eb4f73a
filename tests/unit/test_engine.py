"""Tests for strategy selection and non-raising evaluation."""

from __future__ import annotations

import math

import pytest

from infixcalc.core.errors import (
    EvaluatorMismatchError,
    MismatchedParenthesisError,
    UndefinedOperationError,
)
from infixcalc.core.expression_lang import engine
from infixcalc.core.expression_lang.engine import (
    Strategy,
    evaluate,
    evaluate_safely,
    values_agree,
)
from infixcalc.core.ir.values import Boolean, Number


class TestEvaluate:
    @pytest.mark.parametrize("strategy", list(Strategy))
    def test_every_strategy(self, strategy: Strategy) -> None:
        assert evaluate("2+3*4", strategy) == 14

    def test_strategy_by_name(self) -> None:
        assert evaluate("4!=4", "recursive") == Boolean(value=False)

    def test_default_strategy_is_stack(self) -> None:
        # the recursive evaluator rejects disjoint groups
        assert evaluate("(1+2)*(3+4)") == 21

    def test_unknown_strategy(self) -> None:
        with pytest.raises(ValueError):
            evaluate("1+1", "fastest")

    def test_errors_propagate(self) -> None:
        with pytest.raises(UndefinedOperationError):
            evaluate("0^0")


class TestVerify:
    def test_agreeing_result(self) -> None:
        assert evaluate("4!-5^2/1*3==-51", Strategy.VERIFY) == Boolean(value=True)

    def test_error_from_either_evaluator(self) -> None:
        with pytest.raises(MismatchedParenthesisError):
            evaluate("(1+2)*(3+4)", Strategy.VERIFY)

    def test_disagreement(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(engine, "evaluate_recursive", lambda tokens: Number(value=0))
        with pytest.raises(EvaluatorMismatchError, match="Evaluators disagree"):
            evaluate("1+1", Strategy.VERIFY)

    def test_kind_disagreement(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(engine, "evaluate_recursive", lambda tokens: Boolean(value=True))
        with pytest.raises(EvaluatorMismatchError):
            evaluate("1", Strategy.VERIFY)


class TestValuesAgree:
    def test_exact(self) -> None:
        assert values_agree(Number(value=2), Number(value=2))
        assert values_agree(Boolean(value=True), Boolean(value=True))

    def test_rounding_tolerance(self) -> None:
        assert values_agree(Number(value=0.1 + 0.2), Number(value=0.3))
        assert not values_agree(Number(value=1.0), Number(value=1.001))

    def test_special_values(self) -> None:
        assert values_agree(Number(value=math.nan), Number(value=math.nan))
        assert values_agree(Number(value=math.inf), Number(value=math.inf))
        assert not values_agree(Number(value=math.inf), Number(value=-math.inf))
        assert not values_agree(Number(value=math.nan), Number(value=1))

    def test_different_kinds(self) -> None:
        assert not values_agree(Number(value=1), Boolean(value=True))
        assert not values_agree(Boolean(value=False), Boolean(value=True))


class TestEvaluateSafely:
    def test_success(self) -> None:
        outcome = evaluate_safely("2+3")
        assert outcome.ok
        assert outcome.value == Number(value=5)
        assert outcome.error is None
        assert outcome.strategy == "stack"
        assert outcome.render() == "5.0"

    def test_failure(self) -> None:
        outcome = evaluate_safely("0^0", Strategy.RECURSIVE)
        assert not outcome.ok
        assert outcome.value is None
        assert outcome.error == "0^0 is undefined"
        assert outcome.error_type == "UndefinedOperationError"
        assert outcome.strategy == "recursive"
        assert outcome.render() == "Error: 0^0 is undefined"

    def test_error_message_excludes_position_marker(self) -> None:
        outcome = evaluate_safely("2$3")
        assert outcome.error_type == "LexError"
        assert "\n" not in (outcome.error or "")

    def test_mismatch_is_reported(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(engine, "evaluate_recursive", lambda tokens: Number(value=-1))
        outcome = evaluate_safely("1", "verify")
        assert outcome.error_type == "EvaluatorMismatchError"

    def test_unknown_strategy_still_raises(self) -> None:
        with pytest.raises(ValueError):
            evaluate_safely("1", "fastest")
