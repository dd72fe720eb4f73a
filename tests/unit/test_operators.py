"""Tests for the operator catalog: attribute table, symbol resolution, evaluation order."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from infixcalc.core.errors import LexError
from infixcalc.core.expression_lang.operators import (
    OPERATOR_TABLE,
    Arity,
    Associativity,
    Fixity,
    OperatorId,
    evaluated_after,
    follows_operand,
    precedence_of,
    resolve,
    spec_for,
    symbol_of,
)


class TestOperatorTable:
    def test_every_operator_has_an_entry(self) -> None:
        assert set(OPERATOR_TABLE) == set(OperatorId)
        assert len(OPERATOR_TABLE) == 15

    @pytest.mark.parametrize(
        ("op", "precedence"),
        [
            (OperatorId.OPEN_PARENTHESIS, 0),
            (OperatorId.CLOSE_PARENTHESIS, 0),
            (OperatorId.EQUAL_TO, 1),
            (OperatorId.NOT_EQUAL_TO, 1),
            (OperatorId.LESS_THAN, 2),
            (OperatorId.LESS_THAN_OR_EQUAL_TO, 2),
            (OperatorId.GREATER_THAN, 2),
            (OperatorId.GREATER_THAN_OR_EQUAL_TO, 2),
            (OperatorId.ADDITION, 3),
            (OperatorId.SUBTRACTION, 3),
            (OperatorId.MULTIPLICATION, 4),
            (OperatorId.DIVISION, 4),
            (OperatorId.POWER, 5),
            (OperatorId.NEGATION, 6),
            (OperatorId.FACTORIAL, 7),
        ],
    )
    def test_precedence(self, op: OperatorId, precedence: int) -> None:
        assert precedence_of(op) == precedence

    def test_only_power_and_negation_are_right_associative(self) -> None:
        right = {op for op, spec in OPERATOR_TABLE.items() if spec.associativity == Associativity.RIGHT}
        assert right == {OperatorId.POWER, OperatorId.NEGATION}

    def test_unary_operators(self) -> None:
        assert spec_for(OperatorId.FACTORIAL).arity == Arity.UNARY
        assert spec_for(OperatorId.FACTORIAL).fixity == Fixity.POSTFIX
        assert spec_for(OperatorId.NEGATION).arity == Arity.UNARY
        assert spec_for(OperatorId.NEGATION).fixity == Fixity.PREFIX

    def test_groupers(self) -> None:
        groupers = {op for op, spec in OPERATOR_TABLE.items() if spec.is_grouper}
        assert groupers == {OperatorId.OPEN_PARENTHESIS, OperatorId.CLOSE_PARENTHESIS}

    def test_symbols(self) -> None:
        assert symbol_of(OperatorId.NEGATION) == "-"
        assert symbol_of(OperatorId.SUBTRACTION) == "-"
        assert symbol_of(OperatorId.LESS_THAN_OR_EQUAL_TO) == "<="
        assert symbol_of(OperatorId.NOT_EQUAL_TO) == "!="

    def test_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            OPERATOR_TABLE[OperatorId.POWER] = spec_for(OperatorId.ADDITION)  # type: ignore[index]

    def test_spec_is_frozen(self) -> None:
        with pytest.raises(ValidationError):
            spec_for(OperatorId.ADDITION).precedence = 9  # type: ignore[misc]


class TestResolve:
    @pytest.mark.parametrize(
        ("expression", "position", "expected"),
        [
            ("(1)", 0, (OperatorId.OPEN_PARENTHESIS, 1)),
            ("(1)", 2, (OperatorId.CLOSE_PARENTHESIS, 1)),
            ("2^3", 1, (OperatorId.POWER, 1)),
            ("2*3", 1, (OperatorId.MULTIPLICATION, 1)),
            ("2/3", 1, (OperatorId.DIVISION, 1)),
            ("2+3", 1, (OperatorId.ADDITION, 1)),
            ("3!", 1, (OperatorId.FACTORIAL, 1)),
            ("4!=4", 1, (OperatorId.NOT_EQUAL_TO, 2)),
            ("1<2", 1, (OperatorId.LESS_THAN, 1)),
            ("1<=2", 1, (OperatorId.LESS_THAN_OR_EQUAL_TO, 2)),
            ("1>2", 1, (OperatorId.GREATER_THAN, 1)),
            ("1>=2", 1, (OperatorId.GREATER_THAN_OR_EQUAL_TO, 2)),
            ("1==2", 1, (OperatorId.EQUAL_TO, 2)),
        ],
    )
    def test_symbols(self, expression: str, position: int, expected: tuple[OperatorId, int]) -> None:
        assert resolve(expression, position) == expected

    @pytest.mark.parametrize(
        ("expression", "position"),
        [
            ("5-3", 1),
            ("2.-1", 2),
            ("(2)-3", 3),
            ("3!-2", 2),
        ],
    )
    def test_minus_after_operand_is_subtraction(self, expression: str, position: int) -> None:
        assert resolve(expression, position) == (OperatorId.SUBTRACTION, 1)

    @pytest.mark.parametrize(
        ("expression", "position"),
        [
            ("-3", 0),
            ("2*-3", 2),
            ("(-3)", 1),
            ("--3", 1),
            ("4!=-4", 3),
        ],
    )
    def test_minus_elsewhere_is_negation(self, expression: str, position: int) -> None:
        assert resolve(expression, position) == (OperatorId.NEGATION, 1)

    def test_lone_equals_is_rejected(self) -> None:
        with pytest.raises(LexError, match="'=' must be followed by '='"):
            resolve("1=2", 1)

    @pytest.mark.parametrize("expression", ["1<", "1>", "1="])
    def test_trailing_incomplete_operator(self, expression: str) -> None:
        with pytest.raises(LexError):
            resolve(expression, 1)

    def test_unknown_character_reports_position(self) -> None:
        with pytest.raises(LexError, match="Unexpected character") as excinfo:
            resolve("2&3", 1)
        assert excinfo.value.position == 1


class TestFollowsOperand:
    def test_start_of_expression(self) -> None:
        assert not follows_operand("-1", 0)

    def test_after_digit_and_paren(self) -> None:
        assert follows_operand("1-1", 1)
        assert follows_operand("(1)-1", 3)

    def test_after_factorial(self) -> None:
        assert follows_operand("3!-1", 2)

    def test_after_operator(self) -> None:
        assert not follows_operand("2*-1", 2)
        assert not follows_operand("(-1)", 1)


class TestEvaluatedAfter:
    @pytest.mark.parametrize(
        ("incoming", "stacked", "expected"),
        [
            # lower precedence incoming: stacked operator goes first
            (OperatorId.ADDITION, OperatorId.MULTIPLICATION, True),
            (OperatorId.MULTIPLICATION, OperatorId.ADDITION, False),
            # equal precedence, left-associative incoming
            (OperatorId.SUBTRACTION, OperatorId.ADDITION, True),
            (OperatorId.DIVISION, OperatorId.MULTIPLICATION, True),
            (OperatorId.FACTORIAL, OperatorId.FACTORIAL, True),
            # equal precedence, right-associative incoming
            (OperatorId.POWER, OperatorId.POWER, False),
            (OperatorId.NEGATION, OperatorId.NEGATION, False),
            # right-associative incoming against tighter operator
            (OperatorId.POWER, OperatorId.NEGATION, True),
            (OperatorId.NEGATION, OperatorId.POWER, False),
            # nothing is evaluated across an open parenthesis
            (OperatorId.EQUAL_TO, OperatorId.OPEN_PARENTHESIS, False),
        ],
    )
    def test_evaluation_order(self, incoming: OperatorId, stacked: OperatorId, expected: bool) -> None:
        assert evaluated_after(incoming, stacked) is expected
