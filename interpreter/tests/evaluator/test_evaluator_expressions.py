#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import pytest

from bl_ast import IntLiteral, InfixExpression, PrefixExpression
from bl_evaluator import evaluate
from bl_object import Error, Integer, NULL, TRUE, FALSE
from bl_parser import Parser


@pytest.mark.parametrize(
    "src, expected",
    [
        ("5", 5),
        ("10", 10),
        ("-5", -5),
        ("-10", -10),
        ("5 + 5 + 5 + 5 - 10", 10),
        ("2 * 2 * 2 * 2 * 2", 32),
        ("-50 + 100 + -50", 0),
        ("5 * 2 + 10", 20),
        ("5 + 2 * 10", 25),
        ("20 + 2 * -10", 0),
        ("50 / 2 * 2 + 10", 60),
        ("2 * (5 + 10)", 30),
        ("3 * 3 * 3 + 10", 37),
        ("3 * (3 * 3) + 10", 37),
        ("(5 + 10 * 2 + 15 / 3) * 2 + -10", 50),
        ("1 - 2 - 3", -4),
        ("2 * 3 * 4", 24),
        ("1 + 2 * 3", 7),
        ("(1 + 2) * 3", 9),
        ("0x10 + 0b1", 17),
    ],
)
def test_integer_arithmetic(eval_source, src, expected):
    value = eval_source(src)

    assert isinstance(value, Integer)
    assert value.value == expected


@pytest.mark.parametrize(
    "src, expected",
    [
        ("7 / 2", 3),
        ("-7 / 2", -3),
        ("7 / -2", -3),
        ("-7 / -2", 3),
        ("1 / 3", 0),
        ("-1 / 3", 0),
    ],
)
def test_division_truncates_toward_zero(eval_source, src, expected):
    assert eval_source(src) == Integer(expected)


@pytest.mark.parametrize(
    "src, expected",
    [
        ("9223372036854775807 + 1", -2 ** 63),
        ("-9223372036854775807 - 1 - 1", 2 ** 63 - 1),
        ("(-9223372036854775807 - 1) / -1", -2 ** 63),
        ("-(-9223372036854775807 - 1)", -2 ** 63),
        ("4611686018427387904 * 2", -2 ** 63),
    ],
)
def test_arithmetic_wraps_at_64_bits(eval_source, src, expected):
    assert eval_source(src) == Integer(expected)


def test_negation_does_not_touch_the_tree():
    program = Parser.from_source("-5").parse_program()

    assert evaluate(program) == Integer(-5)
    assert evaluate(program) == Integer(-5)


@pytest.mark.parametrize(
    "src, expected",
    [
        ("true", TRUE),
        ("false", FALSE),
        ("1 < 2", TRUE),
        ("1 > 2", FALSE),
        ("1 < 1", FALSE),
        ("1 <= 1", TRUE),
        ("2 >= 3", FALSE),
        ("3 >= 3", TRUE),
        ("1 == 1", TRUE),
        ("1 != 1", FALSE),
        ("1 == 2", FALSE),
        ("1 != 2", TRUE),
        ("true == true", TRUE),
        ("false == false", TRUE),
        ("true == false", FALSE),
        ("true != false", TRUE),
        ("false != true", TRUE),
        ("(1 < 2) == true", TRUE),
        ("(1 < 2) == false", FALSE),
        ("(1 > 2) == true", FALSE),
        ("(1 > 2) == false", TRUE),
    ],
)
def test_boolean_results_are_singletons(eval_source, src, expected):
    assert eval_source(src) is expected


@pytest.mark.parametrize(
    "src, expected",
    [
        ("!true", FALSE),
        ("!false", TRUE),
        ("!5", FALSE),
        ("!0", TRUE),
        ("!-1", FALSE),
        ("!!true", TRUE),
        ("!!false", FALSE),
        ("!!5", TRUE),
        ("!!0", FALSE),
        ("!if (false) { 1 }", FALSE),
    ],
)
def test_bang_operator(eval_source, src, expected):
    assert eval_source(src) is expected


@pytest.mark.parametrize(
    "src, message",
    [
        ("5 + true;", "type mismatch: INTEGER + BOOLEAN"),
        ("5 + true; 5;", "type mismatch: INTEGER + BOOLEAN"),
        ("true == 1", "type mismatch: BOOLEAN == INTEGER"),
        ("1 != false", "type mismatch: INTEGER != BOOLEAN"),
        ("if (false) { 1 } == true", "type mismatch: NULL == BOOLEAN"),
        ("-true", "unsupported operator: -BOOLEAN"),
        ("-if (false) { 1 }", "unsupported operator: -NULL"),
        ("true + false;", "unsupported operator: BOOLEAN + BOOLEAN"),
        ("true < false", "unsupported operator: BOOLEAN < BOOLEAN"),
        ("5; true + false; 5", "unsupported operator: BOOLEAN + BOOLEAN"),
        ("if (10 > 1) { true + false; }", "unsupported operator: BOOLEAN + BOOLEAN"),
        (
            "if (10 > 1) { if (10 > 1) { return true + false; } return 1; }",
            "unsupported operator: BOOLEAN + BOOLEAN",
        ),
        ("1 / 0", "division by zero"),
        ("10 / (5 - 5)", "division by zero"),
    ],
)
def test_error_values(eval_source, src, message):
    value = eval_source(src)

    assert isinstance(value, Error)
    assert value.message == message


def test_left_operand_error_wins(eval_source):
    value = eval_source("(true + false) + (5 + true)")

    assert value == Error("unsupported operator: BOOLEAN + BOOLEAN")


def test_error_inside_if_condition_propagates(eval_source):
    value = eval_source("if (1 / 0) { 1 } else { 2 }")

    assert value == Error("division by zero")


def test_unknown_operators_are_unsupported():
    assert evaluate(PrefixExpression("~", IntLiteral(1))) == Error("unsupported operator: ~INTEGER")
    assert evaluate(InfixExpression(IntLiteral(1), "%", IntLiteral(2))) == Error(
        "unsupported operator: INTEGER % INTEGER")


def test_identifiers_and_absent_nodes_evaluate_to_null(eval_source):
    assert eval_source("x") is NULL
    assert evaluate(None) is NULL
