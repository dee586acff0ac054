#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import pytest

from bl_ast import (
    Program, LetStatement, ReturnStatement, ExpressionStatement, BlockStatement, Identifier, IntLiteral, Boolean,
    PrefixExpression, InfixExpression, IfExpression)
from bl_lexer import Token, TokenKind, TokenListSource
from bl_parser import Parser, parse


def single_expr(parse_program, src: str):
    program, errors = parse_program(src)
    assert errors == []
    assert len(program.stmts) == 1
    stmt = program.stmts[0]
    assert isinstance(stmt, ExpressionStatement)
    return stmt.expr


def test_let_statements_keep_name_and_skip_value(parse_program):
    program, errors = parse_program("""
    let x = 5;
    let y = 10 + 2;
    let foobar = 838383;
    """)

    assert errors == []
    assert [type(s) for s in program.stmts] == [LetStatement] * 3
    assert [s.name.name for s in program.stmts] == ["x", "y", "foobar"]
    assert all(s.value is None for s in program.stmts)
    assert str(program.stmts[1]) == "let y = ;"


def test_unterminated_let_stops_at_end_of_input(parse_program):
    program, errors = parse_program("let x = 5")

    assert errors == []
    assert len(program.stmts) == 1
    assert program.stmts[0].name.name == "x"


def test_return_statements_carry_their_value(parse_program):
    program, errors = parse_program("return 5; return 2 * 3; return;")

    assert errors == []
    assert [type(s) for s in program.stmts] == [ReturnStatement] * 3
    assert isinstance(program.stmts[0].value, IntLiteral)
    assert isinstance(program.stmts[1].value, InfixExpression)
    assert program.stmts[2].value is None
    assert [str(s) for s in program.stmts] == ["return 5;", "return (2 * 3);", "return;"]


def test_identifier_expression(parse_program):
    expr = single_expr(parse_program, "foobar;")

    assert expr == Identifier("foobar")


def test_semicolon_is_optional(parse_program):
    program, errors = parse_program("1\n2; 3")

    assert errors == []
    assert [s.expr.value for s in program.stmts] == [1, 2, 3]


@pytest.mark.parametrize(
    "src, expected",
    [
        ("5", 5),
        ("0", 0),
        ("9223372036854775807", 2 ** 63 - 1),
        ("0x1F", 31),
        ("0b101", 5),
        ("0o17", 15),
        ("010", 8),
        ("1_000", 1000),
    ],
)
def test_integer_literals(parse_program, src, expected):
    expr = single_expr(parse_program, src)

    assert isinstance(expr, IntLiteral)
    assert expr.value == expected


@pytest.mark.parametrize("src, expected", [("true;", True), ("false;", False)])
def test_boolean_literals(parse_program, src, expected):
    expr = single_expr(parse_program, src)

    assert expr == Boolean(expected)


@pytest.mark.parametrize(
    "src, op, operand",
    [
        ("!5;", "!", IntLiteral(5)),
        ("-15;", "-", IntLiteral(15)),
        ("!true;", "!", Boolean(True)),
        ("-x;", "-", Identifier("x")),
    ],
)
def test_prefix_expressions(parse_program, src, op, operand):
    expr = single_expr(parse_program, src)

    assert isinstance(expr, PrefixExpression)
    assert expr.op == op
    assert expr.right == operand


@pytest.mark.parametrize("op", ["+", "-", "*", "/", ">", "<", ">=", "<=", "==", "!="])
def test_infix_expressions(parse_program, op):
    expr = single_expr(parse_program, f"5 {op} 6;")

    assert expr == InfixExpression(IntLiteral(5), op, IntLiteral(6))


def test_if_expression_without_else(parse_program):
    expr = single_expr(parse_program, "if (x < y) { x }")

    assert isinstance(expr, IfExpression)
    assert expr.cond == InfixExpression(Identifier("x"), "<", Identifier("y"))
    assert isinstance(expr.body, BlockStatement)
    assert expr.body.stmts == [ExpressionStatement(Identifier("x"))]
    assert expr.else_branch is None


def test_if_expression_with_else_block(parse_program):
    expr = single_expr(parse_program, "if (x < y) { x } else { y; 1 }")

    assert isinstance(expr.else_branch, BlockStatement)
    assert len(expr.else_branch.stmts) == 2


def test_else_if_chains_nest_if_expressions(parse_program):
    expr = single_expr(parse_program, "if (a) { 1 } else if (b) { 2 } else { 3 }")

    inner = expr.else_branch
    assert isinstance(inner, IfExpression)
    assert inner.cond == Identifier("b")
    assert isinstance(inner.else_branch, BlockStatement)
    assert str(expr) == "if a { 1 } else if b { 2 } else { 3 }"


def test_nested_blocks_with_returns(parse_program):
    expr = single_expr(parse_program, "if (true) { if (true) { return 10; } return 1; }")

    outer_body = expr.body.stmts
    assert isinstance(outer_body[0].expr, IfExpression)
    assert isinstance(outer_body[1], ReturnStatement)
    assert outer_body[1].value == IntLiteral(1)


def test_empty_block(parse_program):
    expr = single_expr(parse_program, "if (true) { }")

    assert expr.body.stmts == []
    assert str(expr) == "if true { }"


def test_parser_accepts_any_token_source():
    tokens = [
        Token(TokenKind.INT, "5"),
        Token(TokenKind.PLUS, "+"),
        Token(TokenKind.INT, "6"),
    ]
    program, errors = parse(TokenListSource(tokens))

    assert errors == []
    assert isinstance(program, Program)
    assert str(program) == "(5 + 6)"


def test_spans_cover_the_source_text():
    parser = Parser.from_source("let x = 1;\n  10 + 20")
    program = parser.parse_program()

    let, expr_stmt = program.stmts
    assert (let.span.start_line, let.span.start_column) == (1, 1)
    infix = expr_stmt.expr
    assert (infix.span.start_line, infix.span.start_column) == (2, 3)
    assert (infix.span.end_line, infix.span.end_column) == (2, 10)
