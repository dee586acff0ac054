#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from enum import IntEnum
from typing import Callable, Dict, List, Optional, Tuple

from bl_ast import (
    Span, Node, Program, Stmt, LetStatement, ReturnStatement, ExpressionStatement, BlockStatement, Expr,
    Identifier, IntLiteral, Boolean, PrefixExpression, InfixExpression, IfExpression)
from bl_context import InterpreterContext
from bl_diagnostics import Diagnostic, diag_from_token
from bl_lexer import TokenKind, Token, TokenSource, Lexer
from bl_logger import log_debug
from bl_object import INT64_MAX, INT64_MIN


# ==========================
# Parser
# ==========================


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2  # == !=
    LESSGREATER = 3  # < > <= >=
    SUM = 4  # + -
    PRODUCT = 5  # * /
    PREFIX = 6  # -x !x
    CALL = 7  # f(x), reserved


PRECEDENCES: Dict[TokenKind, Precedence] = {
    TokenKind.EQ: Precedence.EQUALS,
    TokenKind.NOT_EQ: Precedence.EQUALS,
    TokenKind.LT: Precedence.LESSGREATER,
    TokenKind.GT: Precedence.LESSGREATER,
    TokenKind.LE: Precedence.LESSGREATER,
    TokenKind.GE: Precedence.LESSGREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.SLASH: Precedence.PRODUCT,
}

PrefixParseFn = Callable[[], Optional[Expr]]
InfixParseFn = Callable[[Expr], Optional[Expr]]


def parse_int_literal(text: str) -> Optional[int]:
    """
    Parse integer literal text the way the lexer hands it over.

    Accepts decimal, 0x/0o/0b prefixes, `_` digit separators and C-style
    leading-zero octal. Returns None for malformed text or values outside
    the signed 64-bit range.
    """
    body = text
    sign = 1
    if body[:1] in ("+", "-"):
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    try:
        if len(body) > 1 and body[0] == "0" and body[1].isdigit():
            value = int(body, 8)
        else:
            value = int(body, 0)
    except ValueError:
        return None
    value *= sign
    if value < INT64_MIN or value > INT64_MAX:
        return None
    return value


class Parser:
    """
    Pratt parser over a token source with one token of lookahead.

    Errors never abort the parse: each one is recorded as a Diagnostic and
    the top-level loop moves on to the next token.
    """

    def __init__(self, source: TokenSource, filename: Optional[str] = None,
                 context: Optional[InterpreterContext] = None) -> None:
        self.source = source
        self.filename = filename
        self.context = context
        self.diagnostics: List[Diagnostic] = []

        self.cur_token: Token = Token(TokenKind.EOF, "")
        self.peek_token: Token = Token(TokenKind.EOF, "")
        self._next_token()
        self._next_token()

        self.prefix_parse_fns: Dict[TokenKind, PrefixParseFn] = {}
        self.infix_parse_fns: Dict[TokenKind, InfixParseFn] = {}

        self.register_prefix(TokenKind.IDENT, self._parse_identifier)
        self.register_prefix(TokenKind.INT, self._parse_int_literal)
        self.register_prefix(TokenKind.TRUE, self._parse_boolean)
        self.register_prefix(TokenKind.FALSE, self._parse_boolean)
        self.register_prefix(TokenKind.BANG, self._parse_prefix_expression)
        self.register_prefix(TokenKind.MINUS, self._parse_prefix_expression)
        self.register_prefix(TokenKind.LPAREN, self._parse_grouped_expression)
        self.register_prefix(TokenKind.IF, self._parse_if_expression)

        for kind in PRECEDENCES:
            self.register_infix(kind, self._parse_infix_expression)

    @classmethod
    def from_source(cls, source: str, context: Optional[InterpreterContext] = None) -> "Parser":
        return cls(Lexer.from_source(source), context=context)

    def register_prefix(self, kind: TokenKind, fn: PrefixParseFn) -> None:
        self.prefix_parse_fns[kind] = fn

    def register_infix(self, kind: TokenKind, fn: InfixParseFn) -> None:
        self.infix_parse_fns[kind] = fn

    @property
    def errors(self) -> List[str]:
        return [d.message for d in self.diagnostics]

    # --- token utilities ---

    def _next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.source.next_token()

    def _cur_is(self, kind: TokenKind) -> bool:
        return self.cur_token.kind is kind

    def _peek_is(self, kind: TokenKind) -> bool:
        return self.peek_token.kind is kind

    def _expect_peek(self, kind: TokenKind) -> bool:
        if self._peek_is(kind):
            self._next_token()
            return True
        self._error(
            f"[PAR-0010] expected next token to be {kind.name}, got {self.peek_token.kind.name} instead",
            self.peek_token,
        )
        return False

    def _peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.kind, Precedence.LOWEST)

    def _cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.kind, Precedence.LOWEST)

    def _error(self, message: str, token: Token) -> None:
        diag = diag_from_token("error", message, filename=self.filename, token=token)
        self.diagnostics.append(diag)
        log_debug(self.context, f"parse: {diag.format()}")

    def _span_from(self, start: Token) -> Span:
        end = self.cur_token
        return Span(start.line, start.column, end.line, end.column + len(end.text))

    def _finish(self, node: Node, start: Token) -> Node:
        node.span = self._span_from(start)
        return node

    # --- entry point ---

    def parse_program(self) -> Program:
        start = self.cur_token
        stmts: List[Stmt] = []
        while not self._cur_is(TokenKind.EOF):
            stmt = self._parse_statement()
            if stmt is not None:
                stmts.append(stmt)
            self._next_token()
        return Program(stmts, span=Span(start.line, start.column, self.cur_token.line, self.cur_token.column))

    # --- statements ---

    def _parse_statement(self) -> Optional[Stmt]:
        if self._cur_is(TokenKind.LET):
            return self._parse_let_statement()
        if self._cur_is(TokenKind.RETURN):
            return self._parse_return_statement()
        return self._parse_expression_statement()

    def _parse_let_statement(self) -> Optional[LetStatement]:
        start = self.cur_token
        if not self._expect_peek(TokenKind.IDENT):
            return None
        name = Identifier(self.cur_token.text, span=self._span_from(self.cur_token))
        if not self._expect_peek(TokenKind.ASSIGN):
            return None

        # initializer expressions are not bound yet: skip to the terminator,
        # leaving a closing brace or EOF for the enclosing loop
        while not self._cur_is(TokenKind.SEMICOLON):
            if self._peek_is(TokenKind.RBRACE) or self._peek_is(TokenKind.EOF):
                break
            self._next_token()

        return self._finish(LetStatement(name), start)

    def _parse_return_statement(self) -> ReturnStatement:
        start = self.cur_token
        if self._peek_is(TokenKind.SEMICOLON):
            self._next_token()
            return self._finish(ReturnStatement(None), start)
        if self._peek_is(TokenKind.RBRACE) or self._peek_is(TokenKind.EOF):
            return self._finish(ReturnStatement(None), start)

        self._next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if self._peek_is(TokenKind.SEMICOLON):
            self._next_token()
        return self._finish(ReturnStatement(value), start)

    def _parse_expression_statement(self) -> Optional[ExpressionStatement]:
        start = self.cur_token
        expr = self.parse_expression(Precedence.LOWEST)
        if expr is None:
            return None
        # the terminating semicolon is optional
        if self._peek_is(TokenKind.SEMICOLON):
            self._next_token()
        return self._finish(ExpressionStatement(expr), start)

    def _parse_block_statement(self) -> BlockStatement:
        start = self.cur_token
        stmts: List[Stmt] = []
        self._next_token()
        while not self._cur_is(TokenKind.RBRACE) and not self._cur_is(TokenKind.EOF):
            stmt = self._parse_statement()
            if stmt is not None:
                stmts.append(stmt)
            self._next_token()
        if self._cur_is(TokenKind.EOF):
            self._error("[PAR-0010] expected next token to be RBRACE, got EOF instead", self.cur_token)
        return self._finish(BlockStatement(stmts), start)

    # --- expressions with precedence ---

    def parse_expression(self, precedence: Precedence) -> Optional[Expr]:
        prefix = self.prefix_parse_fns.get(self.cur_token.kind)
        if prefix is None:
            self._error(f"[PAR-0020] no prefix parse function found for {self.cur_token.kind.name}", self.cur_token)
            return None
        left = prefix()
        if left is None:
            return None

        while not self._peek_is(TokenKind.SEMICOLON) and precedence < self._peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.kind)
            if infix is None:
                return left
            self._next_token()
            left = infix(left)
        return left

    def _parse_identifier(self) -> Expr:
        tok = self.cur_token
        return self._finish(Identifier(tok.text), tok)

    def _parse_int_literal(self) -> Optional[Expr]:
        tok = self.cur_token
        value = parse_int_literal(tok.text)
        if value is None:
            self._error(f"[PAR-0030] could not parse {tok.text!r} as integer", tok)
            return None
        return self._finish(IntLiteral(value), tok)

    def _parse_boolean(self) -> Expr:
        tok = self.cur_token
        return self._finish(Boolean(self._cur_is(TokenKind.TRUE)), tok)

    def _parse_prefix_expression(self) -> Expr:
        start = self.cur_token
        self._next_token()
        right = self.parse_expression(Precedence.PREFIX)
        return self._finish(PrefixExpression(start.text, right), start)

    def _parse_infix_expression(self, left: Expr) -> Expr:
        op_tok = self.cur_token
        precedence = self._cur_precedence()
        self._next_token()
        # same precedence on the right keeps equal-level chains left-associative
        right = self.parse_expression(precedence)
        expr = InfixExpression(left, op_tok.text, right)
        expr.span = self._span_from(op_tok)
        if left.span is not None:
            expr.span.start_line = left.span.start_line
            expr.span.start_column = left.span.start_column
        return expr

    def _parse_grouped_expression(self) -> Optional[Expr]:
        self._next_token()
        expr = self.parse_expression(Precedence.LOWEST)
        if not self._expect_peek(TokenKind.RPAREN):
            return None
        return expr

    def _parse_if_expression(self) -> Optional[Expr]:
        start = self.cur_token
        if not self._expect_peek(TokenKind.LPAREN):
            return None
        self._next_token()
        cond = self.parse_expression(Precedence.LOWEST)
        if not self._expect_peek(TokenKind.RPAREN):
            return None
        if not self._expect_peek(TokenKind.LBRACE):
            return None
        body = self._parse_block_statement()

        else_branch = None
        if self._peek_is(TokenKind.ELSE):
            self._next_token()
            if self._peek_is(TokenKind.IF):
                self._next_token()
                else_branch = self._parse_if_expression()
                if else_branch is None:
                    return None
            else:
                if not self._expect_peek(TokenKind.LBRACE):
                    return None
                else_branch = self._parse_block_statement()

        return self._finish(IfExpression(cond, body, else_branch), start)


def parse(source: TokenSource, filename: Optional[str] = None,
          context: Optional[InterpreterContext] = None) -> Tuple[Program, List[str]]:
    """Parse a whole token source; returns the program and its diagnostic messages."""
    parser = Parser(source, filename=filename, context=context)
    program = parser.parse_program()
    return program, parser.errors
