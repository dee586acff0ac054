#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass, field
from typing import List, Optional, Union


# ==========================
# AST definitions
# ==========================


@dataclass
class Span:
    start_line: int
    start_column: int
    end_line: int
    end_column: int


@dataclass
class Node:
    """
    Base of every syntax tree node.

    Each node renders back to source-like text through `str()`; prefix and
    infix expressions are fully parenthesized, so `-a * b` renders as
    `((-a) * b)`. Grouping parentheses from the source are not kept.
    """
    span: Optional[Span] = field(default=None, repr=False, compare=False, kw_only=True)


def _render(node: Optional[Node]) -> str:
    # partial nodes left behind by parse errors render as nothing
    return "" if node is None else str(node)


# --- expressions ---

class Expr(Node):
    pass


@dataclass
class Identifier(Expr):
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass
class IntLiteral(Expr):
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class Boolean(Expr):
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass
class PrefixExpression(Expr):
    op: str
    right: Optional[Expr]

    def __str__(self) -> str:
        return f"({self.op}{_render(self.right)})"


@dataclass
class InfixExpression(Expr):
    left: Expr
    op: str
    right: Optional[Expr]

    def __str__(self) -> str:
        return f"({_render(self.left)} {self.op} {_render(self.right)})"


@dataclass
class IfExpression(Expr):
    cond: Optional[Expr]
    body: "BlockStatement"
    else_branch: Optional[Union["BlockStatement", "IfExpression"]] = None

    def __str__(self) -> str:
        text = f"if {_render(self.cond)} {self.body}"
        if self.else_branch is not None:
            text += f" else {self.else_branch}"
        return text


# --- statements ---

@dataclass
class Stmt(Node):
    pass


@dataclass
class LetStatement(Stmt):
    name: Identifier
    value: Optional[Expr] = None  # never parsed yet; the parser skips the initializer

    def __str__(self) -> str:
        return f"let {self.name} = {_render(self.value)};"


@dataclass
class ReturnStatement(Stmt):
    value: Optional[Expr]

    def __str__(self) -> str:
        if self.value is None:
            return "return;"
        return f"return {self.value};"


@dataclass
class ExpressionStatement(Stmt):
    expr: Expr

    def __str__(self) -> str:
        return _render(self.expr)


@dataclass
class BlockStatement(Stmt):
    stmts: List[Stmt]

    def __str__(self) -> str:
        if not self.stmts:
            return "{ }"
        return "{ " + " ".join(str(s) for s in self.stmts) + " }"


@dataclass
class Program(Node):
    stmts: List[Stmt]

    def __str__(self) -> str:
        return "\n".join(str(s) for s in self.stmts)
