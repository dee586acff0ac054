#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from typing import List, Optional

from bl_ast import (
    Node, Program, Stmt, ExpressionStatement, BlockStatement, ReturnStatement, IntLiteral, Boolean,
    PrefixExpression, InfixExpression, IfExpression)
from bl_context import InterpreterContext
from bl_logger import log_debug
from bl_object import (
    Object, Integer, Error, ReturnValue, ObjectKind, NULL, TRUE, FALSE, native_bool, is_signal, is_truthy)

ERR_UNSUPPORTED_INFIX = "unsupported operator: {} {} {}"
ERR_UNSUPPORTED_PREFIX = "unsupported operator: {}{}"
ERR_TYPE_MISMATCH = "type mismatch: {} {} {}"
ERR_DIVISION_BY_ZERO = "division by zero"


class Evaluator:
    """
    Tree-walking evaluator.

    Every node reduces to exactly one Object. Failures come back as Error
    values, never as exceptions, and a `return` travels outwards as a
    ReturnValue until the program level unwraps it.
    """

    def __init__(self, context: Optional[InterpreterContext] = None) -> None:
        self.context = context

    def evaluate(self, node: Optional[Node]) -> Object:
        # statements
        if isinstance(node, Program):
            return self._eval_program(node.stmts)
        elif isinstance(node, ExpressionStatement):
            return self.evaluate(node.expr)
        elif isinstance(node, BlockStatement):
            return self._eval_block(node.stmts)
        elif isinstance(node, ReturnStatement):
            value = self.evaluate(node.value)
            if is_signal(value):
                return value
            return ReturnValue(value)

        # expressions
        elif isinstance(node, IntLiteral):
            return Integer(node.value)
        elif isinstance(node, Boolean):
            return native_bool(node.value)
        elif isinstance(node, PrefixExpression):
            right = self.evaluate(node.right)
            if is_signal(right):
                return right
            return self._eval_prefix(node.op, right)
        elif isinstance(node, InfixExpression):
            left = self.evaluate(node.left)
            if is_signal(left):
                return left
            right = self.evaluate(node.right)
            if is_signal(right):
                return right
            return self._eval_infix(node.op, left, right)
        elif isinstance(node, IfExpression):
            return self._eval_if(node)

        # let statements, identifiers and absent nodes have no runtime meaning yet
        return NULL

    # --- statement sequences ---

    def _eval_program(self, stmts: List[Stmt]) -> Object:
        result: Object = NULL
        for stmt in stmts:
            result = self.evaluate(stmt)
            if isinstance(result, Error):
                return result
            if isinstance(result, ReturnValue):
                return result.value
        return result

    def _eval_block(self, stmts: List[Stmt]) -> Object:
        result: Object = NULL
        for stmt in stmts:
            result = self.evaluate(stmt)
            # a return stays wrapped so enclosing blocks stop as well
            if isinstance(result, (Error, ReturnValue)):
                return result
        return result

    # --- expressions ---

    def _eval_if(self, node: IfExpression) -> Object:
        cond = self.evaluate(node.cond)
        if is_signal(cond):
            return cond

        if is_truthy(cond):
            return self.evaluate(node.body)
        if isinstance(node.else_branch, (BlockStatement, IfExpression)):
            return self.evaluate(node.else_branch)
        return NULL

    def _eval_prefix(self, op: str, right: Object) -> Object:
        if op == "!":
            return self._eval_bang(right)
        if op == "-":
            return self._eval_minus(right)
        return self._error(ERR_UNSUPPORTED_PREFIX.format(op, right.kind.name))

    @staticmethod
    def _eval_bang(right: Object) -> Object:
        if right is TRUE:
            return FALSE
        if right is FALSE:
            return TRUE
        if isinstance(right, Integer):
            return native_bool(right.value == 0)
        return FALSE

    def _eval_minus(self, right: Object) -> Object:
        if isinstance(right, Integer):
            return Integer.wrapping(-right.value)
        return self._error(ERR_UNSUPPORTED_PREFIX.format("-", right.kind.name))

    def _eval_infix(self, op: str, left: Object, right: Object) -> Object:
        if isinstance(left, Integer) and isinstance(right, Integer):
            return self._eval_integer_infix(op, left, right)
        if left.kind is not right.kind:
            return self._error(ERR_TYPE_MISMATCH.format(left.kind.name, op, right.kind.name))
        # booleans and null are singletons, so identity is value equality
        if op == "==":
            return native_bool(left is right)
        if op == "!=":
            return native_bool(left is not right)
        return self._error(ERR_UNSUPPORTED_INFIX.format(left.kind.name, op, right.kind.name))

    def _eval_integer_infix(self, op: str, left: Integer, right: Integer) -> Object:
        a, b = left.value, right.value
        if op == "+":
            return Integer.wrapping(a + b)
        if op == "-":
            return Integer.wrapping(a - b)
        if op == "*":
            return Integer.wrapping(a * b)
        if op == "/":
            if b == 0:
                return self._error(ERR_DIVISION_BY_ZERO)
            return Integer.wrapping(_truncating_div(a, b))
        if op == "<":
            return native_bool(a < b)
        if op == "<=":
            return native_bool(a <= b)
        if op == ">":
            return native_bool(a > b)
        if op == ">=":
            return native_bool(a >= b)
        if op == "==":
            return native_bool(a == b)
        if op == "!=":
            return native_bool(a != b)
        return self._error(ERR_UNSUPPORTED_INFIX.format(ObjectKind.INTEGER.name, op, ObjectKind.INTEGER.name))

    def _error(self, message: str) -> Error:
        log_debug(self.context, f"eval: {message}")
        return Error(message)


def _truncating_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def evaluate(node: Optional[Node], context: Optional[InterpreterContext] = None) -> Object:
    """Reduce one syntax tree node (usually a Program) to a runtime value."""
    return Evaluator(context).evaluate(node)
