from __future__ import annotations

import sys
from typing import TextIO

from rill.ast_nodes import (
    ASTProgram, ASTStatement, ASTLetStatement, ASTPrintStatement, ASTIfStatement, ASTWhileStatement,
    ASTBlockStatement, ASTExpressionStatement, ASTExpression, ASTAssignmentExpression, ASTBinaryExpression,
    ASTUnaryExpression, ASTIntegerLiteralExpression, ASTVariableReferenceExpression, ASTBinaryOperator,
    ASTUnaryOperator
)
from rill.environment import Environment
from rill.errors import RillRuntimeError
from rill.integers import truncating_divide, wrap_int64


class Interpreter:
    """
    Tree-walking interpreter for Rill programs.

    Statements are executed directly from the AST. All values are signed 64-bit integers and
    arithmetic wraps on overflow. The environment persists across calls to :meth:`interpret`, so
    successive programs run by one interpreter share their top-level variables.
    """

    def __init__(self, out: TextIO | None = None) -> None:
        """
        Initialize an Interpreter with an empty global scope.

        :param out: Stream receiving ``print`` output; defaults to standard output.
        :type out: TextIO | None
        """
        self.environment = Environment()
        self._out = out

    def interpret(self, program: ASTProgram) -> None:
        """
        Execute every top-level statement in order.

        :param program: The parsed program.
        :type program: ASTProgram

        :raises RillRuntimeError: On the first undefined variable or division by zero, or when
            nesting exceeds the interpreter stack.
        """
        try:
            for statement in program.statements:
                self._execute(statement)
        except RecursionError:
            raise RillRuntimeError("Nesting too deep") from None

    def _execute(self, stmt: ASTStatement) -> None:
        if isinstance(stmt, ASTLetStatement):
            self.environment.define(stmt.name, self._evaluate(stmt.initializer))
        elif isinstance(stmt, ASTPrintStatement):
            value = self._evaluate(stmt.expression)
            out = self._out if self._out is not None else sys.stdout
            out.write(f"{value}\n")
        elif isinstance(stmt, ASTIfStatement):
            if self._evaluate(stmt.condition) != 0:
                self._execute_block(stmt.then_branch)
            elif stmt.else_branch is not None:
                self._execute_block(stmt.else_branch)
        elif isinstance(stmt, ASTWhileStatement):
            while self._evaluate(stmt.condition) != 0:
                self._execute_block(stmt.body)
        elif isinstance(stmt, ASTBlockStatement):
            self._execute_block(stmt.statements)
        elif isinstance(stmt, ASTExpressionStatement):
            self._evaluate(stmt.expression)
        else:
            raise ValueError(f"Unknown statement type: {type(stmt).__name__}")

    def _execute_block(self, statements: list[ASTStatement]) -> None:
        with self.environment.scope():
            for statement in statements:
                self._execute(statement)

    def _evaluate(self, expr: ASTExpression) -> int:
        if isinstance(expr, ASTIntegerLiteralExpression):
            return expr.value
        elif isinstance(expr, ASTVariableReferenceExpression):
            return self.environment.get(expr.name)
        elif isinstance(expr, ASTAssignmentExpression):
            value = self._evaluate(expr.value)
            self.environment.assign(expr.name, value)
            return value
        elif isinstance(expr, ASTUnaryExpression):
            operand = self._evaluate(expr.operand)
            if expr.operator == ASTUnaryOperator.NEGATE:
                return wrap_int64(-operand)
            raise ValueError(f"Unknown unary operator: {expr.operator}")
        elif isinstance(expr, ASTBinaryExpression):
            return self._evaluate_binary(expr)
        else:
            raise ValueError(f"Unknown expression type: {type(expr).__name__}")

    def _evaluate_binary(self, expr: ASTBinaryExpression) -> int:
        # Walk the left spine so a long left-associative chain costs one frame, not one per operator.
        chain = []
        node: ASTExpression = expr
        while isinstance(node, ASTBinaryExpression):
            chain.append(node)
            node = node.left

        value = self._evaluate(node)
        for binary in reversed(chain):
            right = self._evaluate(binary.right)
            value = self._apply_binary_operator(binary.operator, value, right)
        return value

    @staticmethod
    def _apply_binary_operator(operator: ASTBinaryOperator, left: int, right: int) -> int:
        if operator == ASTBinaryOperator.ADD:
            return wrap_int64(left + right)
        elif operator == ASTBinaryOperator.SUBTRACT:
            return wrap_int64(left - right)
        elif operator == ASTBinaryOperator.MULTIPLY:
            return wrap_int64(left * right)
        elif operator == ASTBinaryOperator.DIVIDE:
            if right == 0:
                raise RillRuntimeError("Division by zero")
            return truncating_divide(left, right)
        elif operator == ASTBinaryOperator.EQUAL:
            return int(left == right)
        elif operator == ASTBinaryOperator.NOT_EQUAL:
            return int(left != right)
        elif operator == ASTBinaryOperator.LESS:
            return int(left < right)
        elif operator == ASTBinaryOperator.LESS_EQUAL:
            return int(left <= right)
        elif operator == ASTBinaryOperator.GREATER:
            return int(left > right)
        elif operator == ASTBinaryOperator.GREATER_EQUAL:
            return int(left >= right)
        else:
            raise ValueError(f"Unknown binary operator: {operator}")
