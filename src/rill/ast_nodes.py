from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class ASTBinaryOperator(Enum):
    ADD = auto()
    SUBTRACT = auto()
    MULTIPLY = auto()
    DIVIDE = auto()
    EQUAL = auto()
    NOT_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()


class ASTUnaryOperator(Enum):
    NEGATE = auto()


@dataclass
class ASTNode:
    line: int = field(default=0, kw_only=True, compare=False)


@dataclass
class ASTExpression(ASTNode):
    pass


@dataclass
class ASTIntegerLiteralExpression(ASTExpression):
    value: int


@dataclass
class ASTVariableReferenceExpression(ASTExpression):
    name: str


@dataclass
class ASTAssignmentExpression(ASTExpression):
    name: str
    value: ASTExpression


@dataclass
class ASTUnaryExpression(ASTExpression):
    operator: ASTUnaryOperator
    operand: ASTExpression


@dataclass
class ASTBinaryExpression(ASTExpression):
    operator: ASTBinaryOperator
    left: ASTExpression
    right: ASTExpression


@dataclass
class ASTStatement(ASTNode):
    pass


@dataclass
class ASTLetStatement(ASTStatement):
    name: str
    initializer: ASTExpression


@dataclass
class ASTPrintStatement(ASTStatement):
    expression: ASTExpression


@dataclass
class ASTIfStatement(ASTStatement):
    condition: ASTExpression
    then_branch: list[ASTStatement]
    else_branch: list[ASTStatement] | None


@dataclass
class ASTWhileStatement(ASTStatement):
    condition: ASTExpression
    body: list[ASTStatement]


@dataclass
class ASTBlockStatement(ASTStatement):
    statements: list[ASTStatement]


@dataclass
class ASTExpressionStatement(ASTStatement):
    expression: ASTExpression


@dataclass
class ASTProgram:
    statements: list[ASTStatement]
