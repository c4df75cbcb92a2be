from __future__ import annotations

from collections.abc import Callable
from typing import cast

from rill.ast_nodes import (
    ASTProgram, ASTStatement, ASTLetStatement, ASTPrintStatement, ASTIfStatement, ASTWhileStatement,
    ASTBlockStatement, ASTExpressionStatement, ASTExpression, ASTAssignmentExpression, ASTBinaryExpression,
    ASTUnaryExpression, ASTIntegerLiteralExpression, ASTVariableReferenceExpression, ASTBinaryOperator,
    ASTUnaryOperator
)
from rill.errors import ParseError
from rill.tokens import Token, TokenType


class Parser:
    """
    Recursive-descent parser turning a token list into an ASTProgram.

    Each precedence level has its own method and delegates to the next-tighter level for its
    operands. The cursor is reset by every call to :meth:`parse`, so one instance can parse many programs.
    """

    _EQUALITY_OPERATORS = {
        TokenType.EQUAL_EQUAL: ASTBinaryOperator.EQUAL,
        TokenType.BANG_EQUAL: ASTBinaryOperator.NOT_EQUAL,
    }

    _COMPARISON_OPERATORS = {
        TokenType.LESS: ASTBinaryOperator.LESS,
        TokenType.LESS_EQUAL: ASTBinaryOperator.LESS_EQUAL,
        TokenType.GREATER: ASTBinaryOperator.GREATER,
        TokenType.GREATER_EQUAL: ASTBinaryOperator.GREATER_EQUAL,
    }

    _TERM_OPERATORS = {
        TokenType.PLUS: ASTBinaryOperator.ADD,
        TokenType.MINUS: ASTBinaryOperator.SUBTRACT,
    }

    _FACTOR_OPERATORS = {
        TokenType.STAR: ASTBinaryOperator.MULTIPLY,
        TokenType.SLASH: ASTBinaryOperator.DIVIDE,
    }

    def __init__(self) -> None:
        self._tokens: list[Token] = []
        self._position = 0

    def parse(self, tokens: list[Token]) -> ASTProgram:
        """
        Parse a complete program.

        :param tokens: Scanner output; must end with an EOF token.
        :type tokens: list[Token]

        :return: The top-level statements in source order.
        :rtype: ASTProgram

        :raises ParseError: On the first token that does not fit the grammar, or when nesting
            exceeds the interpreter stack.
        """
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ValueError("Token list must end with an EOF token")

        self._tokens = tokens
        self._position = 0

        statements = []
        try:
            while not self._check(TokenType.EOF):
                statements.append(self._parse_statement())
        except RecursionError:
            token = self._peek()
            raise ParseError(
                "shallower nesting",
                token,
                token.line,
                f"Nesting too deep at {token.describe()} on line {token.line}"
            ) from None
        return ASTProgram(statements=statements)

    # Cursor helpers

    def _peek(self) -> Token:
        return self._tokens[self._position]

    def _peek_next(self) -> Token:
        # The EOF token is never consumed, so looking past it just returns it again.
        return self._tokens[min(self._position + 1, len(self._tokens) - 1)]

    def _advance(self) -> Token:
        token = self._tokens[self._position]
        if token.type != TokenType.EOF:
            self._position += 1
        return token

    def _check(self, token_type: TokenType) -> bool:
        return self._peek().type == token_type

    def _expect(self, token_type: TokenType) -> Token:
        token = self._peek()
        if token.type != token_type:
            raise ParseError(token_type, token, token.line)
        return self._advance()

    # Statements

    def _parse_statement(self) -> ASTStatement:
        token_type = self._peek().type
        if token_type == TokenType.LET:
            return self._parse_let_statement()
        elif token_type == TokenType.PRINT:
            return self._parse_print_statement()
        elif token_type == TokenType.IF:
            return self._parse_if_statement()
        elif token_type == TokenType.WHILE:
            return self._parse_while_statement()
        elif token_type == TokenType.LEFT_BRACE:
            line = self._peek().line
            return ASTBlockStatement(statements=self._parse_block(), line=line)
        else:
            return self._parse_expression_statement()

    def _parse_let_statement(self) -> ASTLetStatement:
        let_token = self._expect(TokenType.LET)
        name_token = self._expect(TokenType.IDENTIFIER)
        self._expect(TokenType.EQUAL)
        initializer = self._parse_expression()
        self._expect(TokenType.SEMICOLON)
        return ASTLetStatement(name=str(name_token.value), initializer=initializer, line=let_token.line)

    def _parse_print_statement(self) -> ASTPrintStatement:
        print_token = self._expect(TokenType.PRINT)
        self._expect(TokenType.LEFT_PAREN)
        expression = self._parse_expression()
        self._expect(TokenType.RIGHT_PAREN)
        self._expect(TokenType.SEMICOLON)
        return ASTPrintStatement(expression=expression, line=print_token.line)

    def _parse_if_statement(self) -> ASTIfStatement:
        if_token = self._expect(TokenType.IF)
        condition = self._parse_parenthesized_condition()
        then_branch = self._parse_block()

        # `else if` is not part of the grammar; the else branch must be a block.
        else_branch: list[ASTStatement] | None = None
        if self._check(TokenType.ELSE):
            self._advance()
            else_branch = self._parse_block()

        return ASTIfStatement(
            condition=condition,
            then_branch=then_branch,
            else_branch=else_branch,
            line=if_token.line
        )

    def _parse_while_statement(self) -> ASTWhileStatement:
        while_token = self._expect(TokenType.WHILE)
        condition = self._parse_parenthesized_condition()
        body = self._parse_block()
        return ASTWhileStatement(condition=condition, body=body, line=while_token.line)

    def _parse_parenthesized_condition(self) -> ASTExpression:
        self._expect(TokenType.LEFT_PAREN)
        condition = self._parse_expression()
        self._expect(TokenType.RIGHT_PAREN)
        return condition

    def _parse_block(self) -> list[ASTStatement]:
        self._expect(TokenType.LEFT_BRACE)
        statements = []
        while not self._check(TokenType.RIGHT_BRACE):
            if self._check(TokenType.EOF):
                raise ParseError(TokenType.RIGHT_BRACE, self._peek(), self._peek().line)
            statements.append(self._parse_statement())
        self._expect(TokenType.RIGHT_BRACE)
        return statements

    def _parse_expression_statement(self) -> ASTExpressionStatement:
        line = self._peek().line
        expression = self._parse_expression()
        self._expect(TokenType.SEMICOLON)
        return ASTExpressionStatement(expression=expression, line=line)

    # Expressions, loosest to tightest

    def _parse_expression(self) -> ASTExpression:
        return self._parse_assignment()

    def _parse_assignment(self) -> ASTExpression:
        if self._check(TokenType.IDENTIFIER) and self._peek_next().type == TokenType.EQUAL:
            name_token = self._advance()
            self._advance()
            value = self._parse_assignment()
            return ASTAssignmentExpression(name=str(name_token.value), value=value, line=name_token.line)
        return self._parse_equality()

    def _parse_equality(self) -> ASTExpression:
        return self._parse_binary_level(self._parse_comparison, self._EQUALITY_OPERATORS)

    def _parse_comparison(self) -> ASTExpression:
        return self._parse_binary_level(self._parse_term, self._COMPARISON_OPERATORS)

    def _parse_term(self) -> ASTExpression:
        return self._parse_binary_level(self._parse_factor, self._TERM_OPERATORS)

    def _parse_factor(self) -> ASTExpression:
        return self._parse_binary_level(self._parse_unary, self._FACTOR_OPERATORS)

    def _parse_binary_level(
        self,
        parse_operand: Callable[[], ASTExpression],
        operators: dict[TokenType, ASTBinaryOperator]
    ) -> ASTExpression:
        """Parse one left-associative precedence level: operand (operator operand)*."""
        left = parse_operand()
        while self._peek().type in operators:
            operator_token = self._advance()
            right = parse_operand()
            left = ASTBinaryExpression(
                operator=operators[operator_token.type],
                left=left,
                right=right,
                line=operator_token.line
            )
        return left

    def _parse_unary(self) -> ASTExpression:
        if self._check(TokenType.MINUS):
            minus_token = self._advance()
            operand = self._parse_unary()
            return ASTUnaryExpression(operator=ASTUnaryOperator.NEGATE, operand=operand, line=minus_token.line)
        return self._parse_primary()

    def _parse_primary(self) -> ASTExpression:
        token = self._peek()
        if token.type == TokenType.NUMBER:
            self._advance()
            return ASTIntegerLiteralExpression(value=cast(int, token.value), line=token.line)
        elif token.type == TokenType.IDENTIFIER:
            self._advance()
            return ASTVariableReferenceExpression(name=str(token.value), line=token.line)
        elif token.type == TokenType.LEFT_PAREN:
            self._advance()
            expression = self._parse_expression()
            self._expect(TokenType.RIGHT_PAREN)
            return expression
        else:
            raise ParseError("expression", token, token.line)
