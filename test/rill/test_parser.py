import pytest

from rill.ast_nodes import (
    ASTProgram, ASTLetStatement, ASTPrintStatement, ASTIfStatement, ASTWhileStatement, ASTBlockStatement,
    ASTExpressionStatement, ASTAssignmentExpression, ASTBinaryExpression, ASTUnaryExpression,
    ASTIntegerLiteralExpression, ASTVariableReferenceExpression, ASTBinaryOperator, ASTUnaryOperator
)
from rill.errors import ParseError
from rill.parser import Parser
from rill.scanner import Scanner
from rill.tokens import TokenType


@pytest.fixture
def rill_parser():
    scanner = Scanner()
    parser = Parser()

    def parse(source: str) -> ASTProgram:
        return parser.parse(scanner.tokenize(source))

    return parse


def test_empty_program(rill_parser):
    ast = rill_parser("")
    assert isinstance(ast, ASTProgram)
    assert len(ast.statements) == 0


def test_let_statement(rill_parser):
    ast = rill_parser("let x = 10;")
    assert len(ast.statements) == 1
    stmt = ast.statements[0]
    assert isinstance(stmt, ASTLetStatement)
    assert stmt.name == "x"
    assert isinstance(stmt.initializer, ASTIntegerLiteralExpression)
    assert stmt.initializer.value == 10
    assert stmt.line == 1


def test_print_statement(rill_parser):
    ast = rill_parser("print(a);")
    stmt = ast.statements[0]
    assert isinstance(stmt, ASTPrintStatement)
    assert isinstance(stmt.expression, ASTVariableReferenceExpression)
    assert stmt.expression.name == "a"


def test_expression_statement(rill_parser):
    ast = rill_parser("1 + 2;")
    stmt = ast.statements[0]
    assert isinstance(stmt, ASTExpressionStatement)
    assert isinstance(stmt.expression, ASTBinaryExpression)


def test_assignment_expression(rill_parser):
    ast = rill_parser("x = 5 + y;")
    stmt = ast.statements[0]
    assert isinstance(stmt, ASTExpressionStatement)
    expr = stmt.expression
    assert isinstance(expr, ASTAssignmentExpression)
    assert expr.name == "x"
    assert isinstance(expr.value, ASTBinaryExpression)
    assert expr.value.operator == ASTBinaryOperator.ADD


def test_assignment_is_right_associative(rill_parser):
    ast = rill_parser("a = b = 3;")
    expr = ast.statements[0].expression
    assert isinstance(expr, ASTAssignmentExpression)
    assert expr.name == "a"
    assert isinstance(expr.value, ASTAssignmentExpression)
    assert expr.value.name == "b"
    assert expr.value.value == ASTIntegerLiteralExpression(3)


def test_equality_is_not_assignment(rill_parser):
    ast = rill_parser("x == 1;")
    expr = ast.statements[0].expression
    assert isinstance(expr, ASTBinaryExpression)
    assert expr.operator == ASTBinaryOperator.EQUAL


def test_multiplication_binds_tighter_than_addition(rill_parser):
    ast = rill_parser("1 + 2 * 3;")
    expr = ast.statements[0].expression
    assert isinstance(expr, ASTBinaryExpression)
    assert expr.operator == ASTBinaryOperator.ADD
    assert expr.left == ASTIntegerLiteralExpression(1)
    assert isinstance(expr.right, ASTBinaryExpression)
    assert expr.right.operator == ASTBinaryOperator.MULTIPLY
    assert expr.right.left == ASTIntegerLiteralExpression(2)
    assert expr.right.right == ASTIntegerLiteralExpression(3)


def test_parentheses_override_precedence(rill_parser):
    ast = rill_parser("(1 + 2) * 3;")
    expr = ast.statements[0].expression
    assert isinstance(expr, ASTBinaryExpression)
    assert expr.operator == ASTBinaryOperator.MULTIPLY
    assert isinstance(expr.left, ASTBinaryExpression)
    assert expr.left.operator == ASTBinaryOperator.ADD


def test_subtraction_is_left_associative(rill_parser):
    ast = rill_parser("10 - 4 - 3;")
    expr = ast.statements[0].expression
    assert expr.operator == ASTBinaryOperator.SUBTRACT
    assert isinstance(expr.left, ASTBinaryExpression)
    assert expr.left.operator == ASTBinaryOperator.SUBTRACT
    assert expr.right == ASTIntegerLiteralExpression(3)


def test_comparison_binds_tighter_than_equality(rill_parser):
    ast = rill_parser("a < b == c >= d;")
    expr = ast.statements[0].expression
    assert expr.operator == ASTBinaryOperator.EQUAL
    assert expr.left.operator == ASTBinaryOperator.LESS
    assert expr.right.operator == ASTBinaryOperator.GREATER_EQUAL


def test_all_binary_operators(rill_parser):
    expected = {
        "+": ASTBinaryOperator.ADD,
        "-": ASTBinaryOperator.SUBTRACT,
        "*": ASTBinaryOperator.MULTIPLY,
        "/": ASTBinaryOperator.DIVIDE,
        "==": ASTBinaryOperator.EQUAL,
        "!=": ASTBinaryOperator.NOT_EQUAL,
        "<": ASTBinaryOperator.LESS,
        "<=": ASTBinaryOperator.LESS_EQUAL,
        ">": ASTBinaryOperator.GREATER,
        ">=": ASTBinaryOperator.GREATER_EQUAL,
    }
    for symbol, operator in expected.items():
        expr = rill_parser(f"a {symbol} b;").statements[0].expression
        assert isinstance(expr, ASTBinaryExpression)
        assert expr.operator == operator


def test_unary_negation(rill_parser):
    ast = rill_parser("--5;")
    expr = ast.statements[0].expression
    assert isinstance(expr, ASTUnaryExpression)
    assert expr.operator == ASTUnaryOperator.NEGATE
    assert isinstance(expr.operand, ASTUnaryExpression)
    assert expr.operand.operand == ASTIntegerLiteralExpression(5)


def test_unary_binds_tighter_than_multiplication(rill_parser):
    ast = rill_parser("-a * b;")
    expr = ast.statements[0].expression
    assert expr.operator == ASTBinaryOperator.MULTIPLY
    assert isinstance(expr.left, ASTUnaryExpression)


def test_if_statement(rill_parser):
    source = """
    if (x > 0) {
        y = 1;
    }
    """
    ast = rill_parser(source)
    if_stmt = ast.statements[0]
    assert isinstance(if_stmt, ASTIfStatement)
    assert isinstance(if_stmt.condition, ASTBinaryExpression)
    assert if_stmt.condition.operator == ASTBinaryOperator.GREATER
    assert len(if_stmt.then_branch) == 1
    assert isinstance(if_stmt.then_branch[0], ASTExpressionStatement)
    assert if_stmt.else_branch is None
    assert if_stmt.line == 2


def test_if_else_statement(rill_parser):
    source = """
    if (x) {
        print(1);
    } else {
        print(2);
        print(3);
    }
    """
    if_stmt = rill_parser(source).statements[0]
    assert isinstance(if_stmt, ASTIfStatement)
    assert len(if_stmt.then_branch) == 1
    assert if_stmt.else_branch is not None
    assert len(if_stmt.else_branch) == 2


def test_else_if_requires_braces(rill_parser):
    with pytest.raises(ParseError) as exc_info:
        rill_parser("if (a) { } else if (b) { }")
    assert exc_info.value.expected == TokenType.LEFT_BRACE
    assert exc_info.value.found.type == TokenType.IF


def test_nested_if_inside_else_block(rill_parser):
    if_stmt = rill_parser("if (a) { } else { if (b) { print(1); } }").statements[0]
    assert if_stmt.then_branch == []
    assert isinstance(if_stmt.else_branch[0], ASTIfStatement)


def test_while_statement(rill_parser):
    source = """
    while (i < 10) {
        i = i + 1;
    }
    """
    while_stmt = rill_parser(source).statements[0]
    assert isinstance(while_stmt, ASTWhileStatement)
    assert while_stmt.condition.operator == ASTBinaryOperator.LESS
    assert len(while_stmt.body) == 1


def test_block_statement(rill_parser):
    ast = rill_parser("{ let x = 1; { } print(x); }")
    block = ast.statements[0]
    assert isinstance(block, ASTBlockStatement)
    assert len(block.statements) == 3
    assert isinstance(block.statements[1], ASTBlockStatement)
    assert block.statements[1].statements == []


def test_multiple_top_level_statements(rill_parser):
    ast = rill_parser("let a=5;let b=10;print(a+b);")
    assert [type(stmt) for stmt in ast.statements] == [ASTLetStatement, ASTLetStatement, ASTPrintStatement]


def test_missing_semicolon(rill_parser):
    source = "let x = 5\nprint(x);"
    with pytest.raises(ParseError) as exc_info:
        rill_parser(source)
    assert exc_info.value.expected == TokenType.SEMICOLON
    assert exc_info.value.found.type == TokenType.PRINT
    assert exc_info.value.line == 2


def test_unbalanced_parentheses(rill_parser):
    with pytest.raises(ParseError) as exc_info:
        rill_parser("x = (5 + 2;")
    assert exc_info.value.expected == TokenType.RIGHT_PAREN
    assert exc_info.value.found.type == TokenType.SEMICOLON


def test_unclosed_block(rill_parser):
    with pytest.raises(ParseError) as exc_info:
        rill_parser("while (1) {\n  print(1);\n")
    assert exc_info.value.expected == TokenType.RIGHT_BRACE
    assert exc_info.value.found.type == TokenType.EOF
    assert exc_info.value.line == 3


def test_missing_operand(rill_parser):
    with pytest.raises(ParseError) as exc_info:
        rill_parser("print(1 +);")
    assert exc_info.value.expected == "expression"
    assert exc_info.value.found.type == TokenType.RIGHT_PAREN
    assert str(exc_info.value) == "Expected expression, found ')' on line 1"


def test_let_requires_identifier(rill_parser):
    with pytest.raises(ParseError) as exc_info:
        rill_parser("let 5 = 1;")
    assert str(exc_info.value) == "Expected identifier, found number 5 on line 1"


def test_print_requires_parentheses(rill_parser):
    with pytest.raises(ParseError) as exc_info:
        rill_parser("print x;")
    assert exc_info.value.expected == TokenType.LEFT_PAREN


def test_assignment_to_non_identifier(rill_parser):
    with pytest.raises(ParseError) as exc_info:
        rill_parser("1 = 2;")
    assert exc_info.value.expected == TokenType.SEMICOLON
    assert exc_info.value.found.type == TokenType.EQUAL


def test_stray_closing_brace(rill_parser):
    with pytest.raises(ParseError):
        rill_parser("}")


def test_token_list_must_end_with_eof():
    with pytest.raises(ValueError):
        Parser().parse([])


def test_deeply_nested_parentheses(rill_parser):
    depth = 60
    ast = rill_parser("print(" + "(" * depth + "7" + ")" * depth + ");")
    assert ast.statements[0].expression == ASTIntegerLiteralExpression(7)


def test_long_operator_chain_is_left_associative(rill_parser):
    ast = rill_parser(" + ".join(["1"] * 1500) + ";")
    expr = ast.statements[0].expression
    depth = 0
    while isinstance(expr, ASTBinaryExpression):
        assert expr.right == ASTIntegerLiteralExpression(1)
        expr = expr.left
        depth += 1
    assert depth == 1499


def test_nesting_too_deep(rill_parser):
    source = "print(" + "(" * 5000 + "1" + ")" * 5000 + ");"
    with pytest.raises(ParseError) as exc_info:
        rill_parser(source)
    assert str(exc_info.value).startswith("Nesting too deep at '(' on line 1")
    assert exc_info.value.found.type == TokenType.LEFT_PAREN
