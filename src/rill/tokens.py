from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    NUMBER = "number"
    IDENTIFIER = "identifier"

    LET = "let"
    PRINT = "print"
    IF = "if"
    ELSE = "else"
    WHILE = "while"

    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    EQUAL = "="
    EQUAL_EQUAL = "=="
    BANG_EQUAL = "!="
    LESS = "<"
    LESS_EQUAL = "<="
    GREATER = ">"
    GREATER_EQUAL = ">="
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    LEFT_BRACE = "{"
    RIGHT_BRACE = "}"
    SEMICOLON = ";"

    EOF = "end of input"

    @property
    def display_name(self) -> str:
        if self in (TokenType.NUMBER, TokenType.IDENTIFIER, TokenType.EOF):
            return self.value
        return f"'{self.value}'"


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: int | str | None
    line: int

    def describe(self) -> str:
        if self.type == TokenType.NUMBER:
            return f"number {self.value}"
        if self.type == TokenType.IDENTIFIER:
            return f"identifier '{self.value}'"
        return self.type.display_name
