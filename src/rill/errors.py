from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rill.tokens import Token, TokenType


class RillError(Exception):
    """Base class for every error raised by the scanner, parser and interpreter."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class LexError(RillError):
    def __init__(self, character: str, line: int, message: str | None = None) -> None:
        if message is None:
            message = f"Unexpected character {character!r} on line {line}"
        super().__init__(message)
        self.character = character
        self.line = line


class ParseError(RillError):
    def __init__(self, expected: TokenType | str, found: Token, line: int, message: str | None = None) -> None:
        if message is None:
            expected_name = expected if isinstance(expected, str) else expected.display_name
            message = f"Expected {expected_name}, found {found.describe()} on line {line}"
        super().__init__(message)
        self.expected = expected
        self.found = found
        self.line = line


class RillRuntimeError(RillError):
    pass
