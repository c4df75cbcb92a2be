from __future__ import annotations

from pathlib import Path

from lark import Lark
from lark.exceptions import UnexpectedCharacters
from lark.lexer import Token as LarkToken

from rill.errors import LexError
from rill.integers import INT64_MAX
from rill.tokens import Token, TokenType


class Scanner:
    def __init__(self) -> None:
        grammar_path = Path(__file__).parent / "rill.lark"
        if not grammar_path.exists():
            raise FileNotFoundError(f"Grammar file 'rill.lark' not found at {grammar_path.resolve()}")

        with open(grammar_path, 'r') as f:
            grammar = f.read()
        self.lexer = Lark(grammar, parser='lalr', lexer='basic', start='start')

    def tokenize(self, source: str) -> list[Token]:
        """
        Split source text into tokens, ending with a synthetic EOF token.

        :param source: The program text.
        :type source: str

        :return: The tokens in source order.
        :rtype: list[Token]

        :raises LexError: On the first character that starts no token.
        """
        tokens = []
        try:
            for lark_token in self.lexer.lex(source):
                tokens.append(self._convert_token(lark_token))
        except UnexpectedCharacters as e:
            raise LexError(e.char, e.line) from None

        tokens.append(Token(TokenType.EOF, None, source.count("\n") + 1))
        return tokens

    @staticmethod
    def _convert_token(lark_token: LarkToken) -> Token:
        token_type = TokenType[lark_token.type]
        line = lark_token.line if lark_token.line is not None else 1

        if token_type == TokenType.NUMBER:
            value = int(lark_token.value)
            if value > INT64_MAX:
                raise LexError(
                    str(lark_token.value),
                    line,
                    f"Number literal {lark_token.value} out of range on line {line}"
                )
            return Token(token_type, value, line)
        elif token_type == TokenType.IDENTIFIER:
            return Token(token_type, str(lark_token.value), line)
        else:
            return Token(token_type, None, line)
