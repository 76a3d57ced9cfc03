#!/usr/bin/env python3
from dataclasses import dataclass
from typing import Union

from tinylox.token_type import TokenType

# Runtime value of a tinylox expression. Numbers are always floats, nil is None.
Value = Union[float, str, bool, None]


@dataclass(frozen=True)
class Token:
    """A single lexeme scanned from a tinylox source.

    For example, "var a = 2;" scans to:
    Token(TokenType.VAR,        "var", None, 1)
    Token(TokenType.IDENTIFIER, "a",   None, 1)
    Token(TokenType.EQUAL,      "=",   None, 1)
    Token(TokenType.NUMBER,     "2",   2.0,  1)
    Token(TokenType.SEMICOLON,  ";",   None, 1)
    Token(TokenType.EOF,        "",    None, 1)

    Args:
        type: TokenType. Kind of the token.
        lexeme: str. Exact source text the token was scanned from.
        literal: Value. Parsed value for NUMBER and STRING tokens, otherwise None.
        line: int. Source line the token ends on.
    """

    type: TokenType
    lexeme: str
    literal: Value
    line: int

    def __repr__(self) -> str:
        return self.to_string()

    def to_string(self) -> str:
        return f"{self.type.name} {self.lexeme} {self.literal}"
