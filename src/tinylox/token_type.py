#!/usr/bin/env python3
from enum import IntEnum, auto


class TokenType(IntEnum):
    """Closed vocabulary of token kinds produced by the Scanner.

    Some keywords (class, fun, return, super, this) are reserved by the
    language but have no grammar rule here; they still scan as keywords so
    they can never be used as identifiers.
    """

    # Punctuation
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    DOT = auto()
    SEMICOLON = auto()

    # Arithmetic
    MINUS = auto()
    PLUS = auto()
    SLASH = auto()
    STAR = auto()

    # Operators that may take a trailing "="
    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()

    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FOR = auto()
    FUN = auto()
    IF = auto()
    NIL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()

    EOF = auto()


# Tokens which begin a new statement or declaration, used by the Parser to find
# a safe place to resume after a syntax error.
STATEMENT_KEYWORDS = frozenset(
    {
        TokenType.CLASS,
        TokenType.FUN,
        TokenType.VAR,
        TokenType.FOR,
        TokenType.IF,
        TokenType.WHILE,
        TokenType.PRINT,
        TokenType.RETURN,
    }
)
