#!/usr/bin/env python3
from dataclasses import dataclass
from typing import Union

from tinylox.token import Token
from tinylox.token_type import TokenType


@dataclass(frozen=True)
class ScanError:
    """Malformed source text found by the Scanner.

    Args:
        line: int. Line the error was found on.
        message: str. Human readable description.
    """

    line: int
    message: str

    @property
    def where(self) -> str:
        return ""


@dataclass(frozen=True)
class ParseError:
    """Syntax error found by the Parser.

    Grammar rules return this instead of a node when they fail, leaving the
    declaration rule to decide how to recover.

    Args:
        token: Token. Token the parser was looking at when it failed.
        message: str. Human readable description.
    """

    token: Token
    message: str

    @property
    def line(self) -> int:
        return self.token.line

    @property
    def where(self) -> str:
        if self.token.type is TokenType.EOF:
            return " at end"

        return f" at '{self.token.lexeme}'"


# Errors which stop a program from running at all.
StaticError = Union[ScanError, ParseError]


class LoxRuntimeError(RuntimeError):
    """Error raised while executing a well formed program.

    Runtime errors unwind to the top of Interpreter.interpret, where they are
    reported and the remaining statements are skipped.

    Args:
        token: Token. Token where the error was encountered.
        message: str. Error message with details.
    """

    def __init__(self, token: Token, message: str) -> None:
        super().__init__(message)
        self.token = token
        self.message = message
