#!/usr/bin/env python3
from typing import Dict, List, Optional

from tinylox.diagnostics import Diagnostics
from tinylox.errors import ScanError
from tinylox.token import Token, Value
from tinylox.token_type import TokenType


class Scanner:
    """tinylox Scanner

    Converts a source text into a list of Tokens in a single left to right pass,
    always terminated by exactly one EOF Token.

    Errors do not stop the scan. An unexpected character is skipped and an
    unterminated string is dropped; each is recorded in errors and reported to
    the Diagnostics (if any) so that every problem in a source is shown at once.

    To use:
    Scanner("var a = 2;").scan_tokens()
    [VAR var None, IDENTIFIER a None, EQUAL = None, NUMBER 2 2.0,
     SEMICOLON ; None, EOF  None]

    Args:
        source: str. The source text to scan.
        diagnostics: Optional[Diagnostics]. Sink for scan errors.

    Public Attributes:
        tokens: List[Token]. All scanned tokens.
        errors: List[ScanError]. All scan errors, in source order.
        start: int. Index of the first character of the lexeme being scanned.
        current: int. Index of the character about to be consumed.
        line: int. Current line, incremented on every newline in the source.
    """

    keywords: Dict[str, TokenType] = {
        "and": TokenType.AND,
        "class": TokenType.CLASS,
        "else": TokenType.ELSE,
        "false": TokenType.FALSE,
        "for": TokenType.FOR,
        "fun": TokenType.FUN,
        "if": TokenType.IF,
        "nil": TokenType.NIL,
        "or": TokenType.OR,
        "print": TokenType.PRINT,
        "return": TokenType.RETURN,
        "super": TokenType.SUPER,
        "this": TokenType.THIS,
        "true": TokenType.TRUE,
        "var": TokenType.VAR,
        "while": TokenType.WHILE,
    }

    # Lexemes which are always exactly one character long.
    punctuation: Dict[str, TokenType] = {
        "(": TokenType.LEFT_PAREN,
        ")": TokenType.RIGHT_PAREN,
        "{": TokenType.LEFT_BRACE,
        "}": TokenType.RIGHT_BRACE,
        ",": TokenType.COMMA,
        ".": TokenType.DOT,
        "-": TokenType.MINUS,
        "+": TokenType.PLUS,
        ";": TokenType.SEMICOLON,
        "*": TokenType.STAR,
    }

    def __init__(self, source: str, diagnostics: Optional[Diagnostics] = None) -> None:
        self.source = source
        self.diagnostics = diagnostics
        self.tokens: List[Token] = []
        self.errors: List[ScanError] = []
        self.start = 0
        self.current = 0
        self.line = 1

    def scan_tokens(self) -> List[Token]:
        """Scan the whole source and return its Tokens.

        Returns:
            tokens: List[Token]. Successfully scanned Tokens followed by EOF.
        """

        while not self.is_at_end():
            self.start = self.current
            self.scan_token()

        self.tokens.append(Token(TokenType.EOF, "", None, self.line))
        return self.tokens

    def scan_token(self) -> None:
        c = self.advance()

        if c in self.punctuation:
            self.add_token(self.punctuation[c])
            return

        match c:
            case "!":
                self.add_token(
                    TokenType.BANG_EQUAL if self.match("=") else TokenType.BANG
                )
            case "=":
                self.add_token(
                    TokenType.EQUAL_EQUAL if self.match("=") else TokenType.EQUAL
                )
            case "<":
                self.add_token(
                    TokenType.LESS_EQUAL if self.match("=") else TokenType.LESS
                )
            case ">":
                self.add_token(
                    TokenType.GREATER_EQUAL if self.match("=") else TokenType.GREATER
                )
            case "/":
                if self.match("/"):
                    # Line comment, the newline itself is left for the next pass
                    # so the line counter stays correct.
                    while self.peek() != "\n" and not self.is_at_end():
                        self.advance()
                else:
                    self.add_token(TokenType.SLASH)
            case " " | "\r" | "\t":
                pass
            case "\n":
                self.line += 1
            case '"':
                self.string()
            case _ if self.is_digit(c):
                self.number()
            case _ if self.is_alpha(c):
                self.identifier()
            case _:
                self.error("Unexpected character.")

    def identifier(self) -> None:
        """Scan an identifier or a keyword.

        print  -> Token(TokenType.PRINT,      "print",  None, 1)
        orchid -> Token(TokenType.IDENTIFIER, "orchid", None, 1)
        """

        while self.is_alpha_numeric(self.peek()):
            self.advance()

        text = self.source[self.start : self.current]
        self.add_token(self.keywords.get(text, TokenType.IDENTIFIER))

    def number(self) -> None:
        """Scan a number literal.

        A "." only belongs to the number when a digit follows it, so "4." scans
        as NUMBER 4 followed by DOT.
        """

        while self.is_digit(self.peek()):
            self.advance()

        if self.peek() == "." and self.is_digit(self.peek_next()):
            self.advance()

            while self.is_digit(self.peek()):
                self.advance()

        self.add_token(TokenType.NUMBER, float(self.source[self.start : self.current]))

    def string(self) -> None:
        """Scan a string literal, which may span several lines.

        The lexeme keeps the quotes while the literal value drops them:
        "foo" -> Token(TokenType.STRING, '"foo"', "foo", 1)
        """

        while self.peek() != '"' and not self.is_at_end():
            if self.peek() == "\n":
                self.line += 1

            self.advance()

        if self.is_at_end():
            self.error("Unterminated string.")
            return

        # Closing quote
        self.advance()

        value = self.source[self.start + 1 : self.current - 1]
        self.add_token(TokenType.STRING, value)

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def advance(self) -> str:
        c = self.source[self.current]
        self.current += 1
        return c

    def match(self, expected: str) -> bool:
        """Consume the current character only if it is the expected one.

        Args:
            expected: str. Character to look for.

        Returns:
            matched: bool. Whether the character was found and consumed.
        """

        if self.is_at_end() or self.source[self.current] != expected:
            return False

        self.current += 1
        return True

    def peek(self) -> str:
        if self.is_at_end():
            return "\0"

        return self.source[self.current]

    def peek_next(self) -> str:
        if self.current + 1 >= len(self.source):
            return "\0"

        return self.source[self.current + 1]

    def is_alpha(self, c: str) -> bool:
        return c.isalpha() or c == "_"

    def is_digit(self, c: str) -> bool:
        return "0" <= c <= "9"

    def is_alpha_numeric(self, c: str) -> bool:
        return self.is_alpha(c) or self.is_digit(c)

    def add_token(self, type: TokenType, literal: Value = None) -> None:
        text = self.source[self.start : self.current]
        self.tokens.append(Token(type, text, literal, self.line))

    def error(self, message: str) -> None:
        """Record a scan error on the current line and keep scanning."""

        error = ScanError(self.line, message)
        self.errors.append(error)

        if self.diagnostics is not None:
            self.diagnostics.static_error(error)
