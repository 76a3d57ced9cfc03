#!/usr/bin/env python3
from typing import Callable, List, Optional, Type, TypeVar, Union

from tinylox.diagnostics import Diagnostics
from tinylox.errors import ParseError
from tinylox.expr import (
    Assign,
    Binary,
    Expr,
    Grouping,
    Literal,
    Logical,
    Unary,
    Variable,
)
from tinylox.stmt import Block, Expression, If, Print, Stmt, Var, While
from tinylox.token import Token
from tinylox.token_type import STATEMENT_KEYWORDS, TokenType

T = TypeVar("T")

# Every grammar rule returns either what it parsed or the error which stopped it.
# Errors are passed back up unchanged until declaration() handles them.
ParseResult = Union[T, ParseError]


class Parser:
    """tinylox Parser

    Recursive descent parser turning the Scanner's Tokens into a list of
    statements. Each grammar rule below is one method, from the loosest binding
    rule to the tightest:

    program     → declaration* EOF ;
    declaration → varDecl | statement ;
    varDecl     → "var" IDENTIFIER ( "=" expression )? ";" ;
    statement   → exprStmt | forStmt | ifStmt | printStmt | whileStmt | block ;
    exprStmt    → expression ";" ;
    forStmt     → "for" "(" ( varDecl | exprStmt | ";" )
                  expression? ";" expression? ")" statement ;
    ifStmt      → "if" "(" expression ")" statement ( "else" statement )? ;
    printStmt   → "print" expression ";" ;
    whileStmt   → "while" "(" expression ")" statement ;
    block       → "{" declaration* "}" ;
    expression  → assignment ;
    assignment  → IDENTIFIER "=" assignment | logic_or ;
    logic_or    → logic_and ( "or" logic_and )* ;
    logic_and   → equality ( "and" equality )* ;
    equality    → comparison ( ( "!=" | "==" ) comparison )* ;
    comparison  → term ( ( ">" | ">=" | "<" | "<=" ) term )* ;
    term        → factor ( ( "-" | "+" ) factor )* ;
    factor      → unary ( ( "/" | "*" ) unary )* ;
    unary       → ( "!" | "-" ) unary | primary ;
    primary     → "true" | "false" | "nil" | NUMBER | STRING | IDENTIFIER
                | "(" expression ")" ;

    A declaration which fails to parse is reported, the parser skips ahead to
    the next likely statement boundary and carries on, so one bad statement
    does not hide errors (or valid statements) after it. Failed declarations
    are left out of the result.

    Args:
        tokens: List[Token]. Tokens to parse, ending with EOF.
        diagnostics: Optional[Diagnostics]. Sink for parse errors.

    Public Attributes:
        current: int. Index of the next Token to consume.
        errors: List[ParseError]. Every parse error reported so far.
    """

    def __init__(
        self, tokens: List[Token], diagnostics: Optional[Diagnostics] = None
    ) -> None:
        self.tokens = tokens
        self.diagnostics = diagnostics
        self.current = 0
        self.errors: List[ParseError] = []

    def parse(self) -> List[Stmt]:
        """Parse every declaration up to the EOF Token.

        Returns:
            statements: List[Stmt]. Successfully parsed statements, in order.
        """

        statements = []

        while not self.is_at_end():
            statement = self.declaration()
            if statement is not None:
                statements.append(statement)

        return statements

    def declaration(self) -> Optional[Stmt]:
        """Parse a declaration, recovering from any error inside it.

        Nesting too deep for the Python stack is reported like a syntax error.

        Returns:
            statement: Optional[Stmt]. The parsed statement, or None if it had
                to be skipped.
        """

        try:
            if self.match(TokenType.VAR):
                result = self.var_declaration()
            else:
                result = self.statement()
        except RecursionError:
            result = ParseError(self.peek(), "Too much nesting.")

        if isinstance(result, ParseError):
            self.report(result)
            self.synchronize()
            return None

        return result

    def var_declaration(self) -> ParseResult[Var]:
        name = self.consume(TokenType.IDENTIFIER, "Expect variable name.")
        if isinstance(name, ParseError):
            return name

        initializer = None
        if self.match(TokenType.EQUAL):
            initializer = self.expression()
            if isinstance(initializer, ParseError):
                return initializer

        semicolon = self.consume(
            TokenType.SEMICOLON, "Expect ';' after variable declaration."
        )
        if isinstance(semicolon, ParseError):
            return semicolon

        return Var(name, initializer)

    def statement(self) -> ParseResult[Stmt]:
        if self.match(TokenType.FOR):
            return self.for_statement()
        if self.match(TokenType.IF):
            return self.if_statement()
        if self.match(TokenType.PRINT):
            return self.print_statement()
        if self.match(TokenType.WHILE):
            return self.while_statement()
        if self.match(TokenType.LEFT_BRACE):
            statements = self.block()
            if isinstance(statements, ParseError):
                return statements
            return Block(statements)

        return self.expression_statement()

    def for_statement(self) -> ParseResult[Stmt]:
        """Parse a for loop, desugared into Block, Var and While statements.

        for (var i = 0; i < 10; i = i + 1) print i;
        becomes
        { var i = 0; while (i < 10) { print i; i = i + 1; } }

        A missing condition loops forever, as if it were "true".
        """

        paren = self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")
        if isinstance(paren, ParseError):
            return paren

        initializer: ParseResult[Optional[Stmt]]
        if self.match(TokenType.SEMICOLON):
            initializer = None
        elif self.match(TokenType.VAR):
            initializer = self.var_declaration()
        else:
            initializer = self.expression_statement()
        if isinstance(initializer, ParseError):
            return initializer

        condition: ParseResult[Optional[Expr]] = None
        if not self.check(TokenType.SEMICOLON):
            condition = self.expression()
            if isinstance(condition, ParseError):
                return condition
        semicolon = self.consume(
            TokenType.SEMICOLON, "Expect ';' after loop condition."
        )
        if isinstance(semicolon, ParseError):
            return semicolon

        increment: ParseResult[Optional[Expr]] = None
        if not self.check(TokenType.RIGHT_PAREN):
            increment = self.expression()
            if isinstance(increment, ParseError):
                return increment
        paren = self.consume(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")
        if isinstance(paren, ParseError):
            return paren

        body = self.statement()
        if isinstance(body, ParseError):
            return body

        if increment is not None:
            body = Block([body, Expression(increment)])

        if condition is None:
            condition = Literal(True)
        body = While(condition, body)

        if initializer is not None:
            body = Block([initializer, body])

        return body

    def if_statement(self) -> ParseResult[If]:
        paren = self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        if isinstance(paren, ParseError):
            return paren
        condition = self.expression()
        if isinstance(condition, ParseError):
            return condition
        paren = self.consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")
        if isinstance(paren, ParseError):
            return paren

        then_branch = self.statement()
        if isinstance(then_branch, ParseError):
            return then_branch

        # A dangling else binds to the nearest if, since the inner if_statement
        # call gets to match it first.
        else_branch = None
        if self.match(TokenType.ELSE):
            else_branch = self.statement()
            if isinstance(else_branch, ParseError):
                return else_branch

        return If(condition, then_branch, else_branch)

    def print_statement(self) -> ParseResult[Print]:
        value = self.expression()
        if isinstance(value, ParseError):
            return value

        semicolon = self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        if isinstance(semicolon, ParseError):
            return semicolon

        return Print(value)

    def while_statement(self) -> ParseResult[While]:
        paren = self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        if isinstance(paren, ParseError):
            return paren
        condition = self.expression()
        if isinstance(condition, ParseError):
            return condition
        paren = self.consume(TokenType.RIGHT_PAREN, "Expect ')' after condition.")
        if isinstance(paren, ParseError):
            return paren

        body = self.statement()
        if isinstance(body, ParseError):
            return body

        return While(condition, body)

    def expression_statement(self) -> ParseResult[Expression]:
        expr = self.expression()
        if isinstance(expr, ParseError):
            return expr

        semicolon = self.consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        if isinstance(semicolon, ParseError):
            return semicolon

        return Expression(expr)

    def block(self) -> ParseResult[List[Stmt]]:
        """Parse the statements of a block, after its opening brace.

        Declarations inside the block recover from their own errors, only a
        missing closing brace fails the block itself.
        """

        statements = []

        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            statement = self.declaration()
            if statement is not None:
                statements.append(statement)

        brace = self.consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        if isinstance(brace, ParseError):
            return brace

        return statements

    def expression(self) -> ParseResult[Expr]:
        return self.assignment()

    def assignment(self) -> ParseResult[Expr]:
        """Parse an assignment, or any expression binding tighter than it.

        The target is parsed as an ordinary expression first, since the parser
        cannot know it is an assignment until it reaches the "=". Only a bare
        Variable is a valid target. Anything else is reported, but the parser
        is not lost, so parsing continues without synchronizing.
        """

        expr = self.or_expr()
        if isinstance(expr, ParseError):
            return expr

        if self.match(TokenType.EQUAL):
            equals = self.previous()

            # Right associative, a = b = c assigns c to both.
            value = self.assignment()
            if isinstance(value, ParseError):
                return value

            if isinstance(expr, Variable):
                return Assign(expr.name, value)

            self.report(ParseError(equals, "Invalid assignment target."))

        return expr

    def or_expr(self) -> ParseResult[Expr]:
        return self.left_associative(self.and_expr, Logical, TokenType.OR)

    def and_expr(self) -> ParseResult[Expr]:
        return self.left_associative(self.equality, Logical, TokenType.AND)

    def equality(self) -> ParseResult[Expr]:
        return self.left_associative(
            self.comparison, Binary, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL
        )

    def comparison(self) -> ParseResult[Expr]:
        return self.left_associative(
            self.term,
            Binary,
            TokenType.GREATER,
            TokenType.GREATER_EQUAL,
            TokenType.LESS,
            TokenType.LESS_EQUAL,
        )

    def term(self) -> ParseResult[Expr]:
        return self.left_associative(
            self.factor, Binary, TokenType.MINUS, TokenType.PLUS
        )

    def factor(self) -> ParseResult[Expr]:
        return self.left_associative(
            self.unary, Binary, TokenType.SLASH, TokenType.STAR
        )

    def left_associative(
        self,
        operand: Callable[[], ParseResult[Expr]],
        node: Union[Type[Binary], Type[Logical]],
        *operators: TokenType,
    ) -> ParseResult[Expr]:
        """Parse a chain of operands joined by any of the given operators.

        1 - 2 - 3 groups as (1 - 2) - 3: each new operator takes the tree built
        so far as its left operand.

        Args:
            operand: Callable. Grammar rule for the next tighter precedence level.
            node: Type of node to build, Binary or Logical.
            operators: TokenType. Operators belonging to this precedence level.

        Returns:
            expression: ParseResult[Expr]. Parsed expression or the error.
        """

        expr = operand()
        if isinstance(expr, ParseError):
            return expr

        while self.match(*operators):
            operator = self.previous()
            right = operand()
            if isinstance(right, ParseError):
                return right
            expr = node(expr, operator, right)

        return expr

    def unary(self) -> ParseResult[Expr]:
        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            right = self.unary()
            if isinstance(right, ParseError):
                return right
            return Unary(operator, right)

        return self.primary()

    def primary(self) -> ParseResult[Expr]:
        if self.match(TokenType.FALSE):
            return Literal(False)
        if self.match(TokenType.TRUE):
            return Literal(True)
        if self.match(TokenType.NIL):
            return Literal(None)

        if self.match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self.previous().literal)

        if self.match(TokenType.IDENTIFIER):
            return Variable(self.previous())

        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            if isinstance(expr, ParseError):
                return expr
            paren = self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            if isinstance(paren, ParseError):
                return paren
            return Grouping(expr)

        return ParseError(self.peek(), "Expect expression.")

    def match(self, *types: TokenType) -> bool:
        """Consume the current Token if it is any of the given types.

        Returns:
            matched: bool. Whether a Token was consumed.
        """

        for type in types:
            if self.check(type):
                self.advance()
                return True

        return False

    def consume(self, type: TokenType, message: str) -> ParseResult[Token]:
        """Consume a Token of the given type, or describe why it is missing.

        Args:
            type: TokenType. Type of Token required next.
            message: str. Message for the error if it is not there.

        Returns:
            token: ParseResult[Token]. The consumed Token, or an error pointing
                at the Token found instead.
        """

        if self.check(type):
            return self.advance()

        return ParseError(self.peek(), message)

    def check(self, type: TokenType) -> bool:
        if self.is_at_end():
            return False

        return self.peek().type == type

    def advance(self) -> Token:
        if not self.is_at_end():
            self.current += 1

        return self.previous()

    def is_at_end(self) -> bool:
        return self.peek().type == TokenType.EOF

    def peek(self) -> Token:
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]

    def report(self, error: ParseError) -> None:
        self.errors.append(error)

        if self.diagnostics is not None:
            self.diagnostics.static_error(error)

    def synchronize(self) -> None:
        """Skip Tokens until the start of what is probably the next statement.

        That is just after a ";", or at a keyword which begins a statement. The
        Token the error was found at is always skipped, so the parser makes
        progress even if it failed on a statement keyword.
        """

        self.advance()

        while not self.is_at_end():
            if self.previous().type == TokenType.SEMICOLON:
                return

            if self.peek().type in STATEMENT_KEYWORDS:
                return

            self.advance()
