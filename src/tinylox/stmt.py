#!/usr/bin/env python3
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

from tinylox.expr import Expr
from tinylox.token import Token


@dataclass(frozen=True)
class Block:
    """Statements enclosed in braces, run in their own scope.

    { var a = 1; print a; }
    Block(
        statements=[
            Var(
                name=Token(TokenType.IDENTIFIER, "a", None, 1),
                initializer=Literal(1.0),
            ),
            Print(expression=Variable(Token(TokenType.IDENTIFIER, "a", None, 1))),
        ]
    )

    Args:
        statements: List[Stmt]. Statements in source order.
    """

    statements: List[Stmt]


@dataclass(frozen=True)
class Expression:
    """Expression evaluated only for its side effects, ie a = 2;"""

    expression: Expr


@dataclass(frozen=True)
class If:
    """Conditional statement.

    Args:
        condition: Expr. Tested for truthiness.
        then_branch: Stmt. Run when the condition is truthy.
        else_branch: Optional[Stmt]. Run otherwise, if present.
    """

    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt]


@dataclass(frozen=True)
class Print:
    """Write the display form of a value as one line of output."""

    expression: Expr


@dataclass(frozen=True)
class Var:
    """Variable declaration in the current scope.

    Args:
        name: Token. Name being declared.
        initializer: Optional[Expr]. Initial value, nil when absent.
    """

    name: Token
    initializer: Optional[Expr]


@dataclass(frozen=True)
class While:
    """Loop running body for as long as condition is truthy.

    There is no separate for-loop node, the Parser rewrites
    for (var i = 0; i < 3; i = i + 1) print i;
    into
    { var i = 0; while (i < 3) { print i; i = i + 1; } }

    Args:
        condition: Expr. Tested before every iteration.
        body: Stmt. Statement run on each iteration.
    """

    condition: Expr
    body: Stmt


Stmt = Union[Block, Expression, If, Print, Var, While]
