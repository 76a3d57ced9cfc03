#!/usr/bin/env python3
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from tinylox.token import Token, Value

# Expressions form a closed set of node types, combined into the Expr union at
# the bottom of this module. Consumers dispatch on them with a match statement
# ending in assert_never, so a type checker flags any consumer that misses a
# node type.


@dataclass(frozen=True)
class Assign:
    """Assignment to an existing variable, evaluating to the assigned value.

    a = 2;
    Assign(name=Token(TokenType.IDENTIFIER, "a", None, 1), value=Literal(2.0))

    Args:
        name: Token. Name of the assignment target.
        value: Expr. Expression to evaluate for the new value.
    """

    name: Token
    value: Expr


@dataclass(frozen=True)
class Binary:
    """Arithmetic, comparison or equality operation on two operands.

    2 + 3;
    Binary(
        left=Literal(2.0),
        operator=Token(TokenType.PLUS, "+", None, 1),
        right=Literal(3.0),
    )

    Args:
        left: Expr. Left operand.
        operator: Token. Operator token, one of + - * / > >= < <= == !=.
        right: Expr. Right operand.
    """

    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Grouping:
    """Parenthesized expression, ie (1 + 2)."""

    expression: Expr


@dataclass(frozen=True)
class Literal:
    """Constant value taken straight from the source."""

    value: Value


@dataclass(frozen=True)
class Logical:
    """Short circuiting "and" / "or" expression.

    Kept apart from Binary because the right operand is only evaluated when
    the left one does not already decide the result.
    """

    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Unary:
    """Prefix "!" or "-" applied to an operand.

    -2;
    Unary(operator=Token(TokenType.MINUS, "-", None, 1), right=Literal(2.0))
    """

    operator: Token
    right: Expr


@dataclass(frozen=True)
class Variable:
    """Reference to a variable, evaluating to its current value."""

    name: Token


Expr = Union[Assign, Binary, Grouping, Literal, Logical, Unary, Variable]
