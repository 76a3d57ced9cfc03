#!/usr/bin/env python3
from __future__ import annotations

from typing import Union, assert_never

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


class AstPrinter:
    """Printer generating a Lisp style representation of a parsed program.

    Every node is written as a parenthesized prefix form, which makes grouping
    and desugaring visible at a glance:

    tinylox print_ast examples/loop.lox
    1: (var i = 0.0)
    2: (while (< i 3.0) (block (print i)(; (= i (+ i 1.0)))))
    """

    def print(self, node: Union[Expr, Stmt]) -> str:
        match node:
            case Block(statements):
                return "(block " + "".join(self.print(s) for s in statements) + ")"
            case Expression(expression):
                return self.parenthesize(";", expression)
            case If(condition, then_branch, None):
                return self.parenthesize("if", condition, then_branch)
            case If(condition, then_branch, else_branch):
                return self.parenthesize("if-else", condition, then_branch, else_branch)
            case Print(expression):
                return self.parenthesize("print", expression)
            case Var(name, None):
                return self.parenthesize("var", name)
            case Var(name, initializer):
                return self.parenthesize("var", name, "=", initializer)
            case While(condition, body):
                return self.parenthesize("while", condition, body)
            case Assign(name, value):
                return self.parenthesize("=", name, value)
            case Binary(left, operator, right) | Logical(left, operator, right):
                return self.parenthesize(operator.lexeme, left, right)
            case Grouping(expression):
                return self.parenthesize("group", expression)
            case Literal(value):
                return self.literal(value)
            case Unary(operator, right):
                return self.parenthesize(operator.lexeme, right)
            case Variable(name):
                return name.lexeme
            case _:
                assert_never(node)

    def literal(self, value: object) -> str:
        if value is None:
            return "nil"
        if isinstance(value, bool):
            return str(value).lower()

        return str(value)

    def parenthesize(self, name: str, *parts: object) -> str:
        builder = f"({name}"
        builder = self.transform(builder, *parts)
        builder += ")"

        return builder

    def transform(self, builder: str, *parts: object) -> str:
        for part in parts:
            builder += " "
            if isinstance(part, Token):
                builder += part.lexeme
            elif isinstance(part, str):
                builder += part
            else:
                builder += self.print(part)  # type: ignore[arg-type]

        return builder
