#!/usr/bin/env python3
from __future__ import annotations

from decimal import Decimal
from math import copysign, inf, isinf, isnan, nan
from typing import Callable, List, Optional, Tuple, Union, assert_never

from tinylox.diagnostics import Diagnostics
from tinylox.environment import Environment
from tinylox.errors import LoxRuntimeError
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
from tinylox.token import Token, Value
from tinylox.token_type import TokenType


class Interpreter:
    """tinylox interpreter.

    Walks the statements returned by the Parser, evaluating expressions into
    Python values (float, str, bool and None for nil) and carrying out their
    side effects.

    The Environment lives as long as the Interpreter, so variables defined by
    one call to interpret() are still there on the next one. This is what lets
    the REPL build up state one line at a time.

    For example:
    tokens = Scanner("var a = 2; print a * 3;").scan_tokens()
    statements = Parser(tokens).parse()
    Interpreter().interpret(statements)
    6

    Args:
        environment: Optional[Environment]. Scope chain to run against, a new
            one holding only an empty global scope if not given.
        output: Optional[Callable[[str], None]]. Receives one line per print
            statement, defaults to the builtin print.
        diagnostics: Optional[Diagnostics]. Sink for runtime errors.
    """

    def __init__(
        self,
        environment: Optional[Environment] = None,
        output: Optional[Callable[[str], None]] = None,
        diagnostics: Optional[Diagnostics] = None,
    ) -> None:
        self.environment = environment if environment is not None else Environment()
        self.output = output if output is not None else print
        self.diagnostics = diagnostics

    def interpret(
        self, statements: List[Stmt], echo: bool = False
    ) -> List[LoxRuntimeError]:
        """Execute statements in order until they finish or one fails.

        A runtime error skips every remaining statement. It is reported to the
        Diagnostics and returned, never raised to the caller.

        Args:
            statements: List[Stmt]. Statements to execute.
            echo: bool. Also output the value of every expression statement,
                as the REPL does.

        Returns:
            errors: List[LoxRuntimeError]. The runtime error which stopped
                execution, if any.
        """

        try:
            for statement in statements:
                self.run_statement(statement, echo)
        except LoxRuntimeError as error:
            if self.diagnostics is not None:
                self.diagnostics.runtime_error(error)
            return [error]

        return []

    def run_statement(self, statement: Stmt, echo: bool = False) -> None:
        """Execute one top level statement.

        Raises:
            LoxRuntimeError: If the statement fails, including when it nests too
                deeply to evaluate on the Python stack.
        """

        try:
            if echo and isinstance(statement, Expression):
                self.output(stringify(self.evaluate(statement.expression)))
            else:
                self.execute(statement)
        except RecursionError:
            token = first_token(statement)
            if token is None:
                raise
            raise LoxRuntimeError(token, "Too much nesting.") from None

    def execute(self, stmt: Stmt) -> None:
        match stmt:
            case Block(statements):
                self.execute_block(statements)
            case Expression(expression):
                self.evaluate(expression)
            case If(condition, then_branch, else_branch):
                if is_truthy(self.evaluate(condition)):
                    self.execute(then_branch)
                elif else_branch is not None:
                    self.execute(else_branch)
            case Print(expression):
                self.output(stringify(self.evaluate(expression)))
            case Var(name, initializer):
                value = None
                if initializer is not None:
                    value = self.evaluate(initializer)

                self.environment.define(name.lexeme, value)
            case While(condition, body):
                while is_truthy(self.evaluate(condition)):
                    self.execute(body)
            case _:
                assert_never(stmt)

    def execute_block(self, statements: List[Stmt]) -> None:
        """Execute statements in a new scope nested in the current one.

        The scope is dropped when the block finishes, even if a statement in
        it raised a runtime error.
        """

        with self.environment.block():
            for statement in statements:
                self.execute(statement)

    def evaluate(self, expr: Expr) -> Value:
        match expr:
            case Literal(value):
                return value
            case Grouping(expression):
                return self.evaluate(expression)
            case Variable(name):
                return self.environment.get(name)
            case Assign(name, value):
                result = self.evaluate(value)
                self.environment.assign(name, result)
                return result
            case Logical():
                return self.evaluate_logical(expr)
            case Unary():
                return self.evaluate_unary(expr)
            case Binary():
                return self.evaluate_binary(expr)
            case _:
                assert_never(expr)

    def evaluate_logical(self, expr: Logical) -> Value:
        """Evaluate "and" / "or", returning whichever operand decided it.

        The right operand is never evaluated when the left one is enough: a
        truthy left side for "or", a falsey one for "and".
        """

        left = self.evaluate(expr.left)

        if expr.operator.type is TokenType.OR:
            if is_truthy(left):
                return left
        elif not is_truthy(left):
            return left

        return self.evaluate(expr.right)

    def evaluate_unary(self, expr: Unary) -> Value:
        right = self.evaluate(expr.right)

        match expr.operator.type:
            case TokenType.BANG:
                return not is_truthy(right)
            case TokenType.MINUS:
                if not isinstance(right, float):
                    raise LoxRuntimeError(expr.operator, "Invalid negation operand.")
                return -right
            case _:
                raise LoxRuntimeError(expr.operator, "Unknown unary operator.")

    def evaluate_binary(self, expr: Binary) -> Value:
        """Evaluate a binary operation, left operand first.

        Arithmetic and comparison need two numbers, except "+" which also
        joins two strings. Equality works on any pair of values. Division by
        zero is not an error and gives inf or nan.

        Raises:
            LoxRuntimeError: If the operands have the wrong types.
        """

        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        operator = expr.operator

        match operator.type:
            case TokenType.EQUAL_EQUAL:
                return is_equal(left, right)
            case TokenType.BANG_EQUAL:
                return not is_equal(left, right)
            case TokenType.PLUS:
                if isinstance(left, float) and isinstance(right, float):
                    return left + right
                if isinstance(left, str) and isinstance(right, str):
                    return left + right

                raise LoxRuntimeError(
                    operator, "Operands must be either two numbers or two strings."
                )

        a, b = check_number_operands(operator, left, right)

        match operator.type:
            case TokenType.GREATER:
                return a > b
            case TokenType.GREATER_EQUAL:
                return a >= b
            case TokenType.LESS:
                return a < b
            case TokenType.LESS_EQUAL:
                return a <= b
            case TokenType.MINUS:
                return a - b
            case TokenType.STAR:
                return a * b
            case TokenType.SLASH:
                return divide(a, b)
            case _:
                raise LoxRuntimeError(operator, "Unknown binary operator.")


def check_number_operands(
    operator: Token, left: Value, right: Value
) -> Tuple[float, float]:
    """Check that both operands of an operator are numbers.

    Returns:
        operands: Tuple[float, float]. The operands, narrowed to floats.

    Raises:
        LoxRuntimeError: If either operand is not a number.
    """

    if isinstance(left, float) and isinstance(right, float):
        return left, right

    raise LoxRuntimeError(operator, "Operands must be numbers.")


def divide(a: float, b: float) -> float:
    # Python raises ZeroDivisionError where IEEE 754 gives inf or nan.
    if b == 0.0:
        if a == 0.0 or isnan(a):
            return nan

        return copysign(inf, a) * copysign(1.0, b)

    return a / b


def is_truthy(value: Value) -> bool:
    """nil and false are falsey, every other value (0 and "" included) is truthy."""

    if value is None:
        return False
    if isinstance(value, bool):
        return value

    return True


def is_equal(a: Value, b: Value) -> bool:
    """Compare two values without ever raising.

    Values of different types are never equal, so unlike in Python
    true == 1 is false. Numbers follow IEEE 754, so nan is not equal to itself.
    """

    if a is None or b is None:
        return a is b
    if type(a) is not type(b):
        return False

    return a == b


def first_token(node: Union[Stmt, Expr]) -> Optional[Token]:
    """First Token found in a statement or expression, to locate an error by."""

    pending: List[Union[Stmt, Expr]] = [node]
    while pending:
        match pending.pop():
            case Var(name) | Assign(name) | Variable(name):
                return name
            case Binary(_, operator) | Logical(_, operator) | Unary(operator):
                return operator
            case Expression(expression) | Print(expression) | Grouping(expression):
                pending.append(expression)
            case Block(statements):
                pending.extend(reversed(statements))
            case If(condition, then_branch, else_branch):
                if else_branch is not None:
                    pending.append(else_branch)
                pending.extend([then_branch, condition])
            case While(condition, body):
                pending.extend([body, condition])

    return None


def stringify(value: Value) -> str:
    """Display form of a value, as written by print.

    Numbers use the shortest digits which read back as the same value, never
    in exponent form. Whole numbers drop the trailing ".0", so 4.0 displays as
    4 but 4.5 stays 4.5.
    """

    if value is None:
        return "nil"

    if isinstance(value, bool):
        return "true" if value else "false"

    if isinstance(value, float):
        if isinf(value) or isnan(value):
            return repr(value)

        text = format(Decimal(repr(value)), "f")
        if text.endswith(".0"):
            text = text[:-2]

        return text

    return value
