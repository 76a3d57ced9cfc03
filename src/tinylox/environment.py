#!/usr/bin/env python3
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from tinylox.errors import LoxRuntimeError
from tinylox.token import Token, Value


@dataclass
class Scope:
    """Variables declared directly in one block (or the global scope).

    Args:
        enclosing: Optional[int]. Index of the parent Scope in the owning
            Environment, None for the global scope.
        values: Dict[str, Value]. Variable names mapped to their values.
    """

    enclosing: Optional[int] = None
    values: Dict[str, Value] = field(default_factory=dict)


class Environment:
    """tinylox Environment

    The chain of scopes visible from the code currently being executed, from
    the innermost block out to the global scope.

    Scopes live in a single list and refer to their parent by index rather
    than by reference. Blocks only ever nest, so the scope being left is always
    the last one in the list, and leaving it is just a pop.

    For example, while running the inner print of
    var a = 1; { var b = 2; { print a + b; } }
    scopes holds three entries: global {a}, then {b}, then the empty innermost
    scope, each enclosed by the one before it.

    Public Attributes:
        scopes: List[Scope]. Every live scope, global scope first.
        current: int. Index of the innermost scope, where definitions go.
    """

    def __init__(self) -> None:
        self.scopes: List[Scope] = [Scope()]
        self.current = 0

    @property
    def depth(self) -> int:
        """Number of block scopes currently entered, 0 at the global scope."""

        return len(self.scopes) - 1

    def define(self, name: str, value: Value) -> None:
        """Bind a name in the innermost scope.

        This always succeeds. A name already bound in the same scope is
        overwritten, and one bound in an enclosing scope is shadowed.

        Args:
            name: str. Name of the variable being defined.
            value: Value. Value to bind it to.
        """

        self.scopes[self.current].values[name] = value

    def get(self, name: Token) -> Value:
        """Look up the value of a variable.

        Args:
            name: Token. Token naming the variable.

        Returns:
            value: Value. Value from the innermost scope binding this name.

        Raises:
            LoxRuntimeError: If no scope in the chain binds this name.
        """

        return self.resolve(name).values[name.lexeme]

    def assign(self, name: Token, value: Value) -> None:
        """Change the value of an existing variable.

        The innermost binding of the name is updated in place. Assignment never
        creates a variable.

        Args:
            name: Token. Token naming the variable.
            value: Value. New value.

        Raises:
            LoxRuntimeError: If no scope in the chain binds this name.
        """

        self.resolve(name).values[name.lexeme] = value

    def resolve(self, name: Token) -> Scope:
        """Find the innermost Scope which binds a name.

        Raises:
            LoxRuntimeError: If no scope in the chain binds this name.
        """

        index: Optional[int] = self.current
        while index is not None:
            scope = self.scopes[index]
            if name.lexeme in scope.values:
                return scope

            index = scope.enclosing

        raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def push(self) -> None:
        """Enter a new, empty block scope enclosed by the current one."""

        self.scopes.append(Scope(enclosing=self.current))
        self.current = len(self.scopes) - 1

    def pop(self) -> None:
        """Leave the innermost block scope, discarding its variables.

        Raises:
            IndexError: If only the global scope is left.
        """

        scope = self.scopes[self.current]
        if scope.enclosing is None:
            raise IndexError("Cannot leave the global scope.")

        self.scopes.pop()
        self.current = scope.enclosing

    @contextmanager
    def block(self) -> Iterator[Environment]:
        """Run the body of a with statement in a new block scope.

        The scope is left however the body exits, including on a runtime error.

        with environment.block():
            environment.define("a", 1.0)
        """

        self.push()
        try:
            yield self
        finally:
            self.pop()
