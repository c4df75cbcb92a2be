from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from rill.errors import RillRuntimeError


class Environment:
    """
    Stack of lexical scopes, each mapping a variable name to its integer value.

    The global scope is created with the environment and can never be popped; every block pushes
    one scope on entry and pops that same scope on exit.
    """

    def __init__(self) -> None:
        self._scopes: list[dict[str, int]] = [{}]

    @property
    def depth(self) -> int:
        return len(self._scopes)

    def push(self) -> None:
        self._scopes.append({})

    def pop(self) -> None:
        if len(self._scopes) == 1:
            raise Exception("Cannot exit from the global scope")
        self._scopes.pop()

    @contextmanager
    def scope(self) -> Iterator[None]:
        """Run the body in a fresh innermost scope, popped even when the body raises."""
        self.push()
        try:
            yield
        finally:
            self.pop()

    def define(self, name: str, value: int) -> None:
        self._scopes[-1][name] = value

    def get(self, name: str) -> int:
        for scope in reversed(self._scopes):
            if name in scope:
                return scope[name]
        raise RillRuntimeError(f"Undefined variable '{name}'")

    def assign(self, name: str, value: int) -> None:
        for scope in reversed(self._scopes):
            if name in scope:
                scope[name] = value
                return
        raise RillRuntimeError(f"Undefined variable '{name}'")
