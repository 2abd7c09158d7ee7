"""Variable storage for a KADOM session.

A single flat, global scope: `define` inserts or overwrites, `get` fails on
names that were never defined. One instance lives for the whole program (or
REPL session) and is passed explicitly to the interpreter.
"""

from kadom.kadom_errors import KadomRuntimeError
from kadom.kadom_values import RuntimeValue


class Environment:
    """Maps variable names to runtime values."""

    def __init__(self) -> None:
        self.values: dict[str, RuntimeValue] = {}

    def define(self, name: str, value: RuntimeValue) -> None:
        self.values[name] = value

    def get(self, name: str) -> RuntimeValue:
        if name in self.values:
            return self.values[name]
        raise KadomRuntimeError(f"Undeclared variable '{name}'")

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def __len__(self) -> int:
        return len(self.values)


__all__ = ["Environment"]
