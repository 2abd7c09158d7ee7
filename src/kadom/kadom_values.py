"""Runtime values for the KADOM interpreter.

Every value the evaluator produces is one of five immutable variants:
`Number`, `String`, `TrueValue`, `FalseValue` and `NilValue`. Values of
different variants never compare equal, so
`Number(1.0) != String("1")`. The boolean and nil variants carry no data; the
module-level singletons `TRUE`, `FALSE` and `NIL` are used throughout.
Language-level `==` goes through `values_equal`, which applies IEEE rules to
numbers.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Union


@dataclass(frozen=True)
class Number:
    """A 64-bit IEEE float."""

    value: float
    kind = "Number"

    def __str__(self) -> str:
        return format_number(self.value)


@dataclass(frozen=True)
class String:
    value: str
    kind = "String"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TrueValue:
    kind = "True"

    def __str__(self) -> str:
        return "true"


@dataclass(frozen=True)
class FalseValue:
    kind = "False"

    def __str__(self) -> str:
        return "false"


@dataclass(frozen=True)
class NilValue:
    kind = "Nil"

    def __str__(self) -> str:
        return "nil"


RuntimeValue = Union[Number, String, TrueValue, FalseValue, NilValue]

TRUE = TrueValue()
FALSE = FalseValue()
NIL = NilValue()


def from_bool(flag: bool) -> RuntimeValue:
    return TRUE if flag else FALSE


def values_equal(left: RuntimeValue, right: RuntimeValue) -> bool:
    """IEEE equality for numbers (`NaN` is unequal to itself), structural otherwise."""
    if isinstance(left, Number) and isinstance(right, Number):
        return left.value == right.value
    return left == right


def is_falsy(value: RuntimeValue) -> bool:
    """Return True when `value` counts as false for logical negation.

    `false`, `nil`, the number zero and the empty string are falsy; every
    other value is truthy.
    """
    if isinstance(value, (FalseValue, NilValue)):
        return True
    if isinstance(value, Number):
        return value.value == 0
    if isinstance(value, String):
        return value.value == ""
    return False


def format_number(number: float) -> str:
    """Render a float in its shortest round-trip decimal form.

    Integral values drop the fractional part (`7.0` prints as `7`) and the
    sign of negative zero is kept (`-0`). Other values never use exponent
    notation: `1e-07` prints as `0.0000001`.
    """
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    if number == 0:
        return "-0" if math.copysign(1.0, number) < 0 else "0"
    if number.is_integer():
        return str(int(number))
    return format(Decimal(repr(number)), "f")


def describe(value: RuntimeValue) -> str:
    """Kind plus rendered value, used in error messages (e.g. `String "a"`)."""
    if isinstance(value, String):
        return f'String "{value.value}"'
    if isinstance(value, Number):
        return f"Number {value}"
    return value.kind


def stringify(value: RuntimeValue) -> str:
    return str(value)


__all__ = [
    "FALSE",
    "NIL",
    "TRUE",
    "FalseValue",
    "NilValue",
    "Number",
    "RuntimeValue",
    "String",
    "TrueValue",
    "describe",
    "format_number",
    "from_bool",
    "is_falsy",
    "stringify",
    "values_equal",
]
