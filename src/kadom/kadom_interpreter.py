"""
Tree-walking evaluator for KADOM programs.

The `Interpreter` reduces expression nodes to runtime values and executes
statement nodes for their side effects, dispatching on each node's `kind` to a
`visit_<kind>` method.

Evaluation rules:
    - Operands are evaluated left before right.
    - `==` / `!=` work on any pair of values (different kinds are simply unequal).
    - Arithmetic needs two Numbers; `+` also concatenates two Strings.
    - Relational operators compare Number/Number or String/String pairs.
    - `!` negates truthiness: false, nil, 0 and "" are falsy.
    - Division by zero follows IEEE rules (inf, -inf, NaN).
    - A statement nested deeper than the Python stack allows fails with a
      KadomRuntimeError instead of crashing.

Execution stops at the first failing statement; the error propagates as a
`KadomRuntimeError`. Earlier statements keep their effects, so variables
defined before the failure remain in the environment.

Functions:
    evaluate(expr, environment) -> RuntimeValue
    interpret(environment, statements, stdout=None) -> None
"""

from __future__ import annotations

import math
from typing import TextIO

from kadom.kadom_ast import (
    Binary,
    Expr,
    Expression,
    Grouping,
    Literal,
    Print,
    Stmt,
    Unary,
    Var,
    Variable,
)
from kadom.kadom_constants import TokenKind
from kadom.kadom_environment import Environment
from kadom.kadom_errors import KadomRuntimeError
from kadom.kadom_values import (
    Number,
    RuntimeValue,
    String,
    describe,
    from_bool,
    is_falsy,
    stringify,
    values_equal,
)

ARITHMETIC_VERBS: dict[TokenKind, str] = {
    TokenKind.PLUS: "add",
    TokenKind.MINUS: "subtract",
    TokenKind.STAR: "multiply",
    TokenKind.SLASH: "divide",
}


def _divide(left: float, right: float) -> float:
    try:
        return left / right
    except ZeroDivisionError:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)


def _arithmetic(kind: TokenKind, left: float, right: float) -> float:
    if kind == TokenKind.PLUS:
        return left + right
    if kind == TokenKind.MINUS:
        return left - right
    if kind == TokenKind.STAR:
        return left * right
    return _divide(left, right)


def _compare(kind: TokenKind, left: float | str, right: float | str) -> bool:
    if kind == TokenKind.GREATER:
        return left > right  # type: ignore[operator]
    if kind == TokenKind.GREATER_EQUAL:
        return left >= right  # type: ignore[operator]
    if kind == TokenKind.LESS:
        return left < right  # type: ignore[operator]
    return left <= right  # type: ignore[operator]


class Interpreter:
    """Evaluates KADOM statements against a persistent environment.

    Attributes:
        environment (Environment): Variable storage, shared across `interpret` calls.
        stdout (TextIO | None): Destination for `print`; None means the current `sys.stdout`.
    """

    def __init__(
        self, environment: Environment | None = None, stdout: TextIO | None = None
    ) -> None:
        self.environment = environment if environment is not None else Environment()
        self.stdout = stdout

    def interpret(self, statements: list[Stmt]) -> None:
        for stmt in statements:
            self.execute(stmt)

    def execute(self, stmt: Stmt) -> None:
        try:
            self._visit(stmt)
        except RecursionError:
            raise KadomRuntimeError("Expression nested too deeply to evaluate") from None

    def evaluate(self, expr: Expr) -> RuntimeValue:
        return self._visit(expr)  # type: ignore[no-any-return]

    def _visit(self, node: Expr | Stmt) -> RuntimeValue | None:
        method_name = f"visit_{node.kind}"
        if hasattr(self, method_name):
            return getattr(self, method_name)(node)  # type: ignore[no-any-return]
        raise NotImplementedError(f"No interpreter method for node kind '{node.kind}'")

    # Statements

    def visit_expression(self, stmt: Expression) -> None:
        self.evaluate(stmt.expr)

    def visit_print(self, stmt: Print) -> None:
        value = self.evaluate(stmt.expr)
        print(stringify(value), file=self.stdout)

    def visit_var(self, stmt: Var) -> None:
        value = self.evaluate(stmt.initializer)
        self.environment.define(stmt.name.lexeme, value)

    # Expressions

    def visit_literal(self, expr: Literal) -> RuntimeValue:
        return expr.value

    def visit_grouping(self, expr: Grouping) -> RuntimeValue:
        return self.evaluate(expr.inner)

    def visit_variable(self, expr: Variable) -> RuntimeValue:
        return self.environment.get(expr.name.lexeme)

    def visit_unary(self, expr: Unary) -> RuntimeValue:
        right = self.evaluate(expr.right)
        kind = expr.operator.kind

        if kind == TokenKind.BANG:
            return from_bool(is_falsy(right))
        if kind == TokenKind.MINUS:
            if isinstance(right, Number):
                return Number(-right.value)
            raise KadomRuntimeError(
                f"Operand of unary '-' must be a Number, got {describe(right)} on line {expr.operator.line}",
                expr.operator.line,
            )
        raise AssertionError(f"Unexpected unary operator: {expr.operator!r}")  # pragma: no cover

    def visit_binary(self, expr: Binary) -> RuntimeValue:
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        operator = expr.operator
        kind = operator.kind

        if kind == TokenKind.EQUAL_EQUAL:
            return from_bool(values_equal(left, right))
        if kind == TokenKind.BANG_EQUAL:
            return from_bool(not values_equal(left, right))

        if kind in ARITHMETIC_VERBS:
            if isinstance(left, Number) and isinstance(right, Number):
                return Number(_arithmetic(kind, left.value, right.value))
            if (
                kind == TokenKind.PLUS
                and isinstance(left, String)
                and isinstance(right, String)
            ):
                return String(left.value + right.value)
            raise KadomRuntimeError(
                f"Cannot {ARITHMETIC_VERBS[kind]} {describe(left)} and {describe(right)} on line {operator.line}",
                operator.line,
            )

        if kind in (
            TokenKind.GREATER,
            TokenKind.GREATER_EQUAL,
            TokenKind.LESS,
            TokenKind.LESS_EQUAL,
        ):
            if (isinstance(left, Number) and isinstance(right, Number)) or (
                isinstance(left, String) and isinstance(right, String)
            ):
                return from_bool(_compare(kind, left.value, right.value))

        raise KadomRuntimeError(
            f"Operator '{operator.lexeme}' cannot be evaluated for {left.kind} and {right.kind} on line {operator.line}",
            operator.line,
        )


def evaluate(expr: Expr, environment: Environment) -> RuntimeValue:
    """Reduce a single expression against `environment`."""
    return Interpreter(environment).evaluate(expr)


def interpret(
    environment: Environment, statements: list[Stmt], stdout: TextIO | None = None
) -> None:
    """Run `statements` in order, stopping at the first KadomRuntimeError."""
    Interpreter(environment, stdout).interpret(statements)


__all__ = ["Interpreter", "evaluate", "interpret"]
