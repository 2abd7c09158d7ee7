"""
Defines the abstract syntax tree (AST) node structure for the KADOM scripting language.

Expression nodes:
    Binary, Grouping, Literal, Unary, Variable

Statement nodes:
    Expression, Print, Var

Every node is an immutable dataclass that owns its children outright; the tree
is acyclic and has no back-references. Each class carries a `kind` tag used by
visitors (`AstPrinter`, `Interpreter`) to dispatch to `visit_<kind>` methods.

ASTDict:
    TypedDict shape produced by `to_dict()` for inspection in tests and debugging.

Example:
    node = Binary(Literal(Number(1.0)), Token(TokenKind.PLUS, "+", None, 1), Literal(Number(2.0)))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TypedDict, Union

from kadom.kadom_constants import TokenKind
from kadom.kadom_lexer import Token
from kadom.kadom_values import (
    FALSE,
    NIL,
    TRUE,
    Number,
    RuntimeValue,
    String,
)


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of an AST node used for serialization.

    Fields:
        kind (str): The node tag (e.g., "binary", "print").
        line (int): Line number of the node's defining token, 0 when unknown.
        operator (str): Operator lexeme for unary/binary nodes.
        name (str): Variable name for variable references and declarations.
        value (Any): Literal payload.
        left, right, inner, expr, initializer (ASTDict): Child nodes.
    """

    kind: str
    line: int
    operator: str
    name: str
    value: Any
    left: "ASTDict"
    right: "ASTDict"
    inner: "ASTDict"
    expr: "ASTDict"
    initializer: "ASTDict"


def _literal_payload(value: RuntimeValue) -> Any:
    if isinstance(value, Number):
        return value.value
    if isinstance(value, String):
        return value.value
    if value == TRUE:
        return True
    if value == FALSE:
        return False
    return None


@dataclass(frozen=True)
class Binary:
    left: Expr
    operator: Token
    right: Expr
    kind = "binary"

    def to_dict(self) -> ASTDict:
        return {
            "kind": self.kind,
            "line": self.operator.line,
            "operator": self.operator.lexeme,
            "left": self.left.to_dict(),
            "right": self.right.to_dict(),
        }


@dataclass(frozen=True)
class Grouping:
    inner: Expr
    kind = "grouping"

    def to_dict(self) -> ASTDict:
        return {"kind": self.kind, "inner": self.inner.to_dict()}


@dataclass(frozen=True)
class Literal:
    value: RuntimeValue
    kind = "literal"

    @classmethod
    def from_token(cls, token: Token) -> Literal:
        """Build a literal node from a literal-producing token.

        Raises:
            AssertionError: If `token` is not a false/true/string/number/nil token.
                The grammar only calls this after matching one of those kinds.
        """
        if token.kind == TokenKind.FALSE:
            return cls(FALSE)
        if token.kind == TokenKind.TRUE:
            return cls(TRUE)
        if token.kind == TokenKind.NIL:
            return cls(NIL)
        if token.kind == TokenKind.NUMBER and token.literal is not None:
            return cls(Number(float(token.literal.value)))
        if token.kind == TokenKind.STRING and token.literal is not None:
            return cls(String(str(token.literal.value)))
        raise AssertionError(f"Cannot build a literal from token {token!r}")

    def to_dict(self) -> ASTDict:
        return {"kind": self.kind, "value": _literal_payload(self.value)}


@dataclass(frozen=True)
class Unary:
    operator: Token
    right: Expr
    kind = "unary"

    def to_dict(self) -> ASTDict:
        return {
            "kind": self.kind,
            "line": self.operator.line,
            "operator": self.operator.lexeme,
            "right": self.right.to_dict(),
        }


@dataclass(frozen=True)
class Variable:
    name: Token
    kind = "variable"

    def to_dict(self) -> ASTDict:
        return {"kind": self.kind, "line": self.name.line, "name": self.name.lexeme}


Expr = Union[Binary, Grouping, Literal, Unary, Variable]


@dataclass(frozen=True)
class Expression:
    expr: Expr
    kind = "expression"

    def to_dict(self) -> ASTDict:
        return {"kind": self.kind, "expr": self.expr.to_dict()}


@dataclass(frozen=True)
class Print:
    expr: Expr
    kind = "print"

    def to_dict(self) -> ASTDict:
        return {"kind": self.kind, "expr": self.expr.to_dict()}


@dataclass(frozen=True)
class Var:
    name: Token
    initializer: Expr = field(default_factory=lambda: Literal(NIL))
    kind = "var"

    def to_dict(self) -> ASTDict:
        return {
            "kind": self.kind,
            "line": self.name.line,
            "name": self.name.lexeme,
            "initializer": self.initializer.to_dict(),
        }


Stmt = Union[Expression, Print, Var]

__all__ = [
    "ASTDict",
    "Binary",
    "Expr",
    "Expression",
    "Grouping",
    "Literal",
    "Print",
    "Stmt",
    "Unary",
    "Var",
    "Variable",
]
