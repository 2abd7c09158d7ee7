"""
Renders KADOM AST nodes in their canonical parenthesized (Lisp-like) form.

Expressions print operator-first, e.g. the tree for `-123 * (45.67)` prints as
`(* (- 123) (group 45.67))`. Statements print as `(print e)`, `(var name e)`
and `(; e)` for expression statements. The output is deterministic, so it is
used both for debugging (`--ast`, REPL verbose mode) and for asserting parser
output in tests.

Raises:
    NotImplementedError: If a node has no corresponding `visit_<kind>` method.
    KadomError: If the tree is nested deeper than the Python stack allows.
"""

from __future__ import annotations

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
from kadom.kadom_errors import KadomError


class AstPrinter:
    """Dispatches AST nodes to `visit_<kind>` methods that return their text form."""

    def print(self, node: Expr | Stmt) -> str:
        try:
            return self._visit(node)
        except RecursionError:
            raise KadomError("Syntax tree nested too deeply to print") from None

    def _visit(self, node: Expr | Stmt) -> str:
        method_name = f"visit_{node.kind}"
        if hasattr(self, method_name):
            return getattr(self, method_name)(node)  # type: ignore[no-any-return]
        raise NotImplementedError(f"No printer method for node kind '{node.kind}'")

    def parenthesize(self, name: str, *nodes: Expr | Stmt) -> str:
        parts = [name] + [self._visit(n) for n in nodes]
        return "(" + " ".join(parts) + ")"

    def visit_binary(self, node: Binary) -> str:
        return self.parenthesize(node.operator.lexeme, node.left, node.right)

    def visit_grouping(self, node: Grouping) -> str:
        return self.parenthesize("group", node.inner)

    def visit_literal(self, node: Literal) -> str:
        return str(node.value)

    def visit_unary(self, node: Unary) -> str:
        return self.parenthesize(node.operator.lexeme, node.right)

    def visit_variable(self, node: Variable) -> str:
        return node.name.lexeme

    def visit_expression(self, node: Expression) -> str:
        return self.parenthesize(";", node.expr)

    def visit_print(self, node: Print) -> str:
        return self.parenthesize("print", node.expr)

    def visit_var(self, node: Var) -> str:
        return self.parenthesize(f"var {node.name.lexeme}", node.initializer)


def print_ast(nodes: list[Stmt] | Expr | Stmt) -> str:
    """Render one node, or a list of statements one per line."""
    printer = AstPrinter()
    if isinstance(nodes, list):
        return "\n".join(printer.print(n) for n in nodes)
    return printer.print(nodes)


__all__ = ["AstPrinter", "print_ast"]
