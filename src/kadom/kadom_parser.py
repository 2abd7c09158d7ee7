"""
KADOM Language Parser

Parses KADOM tokens into a list of statement nodes.

This module implements a recursive-descent parser that climbs the precedence
levels of the expression grammar one tier per method and builds left-deep
`Binary` nodes for the left-associative operators.

Grammar
-------
    program     → declaration* EOF
    declaration → varDecl | statement
    varDecl     → "var" IDENTIFIER ( "=" expression )? ";"
    statement   → printStmt | exprStmt
    printStmt   → "print" expression ";"
    exprStmt    → expression ";"
    expression  → equality
    equality    → comparison ( ( "!=" | "==" ) comparison )*
    comparison  → term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term        → factor ( ( "-" | "+" ) factor )*
    factor      → unary ( ( "/" | "*" ) unary )*
    unary       → ( "!" | "-" ) unary | primary
    primary     → "(" expression ")" | IDENTIFIER
                | "false" | "true" | STRING | NUMBER | "nil"

Parser Behavior
---------------
- Nesting deeper than the Python stack allows is reported as a syntax error
  ("Expression nested too deeply") for the declaration it starts in.
- A broken declaration records one error and triggers panic-mode
  synchronization: tokens are discarded until a `;` has been consumed or the
  next token starts a new statement (or input ends), then parsing resumes.
- `parse()` succeeds only if no errors were recorded; otherwise every message
  is raised together in a single `ParseError`.

Entry Points
------------
- `parse(tokens)`: Parse a full token sequence into statements.
- `Parser.parse_expression()`: Parse a single expression (used by tests and tooling).

Raises
------
ParseError
    Raised when one or more declarations could not be parsed.
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
from kadom.kadom_constants import TokenKind, statement_starts
from kadom.kadom_errors import ParseError
from kadom.kadom_lexer import Token
from kadom.kadom_values import NIL


class Parser:
    """
    KADOM Parser Class

    Attributes
    ----------
    tokens : list[Token]
        The input token stream, terminated by an EOF token.
    position : int
        Current index into the token stream.
    errors : list[str]
        Syntax errors recorded so far, one per broken declaration.
    """

    def __init__(self, tokens: list[Token]) -> None:
        if not tokens or tokens[-1].kind != TokenKind.EOF:
            line = tokens[-1].line if tokens else 1
            tokens = list(tokens) + [Token(TokenKind.EOF, "", None, line)]
        self.tokens: list[Token] = tokens
        self.position: int = 0
        self.errors: list[str] = []

        # TOKEN MAPPINGS (PARSER)

        self.equality_ops = (TokenKind.BANG_EQUAL, TokenKind.EQUAL_EQUAL)
        self.comparison_ops = (
            TokenKind.GREATER,
            TokenKind.GREATER_EQUAL,
            TokenKind.LESS,
            TokenKind.LESS_EQUAL,
        )
        self.term_ops = (TokenKind.MINUS, TokenKind.PLUS)
        self.factor_ops = (TokenKind.SLASH, TokenKind.STAR)
        self.unary_ops = (TokenKind.BANG, TokenKind.MINUS)
        self.literal_kinds = (
            TokenKind.FALSE,
            TokenKind.TRUE,
            TokenKind.STRING,
            TokenKind.NUMBER,
            TokenKind.NIL,
        )

    def current(self) -> Token:
        return self.tokens[self.position]

    def previous(self) -> Token:
        return self.tokens[self.position - 1]

    def is_at_end(self) -> bool:
        return self.current().kind == TokenKind.EOF

    def advance(self) -> Token:
        if not self.is_at_end():
            self.position += 1
        return self.previous()

    def check(self, kind: TokenKind) -> bool:
        return not self.is_at_end() and self.current().kind == kind

    def match(self, *kinds: TokenKind) -> bool:
        for kind in kinds:
            if self.check(kind):
                self.advance()
                return True
        return False

    def consume(self, kind: TokenKind, message: str) -> Token:
        if self.check(kind):
            return self.advance()
        raise self.error(message)

    def error(self, message: str) -> ParseError:
        return ParseError([f"{message} on line {self.current().line}"])

    def parse(self) -> list[Stmt]:
        """Parse the whole token stream, recovering after each broken declaration."""
        statements: list[Stmt] = []
        while not self.is_at_end():
            stmt = self.parse_declaration()
            if stmt is not None:
                statements.append(stmt)
        if self.errors:
            raise ParseError(self.errors)
        return statements

    def synchronize(self) -> None:
        """Discard tokens until a statement boundary."""
        self.advance()
        while not self.is_at_end():
            if self.previous().kind == TokenKind.SEMICOLON:
                return
            if self.current().kind in statement_starts:
                return
            self.advance()

    def parse_declaration(self) -> Stmt | None:
        line = self.current().line
        try:
            if self.match(TokenKind.VAR):
                return self.parse_var_declaration()
            return self.parse_statement()
        except ParseError as e:
            self.errors.extend(e.errors)
        except RecursionError:
            self.errors.append(f"Expression nested too deeply on line {line}")
        self.synchronize()
        return None

    def parse_var_declaration(self) -> Stmt:
        name = self.consume(TokenKind.IDENTIFIER, "Expected variable name")
        initializer: Expr = Literal(NIL)
        if self.match(TokenKind.EQUAL):
            initializer = self.parse_expression()
        self.consume(TokenKind.SEMICOLON, "Expected ';' after variable declaration")
        return Var(name, initializer)

    def parse_statement(self) -> Stmt:
        if self.match(TokenKind.PRINT):
            return self.parse_print()
        return self.parse_expression_statement()

    def parse_print(self) -> Stmt:
        value = self.parse_expression()
        self.consume(TokenKind.SEMICOLON, "Expected ';' after value")
        return Print(value)

    def parse_expression_statement(self) -> Stmt:
        expr = self.parse_expression()
        self.consume(TokenKind.SEMICOLON, "Expected ';' after expression")
        return Expression(expr)

    def parse_expression(self) -> Expr:
        return self.parse_equality()

    def parse_binary(self, operand: str, operators: tuple[TokenKind, ...]) -> Expr:
        """Parse one left-associative precedence level.

        `operand` names the method parsing the next-tighter level.
        """
        sub_level = getattr(self, operand)
        expr: Expr = sub_level()
        while self.match(*operators):
            operator = self.previous()
            right = sub_level()
            expr = Binary(expr, operator, right)
        return expr

    def parse_equality(self) -> Expr:
        return self.parse_binary("parse_comparison", self.equality_ops)

    def parse_comparison(self) -> Expr:
        return self.parse_binary("parse_term", self.comparison_ops)

    def parse_term(self) -> Expr:
        return self.parse_binary("parse_factor", self.term_ops)

    def parse_factor(self) -> Expr:
        return self.parse_binary("parse_unary", self.factor_ops)

    def parse_unary(self) -> Expr:
        if self.match(*self.unary_ops):
            operator = self.previous()
            right = self.parse_unary()
            return Unary(operator, right)
        return self.parse_primary()

    def parse_primary(self) -> Expr:
        if self.match(TokenKind.LEFT_PAREN):
            expr = self.parse_expression()
            self.consume(TokenKind.RIGHT_PAREN, "Expected ')' after expression")
            return Grouping(expr)
        if self.match(TokenKind.IDENTIFIER):
            return Variable(self.previous())
        if self.match(*self.literal_kinds):
            return Literal.from_token(self.previous())
        raise self.error("Expected expression")


def parse(tokens: list[Token]) -> list[Stmt]:
    """Parse `tokens` into statements, raising ParseError with every syntax error found."""
    return Parser(tokens).parse()


__all__ = ["Parser", "parse"]
