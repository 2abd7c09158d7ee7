"""
Lexical analyzer for the KADOM scripting language.

This module converts raw source text into the token sequence consumed by the parser:

Classes:
    CharacterStream: Stream abstraction for reading characters with line tracking.
    ScannedLiteral: Raw literal payload carried from the lexer to the parser.
    Token: A single token with kind, lexeme, optional literal and source line.
    Lexer: Converts a CharacterStream into a sequence of tokens.

Features:
    - Skips whitespace and line comments (`// ...` through end of line)
    - Maximal-munch recognition of one- and two-character operators
    - Recognizes:
        * Identifiers and the fixed keyword set
        * Numbers (digits with an optional fractional part, read as floats)
        * Strings (double-quoted, may span lines)
        * Punctuation
    - Error recovery: unknown characters and unterminated strings are recorded
      and scanning continues; all errors are raised together at the end.

Raises:
    ScanError: From `scan()` / `Lexer.tokenize()` when any lexical error was recorded.

Example:
    >>> [str(tok) for tok in scan("print 1;")]
    ['PRINT print None', 'NUMBER 1 1.0', 'SEMICOLON ; None', 'EOF  None']

Exports:
    - CharacterStream
    - ScannedLiteral
    - Token
    - Lexer
    - scan
"""

from dataclasses import dataclass
from typing import Any

from kadom.kadom_constants import TokenKind, keywords, token_hashmap
from kadom.kadom_errors import ScanError


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_alpha(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_"


def _is_alphanumeric(ch: str) -> bool:
    return _is_alpha(ch) or _is_digit(ch)


class CharacterStream:
    """
    A utility for reading characters from a string source with line tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1):
        self.source = source
        self.position = position
        self.line = line

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            Exception: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise Exception(
                f"CharacterStreamError: Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """
        Returns the character at the given offset from the current position without advancing.

        Returns:
            str: The character at the offset, or an empty string if out of bounds.
        """
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def slice(self, start: int) -> str:
        """Returns the source text from `start` up to the current position."""
        return self.source[start : self.position]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


@dataclass(frozen=True)
class ScannedLiteral:
    """Raw literal content attached to a token.

    Attributes:
        kind (str): One of "int", "float", "string" or "identifier".
        value (int | float | str): The decoded payload.
    """

    kind: str
    value: int | float | str

    def __repr__(self) -> str:
        return repr(self.value)


class Token:
    """Represents a single lexical token in the KADOM language.

    Attributes:
        kind (TokenKind): The token category.
        lexeme (str): The exact source text the token was scanned from.
        literal (ScannedLiteral | None): Literal payload for numbers, strings and identifiers.
        line (int): The 1-based line number where the token appears.
    """

    def __init__(
        self,
        kind: TokenKind,
        lexeme: str,
        literal: ScannedLiteral | None = None,
        line: int = 0,
    ):
        self.kind = kind
        self.lexeme = lexeme
        self.literal = literal
        self.line = line

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.lexeme!r})"

    def __str__(self) -> str:
        return f"{self.kind} {self.lexeme} {self.literal!r}"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.kind == other.kind
            and self.lexeme == other.lexeme
            and self.literal == other.literal
            and self.line == other.line
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.lexeme, self.literal, self.line))


class Lexer:
    """Lexical analyzer for the KADOM language.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
        errors (list[str]): Lexical errors recorded so far.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream
        self.errors: list[str] = []

    def peek(self, offset: int = 0) -> str:
        return self.stream.peek(offset)

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        """Skips whitespace, newlines and `//` comments."""
        while not self.stream.end_of_file():
            if self.peek() in (" ", "\r", "\t", "\n"):
                self.advance()
            elif self.peek() == "/" and self.peek(1) == "/":
                self.skip_comment()
            else:
                break

    def skip_comment(self) -> None:
        """Advances through the stream until the end of a comment line."""
        while not self.stream.end_of_file() and self.peek() != "\n":
            self.advance()

    def match_operator(self) -> Token | None:
        """Matches the longest operator or punctuation lexeme at the current position."""
        line = self.stream.line
        max_token = None
        match_len = 0
        candidate = ""

        for i in range(2):
            ch = self.peek(i)
            if ch == "":
                break
            candidate += ch
            if candidate in token_hashmap:
                max_token = candidate
                match_len = i + 1

        if max_token:
            for _ in range(match_len):
                self.advance()
            return Token(token_hashmap[max_token], max_token, None, line)

        return None

    def scan_identifier(self) -> Token:
        start, line = self.stream.position, self.stream.line
        while _is_alphanumeric(self.peek()):
            self.advance()
        text = self.stream.slice(start)
        if text in keywords:
            return Token(keywords[text], text, None, line)
        return Token(TokenKind.IDENTIFIER, text, ScannedLiteral("identifier", text), line)

    def scan_number(self) -> Token:
        start, line = self.stream.position, self.stream.line
        while _is_digit(self.peek()):
            self.advance()
        # A fractional part needs at least one digit after the dot.
        if self.peek() == "." and _is_digit(self.peek(1)):
            self.advance()
            while _is_digit(self.peek()):
                self.advance()
        text = self.stream.slice(start)
        return Token(TokenKind.NUMBER, text, ScannedLiteral("float", float(text)), line)

    def scan_string(self) -> Token | None:
        """Scans a double-quoted string; returns None after recording an unterminated one."""
        start, line = self.stream.position, self.stream.line
        self.advance()  # opening quote
        while not self.stream.end_of_file() and self.peek() != '"':
            if self.peek() == "\\" and self.peek(1) == '"':
                self.advance()
            self.advance()

        if self.stream.end_of_file():
            self.errors.append(f"Unterminated string starting on line {line}")
            return None

        self.advance()  # closing quote
        text = self.stream.slice(start)
        return Token(TokenKind.STRING, text, ScannedLiteral("string", text[1:-1]), line)

    def next_token(self) -> Token:
        """Consumes and returns the next Token, recording any lexical errors on the way.

        Returns:
            Token: The next token; an EOF token with an empty lexeme at end of input.
        """
        while True:
            self.skip_whitespace()

            if self.stream.end_of_file():
                return Token(TokenKind.EOF, "", None, self.stream.line)

            ch = self.peek()

            # 1. Identifier or keyword
            if _is_alpha(ch):
                return self.scan_identifier()

            # 2. Number
            if _is_digit(ch):
                return self.scan_number()

            # 3. String
            if ch == '"':
                token = self.scan_string()
                if token is not None:
                    return token
                continue

            # 4. Operator or punctuation
            token = self.match_operator()
            if token:
                return token

            # 5. Unknown character, record and keep going
            line = self.stream.line
            self.advance()
            self.errors.append(f"Unexpected character '{ch}' on line {line}")

    def tokenize(self) -> list[Token]:
        """Scans the whole stream.

        Returns:
            list[Token]: Every token, terminated by exactly one EOF token.

        Raises:
            ScanError: If any lexical error was recorded during the pass.
        """
        tokens: list[Token] = []
        while True:
            tok = self.next_token()
            tokens.append(tok)
            if tok.kind == TokenKind.EOF:
                break
        if self.errors:
            raise ScanError(self.errors)
        return tokens


def scan(source: str) -> list[Token]:
    """Scans `source` into tokens, raising ScanError with every lexical error found."""
    return Lexer(CharacterStream(source)).tokenize()


__all__ = ["CharacterStream", "Lexer", "ScannedLiteral", "Token", "scan"]
