"""
Exception taxonomy for the KADOM interpreter.

Classes:
    - KadomError: Base class for every user-facing failure.
    - ScanError: One or more lexical errors collected during a full scan.
    - ParseError: One or more syntax errors collected during a full parse.
    - KadomRuntimeError: The first runtime/type error raised while evaluating.

Scan and parse errors are reported in bulk: the stage keeps going after the
first problem and raises once, carrying every message in `errors`.
"""


class KadomError(Exception):
    """Base class for errors surfaced to the KADOM driver."""


class _CollectedError(KadomError):
    """A stage failure that carries every message recorded during the pass.

    Attributes:
        errors (list[str]): The individual messages, in source order.
    """

    def __init__(self, errors: list[str]):
        super().__init__("\n".join(errors))
        self.errors = list(errors)


class ScanError(_CollectedError):
    """Raised by the lexer after a full pass that recorded lexical errors.

    Example:
        raise ScanError(["Unexpected character '@' on line 1"])
    """


class ParseError(_CollectedError):
    """Raised by the parser once every declaration has been attempted.

    Also used internally to unwind out of a single broken declaration, in
    which case `errors` holds exactly one message.
    """


class KadomRuntimeError(KadomError):
    """Raised when evaluation fails (type mismatch, undeclared variable).

    Attributes:
        line (int | None): Source line of the offending operator, when known.
    """

    def __init__(self, message: str, line: int | None = None):
        super().__init__(message)
        self.line = line


__all__ = ["KadomError", "KadomRuntimeError", "ParseError", "ScanError"]
