"""
Interactive prompt for KADOM.

Each input line is scanned, parsed and run against one `Environment` that lives
for the whole session, so `var x = 1;` on one line is visible on the next.
Failures are printed and the loop continues with the next line.

Commands:
    exit, quit      Leave the REPL (EOF and Ctrl-C also leave).
    verbose-mode    Toggle echoing of tokens and parsed statements.

Expression statements echo their value, so `1 + 2;` prints `3`.
"""

import io
import traceback

from kadom.kadom_ast import Expression
from kadom.kadom_environment import Environment
from kadom.kadom_errors import KadomError
from kadom.kadom_interpreter import Interpreter
from kadom.kadom_lexer import scan
from kadom.kadom_parser import parse
from kadom.kadom_printer import print_ast
from kadom.kadom_values import stringify

PROMPT = "> "


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def run_line(src: str, interpreter: Interpreter, verbose: bool = False) -> None:
    """Run one REPL input against the session interpreter.

    Raises:
        KadomError: Any scan, parse or runtime failure, for the caller to report.
    """
    tokens = scan(src)
    if verbose:
        print(f"[tokens] >>> {' '.join(str(tok.kind) for tok in tokens)}")

    statements = parse(tokens)
    if verbose:
        print(f"[ast] >>> {print_ast(statements)}")

    for stmt in statements:
        if isinstance(stmt, Expression):
            print(stringify(interpreter.evaluate(stmt.expr)))
        else:
            interpreter.execute(stmt)


def start_repl(verbose: bool = False, environment: Environment | None = None) -> None:
    print("Kadom REPL. Type 'exit' or 'quit' to leave.")
    interpreter = Interpreter(environment)

    while True:
        try:
            src = input(PROMPT).strip()
            if src in ("exit", "quit"):
                print("Exiting Kadom REPL.")
                return
            if not src:
                continue
            if src.lower() == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue

            try:
                run_line(src, interpreter, verbose=verbose)
            except KadomError as e:
                print(f"[error] >>> {e}")
            except Exception:
                print_traceback()

        except (KeyboardInterrupt, EOFError):
            print("\nExiting Kadom REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
