"""
KADOM CLI Entrypoint.

This module provides the command-line interface for running KADOM source code.
It supports file execution, inline source, token/AST dumps, and interactive REPL mode.

Features:
    - Read source from a script file or an inline string.
    - Scan, parse and interpret against one environment per run.
    - Dump the token stream (`--tokens`) or the parsed statements (`--ast`).
    - Launch an interactive REPL with optional verbosity.

Example usage:
    kadom hello.kd
    kadom -s "print 1 + 2;"
    kadom -s "print -123 * (45.67);" --ast
    kadom --repl --verbose

Exit codes:
    64  usage error (more than one script argument)
    65  lexical or syntax error
    70  runtime error (or a syntax tree too deep to print)
    74  the script file could not be read

Functions:
    run_source(source, environment, show_tokens=False, show_ast=False) -> None:
        Executes the full KADOM pipeline (scan → parse → interpret) on one source text.

    run_file(path, show_tokens=False, show_ast=False) -> int:
        Runs a script file and returns the process exit code.

    main(argv=None) -> None:
        Parses CLI arguments and invokes the appropriate action.
"""

import argparse
import sys

from kadom.kadom_environment import Environment
from kadom.kadom_errors import KadomError, ParseError, ScanError
from kadom.kadom_interpreter import interpret
from kadom.kadom_lexer import scan
from kadom.kadom_parser import parse
from kadom.kadom_printer import print_ast

EXIT_USAGE = 64
EXIT_DATA_ERROR = 65
EXIT_SOFTWARE = 70
EXIT_IO_ERROR = 74


def run_source(
    source: str,
    environment: Environment,
    show_tokens: bool = False,
    show_ast: bool = False,
) -> None:
    """
    Run the KADOM pipeline on `source`: scan, parse, then interpret.

    Args:
        source (str): KADOM program text.
        environment (Environment): Variable storage; kept by the caller across runs.
        show_tokens (bool): Print the token stream instead of running. Defaults to False.
        show_ast (bool): Print the parsed statements instead of running. Defaults to False.

    Raises:
        ScanError: If the source has lexical errors.
        ParseError: If the source has syntax errors.
        KadomRuntimeError: If a statement fails while running.
        KadomError: If the `--ast` rendering is nested too deeply to print.
    """
    tokens = scan(source)
    if show_tokens:
        for tok in tokens:
            print(tok)
        return

    statements = parse(tokens)
    if show_ast:
        if statements:
            print(print_ast(statements))
        return

    interpret(environment, statements)


def run_file(path: str, show_tokens: bool = False, show_ast: bool = False) -> int:
    """
    Run a KADOM script file and report any error on stderr.

    Returns:
        int: 0 on success, otherwise one of the EXIT_* codes.
    """
    try:
        with open(path, encoding="utf-8") as f:
            source = f.read()
    except OSError as e:
        print(f"Failed to read file {path}: {e}", file=sys.stderr)
        return EXIT_IO_ERROR
    return run_string(source, show_tokens=show_tokens, show_ast=show_ast)


def run_string(source: str, show_tokens: bool = False, show_ast: bool = False) -> int:
    try:
        run_source(source, Environment(), show_tokens=show_tokens, show_ast=show_ast)
    except (ScanError, ParseError) as e:
        print(e, file=sys.stderr)
        return EXIT_DATA_ERROR
    except KadomError as e:
        print(e, file=sys.stderr)
        return EXIT_SOFTWARE
    return 0


def main(argv: list[str] | None = None) -> None:
    """
    Entry point for the KADOM CLI.

    - Launches the REPL if no script is given or `--repl` is specified.
    - Otherwise runs the script (or inline source with `-s`) and exits with its status.

    Supported flags:
        - `-s`, `--string`: Interpret the argument as source text instead of a file path.
        - `--tokens`: Print the scanned tokens and stop.
        - `--ast`: Print the parsed statements in canonical form and stop.
        - `--repl`: Launch the interactive REPL.
        - `--verbose`: Enable verbose REPL mode.
    """
    parser = argparse.ArgumentParser(prog="kadom")
    parser.add_argument("script", nargs="*", help="Script file, or raw source with -s")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret script as literal source"
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Print scanned tokens instead of running"
    )
    parser.add_argument(
        "--ast", action="store_true", help="Print the parsed AST instead of running"
    )
    parser.add_argument("--repl", action="store_true", help="Launch interactive REPL")
    parser.add_argument(
        "--verbose", action="store_true", help="Verbose REPL mode (if --repl)"
    )

    args = parser.parse_args(argv)

    if len(args.script) > 1:
        print("Usage: kadom [script]")
        sys.exit(EXIT_USAGE)

    if args.repl or not args.script:
        from kadom.kadom_repl import start_repl

        start_repl(verbose=args.verbose)
        return

    if args.string:
        status = run_string(args.script[0], show_tokens=args.tokens, show_ast=args.ast)
    else:
        status = run_file(args.script[0], show_tokens=args.tokens, show_ast=args.ast)
    if status:
        sys.exit(status)


if __name__ == "__main__":
    main()
