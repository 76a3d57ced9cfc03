#!/usr/bin/env python3
import sys
from pathlib import Path
from typing import List, Optional

from tinylox.ast_printer import AstPrinter
from tinylox.diagnostics import Diagnostics
from tinylox.interpreter import Interpreter
from tinylox.lox import parse, run, run_source, scan

__all__ = [
    "main",
    "parse",
    "print_ast",
    "run",
    "run_file",
    "run_prompt",
    "run_source",
    "scan",
]


def main(args: Optional[List[str]] = None) -> None:
    """Main entrypoint for the tinylox interpreter.

    This function is invoked by "python -m tinylox" or the tinylox CLI
    entrypoint.

    With no arguments it will start an interactive REPL.

    If the argument is a file, it will be executed by the interpreter.

    Otherwise, the following commands are provided:
    tinylox run_prompt <- Run the interactive REPL
    tinylox run <source_or_stdin> <- Execute a source string, - for stdin.
    tinylox run_file <file> <- Read a source at a given path and execute it.
    tinylox print_ast <file> <- Read a source at a given path and print the AST.

    Args:
        args: Optional[List[str]]. Command line arguments, without the program
            name. Defaults to sys.argv.
    """

    if args is None:
        args = sys.argv[1:]

    if len(args) == 1:
        if args[0] == "run_prompt":
            run_prompt()
            return

        run_file(args[0])
    elif len(args) == 2:
        command = args[0]
        match command:
            case "run":
                source = args[1]
                if source == "-":
                    try:
                        source = sys.stdin.read()
                    except KeyboardInterrupt:
                        return

                exit_for(run_text(source))
            case "run_file":
                run_file(args[1])
            case "print_ast":
                print_ast(args[1])
            case _:
                print(f"unrecognized command: {command}", file=sys.stderr)
                sys.exit(66)
    elif len(args) > 2:
        print("Usage: tinylox [command] [script]")
        sys.exit(64)
    else:
        run_prompt()


def read_script(path: str) -> str:
    script_path = Path(path)
    if not script_path.exists():
        print(f"File at {script_path} not found", file=sys.stderr)
        sys.exit(66)

    return script_path.read_text()


def run_text(source: str) -> Diagnostics:
    """Run a whole program in a fresh interpreter."""

    diagnostics = Diagnostics()
    run_source(source, Interpreter(diagnostics=diagnostics), diagnostics)
    return diagnostics


def exit_for(diagnostics: Diagnostics) -> None:
    # Indicate an error in the exit code.
    if diagnostics.had_error:
        sys.exit(65)
    elif diagnostics.had_runtime_error:
        sys.exit(70)


def run_file(path: str) -> None:
    exit_for(run_text(read_script(path)))


def run_prompt() -> None:
    """Read, run and echo one line at a time until an empty line or EOF.

    Variables persist from line to line, while a syntax error only affects
    the line it is on.
    """

    diagnostics = Diagnostics()
    interpreter = Interpreter(diagnostics=diagnostics)

    try:
        while True:
            line = input("> ")

            if not line:
                break

            run_source(line, interpreter, diagnostics, echo=True)

            # Reset error flag since this is an interactive session.
            diagnostics.reset()
    except (EOFError, KeyboardInterrupt):
        return


def print_ast(path: str) -> None:
    diagnostics = Diagnostics()

    tokens, _ = scan(read_script(path), diagnostics)
    statements, _ = parse(tokens, diagnostics)

    # Stop if there was a syntax error
    if diagnostics.had_error:
        sys.exit(65)

    printer = AstPrinter()
    for i, statement in enumerate(statements, 1):
        try:
            text = printer.print(statement)
        except RecursionError:
            print(f"{i}: Too much nesting.", file=sys.stderr)
            sys.exit(70)

        print(f"{i}: {text}")
