#!/usr/bin/env python3
from typing import Callable, List, Optional, Tuple

from tinylox.diagnostics import Diagnostics
from tinylox.environment import Environment
from tinylox.errors import LoxRuntimeError, ParseError, ScanError
from tinylox.interpreter import Interpreter
from tinylox.parser import Parser
from tinylox.scanner import Scanner
from tinylox.stmt import Stmt
from tinylox.token import Token

# Entry points into the tinylox pipeline, one per stage. Data only flows
# forward: source text -> Tokens -> statements -> side effects. Every stage
# reports its errors to the Diagnostics it is given and also returns them, so
# callers may use whichever is more convenient.


def scan(
    source: str, diagnostics: Optional[Diagnostics] = None
) -> Tuple[List[Token], List[ScanError]]:
    """Scan a source text into Tokens.

    Returns:
        result: Tuple[List[Token], List[ScanError]]. Tokens ending with EOF, and
            every scan error found along the way.
    """

    scanner = Scanner(source, diagnostics)
    tokens = scanner.scan_tokens()
    return tokens, scanner.errors


def parse(
    tokens: List[Token], diagnostics: Optional[Diagnostics] = None
) -> Tuple[List[Stmt], List[ParseError]]:
    """Parse Tokens into statements.

    Returns:
        result: Tuple[List[Stmt], List[ParseError]]. Statements which parsed,
            and the errors for the ones which did not.
    """

    parser = Parser(tokens, diagnostics)
    statements = parser.parse()
    return statements, parser.errors


def run(
    statements: List[Stmt],
    environment: Optional[Environment] = None,
    output: Optional[Callable[[str], None]] = None,
    diagnostics: Optional[Diagnostics] = None,
) -> List[LoxRuntimeError]:
    """Execute statements against an Environment.

    Pass the same Environment to successive calls to keep variables between
    them.

    Returns:
        errors: List[LoxRuntimeError]. The runtime error which stopped
            execution, if any.
    """

    return Interpreter(environment, output, diagnostics).interpret(statements)


def run_source(
    source: str,
    interpreter: Interpreter,
    diagnostics: Diagnostics,
    echo: bool = False,
) -> None:
    """Run a source text through every stage of the pipeline.

    Any scan or parse error, including one reported earlier to the same
    Diagnostics and not yet reset, means nothing is executed.

    Args:
        source: str. Source text to run.
        interpreter: Interpreter. Interpreter (and so Environment) to run it in.
        diagnostics: Diagnostics. Sink for errors from every stage.
        echo: bool. Output the values of expression statements, for the REPL.
    """

    tokens, _ = scan(source, diagnostics)
    statements, _ = parse(tokens, diagnostics)

    # Stop if there was a syntax error
    if diagnostics.had_error:
        return

    errors = interpreter.interpret(statements, echo=echo)

    # An Interpreter built without Diagnostics only returns its errors.
    if interpreter.diagnostics is None:
        for error in errors:
            diagnostics.runtime_error(error)
