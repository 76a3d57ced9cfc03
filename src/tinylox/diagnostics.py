#!/usr/bin/env python3
import sys
from typing import List, Optional, TextIO

from tinylox.errors import LoxRuntimeError, StaticError


class Diagnostics:
    """Collector for every error reported while running a tinylox source.

    One Diagnostics instance is owned by the host (the CLI or a test) and
    passed into the Scanner, Parser and Interpreter, which report into it.
    The host inspects the flags between stages to decide whether to keep going
    and which exit code to use.

    Args:
        stream: Optional[TextIO]. Where reports are written. Defaults to
            whatever sys.stderr is at the time of the report.

    Public Attributes:
        static_errors: List[StaticError]. Scan and parse errors, in the order
            they were reported.
        runtime_errors: List[LoxRuntimeError]. Runtime errors, in the order
            they were reported.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream
        self.static_errors: List[StaticError] = []
        self.runtime_errors: List[LoxRuntimeError] = []

    @property
    def had_error(self) -> bool:
        """Whether a scan or parse error was reported since the last reset."""

        return bool(self.static_errors)

    @property
    def had_runtime_error(self) -> bool:
        return bool(self.runtime_errors)

    def static_error(self, error: StaticError) -> None:
        """Report a scan or parse error.

        Args:
            error: StaticError. Error to report.
        """

        self.static_errors.append(error)
        self.report(error.line, error.where, error.message)

    def report(self, line: int, where: str, message: str) -> None:
        """Write a static error to the stream.

        Args:
            line: int. Line number the error was found on.
            where: str. Location on the line, ie " at 'foo'" or " at end".
            message: str. Error message for the user.
        """

        self.write(f"[line {line}] Error{where}: {message}")

    def runtime_error(self, error: LoxRuntimeError) -> None:
        """Report a runtime error which aborted a run.

        Args:
            error: LoxRuntimeError. Runtime error to report to the user.
        """

        self.runtime_errors.append(error)
        self.write(f"{error.message}\n[line {error.token.line}]")

    def reset(self) -> None:
        """Forget every error, used between lines of an interactive session."""

        self.static_errors.clear()
        self.runtime_errors.clear()

    def write(self, text: str) -> None:
        print(text, file=self.stream if self.stream is not None else sys.stderr)
