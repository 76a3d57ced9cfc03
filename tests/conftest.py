import pytest

from tinylox.diagnostics import Diagnostics
from tinylox.interpreter import Interpreter
from tinylox.lox import run_source
from tinylox.token import Token
from tinylox.token_type import TokenType


@pytest.fixture
def run_lox(capsys):
    """Run a source in a fresh interpreter and return its captured output."""

    def run(source):
        diagnostics = Diagnostics()
        run_source(source, Interpreter(diagnostics=diagnostics), diagnostics)
        return capsys.readouterr()

    return run


def identifier(name, line=1):
    return Token(TokenType.IDENTIFIER, name, None, line)
