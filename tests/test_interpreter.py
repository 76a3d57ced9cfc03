import math

import pytest

from tinylox.diagnostics import Diagnostics
from tinylox.environment import Environment
from tinylox.interpreter import Interpreter, is_equal, is_truthy, stringify
from tinylox.lox import parse, run, scan


def statements_of(source):
    tokens, _ = scan(source)
    statements, errors = parse(tokens)
    assert errors == []
    return statements


def output_of(source):
    lines = []
    errors = Interpreter(output=lines.append).interpret(statements_of(source))
    assert errors == []
    return lines


def test_arithmetic():
    assert output_of("print 1 + 2;") == ["3"]
    assert output_of("print 2 * 3 - 4 / 8;") == ["5.5"]
    assert output_of("print -(1 + 2);") == ["-3"]
    assert output_of("print 10 / 4;") == ["2.5"]


def test_division_by_zero_follows_ieee():
    assert output_of("print 1 / 0; print -1 / 0; print 0 / 0;") == [
        "inf",
        "-inf",
        "nan",
    ]


def test_string_concatenation():
    assert output_of('print "foo" + "bar";') == ["foobar"]


def test_comparison():
    assert output_of("print 1 < 2; print 2 <= 2; print 1 > 2; print 3 >= 4;") == [
        "true",
        "true",
        "false",
        "false",
    ]


def test_equality_across_types():
    source = (
        'print "a" == "a"; print nil == false; print nil == nil; '
        'print 1 == "1"; print true == 1; print 0 == false; print 1 != 2;'
    )
    assert output_of(source) == [
        "true",
        "false",
        "true",
        "false",
        "false",
        "false",
        "true",
    ]


def test_not_uses_truthiness():
    assert output_of('print !nil; print !0; print !""; print !!true;') == [
        "true",
        "false",
        "false",
        "true",
    ]


def test_logical_operators_return_deciding_operand():
    assert output_of('print nil or "x"; print 1 and 2; print false and 1;') == [
        "x",
        "2",
        "false",
    ]


def test_short_circuit_skips_right_operand():
    source = """
    var calls = 0;
    false and (calls = calls + 1);
    true or (calls = calls + 1);
    nil and undefined;
    print calls;
    true and (calls = calls + 1);
    false or (calls = calls + 1);
    print calls;
    """
    assert output_of(source) == ["0", "2"]


def test_var_redeclaration():
    assert output_of('var a = "foo"; var a = "bar"; print a;') == ["bar"]


def test_uninitialized_variable_is_nil():
    assert output_of("var a; print a;") == ["nil"]


def test_assignment_is_an_expression():
    assert output_of("var a; var b; a = b = 3; print a + b;") == ["6"]


def test_while_loop():
    assert output_of("var x = 0; while (x < 3) { print x; x = x + 1; }") == [
        "0",
        "1",
        "2",
    ]


def test_for_loop():
    source = "for (var i = 0; i < 3; i = i + 1) print i * i;"
    assert output_of(source) == ["0", "1", "4"]


def test_if_else():
    source = 'if (1 > 2) print "then"; else print "else"; if (nil) print "no";'
    assert output_of(source) == ["else"]


def test_block_scoping_and_shadowing():
    source = """
    var a = "global";
    {
        var a = "outer";
        {
            var a = "inner";
            print a;
        }
        print a;
    }
    print a;
    """
    assert output_of(source) == ["inner", "outer", "global"]


def test_assignment_in_block_changes_enclosing_variable():
    assert output_of("var a = 1; { a = 2; } print a;") == ["2"]


@pytest.mark.parametrize(
    "source, message",
    [
        ('print 1 + "a";', "Operands must be either two numbers or two strings."),
        ("print nil + nil;", "Operands must be either two numbers or two strings."),
        ('print 1 < "a";', "Operands must be numbers."),
        ("print true * 2;", "Operands must be numbers."),
        ('print -"a";', "Invalid negation operand."),
        ("print x;", "Undefined variable 'x'."),
        ("x = 1;", "Undefined variable 'x'."),
    ],
)
def test_runtime_errors(source, message):
    diagnostics = Diagnostics()
    interpreter = Interpreter(output=lambda text: None, diagnostics=diagnostics)
    errors = interpreter.interpret(statements_of(source))

    assert [error.message for error in errors] == [message]
    assert diagnostics.runtime_errors == errors


def test_runtime_error_aborts_remaining_statements(capsys):
    diagnostics = Diagnostics()
    Interpreter(diagnostics=diagnostics).interpret(
        statements_of("print 1;\nprint x;\nprint 2;")
    )

    captured = capsys.readouterr()
    assert captured.out == "1\n"
    assert captured.err == "Undefined variable 'x'.\n[line 2]\n"
    assert diagnostics.had_runtime_error


def test_environment_is_restored_after_error_in_block():
    environment = Environment()
    interpreter = Interpreter(environment, output=lambda text: None)

    errors = interpreter.interpret(statements_of("{ var a = 1; { print b; } }"))

    assert len(errors) == 1
    assert environment.depth == 0
    assert environment.scopes[0].values == {}


def test_block_assignment_does_not_leak_into_enclosing_scope():
    environment = Environment()
    errors = run(
        statements_of('{ var x = "inner"; x = "changed"; } print x;'),
        environment,
        output=lambda text: None,
    )

    assert [error.message for error in errors] == ["Undefined variable 'x'."]
    assert environment.scopes[0].values == {}


def test_state_persists_across_runs():
    environment = Environment()
    lines = []

    run(statements_of("var count = 1;"), environment, lines.append)
    run(statements_of("count = count + 1;"), environment, lines.append)
    run(statements_of("print count;"), environment, lines.append)

    assert lines == ["2"]


def test_recovered_program_runs_every_valid_statement():
    tokens, _ = scan("1 +; print 1; print 2; print 3;")
    statements, errors = parse(tokens)
    lines = []

    assert len(errors) == 1
    assert run(statements, output=lines.append) == []
    assert lines == ["1", "2", "3"]


def test_echo_outputs_expression_statement_values():
    lines = []
    interpreter = Interpreter(output=lines.append)
    interpreter.interpret(statements_of("var a = 2; a * 2; print a;"), echo=True)
    assert lines == ["4", "2"]


@pytest.mark.parametrize(
    "value, text",
    [
        (None, "nil"),
        (True, "true"),
        (False, "false"),
        (4.0, "4"),
        (4.5, "4.5"),
        (-0.0, "-0"),
        (0.1 + 0.2, "0.30000000000000004"),
        (1e16, "10000000000000000"),
        (0.00001, "0.00001"),
        (math.inf, "inf"),
        (-math.inf, "-inf"),
        ("plain text", "plain text"),
        ("", ""),
    ],
)
def test_stringify(value, text):
    assert stringify(value) == text


def test_truthiness():
    assert not is_truthy(None)
    assert not is_truthy(False)
    assert is_truthy(True)
    assert is_truthy(0.0)
    assert is_truthy("")


def test_nan_is_not_equal_to_itself():
    assert not is_equal(math.nan, math.nan)
    assert is_equal(None, None)
    assert not is_equal(None, False)
    assert not is_equal(1.0, True)


def test_numbers_print_without_exponent():
    assert output_of("print 10000000000000000; print 0.00001;") == [
        "10000000000000000",
        "0.00001",
    ]


def test_deep_expression_is_a_runtime_error(capsys):
    diagnostics = Diagnostics()
    interpreter = Interpreter(diagnostics=diagnostics)
    errors = interpreter.interpret(
        statements_of("print " + " + ".join(["1"] * 5000) + ";")
    )

    assert [error.message for error in errors] == ["Too much nesting."]
    assert capsys.readouterr().err == "Too much nesting.\n[line 1]\n"
    assert interpreter.environment.depth == 0

    interpreter.interpret(statements_of("print 1;"))
    assert capsys.readouterr().out == "1\n"
