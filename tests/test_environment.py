import pytest
from conftest import identifier

from tinylox.environment import Environment
from tinylox.errors import LoxRuntimeError


def test_define_and_get():
    environment = Environment()
    environment.define("a", 1.0)
    assert environment.get(identifier("a")) == 1.0


def test_define_overwrites_in_same_scope():
    environment = Environment()
    environment.define("a", "foo")
    environment.define("a", "bar")
    assert environment.get(identifier("a")) == "bar"


def test_get_undefined_variable():
    with pytest.raises(LoxRuntimeError) as excinfo:
        Environment().get(identifier("missing", line=3))

    assert excinfo.value.message == "Undefined variable 'missing'."
    assert excinfo.value.token.line == 3


def test_assign_never_creates_a_variable():
    environment = Environment()

    with pytest.raises(LoxRuntimeError, match="Undefined variable 'a'."):
        environment.assign(identifier("a"), 1.0)

    assert environment.scopes[0].values == {}


def test_lookup_walks_out_to_enclosing_scopes():
    environment = Environment()
    environment.define("a", "global")

    with environment.block():
        with environment.block():
            assert environment.depth == 2
            assert environment.get(identifier("a")) == "global"


def test_shadowing_and_restoring():
    environment = Environment()
    environment.define("a", "outer")

    with environment.block():
        environment.define("a", "inner")
        assert environment.get(identifier("a")) == "inner"

    assert environment.depth == 0
    assert environment.get(identifier("a")) == "outer"


def test_assign_updates_innermost_binding():
    environment = Environment()
    environment.define("a", 1.0)

    with environment.block():
        environment.assign(identifier("a"), 2.0)
        assert environment.scopes[-1].values == {}

    assert environment.get(identifier("a")) == 2.0


def test_block_variables_are_discarded():
    environment = Environment()

    with environment.block():
        environment.define("b", True)
        environment.assign(identifier("b"), False)

    with pytest.raises(LoxRuntimeError):
        environment.get(identifier("b"))
    assert environment.scopes[0].values == {}


def test_block_is_left_on_error():
    environment = Environment()

    with pytest.raises(LoxRuntimeError):
        with environment.block():
            environment.define("c", None)
            environment.get(identifier("missing"))

    assert environment.depth == 0
    assert environment.current == 0


def test_nil_is_a_defined_value():
    environment = Environment()
    environment.define("n", None)
    assert environment.get(identifier("n")) is None


def test_cannot_leave_global_scope():
    with pytest.raises(IndexError):
        Environment().pop()


def test_cannot_leave_global_scope_after_leaving_blocks():
    environment = Environment()
    environment.push()
    environment.pop()
    assert environment.depth == 0

    with pytest.raises(IndexError):
        environment.pop()
