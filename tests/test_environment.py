import pytest
from hypothesis import given
from hypothesis import strategies as st

from kadom.kadom_environment import Environment
from kadom.kadom_errors import KadomRuntimeError
from kadom.kadom_values import NIL, Number, String


def test_define_then_get(environment: Environment) -> None:
    environment.define("x", Number(5.0))
    assert environment.get("x") == Number(5.0)
    assert "x" in environment
    assert len(environment) == 1


def test_redefine_overwrites(environment: Environment) -> None:
    environment.define("x", Number(5.0))
    environment.define("x", String("five"))
    assert environment.get("x") == String("five")
    assert len(environment) == 1


def test_nil_is_a_real_binding(environment: Environment) -> None:
    environment.define("empty", NIL)
    assert environment.get("empty") == NIL


def test_undeclared_variable(environment: Environment) -> None:
    with pytest.raises(KadomRuntimeError, match="Undeclared variable 'ghost'"):
        environment.get("ghost")
    assert "ghost" not in environment


@given(st.dictionaries(st.text(min_size=1, max_size=8), st.floats(allow_nan=False)))  # type: ignore[misc]
def test_last_definition_wins(bindings: dict[str, float]) -> None:
    env = Environment()
    for name, value in bindings.items():
        env.define(name, Number(-value))
        env.define(name, Number(value))
    for name, value in bindings.items():
        assert env.get(name) == Number(value)
