import pytest

from ayplan.action import Constant, Variable
from ayplan.functions import Function, Invocation

O1 = Constant("o1")
B = Variable("?b")


def test_function_identity_depends_on_range_type():
    as_int = Function("switch-cost", (B,), int)
    as_float = Function("switch-cost", (B,), float)
    assert as_int == Function("switch-cost", (B,), int)
    assert hash(as_int) == hash(Function("switch-cost", (B,), int))
    assert as_int != as_float


def test_function_text_names_range():
    assert str(Function("switch-cost", (B,), float)) == "(switch-cost ?b) - float"


def test_invocation_default_value_is_range_default():
    invocation = Invocation("switch-cost", (O1,), float)
    assert invocation.range_value == 0.0
    assert invocation.range_type is float


def test_invocation_rejects_variables():
    with pytest.raises(TypeError):
        Invocation("switch-cost", (B,), int, 4)


def test_with_range_value_returns_updated_copy():
    invocation = Invocation("switch-cost", (O1,), int, 2)
    updated = invocation.with_range_value(7)
    assert updated.range_value == 7
    assert invocation.range_value == 2
    assert updated.parameters == invocation.parameters


def test_invocation_equality_includes_value():
    first = Invocation("switch-cost", (O1,), int, 2)
    assert first == Invocation("switch-cost", (O1,), int, 2)
    assert first != first.with_range_value(3)
    assert len({first, Invocation("switch-cost", (O1,), int, 2)}) == 1