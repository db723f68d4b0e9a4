"""Tests for the operator catalog."""

import pytest

from infixcalc import Operators
from infixcalc import error as E


def test_names_are_unique_and_upper_case():
    names = [op.name for op in Operators.CATALOG]
    assert len(names) == len(set(names))
    assert all(name == name.upper() for name in names)


def test_lookup_exact_ignores_case():
    assert Operators.lookup_exact("sqrt").name == "SQRT"
    assert Operators.lookup_exact("Log10").name == "LOG10"


def test_lookup_exact_unknown_name():
    with pytest.raises(E.UnknownFunctionName):
        Operators.lookup_exact("FOO")
    assert Operators.find("FOO") is None


@pytest.mark.parametrize("prefix, expected", [
    ("S", True),
    ("sq", True),
    ("SQRT", True),
    ("SQRTX", False),
    ("LOG1", True),
    ("FO", False),
    ("X", False),
])
def test_any_name_starts_with(prefix, expected):
    assert Operators.any_name_starts_with(prefix) is expected


def test_symbols_map_to_binary_operators():
    assert Operators.from_symbol("+").name == "ADD"
    assert Operators.from_symbol("×").name == "MULTIPLY"
    assert Operators.from_symbol("÷").name == "DIVIDE"
    assert Operators.from_symbol("%").name == "MOD"
    assert Operators.is_operator_symbol("^")
    assert not Operators.is_operator_symbol(",")
    with pytest.raises(E.InternalInvariantViolation):
        Operators.from_symbol("(")


def test_precedence_order():
    pow_, mul, add = (Operators.from_symbol(s) for s in "^*+")
    assert Operators.precedence_of(pow_) < Operators.precedence_of(mul) < Operators.precedence_of(add)
    assert Operators.precedence_of(Operators.from_symbol("/")) == Operators.precedence_of(mul)
    assert Operators.precedence_of(Operators.from_symbol("-")) == Operators.precedence_of(add)


def test_only_binary_operators_have_precedence():
    binary = [op.name for op in Operators.CATALOG if Operators.is_binary(op)]
    assert sorted(binary) == ["ADD", "DIVIDE", "MOD", "MULTIPLY", "POW", "SUBTRACT"]
    with pytest.raises(E.InternalInvariantViolation):
        Operators.precedence_of(Operators.lookup_exact("SIN"))


def test_associativity():
    assert Operators.associativity_of(Operators.lookup_exact("POW")) == "right"
    for name in ("ADD", "SUBTRACT", "MULTIPLY", "DIVIDE", "MOD"):
        assert Operators.associativity_of(Operators.lookup_exact(name)) == "left"


def test_arity_kinds():
    assert Operators.arity_of(Operators.lookup_exact("ROOT")) == Operators.Fixed(2)
    assert Operators.arity_of(Operators.lookup_exact("RAND")) == Operators.Fixed(0)
    assert Operators.arity_of(Operators.lookup_exact("SUM")) == Operators.VARIADIC_AT_LEAST_ONE
    assert Operators.arity_of(Operators.lookup_exact("AVGN")) == Operators.VARIADIC_WITH_COUNT
    assert Operators.arity_of(Operators.lookup_exact("PHI")) == Operators.OPTIONAL_ZERO_OR_ONE
    assert Operators.arity_of(Operators.lookup_exact("ADD")) == Operators.Fixed(2)
