"""Tests for the tokenizer state machine."""

import pytest

from infixcalc import MathEngine
from infixcalc import Operands
from infixcalc import Tokenizer
from infixcalc import error as E


def tokens(text, calculation, offset=0):
    return Tokenizer.tokenize(text, calculation, offset)


def test_numbers_and_operators(calculation):
    operands, operators = tokens("2+3*4", calculation)

    assert [op.token for op in operands] == ["2", "3", "4"]
    assert [op.position for op in operands] == [0, 2, 4]
    assert [t.operator.name for t in operators] == ["ADD", "MULTIPLY"]
    assert [t.position for t in operators] == [1, 3]


@pytest.mark.parametrize("text, expected", [
    ("1.5E-3*2", ["1.5E-3", "2"]),
    ("1e+5-2", ["1E+5", "2"]),
    ("-2^2", ["-2", "2"]),
    ("2--3", ["2", "-3"]),
    (".5+1.", [".5", "1."]),
])
def test_number_tokens(calculation, text, expected):
    operands, operators = tokens(text, calculation)
    assert [op.token for op in operands] == expected
    assert len(operators) == len(operands) - 1


def test_parenthesis_and_function_operands(calculation):
    operands, operators = tokens("(1+2)*SQRT(4)", calculation)

    block, call = operands
    assert isinstance(block, Operands.SubExpression)
    assert block.text == "1+2"
    assert block.position == 1
    assert block.depth == 1

    assert isinstance(call, Operands.FunctionCall)
    assert call.operator.name == "SQRT"
    assert call.position == 6
    assert call.args_text == "4"
    assert call.args_position == 11
    assert [t.operator.name for t in operators] == ["MULTIPLY"]


def test_nested_text_is_captured_raw(calculation):
    # "1+" is only looked at when the block is evaluated
    operands, _ = tokens("(1+)*ROOT(2,(4+4))", calculation)
    assert operands[0].text == "1+"
    assert operands[1].args_text == "2,(4+4)"


def test_function_names_are_case_insensitive(calculation):
    operands, _ = tokens("sqrt(4)+Log10(10)", calculation)
    assert [op.operator.name for op in operands] == ["SQRT", "LOG10"]


def test_empty_argument_list_is_allowed(calculation):
    operands, _ = tokens("PI()", calculation)
    assert operands[0].args_text == ""


@pytest.mark.parametrize("text, error, position", [
    ("1.2.3", E.MalformedNumber, 3),
    ("1E5E2", E.MalformedNumber, 3),
    ("1E5.2", E.MalformedNumber, 3),
    ("2x", E.MalformedNumber, 1),
    ("--3", E.MalformedNumber, 1),
    ("2E+", E.MalformedNumber, 3),
    ("2(3)", E.UnexpectedCharacter, 1),
    ("*2", E.UnexpectedCharacter, 0),
    ("2+*3", E.UnexpectedCharacter, 2),
    ("FOO(1)", E.UnknownFunctionName, 1),
    ("X+1", E.UnknownFunctionName, 0),
    ("S(1)", E.UnknownFunctionName, 0),
    ("SQRT+1", E.UnexpectedCharacter, 4),
    ("SQRT.5", E.UnexpectedCharacter, 4),
    ("SQRT", E.UnexpectedCharacter, 4),
    ("2+", E.UnexpectedCharacter, 2),
    ("", E.UnexpectedCharacter, 0),
    ("(2+3", E.UnclosedParenthesis, 0),
    ("SQRT(4", E.UnclosedParenthesis, 4),
    ("2+3)", E.MismatchedParenthesis, 3),
    (")", E.MismatchedParenthesis, 0),
    ("(2))", E.MismatchedParenthesis, 3),
    ("()", E.EmptyParenthesis, 1),
    ("(2)3", E.UnexpectedCharacter, 3),
    ("2,3", E.UnexpectedCharacter, 1),
])
def test_errors_point_at_first_offending_character(calculation, text, error, position):
    with pytest.raises(error) as excinfo:
        tokens(text, calculation)
    assert excinfo.value.position == position


def test_end_of_input_has_no_character(calculation):
    with pytest.raises(E.UnexpectedCharacter) as excinfo:
        tokens("2*", calculation)
    assert excinfo.value.character == ""


def test_offset_shifts_positions(calculation):
    with pytest.raises(E.UnexpectedCharacter) as excinfo:
        tokens("1+", calculation, offset=5)
    assert excinfo.value.position == 7


def test_nesting_limit_is_checked_while_scanning(settings):
    calculation = MathEngine.Calculation("", {**settings, "max_nesting_depth": 3})

    tokens("(((1)))", calculation)
    with pytest.raises(E.NestingTooDeep) as excinfo:
        tokens("((((1))))", calculation)
    assert excinfo.value.position == 3
