"""Tests for error codes and their user facing texts."""

from infixcalc import error as E


def test_every_error_class_has_a_message():
    errors = [E.MalformedNumber(), E.UnknownFunctionName(), E.UnexpectedCharacter(),
              E.UnclosedParenthesis(), E.MismatchedParenthesis(), E.EmptyParenthesis(),
              E.NestingTooDeep(), E.ArityMismatch(), E.DivisionByZero(), E.NumberTooLarge(),
              E.InvalidOperation(), E.InternalInvariantViolation(), E.ScientificError("x")]
    for error in errors:
        assert error.code in E.ERROR_MESSAGES


def test_category_from_first_digit():
    assert E.category(E.DivisionByZero()) == "Calculator Error"
    assert E.category(E.ScientificError("Square root of -1", code="2003")) == "Scientific Calculation Error"
    assert E.category(E.MathError("Settings", code="4501")) == "UI Error"
    assert E.category(E.MathError("?", code="1234")) == "Unexpected Error"


def test_describe():
    error = E.DivisionByZero(position=1, character="/", equation="5/0")
    headline, details = E.describe(error)

    assert headline == "Error 3003: Division by Zero"
    assert details.split("\n") == ["Details: Division by zero", "At position 1 ('/')", "Equation: 5/0"]


def test_str_shows_position():
    assert str(E.MalformedNumber("Bad", position=4)) == "Bad (position 4)"
    assert str(E.MalformedNumber("Bad")) == "Bad"
