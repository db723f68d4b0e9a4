import decimal
from contextlib import contextmanager


class MathError(Exception):
    def __init__(self, message, code="9999", equation=None, position=None, character=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation
        self.position = position
        self.character = character

    def __str__(self):
        if self.position is None:
            return self.message
        return f"{self.message} (position {self.position})"


# --- Categories ---

class ParseError(MathError):
    pass

class CalculationError(MathError):
    pass

class ScientificError(MathError):
    """Domain errors raised by the function library (codes 2xxx)."""
    def __init__(self, message, code="2004", **kwargs):
        super().__init__(message, code=code, **kwargs)


# --- Parse errors: raised at the first offending character ---

class MalformedNumber(ParseError):
    def __init__(self, message="Number wrongly formatted", **kwargs):
        super().__init__(message, code="3008", **kwargs)

class UnknownFunctionName(ParseError):
    def __init__(self, message="No function with that name", **kwargs):
        super().__init__(message, code="3031", **kwargs)

class UnexpectedCharacter(ParseError):
    def __init__(self, message="Unexpected character", **kwargs):
        super().__init__(message, code="3011", **kwargs)

class UnclosedParenthesis(ParseError):
    def __init__(self, message="Unclosed parenthesis", **kwargs):
        super().__init__(message, code="3009", **kwargs)

class MismatchedParenthesis(ParseError):
    def __init__(self, message="Opening and closing parenthesis don't match", **kwargs):
        super().__init__(message, code="3010", **kwargs)

class EmptyParenthesis(ParseError):
    def __init__(self, message="Nothing inside a parenthesis", **kwargs):
        super().__init__(message, code="3023", **kwargs)

class NestingTooDeep(ParseError):
    def __init__(self, message="Parentheses nested too deeply", **kwargs):
        super().__init__(message, code="3032", **kwargs)


# --- Calculation errors: raised while reducing ---

class ArityMismatch(CalculationError):
    def __init__(self, message="Wrong number of arguments", **kwargs):
        super().__init__(message, code="3033", **kwargs)

class DivisionByZero(CalculationError):
    def __init__(self, message="Division by zero", **kwargs):
        super().__init__(message, code="3003", **kwargs)

class NumberTooLarge(CalculationError):
    def __init__(self, message="Number too large (Arithmetic overflow).", **kwargs):
        super().__init__(message, code="3026", **kwargs)

class InvalidOperation(CalculationError):
    def __init__(self, message="Result is not a real number", **kwargs):
        super().__init__(message, code="3027", **kwargs)


class InternalInvariantViolation(MathError):
    """A state that must be unreachable was reached. Always a bug."""
    def __init__(self, message="Wrongly coded", **kwargs):
        super().__init__(message, code="3720", **kwargs)




Error_Dictionary= {

    "2" : "Scientific Calculation Error",
    "3" : "Calculator Error",
    "4" : "UI Error",
    "5" : "Configuration Error",
    "9" : "Unexpected Error"

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number



ERROR_MESSAGES = {
    "2001" : "Logarithm of a non-positive number.",
    "2002" : "Invalid base in logarithm.",
    "2003" : "Square root of a negative number.",
    "2004" : "Unable to identify given Operation.",
    "2005" : "Factorial needs a non-negative integer up to 10000.",
    "2006" : "Argument outside of [-1, 1].",
    "2007" : "Tangent is undefined here.",
    "2008" : "Invalid number of digits for constant.",
    "2009" : "No real solution.",
    "2010" : "Sides don't form a triangle.",
    "2011" : "Leg is longer than the hypotenuse.",
    "2012" : "Invalid root index.",
    "2013" : "Negative radius.",


    "3003" : "Division by Zero",
    "3008" : "Number wrongly formatted.",
    "3009" : "Missing ')'.",
    "3010" : "Parentheses don't match.",
    "3011" : "Unexpected Token.",
    "3023" : "Nothing inside '()'.",
    "3026" : "Number too big.",
    "3027" : "Result is not a real number.",
    "3031" : "Unknown function.",
    "3032" : "Expression nested too deeply.",
    "3033" : "Wrong number of arguments.",
    "3720" : "Internal error, please report.",


    "4002" : "Calculation already Running!",
    "4003" : "No value in Ans yet.",
    "4501" : "Not all Settings could be saved.",


    "9999" : "Unexpected Error."
}


def category(error):
    """Main error group from the first digit of the code, e.g. "Calculator Error"."""
    return Error_Dictionary.get(str(error.code)[:1], Error_Dictionary["9"])


def describe(error):
    """Return (headline, details) for showing a MathError to the user."""
    headline = f"Error {error.code}: {ERROR_MESSAGES.get(error.code, 'Unknown error')}"
    details = f"Details: {error.message}"
    if error.position is not None:
        shown = repr(error.character) if error.character else "end of input"
        details += f"\nAt position {error.position} ({shown})"
    if error.equation is not None:
        details += f"\nEquation: {error.equation}"
    return headline, details


@contextmanager
def decimal_signals(position=None, character=None):
    """Turn the signals of the decimal context into calculator errors."""
    try:
        yield
    except ZeroDivisionError:
        # decimal.DivisionByZero and decimal.DivisionUndefined (0/0)
        raise DivisionByZero(position=position, character=character)
    except decimal.Overflow:
        raise NumberTooLarge(position=position, character=character)
    except decimal.InvalidOperation:
        raise InvalidOperation(position=position, character=character)
