# MathEngine.py
"""""
Core calculation engine of the calculator.

Pipeline
--------
1) Whitespace is removed; positions in errors refer to the remaining text.
2) Tokenizer: a state machine splits the text into operands and operators.
   Parenthesised blocks and function arguments become operands that are
   tokenized on their own when their value is needed.
3) Reducer: applies the operators by precedence until one Decimal is left.
4) Formatter: renders the Decimal using the user's preferences.

Every evaluation runs in its own decimal context with `precision`
significant digits and ROUND_HALF_EVEN. Literals are taken exactly; every
computed value, powers included, is rounded to that precision.
"""""

import decimal
import fractions
from decimal import Decimal, Context, localcontext, ROUND_HALF_EVEN

from . import config_manager
from . import ScientificEngine
from . import Tokenizer
from . import Reducer
from . import error as E


# -----------------------------
# Utilities / small helpers
# -----------------------------

def isInt(zahl):
    """Return True if the given value can be parsed as int; else False."""
    try:
        int(zahl)
        return True
    except (TypeError, ValueError):
        return False


def strip_whitespace(problem):
    return "".join(problem.split())


def decimal_context(precision):
    """Context every calculation runs in. Traps instead of producing NaN/Infinity."""
    return Context(prec=precision, rounding=ROUND_HALF_EVEN,
                   Emax=999999, Emin=-999999,
                   traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow])


# -----------------------------
# Calculation
# -----------------------------

class Calculation:
    """State shared by all nesting levels of one top-level evaluation.

    Holds only read-only values: the settings and the stripped source text.
    Each call to evaluate() runs a fresh Tokenizer.
    """
    def __init__(self, source, settings):
        self.source = source
        self.max_nesting_depth = settings["max_nesting_depth"]
        self.use_degrees = settings["use_degrees"]

    def evaluate(self, text, offset=0, depth=0):
        """Value of `text`, which starts at `offset` and sits inside `depth` parentheses."""
        operands, operators = Tokenizer.tokenize(text, self, offset, depth)
        return Reducer.reduce(operands, operators)

    def apply_function(self, name, args):
        return ScientificEngine.apply(name, args, self.use_degrees)


def evaluate(problem, settings=None):
    """Parse and evaluate `problem`; return a Decimal or raise a MathError.

    `settings` overrides single values of config.json.
    """
    settings = config_manager.load_settings(settings)
    source = strip_whitespace(problem)
    calculation = Calculation(source, settings)

    try:
        with localcontext(decimal_context(settings["precision"])):
            return calculation.evaluate(source)
    # Re-raise our domain errors after attaching the source equation
    except E.MathError as e:
        e.equation = source
        raise
    except RecursionError:
        raise E.NestingTooDeep("Expression nested too deeply for the interpreter", equation=source)


# -----------------------------
# Result formatting
# -----------------------------

def to_string(number):
    """Plain notation for readable numbers, scientific notation for huge/tiny ones."""
    number = number.normalize()
    if -20 <= number.adjusted() < 50:
        return format(number, "f")
    return str(number)


def cleanup(ergebnis, settings):
    """Format a Decimal result as fraction or rounded decimal depending on settings.

    Returns:
        (rendered_value, rounding_flag)
    where rounding_flag tells whether the rendered value differs from the result.
    """
    target_decimals = max(settings["decimal_places"], 0)

    # Room for quantize() and normalize() without losing digits of the result
    with localcontext(decimal_context(settings["precision"] + target_decimals + 2)):
        return _render(ergebnis, target_decimals, settings["fractions"])


def _render(ergebnis, target_decimals, as_fraction):
    rounding = False

    # Try Fraction rendering if enabled
    if as_fraction and ergebnis != ergebnis.to_integral_value():
        bruch_ergebnis = fractions.Fraction(ergebnis)
        gekuerzter_bruch = bruch_ergebnis.limit_denominator(100000)
        rounding = gekuerzter_bruch != bruch_ergebnis
        zaehler = gekuerzter_bruch.numerator
        nenner = gekuerzter_bruch.denominator
        if abs(zaehler) > nenner:
            # Mixed fraction form (e.g., 3/2 -> "1 1/2")
            ganzzahl = abs(zaehler) // nenner
            rest_zaehler = abs(zaehler) % nenner
            vorzeichen = "-" if zaehler < 0 else ""
            return f"{vorzeichen}{ganzzahl} {rest_zaehler}/{nenner}", rounding
        return str(gekuerzter_bruch), rounding

    if ergebnis == ergebnis.to_integral_value():
        # Integer result: return normalized without rounding
        return to_string(ergebnis), rounding

    # Non-integer result (e.g. 1/3 or repeating decimals)
    rundungs_muster = Decimal(1).scaleb(-target_decimals)
    gerundetes_ergebnis = ergebnis.quantize(rundungs_muster)
    if gerundetes_ergebnis.is_zero():
        gerundetes_ergebnis = gerundetes_ergebnis.copy_abs()  # no "-0"

    if gerundetes_ergebnis != ergebnis:
        rounding = True

    return to_string(gerundetes_ergebnis), rounding


# -----------------------------
# Public entry point for the front ends
# -----------------------------

def render(ergebnis, settings):
    """Display text of a result: ("= 14", False) or ("≈ 0.3333333333", True)."""
    ausgabe_string, rounding = cleanup(ergebnis, settings)

    ungefaehr_zeichen = "\u2248"  # "≈"
    if rounding:
        return f"{ungefaehr_zeichen} {ausgabe_string}", rounding
    return f"= {ausgabe_string}", rounding


def calculate(problem, settings=None):
    """Evaluate and render in one go; see render()."""
    settings = config_manager.load_settings(settings)
    return render(evaluate(problem, settings), settings)


def test_main():
    """Simple REPL-like runner for manual testing of the engine."""
    print("Enter the problem: ")
    problem = input()
    print(calculate(problem)[0])


if __name__ == "__main__":
    # Allow running this module directly for quick CLI tests:
    #   python -m infixcalc.MathEngine
    test_main()
