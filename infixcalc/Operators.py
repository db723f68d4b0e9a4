# Operators.py
"""""
Operator catalog of the calculator.

Every operator the user can type is one entry of CATALOG: the six binary
arithmetic operators (which have infix symbols and a precedence) and the
named functions. Lower precedence values bind tighter, following
https://docs.python.org/3/reference/expressions.html: operators of the same
precedence group left to right, except exponentiation, which groups right
to left.

The catalog is built once at import time and never changed afterwards.
"""""

from collections import namedtuple

from . import error as E


# -----------------------------
# Arity kinds
# -----------------------------

class Fixed(namedtuple("Fixed", "count")):
    """Exactly `count` arguments."""
    __slots__ = ()

    def __repr__(self):
        return f"Fixed({self.count})"


# Marker objects for the arity kinds that are not a plain number
VARIADIC_AT_LEAST_ONE = "VariadicAtLeastOne"   # SUM(1,2,3)
VARIADIC_WITH_COUNT = "VariadicWithCount"      # SUMN(2,1,2,3) -> 1+2
OPTIONAL_ZERO_OR_ONE = "OptionalZeroOrOne"     # PI() or PI(4)


Operator = namedtuple("Operator", "name arity precedence symbols right_assoc")


def _binary(name, precedence, symbols, right_assoc=False):
    return Operator(name, Fixed(2), precedence, symbols, right_assoc)


def _function(name, arity):
    if isinstance(arity, int):
        arity = Fixed(arity)
    return Operator(name, arity, None, (), False)


CATALOG = (
    _binary("ADD", 2, ("+",)),
    _binary("SUBTRACT", 2, ("-",)),
    _binary("MULTIPLY", 1, ("*", "×")),
    _binary("DIVIDE", 1, ("/", "÷")),
    _binary("MOD", 1, ("%",)),
    _binary("POW", 0, ("^",), right_assoc=True),

    _function("SQUARE", 1), _function("SQRT", 1), _function("ROOT", 2),
    _function("NEG", 1), _function("INVERSION", 1),

    _function("LOG10", 1), _function("LOG", 2), _function("LOGN", 1),
    _function("EXP", 1), _function("FACT", 1),

    _function("SIN", 1), _function("COS", 1), _function("TAN", 1),
    _function("ASIN", 1), _function("ACOS", 1), _function("ATAN", 1),
    _function("SINH", 1), _function("COSH", 1), _function("TANH", 1),
    _function("RAD", 1), _function("DEG", 1),

    _function("FLOOR", 1), _function("ROUND", 1), _function("CEIL", 1),

    _function("RAND", 0),

    _function("SUM", VARIADIC_AT_LEAST_ONE), _function("SUMN", VARIADIC_WITH_COUNT),
    _function("AVG", VARIADIC_AT_LEAST_ONE), _function("AVGN", VARIADIC_WITH_COUNT),

    _function("PI", OPTIONAL_ZERO_OR_ONE), _function("E", OPTIONAL_ZERO_OR_ONE),
    _function("PHI", OPTIONAL_ZERO_OR_ONE),

    _function("SFCCIRCLE", 1), _function("SFCTRIANGLE", 3),
    _function("PYTHAHYPO", 2), _function("PYTHALEG", 2),
    _function("SOLVE", 3),
)


# Lookup tables derived from CATALOG
_by_name = {}
for _op in CATALOG:
    if _op.name in _by_name:
        raise E.InternalInvariantViolation(f"Duplicate operator name in catalog: {_op.name}")
    _by_name[_op.name] = _op

_by_symbol = {symbol: op for op in CATALOG for symbol in op.symbols}

# Every prefix of every name, for the incremental check while a name is typed
_prefixes = frozenset(op.name[:i] for op in CATALOG for i in range(1, len(op.name) + 1))

OPERATOR_SYMBOLS = frozenset(_by_symbol)


def find(name):
    """Return the operator called `name` (any case) or None."""
    return _by_name.get(name.upper())


def lookup_exact(name):
    """Return the operator called `name`; raise UnknownFunctionName if there is none."""
    op = find(name)
    if op is None:
        raise E.UnknownFunctionName(f"There is no function with that name: {name}")
    return op


def any_name_starts_with(prefix):
    """True if at least one catalog name starts with `prefix` (case-insensitive)."""
    return prefix.upper() in _prefixes


def is_operator_symbol(char):
    return char in _by_symbol


def from_symbol(char):
    """Return the binary operator spelled by `char`."""
    try:
        return _by_symbol[char]
    except KeyError:
        raise E.InternalInvariantViolation(f"'{char}' is not an operator symbol")


def arity_of(op):
    return op.arity


def is_binary(op):
    return op.precedence is not None


def precedence_of(op):
    if op.precedence is None:
        raise E.InternalInvariantViolation(f"{op.name} has no precedence, it is not a binary operator")
    return op.precedence


def associativity_of(op):
    return "right" if op.right_assoc else "left"
