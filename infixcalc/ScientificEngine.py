# ScientificEngine
"""""
Implementations of the named catalog functions.

apply(name, args) receives Decimals whose count was already checked against
the function's arity and returns one Decimal. It runs inside the caller's
decimal context, so results are rounded to the working precision. sin, cos,
pi and everything built on exp/ln/sqrt are computed at that precision; the
inverse trigonometric functions go through math floats (about 16 digits).

Domain problems raise error.ScientificError with a 2xxx code.
"""""

import math
import random
from decimal import Decimal, getcontext, localcontext, ROUND_FLOOR, ROUND_CEILING, ROUND_HALF_UP

from . import Operators
from . import Reducer
from . import error as E


MAX_FACTORIAL = 10000
# Largest angle exponent sin/cos reduce; pi is carried to that many extra digits
MAX_ANGLE_DIGITS = 10000


# -----------------------------
# Constants
# -----------------------------

def pi():
    """Pi at the current precision (recipe from the decimal module docs)."""
    with localcontext() as ctx:
        ctx.prec += 2
        three = Decimal(3)
        lasts, t, s, n, na, d, da = 0, three, 3, 1, 0, 0, 24
        while s != lasts:
            lasts = s
            n, na = n + na, na + 8
            d, da = d + da, da + 32
            t = (t * n) / d
            s += t
    return +s


def euler():
    return Decimal(1).exp()


def phi():
    return (1 + Decimal(5).sqrt()) / 2


def with_digits(value, args):
    """PI(), PI(4): the constant, optionally rounded to that many decimal places."""
    if not args:
        return +value
    digits = args[0]
    if digits != digits.to_integral_value() or digits < 0 or digits >= getcontext().prec:
        raise E.ScientificError(f"Invalid number of digits: {digits}", code="2008")
    return value.quantize(Decimal(1).scaleb(-int(digits)))


# -----------------------------
# Trigonometry
# -----------------------------

def to_radians(x, use_degrees):
    if use_degrees:
        return x * pi() / 180
    return x


def from_radians(x, use_degrees):
    if use_degrees:
        return x * 180 / pi()
    return x


def _series(x, i, s, num):
    # Shared Taylor loop of sin and cos
    fact, sign, lasts = 1, 1, 0
    while s != lasts:
        lasts = s
        i += 2
        fact *= i * (i - 1)
        num *= x * x
        sign *= -1
        s += num / fact * sign
    return s


def _without_full_turns(x):
    """x modulo 2*pi, with pi carried to as many digits as x has before the point."""
    if x.adjusted() > MAX_ANGLE_DIGITS:
        raise E.NumberTooLarge(f"Angle {x} too large to reduce")
    with localcontext() as ctx:
        ctx.prec += max(x.adjusted(), 0) + 2
        return Reducer.remainder(x, 2 * pi())


def sin(x):
    with localcontext() as ctx:
        ctx.prec += 2
        x = _without_full_turns(x)
        s = _series(x, 1, x, x)
    return +s


def cos(x):
    with localcontext() as ctx:
        ctx.prec += 2
        x = _without_full_turns(x)
        s = _series(x, 0, Decimal(1), Decimal(1))
    return +s


def exact_degrees(name, x):
    """sin/cos of whole multiples of 90 degrees, which the series only approximates."""
    if Reducer.remainder(x, Decimal(90)) != 0:
        return None
    quarter = int(Reducer.remainder(x, Decimal(360)) / 90)
    if name == "SIN":
        return Decimal((0, 1, 0, -1)[quarter])
    return Decimal((1, 0, -1, 0)[quarter])


def isSCT(name, x, use_degrees):  # Sin / Cos / Tan
    if use_degrees:
        # Whole turns are dropped exactly, before pi gets involved
        angle = Reducer.remainder(x, Decimal(360))
        if name in ("SIN", "COS"):
            exact = exact_degrees(name, angle)
            if exact is not None:
                return exact
        elif abs(Reducer.remainder(angle, Decimal(180))) == 90:
            raise E.ScientificError(f"Tangent of {x} degrees", code="2007")
    else:
        angle = x

    radians = to_radians(angle, use_degrees)
    if name == "SIN":
        return sin(radians)
    elif name == "COS":
        return cos(radians)

    cosine = cos(radians)
    if cosine.is_zero() or abs(cosine) < Decimal(1).scaleb(5 - getcontext().prec):
        raise E.ScientificError(f"Tangent of {x}", code="2007")
    return sin(radians) / cosine


def isArc(name, x, use_degrees):  # asin / acos / atan
    if name in ("ASIN", "ACOS") and not -1 <= x <= 1:
        raise E.ScientificError(f"{name} of {x}", code="2006")
    function = {"ASIN": math.asin, "ACOS": math.acos, "ATAN": math.atan}[name]
    result = Decimal(repr(function(float(x))))
    return from_radians(result, use_degrees)


def isHyperbolic(name, x):
    if name == "TANH":
        # exp(-2|x|) never overflows; past the precision tanh is +-1
        if 2 * abs(x) > (getcontext().prec + 2) * Decimal(10).ln():
            return Decimal(1).copy_sign(x)
        t = (-2 * abs(x)).exp()
        return ((1 - t) / (1 + t)).copy_sign(x)

    plus, minus = x.exp(), (-x).exp()
    if name == "SINH":
        return (plus - minus) / 2
    return (plus + minus) / 2


# -----------------------------
# Roots, logarithms, powers
# -----------------------------

def isRoot(x):
    if x < 0:
        raise E.ScientificError(f"Square root of {x}", code="2003")
    return x.sqrt()


def nth_root(index, x):
    """ROOT(y, x): the y-th root of x."""
    if index == 0:
        raise E.ScientificError("Root index 0", code="2012")
    if index == 2:
        return isRoot(x)

    odd = index == index.to_integral_value() and int(index) % 2 == 1
    if x < 0:
        if not odd:
            raise E.ScientificError(f"Root of index {index} of {x}", code="2003")
        return -nth_root(index, -x)
    if x == 0 and index < 0:
        # decimal answers Infinity for 0 ** negative without signalling
        raise E.DivisionByZero("Root of zero with negative index")

    result = x ** (Decimal(1) / index)
    # Perfect roots come out as 1.99999...; prefer the exact integer when it fits
    nearest = result.to_integral_value()
    if index == index.to_integral_value() and nearest ** int(index) == x:
        return nearest
    return result


def isLog(base, x):
    if x <= 0:
        raise E.ScientificError(f"Logarithm of {x}", code="2001")
    if base is None:
        return x.ln()
    if base <= 0 or base == 1:
        raise E.ScientificError(f"Logarithm base {base}", code="2002")
    return x.ln() / base.ln()


def isLog10(x):
    if x <= 0:
        raise E.ScientificError(f"Logarithm of {x}", code="2001")
    return x.log10()


def factorial(x):
    if x != x.to_integral_value() or x < 0 or x > MAX_FACTORIAL:
        raise E.ScientificError(f"Factorial of {x}", code="2005")
    return +Decimal(math.factorial(int(x)))


def inversion(x):
    if x == 0:
        raise E.DivisionByZero("Inversion of zero")
    return 1 / x


# -----------------------------
# Aggregates
# -----------------------------

def summation(args):
    return sum(args, Decimal(0))


def mean(args):
    if not args:
        raise E.DivisionByZero("Mean of zero values")
    return summation(args) / len(args)


# -----------------------------
# Geometry and equations
# -----------------------------

def circle_surface(radius):
    if radius < 0:
        raise E.ScientificError(f"Negative radius {radius}", code="2013")
    return pi() * radius * radius


def triangle_surface(a, b, c):
    """Heron's formula."""
    s = (a + b + c) / 2
    square = s * (s - a) * (s - b) * (s - c)
    if min(a, b, c) <= 0 or square < 0:
        raise E.ScientificError(f"Sides {a}, {b}, {c}", code="2010")
    return square.sqrt()


def hypotenuse(a, b):
    return (a * a + b * b).sqrt()


def leg(longest, other_leg):
    square = longest * longest - other_leg * other_leg
    if square < 0:
        raise E.ScientificError(f"Leg {other_leg} longer than hypotenuse {longest}", code="2011")
    return square.sqrt()


def solve_quadratic(a, b, c):
    """Larger real root of a*x^2 + b*x + c = 0."""
    if a == 0:
        if b == 0:
            raise E.ScientificError("Neither quadratic nor linear", code="2009")
        return -c / b
    discriminant = b * b - 4 * a * c
    if discriminant < 0:
        raise E.ScientificError(f"Negative discriminant {discriminant}", code="2009")
    root = discriminant.sqrt()
    return max((-b + root) / (2 * a), (-b - root) / (2 * a))


# -----------------------------
# Dispatcher
# -----------------------------

def apply(name, args, use_degrees=False):
    """Evaluate catalog function `name` on the Decimal arguments `args`."""
    operator = Operators.find(name)
    if operator is None:
        raise E.ScientificError(f"Unable to identify given Operation: {name}", code="2004")

    if Operators.is_binary(operator):
        return Reducer.apply_operator(operator, args[0], args[1])

    if name in ("SIN", "COS", "TAN"):
        return isSCT(name, args[0], use_degrees)
    elif name in ("ASIN", "ACOS", "ATAN"):
        return isArc(name, args[0], use_degrees)
    elif name in ("SINH", "COSH", "TANH"):
        return isHyperbolic(name, args[0])

    elif name == "SQUARE":
        return args[0] * args[0]
    elif name == "SQRT":
        return isRoot(args[0])
    elif name == "ROOT":
        return nth_root(args[0], args[1])
    elif name == "NEG":
        return -args[0]
    elif name == "INVERSION":
        return inversion(args[0])

    elif name == "LOG10":
        return isLog10(args[0])
    elif name == "LOG":
        return isLog(args[0], args[1])
    elif name == "LOGN":
        return isLog(None, args[0])
    elif name == "EXP":
        return args[0].exp()
    elif name == "FACT":
        return factorial(args[0])

    elif name == "RAD":
        return to_radians(args[0], True)
    elif name == "DEG":
        return from_radians(args[0], True)

    elif name == "FLOOR":
        return args[0].to_integral_value(rounding=ROUND_FLOOR)
    elif name == "CEIL":
        return args[0].to_integral_value(rounding=ROUND_CEILING)
    elif name == "ROUND":
        return args[0].to_integral_value(rounding=ROUND_HALF_UP)

    elif name == "RAND":
        return Decimal(repr(random.random()))

    elif name in ("SUM", "SUMN"):
        return summation(args)
    elif name in ("AVG", "AVGN"):
        return mean(args)

    elif name == "PI":
        return with_digits(pi(), args)
    elif name == "E":
        return with_digits(euler(), args)
    elif name == "PHI":
        return with_digits(phi(), args)

    elif name == "SFCCIRCLE":
        return circle_surface(args[0])
    elif name == "SFCTRIANGLE":
        return triangle_surface(*args)
    elif name == "PYTHAHYPO":
        return hypotenuse(*args)
    elif name == "PYTHALEG":
        return leg(*args)
    elif name == "SOLVE":
        return solve_quadratic(*args)

    raise E.InternalInvariantViolation(f"{name} is in the catalog but has no implementation")
