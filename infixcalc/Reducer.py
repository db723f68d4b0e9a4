# Reducer.py
"""""
Collapses the operands and operators of one expression into a single Decimal.

Each step picks the operator that binds tightest (lowest precedence value),
applies it to its two neighbours and puts the result back as a Number:

    2 + 3 * 4   ->   2 + 12   ->   14

Equal precedence is resolved left to right, except for '^', which is right
associative: the rightmost '^' of a tie is applied first, so 2^3^2 = 2^9.
"""""

from decimal import localcontext

from . import Operators
from . import Operands
from . import error as E


def pick_operator(operators):
    """Index of the operator to apply next."""
    best = None
    best_precedence = None
    for i, token in enumerate(operators):
        precedence = Operators.precedence_of(token.operator)
        if best is None or precedence < best_precedence:
            best, best_precedence = i, precedence
        elif precedence == best_precedence and Operators.associativity_of(token.operator) == "right":
            best = i
    return best


def remainder(left, right):
    """left % right, also when the integer quotient has more digits than the precision.

    The result has the sign of `left` and is rounded to the current precision.
    """
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, left.adjusted() - right.adjusted() + ctx.prec + 2)
        result = left % right
    return +result


def apply_operator(operator, left, right, position=None, character=None):
    """Apply one of the binary catalog operators to two Decimals."""
    name = operator.name

    with E.decimal_signals(position, character):
        if name == "ADD":
            return left + right
        elif name == "SUBTRACT":
            return left - right
        elif name == "MULTIPLY":
            return left * right
        elif name == "DIVIDE":
            if right == 0:
                raise E.DivisionByZero(position=position, character=character)
            return left / right
        elif name == "MOD":
            if right == 0:
                raise E.DivisionByZero("Modulo by zero", position=position, character=character)
            return remainder(left, right)
        elif name == "POW":
            if left == 0 and right < 0:
                # decimal answers Infinity here without signalling
                raise E.DivisionByZero("Zero to a negative power", position=position, character=character)
            return left ** right

    raise E.InternalInvariantViolation(f"{name} is not a binary operator", position=position)


def reduce(operands, operators):
    """Reduce until one operand is left and return its value.

    The lists are consumed; they belong to the Tokenizer run that made them.
    """
    if len(operators) != len(operands) - 1:
        raise E.InternalInvariantViolation(
            f"Cannot reduce {len(operands)} operands with {len(operators)} operators")

    while operators:
        i = pick_operator(operators)
        token = operators.pop(i)
        left = operands[i].value()
        right = operands[i + 1].value()
        result = apply_operator(token.operator, left, right, token.position, token.symbol)
        operands[i:i + 2] = [Operands.Number(result, operands[i].position)]

    return operands[0].value()
