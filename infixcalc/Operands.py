# Operands.py
"""""
The three kinds of operand an expression is made of.

- Number:        a numeric literal ("-1.2E+4")
- SubExpression: the text inside a pair of parentheses, evaluated on demand
- FunctionCall:  a catalog function plus the raw text of its argument list

All of them answer value() with a Decimal. The value is computed on the
first call and cached; an operand never changes after that.

Positions are 0-based indexes into the whitespace-free top-level expression,
so errors raised deep inside nested parentheses still point at the right
character of what the user typed.
"""""

import decimal
from decimal import Decimal

from . import Operators
from . import error as E


class Number:
    """Leaf operand holding a decimal literal (or an already computed Decimal)."""
    def __init__(self, token, position=None):
        self.token = token
        self.position = position
        self._value = token if isinstance(token, Decimal) else None

    def value(self):
        if self._value is None:
            try:
                number = Decimal(self.token)
            except decimal.InvalidOperation:
                number = None
            if number is None or not number.is_finite():
                raise E.MalformedNumber(f"Not a number: {self.token}",
                                        position=self.position, character=str(self.token)[:1])
            self._value = number
        return self._value

    def __repr__(self):
        return f"Number({self.token})"


class SubExpression:
    """Parenthesised text; evaluated through a fresh Tokenizer at `depth`."""
    def __init__(self, text, position, calculation, depth):
        self.text = text
        self.position = position
        self.calculation = calculation
        self.depth = depth
        self._value = None

    def value(self):
        if self._value is None:
            self._value = self.calculation.evaluate(self.text, self.position, self.depth)
        return self._value

    def __repr__(self):
        return f"SubExpression({self.text!r})"


class FunctionCall:
    """A call such as ROOT(2,(4+4)).

    `args_text` is the raw text between the parentheses and `args_position`
    the position of its first character. The arguments are split and
    evaluated only when the value is asked for.
    """
    def __init__(self, operator, position, calculation, depth):
        self.operator = operator
        self.position = position
        self.calculation = calculation
        self.depth = depth
        self.args_text = None
        self.args_position = None
        self._value = None

    def set_arguments(self, args_text, args_position):
        self.args_text = args_text
        self.args_position = args_position

    def value(self):
        if self._value is None:
            if self.args_text is None:
                raise E.InternalInvariantViolation(f"{self.operator.name} has no argument list",
                                                   position=self.position)

            arguments = [SubExpression(piece, position, self.calculation, self.depth).value()
                         for piece, position in split_arguments(self.args_text, self.args_position)]
            arguments = self.check_arity(arguments)

            try:
                with E.decimal_signals(self.position, self.operator.name[0]):
                    self._value = self.calculation.apply_function(self.operator.name, arguments)
            except E.MathError as e:
                # Library errors keep their type and message, they only learn where they happened
                if e.position is None:
                    e.position = self.position
                    e.character = self.operator.name[0]
                raise
        return self._value

    def check_arity(self, arguments):
        """Validate the argument count and return the arguments to pass on."""
        name = self.operator.name
        arity = Operators.arity_of(self.operator)
        given = len(arguments)

        if isinstance(arity, Operators.Fixed):
            if given != arity.count:
                self._arity_error(f"{name} takes exactly {arity.count} argument(s), {given} given")
            return arguments

        elif arity == Operators.VARIADIC_AT_LEAST_ONE:
            if given < 1:
                self._arity_error(f"{name} takes at least one argument")
            return arguments

        elif arity == Operators.VARIADIC_WITH_COUNT:
            # First argument says how many of the following ones take part
            if given < 1:
                self._arity_error(f"{name} needs a count as first argument")
            count, rest = arguments[0], arguments[1:]
            if count != count.to_integral_value() or count < 0 or count > len(rest):
                self._arity_error(f"{name}: count must be an integer between 0 and {len(rest)}, got {count}")
            return rest[:int(count)]

        elif arity == Operators.OPTIONAL_ZERO_OR_ONE:
            if given > 1:
                self._arity_error(f"{name} takes zero or one argument, {given} given")
            return arguments

        raise E.InternalInvariantViolation(f"Unknown arity {arity!r} for {name}", position=self.position)

    def _arity_error(self, message):
        raise E.ArityMismatch(message, position=self.position, character=self.operator.name[0])

    def __repr__(self):
        return f"FunctionCall({self.operator.name}, {self.args_text!r})"


def split_arguments(args_text, args_position):
    """Split a raw argument list at the commas that are not inside parentheses.

    Returns a list of (piece, position). Empty text means no arguments at all;
    an empty piece between commas is an error.
    """
    if args_text == "":
        return []

    pieces = []
    depth = 0
    start = 0
    for i, char in enumerate(args_text):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == "," and depth == 0:
            if i == start:
                raise E.UnexpectedCharacter("Missing argument before ','",
                                            position=args_position + i, character=char)
            pieces.append((args_text[start:i], args_position + start))
            start = i + 1

    if start == len(args_text):
        raise E.UnexpectedCharacter("Missing argument after ','",
                                    position=args_position + start - 1, character=",")
    pieces.append((args_text[start:], args_position + start))
    return pieces
