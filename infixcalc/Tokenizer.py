# Tokenizer.py
"""""
Character level state machine that turns an expression into operands and operators.

The text is read strictly left to right, one character at a time. What a
character means depends on the current mode:

    OPERAND   an operand is expected (start, and after every operator)
    NUMBER    inside a numeric literal such as -1.2E+4
    FUNCTION  inside a function name such as SQRT
    PAREN     inside a parenthesised block, captured raw
    ARGS      inside the argument list of a function, captured raw
    CLOSED    right after a closing parenthesis, only an operator may follow

Parenthesised text is not tokenized here. It becomes a SubExpression (or the
argument list of a FunctionCall) and gets its own Tokenizer when its value
is needed.

After parse(): len(operators) == len(operands) - 1.
"""""

import re
from collections import namedtuple

from . import Operators
from . import Operands
from . import error as E


# Modes
OPERAND = "operand"
NUMBER = "number"
FUNCTION = "function"
PAREN = "paren"
ARGS = "args"
CLOSED = "closed"

DIGITS = "0123456789"
SIGNS = "+-"
EXPONENT = "E"

# Grammar a finished numeric token must match (token is kept upper case)
NUMBER_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)(E[+-]?\d+)?")

# Binary operator as it appears between two operands
OperatorToken = namedtuple("OperatorToken", "operator symbol position")


class Tokenizer:
    """Tokenizes one (sub-)expression.

    text        whitespace-free expression text
    calculation the Calculation that evaluates nested blocks and functions
    offset      position of text[0] in the top-level expression
    depth       how many parentheses enclose this text
    """
    def __init__(self, text, calculation, offset=0, depth=0):
        self.text = text
        self.calculation = calculation
        self.offset = offset
        self.depth = depth

        self.operands = []
        self.operators = []
        self.token = []  # characters of the token being read, upper case
        self.token_start = None
        self.mode = OPERAND
        self.open_parenthesis = 0
        self.span_start = None  # position of the '(' that opened the current block
        self.current_function = None

    def parse(self):
        """Scan the whole text; return (operands, operators)."""
        for i, char in enumerate(self.text):
            self.interpret(char, self.offset + i)

        end = self.offset + len(self.text)

        if self.mode == NUMBER:
            self.save_number(end, "")
        elif self.mode in (OPERAND, FUNCTION):
            raise E.UnexpectedCharacter("Unexpected end of input", position=end, character="")
        elif self.mode in (PAREN, ARGS):
            raise E.UnclosedParenthesis(position=self.span_start, character="(")
        elif self.mode != CLOSED:
            raise E.InternalInvariantViolation(f"Unknown tokenizer mode: {self.mode}", position=end)

        if self.open_parenthesis != 0:
            raise E.MismatchedParenthesis(position=end, character="")

        if len(self.operators) != len(self.operands) - 1:
            raise E.InternalInvariantViolation(
                f"{len(self.operands)} operands but {len(self.operators)} operators", position=end)

        return self.operands, self.operators

    # -----------------------------
    # Token helpers
    # -----------------------------

    def add_char(self, char):
        self.token.append(char.upper())

    def token_text(self):
        return "".join(self.token)

    def clear_token(self):
        self.token.clear()

    def start_number(self, char, position):
        self.token_start = position
        self.add_char(char)
        self.mode = NUMBER

    def save_number(self, position, char):
        """Close the numeric token; `position`/`char` is what ended it."""
        text = self.token_text()
        if not NUMBER_PATTERN.fullmatch(text):
            raise E.MalformedNumber(f"Number wrongly formatted: {text}", position=position, character=char)
        self.operands.append(Operands.Number(text, self.token_start))
        self.clear_token()

    def start_function(self, char, position):
        self.token_start = position
        self.add_char(char)
        self.mode = FUNCTION

    def save_function_name(self, position):
        name = self.token_text()
        operator = Operators.find(name)
        if operator is None:
            raise E.UnknownFunctionName(f"There is no function with that name: {name}",
                                        position=self.token_start, character=name[0])
        self.current_function = Operands.FunctionCall(operator, self.token_start, self.calculation, self.depth + 1)
        self.clear_token()
        self.open_span(position)
        self.mode = ARGS

    def save_function_args(self, position):
        self.current_function.set_arguments(self.token_text(), self.span_start + 1)
        self.operands.append(self.current_function)
        self.current_function = None
        self.clear_token()
        self.mode = CLOSED

    def save_operator(self, char, position):
        self.operators.append(OperatorToken(Operators.from_symbol(char), char, position))
        self.mode = OPERAND

    def open_span(self, position):
        self.check_nesting(1, position)
        self.span_start = position
        self.open_parenthesis = 1

    def save_parenthesis(self, position):
        text = self.token_text()
        if text == "":
            raise E.EmptyParenthesis(position=position, character=")")
        self.operands.append(Operands.SubExpression(text, self.span_start + 1, self.calculation, self.depth + 1))
        self.clear_token()
        self.mode = CLOSED

    def check_nesting(self, level, position):
        if self.depth + level > self.calculation.max_nesting_depth:
            raise E.NestingTooDeep(f"More than {self.calculation.max_nesting_depth} nested parentheses",
                                   position=position, character="(")

    def unexpected(self, char, position, info=None):
        message = f"{info}. Unexpected '{char}'" if info else f"Unexpected '{char}'"
        raise E.UnexpectedCharacter(message, position=position, character=char)

    def unmatched(self, char, position):
        raise E.MismatchedParenthesis("')' without matching '('", position=position, character=char)

    # -----------------------------
    # State machine
    # -----------------------------

    def interpret(self, char, position):
        """Feed one character; what is legal depends on the mode."""
        if self.mode == NUMBER:
            self.read_number(char, position)
        elif self.mode == FUNCTION:
            self.read_function_name(char, position)
        elif self.mode == OPERAND:
            self.read_operand_start(char, position)
        elif self.mode in (PAREN, ARGS):
            self.read_block(char, position)
        elif self.mode == CLOSED:
            self.read_after_close(char, position)
        else:
            raise E.InternalInvariantViolation(f"Unknown tokenizer mode: {self.mode}", position=position)

    def read_operand_start(self, char, position):
        if char in DIGITS or char in SIGNS or char == ".":
            self.start_number(char, position)
        elif char == "(":
            self.open_span(position)
            self.mode = PAREN
        elif char == ")":
            self.unmatched(char, position)
        elif Operators.is_operator_symbol(char):
            self.unexpected(char, position, "Operand expected")
        elif char.isalpha():
            if Operators.any_name_starts_with(char):
                self.start_function(char, position)
            else:
                raise E.UnknownFunctionName(f"No function starts with '{char}'", position=position, character=char)
        else:
            self.unexpected(char, position)

    def read_number(self, char, position):
        if char in DIGITS:
            self.add_char(char)
        elif char == ".":
            if "." in self.token or EXPONENT in self.token:
                raise E.MalformedNumber(position=position, character=char)
            self.add_char(char)
        elif char.upper() == EXPONENT:
            if EXPONENT in self.token:
                raise E.MalformedNumber(position=position, character=char)
            self.add_char(char)
        elif char in SIGNS:
            if self.token[-1] == EXPONENT:
                # Sign of the exponent: 1E-3
                self.add_char(char)
            else:
                self.save_number(position, char)
                self.save_operator(char, position)
        elif Operators.is_operator_symbol(char):
            self.save_number(position, char)
            self.save_operator(char, position)
        elif char == "(":
            self.unexpected(char, position, "Number ended abruptly")
        elif char == ")":
            self.unmatched(char, position)
        elif char.isalpha():
            raise E.MalformedNumber(position=position, character=char)
        else:
            self.unexpected(char, position)

    def read_function_name(self, char, position):
        if char in DIGITS or char.isalpha():
            if Operators.any_name_starts_with(self.token_text() + char):
                self.add_char(char)
            else:
                raise E.UnknownFunctionName(f"No function starts with '{self.token_text()}{char.upper()}'",
                                            position=position, character=char)
        elif char == "(":
            self.save_function_name(position)
        elif char == ".":
            self.unexpected(char, position, "'.' not allowed in function names")
        elif char == ")":
            self.unmatched(char, position)
        elif Operators.is_operator_symbol(char):
            self.unexpected(char, position, "Function needs argument(s)")
        else:
            self.unexpected(char, position)

    def read_block(self, char, position):
        """Raw capture of a parenthesised block, PAREN and ARGS alike."""
        if char == ")":
            self.open_parenthesis -= 1
            if self.open_parenthesis == 0:
                if self.mode == PAREN:
                    self.save_parenthesis(position)
                else:
                    self.save_function_args(position)
                return
        elif char == "(":
            self.open_parenthesis += 1
            self.check_nesting(self.open_parenthesis, position)
        self.token.append(char)

    def read_after_close(self, char, position):
        if Operators.is_operator_symbol(char):
            self.save_operator(char, position)
        elif char == ")":
            self.unmatched(char, position)
        else:
            self.unexpected(char, position, "Expected operator after closing parenthesis")


def tokenize(text, calculation, offset=0, depth=0):
    """Shortcut: run a fresh Tokenizer over `text`."""
    return Tokenizer(text, calculation, offset, depth).parse()
