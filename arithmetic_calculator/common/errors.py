"""Errors raised while tokenizing, converting or evaluating an expression."""


class CalculatorError(ValueError):
    """Base class for every expression rejection."""


class BadToken(CalculatorError):
    """
    An unrecognized character or malformed number was scanned.

    :param str char: Offending character
    """

    def __init__(self, char: str):
        self.char = char
        super().__init__(f"Bad token: {char!r}")


class MismatchedParens(CalculatorError):
    """Brackets are not balanced."""

    def __init__(self):
        super().__init__("Mismatched parentheses")


class DivisionByZero(CalculatorError):
    """Right operand of a division is exactly zero."""

    def __init__(self):
        super().__init__("Division by zero")


class InvalidExpression(CalculatorError):
    """The token stream does not reduce to exactly one value."""

    def __init__(self):
        super().__init__("Invalid expression")
