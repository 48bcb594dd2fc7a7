"""Token types shared by the tokenizer, the converter and the evaluator."""
from dataclasses import dataclass
from enum import Enum
import operator
from typing import Callable, Dict, Literal, Union

from arithmetic_calculator.common.errors import DivisionByZero


class Operator(Enum):
    """
    Binary arithmetic operators.

    Ordering comparisons compare precedence classes only, so
    ``Operator.ADD >= Operator.SUBTRACT`` and ``Operator.SUBTRACT >= Operator.ADD``
    both hold. Equality keeps the usual Enum identity semantics, which is why
    ``>`` and ``<=`` go through the reflected ``__lt__`` and ``__ge__`` instead
    of functools.total_ordering.
    """

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    @classmethod
    def from_symbol(cls, symbol: str) -> "Operator":
        """
        Return the operator written as ``symbol``.

        :param str symbol: One of ``+ - * /``

        :return: Matching operator
        :rtype: Operator
        :raises ValueError: If the symbol is not an operator
        """
        return cls(symbol)

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def precedence(self) -> int:
        return PRECEDENCE[self]

    def apply(self, left: float, right: float) -> float:
        """
        Apply the operator to two operands.

        :param float left: Earlier-pushed operand
        :param float right: Later-pushed operand

        :return: Computed value
        :rtype: float
        :raises DivisionByZero: If dividing by exactly zero
        """
        if self is Operator.DIVIDE and right == 0.0:
            raise DivisionByZero()
        return FUNCTIONS[self](left, right)

    def __lt__(self, other: "Operator") -> bool:
        if not isinstance(other, Operator):
            return NotImplemented
        return self.precedence < other.precedence

    def __ge__(self, other: "Operator") -> bool:
        if not isinstance(other, Operator):
            return NotImplemented
        return self.precedence >= other.precedence


# Higher binds tighter
PRECEDENCE: Dict[Operator, int] = {
    Operator.ADD: 1,
    Operator.SUBTRACT: 1,
    Operator.MULTIPLY: 2,
    Operator.DIVIDE: 2,
}

FUNCTIONS: Dict[Operator, Callable[[float, float], float]] = {
    Operator.ADD: operator.add,
    Operator.SUBTRACT: operator.sub,
    Operator.MULTIPLY: operator.mul,
    Operator.DIVIDE: operator.truediv,
}


@dataclass(frozen=True)
class Number:
    """Scanned numeric literal."""

    value: float

    def __str__(self) -> str:
        return repr(self.value)


@dataclass(frozen=True)
class OperatorToken:
    """One of the four binary operators."""

    operator: Operator

    def __str__(self) -> str:
        return self.operator.symbol


@dataclass(frozen=True)
class Bracket:
    """Opening or closing parenthesis."""

    symbol: Literal["(", ")"]

    @property
    def is_open(self) -> bool:
        return self.symbol == "("

    def __str__(self) -> str:
        return self.symbol


Token = Union[Number, OperatorToken, Bracket]

OPEN = Bracket("(")
CLOSE = Bracket(")")
