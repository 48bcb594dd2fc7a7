"""Parse and evaluate arithmetic expressions safely."""
from typing import List

from arithmetic_calculator.common.errors import (
    BadToken,
    InvalidExpression,
    MismatchedParens,
)
from arithmetic_calculator.common.tokens import (
    CLOSE,
    OPEN,
    Number,
    Operator,
    OperatorToken,
    Token,
)


DIGITS = frozenset("0123456789")
NUMBER_CHARS = DIGITS | {"."}
OPERATOR_SYMBOLS = frozenset(op.symbol for op in Operator)
WHITESPACE = frozenset(" \t\n")


class Calculator:
    """
    Parse and evaluate arithmetic expressions safely.

    Design constraints:
        - No eval(), no dynamic code execution
        - Safe, deterministic computation
        - No state shared between calls

    Algorithm:
        1. Tokenize the text into numbers, operators and brackets
        2. Convert to Reverse Polish Notation (RPN) using Shunting-yard
        3. Evaluate RPN using a stack

    The Shunting-yard algorithm converts an infix expression into Reverse Polish Notation (RPN), allowing safe, stack-based evaluation without parentheses.
    It handles operator precedence by temporarily storing operators on a stack and outputting them in the correct order.

    Examples:
        - Infix expression (standard notation): (3 + 4) * 2
        - Corresponding Reverse Polish Notation (RPN): 3 4 + 2 *

    """

    @staticmethod
    def parse(text: str) -> List[Token]:
        """
        Split an arithmetic expression into tokens.

        Whitespace (space, tab, newline) between tokens is optional and ignored.
        Bracket balance is checked here, so every sequence returned is balanced.

        :param str text: Arithmetic expression as a string

        :return: List of tokens in source order
        :rtype: List[Token]
        :raises BadToken: On an unknown character or a malformed number
        :raises MismatchedParens: On an unmatched closing or opening bracket
        """
        tokens: List[Token] = []
        # Only "(" is ever pushed, the stack depth is what matters
        parens: List[str] = []
        i = 0

        while i < len(text):
            char = text[i]

            if char in NUMBER_CHARS:
                # Greedily consume digits and dots, then let float() judge the run
                end = i
                while end < len(text) and text[end] in NUMBER_CHARS:
                    end += 1
                run = text[i:end]
                try:
                    tokens.append(Number(float(run)))
                except ValueError:
                    raise BadToken(char) from None
                i = end
                continue

            if char == "(":
                tokens.append(OPEN)
                parens.append(char)
            elif char == ")":
                tokens.append(CLOSE)
                if not parens:
                    raise MismatchedParens()
                parens.pop()
            elif char in OPERATOR_SYMBOLS:
                tokens.append(OperatorToken(Operator.from_symbol(char)))
            elif char not in WHITESPACE:
                raise BadToken(char)
            i += 1

        if parens:
            raise MismatchedParens()

        return tokens

    @staticmethod
    def to_postfix(tokens: List[Token]) -> List[Token]:
        """
        Convert a list of tokens into Reverse Polish Notation (RPN) using the Shunting-yard algorithm.

        Precondition: ``tokens`` comes from :meth:`parse`, i.e. brackets are balanced.
        Unbalanced input is not rejected here; it yields a postfix sequence that
        :meth:`evaluate` refuses with ``InvalidExpression``.

        :param List[Token] tokens: List of arithmetic tokens

        :return: List of tokens in RPN order
        :rtype: List[Token]
        """
        output: List[Token] = []
        stack: List[Token] = []

        for token in tokens:
            if isinstance(token, Number):
                # Numbers are added directly to the output
                output.append(token)
            elif isinstance(token, OperatorToken):
                # Pop operators with higher or equal precedence (left associativity)
                while stack and isinstance(stack[-1], OperatorToken) and stack[-1].operator >= token.operator:
                    output.append(stack.pop())
                stack.append(token)
            elif token.is_open:
                stack.append(token)
            else:
                while stack and stack[-1] != OPEN:
                    output.append(stack.pop())
                # Discard the matching "(" if there is one
                if stack:
                    stack.pop()

        # Append remaining operators in reverse order (stack top first)
        output.extend(reversed(stack))
        return output

    @staticmethod
    def evaluate(tokens: List[Token]) -> float:
        """
        Evaluate a postfix token sequence using an operand stack.

        :param List[Token] tokens: Tokens in RPN order

        :return: Computed result as float
        :rtype: float
        :raises InvalidExpression: If the sequence does not reduce to exactly one value
        :raises DivisionByZero: If a division has a zero right operand
        """
        stack: List[float] = []
        for token in tokens:
            if isinstance(token, Number):
                stack.append(token.value)
            elif isinstance(token, OperatorToken):
                # Operator requires two operands
                if len(stack) < 2:
                    raise InvalidExpression()
                right: float = stack.pop()
                left: float = stack.pop()
                stack.append(token.operator.apply(left, right))
            else:
                # Brackets never survive a correct conversion
                raise InvalidExpression()

        if len(stack) != 1:
            raise InvalidExpression()

        return stack[0]

    @staticmethod
    def calculate(text: str) -> float:
        """
        Evaluate an arithmetic expression safely.

        :param str text: Arithmetic expression string

        :return: Computed result as float
        :rtype: float
        :raises CalculatorError: From the earliest failing stage
        """
        tokens: List[Token] = Calculator.parse(text)
        postfix: List[Token] = Calculator.to_postfix(tokens)
        return Calculator.evaluate(postfix)


def calculate(text: str) -> float:
    """Evaluate ``text``; the entry point external callers should use."""
    return Calculator.calculate(text)
