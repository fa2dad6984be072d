"""Evaluate postfix token sequences."""
from collections.abc import Callable as ABCCallable
import operator
from typing import Callable, Dict, Iterable

from calc_solver.common.errors import DivisionByZeroError, MalformedExpressionError, MalformedPostfixError
from calc_solver.common.models import Symbol, Token
from calc_solver.common.stack import TokenStack


# Type alias for operator functions (taking two floats, returning a float)
OperatorFn: ABCCallable[[float, float], float] = Callable[[float, float], float]


def _divide(left: float, right: float) -> float:
    # Exact comparison, no tolerance
    if right == 0.0:
        raise DivisionByZeroError(f"Division by zero: {left} / {right}")
    return left / right


OPERATIONS: Dict[Symbol, OperatorFn] = {
    Symbol.PLUS: operator.add,
    Symbol.MINUS: operator.sub,
    Symbol.MULTIPLY: operator.mul,
    Symbol.DIVIDE: _divide,
}


class PostfixEvaluator:
    """
    Reduce a Reverse Polish Notation (RPN) token sequence to a single number.

    Numbers are pushed on an operand stack; each operator pops its right operand,
    then its left operand, and pushes ``left OP right`` back.

    Examples:
        - RPN: 2 3 + 4 *
        - Result: 20.0
    """

    @staticmethod
    def evaluate(postfix: Iterable[Token]) -> float:
        """
        Evaluate a postfix token sequence.

        :param Iterable[Token] postfix: Tokens in RPN order

        :return: Computed result as float
        :rtype: float
        :raises StackUnderflowError: If an operator lacks operands
        :raises DivisionByZeroError: If a divisor is exactly zero
        :raises MalformedPostfixError: If a parenthesis token is found
        :raises MalformedExpressionError: If zero or several values remain
        """
        with TokenStack() as operands:
            for token in postfix:
                if token.kind is Symbol.NUMBER:
                    operands.push(token)
                    continue

                operation = OPERATIONS.get(token.kind)
                if operation is None:
                    raise MalformedPostfixError(f"Unexpected {token.kind.value} token in postfix sequence")

                right = operands.pop()
                left = operands.pop()
                operands.push(Token.number(operation(left.value, right.value)))

            if len(operands) != 1:
                raise MalformedExpressionError(
                    f"Invalid expression ({len(operands)} values remaining, expected 1)"
                )

            return operands.pop().value
