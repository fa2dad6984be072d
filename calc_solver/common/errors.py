"""Exceptions raised while solving arithmetic expressions."""
from calc_solver.common.models import Status


class CalcError(Exception):
    """
    Base class of every failure reported by the solver.

    Each subclass carries the :class:`Status` the status-returning façade
    reports for it.
    """

    status: Status = Status.EVALUATION_ERROR


class InvalidArgumentError(CalcError, TypeError):
    """The expression handed to the solver is not a string."""

    status = Status.INVALID_ARGUMENT


class ParseError(CalcError, ValueError):
    """The expression could not be reordered into postfix form."""

    status = Status.PARSE_ERROR


class InvalidCharacterError(ParseError):
    """A character outside digits, whitespace and ``( ) + - * /`` was found."""

    def __init__(self, char: str, position: int):
        super().__init__(f"Invalid character {char!r} at position {position}")
        self.char = char
        self.position = position


class UnbalancedParenthesesError(ParseError):
    """A parenthesis has no matching counterpart."""


class EvaluationError(CalcError, ValueError):
    """The postfix sequence could not be reduced to a single number."""

    status = Status.EVALUATION_ERROR


class DivisionByZeroError(EvaluationError):
    """The right operand of a division is exactly zero."""


class StackUnderflowError(EvaluationError):
    """A value was popped from an empty stack."""


class MalformedExpressionError(EvaluationError):
    """Evaluation did not leave exactly one value on the operand stack."""


class MalformedPostfixError(EvaluationError):
    """A parenthesis token reached the evaluator."""


class OutOfMemoryError(CalcError, MemoryError):
    """A token stack could not grow."""

    status = Status.OUT_OF_MEMORY
