"""Solve arithmetic expressions: parse to postfix, then evaluate."""
import logging

from calc_solver.common.errors import CalcError, InvalidArgumentError
from calc_solver.common.evaluator import PostfixEvaluator
from calc_solver.common.logger import logger
from calc_solver.common.models import SolveResult, Status
from calc_solver.common.parser import ExpressionParser
from calc_solver.common.stack import TokenStack


def solve(expression: str) -> float:
    """
    Evaluate an infix arithmetic expression.

    Supports ``+ - * /``, parentheses and floating-point literals
    (e.g. "(2 - 1) / (1 + 4 * 2 - 5)" gives 0.25).

    :param str expression: Arithmetic expression as a string

    :return: Computed result as float
    :rtype: float
    :raises InvalidArgumentError: If expression is not a string
    :raises ParseError: If expression holds an invalid character or unbalanced parentheses
    :raises EvaluationError: If expression divides by zero or is malformed
    :raises OutOfMemoryError: If a token stack cannot grow
    """
    if not isinstance(expression, str):
        raise InvalidArgumentError(f"Expression must be a string, got {type(expression).__name__}")

    with TokenStack() as postfix:
        ExpressionParser.parse(expression, postfix)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Postfix form of %r: %s", expression, " ".join(str(token) for token in postfix))
        return PostfixEvaluator.evaluate(postfix)


def try_solve(expression: str) -> SolveResult:
    """
    Evaluate an expression and report the outcome as a status instead of raising.

    :param str expression: Arithmetic expression as a string

    :return: Result carrying the status and, on success, the computed value
    :rtype: SolveResult
    """
    try:
        result = solve(expression)
    except CalcError as exc:
        logger.debug("Could not solve %r: %s", expression, exc)
        return SolveResult(
            expression=expression if isinstance(expression, str) else None,
            status=exc.status,
            error=str(exc),
        )
    return SolveResult(expression=expression, status=Status.SUCCESS, result=result)
