"""Scan arithmetic expressions and reorder them into postfix form."""
import re
from typing import Dict, Iterable, Iterator

from calc_solver.common.errors import InvalidCharacterError, UnbalancedParenthesesError
from calc_solver.common.models import Symbol, Token
from calc_solver.common.stack import TokenStack


# Widest floating-point literal starting at a digit; a dangling exponent marker is left unconsumed
NUMBER_PATTERN = re.compile(r"[0-9]+(?:\.[0-9]*)?(?:[eE][+-]?[0-9]+)?")

WHITESPACE = frozenset(" \t\n")

SYMBOLS: Dict[str, Symbol] = {
    "(": Symbol.OPEN_PAREN,
    ")": Symbol.CLOSE_PAREN,
    "+": Symbol.PLUS,
    "-": Symbol.MINUS,
    "*": Symbol.MULTIPLY,
    "/": Symbol.DIVIDE,
}

PRECEDENCE: Dict[Symbol, int] = {
    Symbol.OPEN_PAREN: 3,
    Symbol.MULTIPLY: 2,
    Symbol.DIVIDE: 2,
    Symbol.PLUS: 1,
    Symbol.MINUS: 1,
}

PARENTHESES = frozenset({Symbol.OPEN_PAREN, Symbol.CLOSE_PAREN})


class ExpressionParser:
    """
    Turn an infix arithmetic expression into a postfix token sequence.

    Design constraints:
        - No eval(), no dynamic code execution
        - Single left-to-right pass with a cursor, no pre-splitting on whitespace

    Algorithm:
        1. Scan characters into tokens (whitespace skipped, numbers matched greedily)
        2. Reorder tokens into Reverse Polish Notation (RPN) using Shunting-yard

    Numbers go straight to the output, while operators wait on an operator stack
    until an operator of lower precedence (or a closing parenthesis) releases them.
    Operators of equal precedence are released first, which makes them left-associative.

    Examples:
        - Infix expression (standard notation): (2 + 3) * 4
        - Corresponding Reverse Polish Notation (RPN): 2 3 + 4 *
    """

    @staticmethod
    def tokenize(expr: str) -> Iterator[Token]:
        """
        Scan an expression into tokens, left to right.

        Tokens do not need to be space-separated (e.g., "3+4*2" and "3 + 4 * 2" are equivalent).

        :param str expr: Arithmetic expression as a string

        :return: Iterator over the scanned tokens
        :rtype: Iterator[Token]
        :raises InvalidCharacterError: On any character that is not whitespace, digit or operator
        """
        cursor = 0
        while cursor < len(expr):
            char = expr[cursor]

            if char in WHITESPACE:
                cursor += 1
                continue

            if "0" <= char <= "9":
                match = NUMBER_PATTERN.match(expr, cursor)
                yield Token.number(float(match.group()))
                cursor = match.end()
                continue

            if char in SYMBOLS:
                yield Token.operator(SYMBOLS[char])
                cursor += 1
                continue

            raise InvalidCharacterError(char, cursor)

    @staticmethod
    def _has_preceding_order(top: Symbol, incoming: Symbol) -> bool:
        """
        Tell whether the operator on top of the stack must be output before the incoming one.

        :param Symbol top: Operator currently on top of the operator stack
        :param Symbol incoming: Operator being scanned

        :return: True if ``top`` binds at least as tightly as ``incoming``
        :rtype: bool
        """
        if top in PARENTHESES:
            return False
        return PRECEDENCE[top] >= PRECEDENCE[incoming]

    @staticmethod
    def _drain_paren(output: TokenStack, opers: TokenStack) -> None:
        # Move operators to the output until the matching "(" is found and dropped
        while opers:
            oper = opers.pop()
            if oper.kind is Symbol.OPEN_PAREN:
                return
            output.push(oper)
        raise UnbalancedParenthesesError("Closing parenthesis without a matching opening one")

    @staticmethod
    def to_rpn(tokens: Iterable[Token], output: TokenStack) -> TokenStack:
        """
        Reorder tokens into Reverse Polish Notation (RPN) using the Shunting-yard algorithm.

        :param Iterable[Token] tokens: Tokens in infix order
        :param TokenStack output: Container receiving the tokens in RPN order

        :return: The output container
        :rtype: TokenStack
        :raises UnbalancedParenthesesError: If a parenthesis has no counterpart
        """
        with TokenStack() as opers:
            for token in tokens:
                if token.kind is Symbol.NUMBER:
                    output.push(token)
                elif token.kind is Symbol.OPEN_PAREN:
                    opers.push(token)
                elif token.kind is Symbol.CLOSE_PAREN:
                    ExpressionParser._drain_paren(output, opers)
                else:
                    # Pop operators with higher or equal precedence
                    while opers and ExpressionParser._has_preceding_order(opers.peek().kind, token.kind):
                        output.push(opers.pop())
                    opers.push(token)

            # Append remaining operators, stack top first
            while opers:
                oper = opers.pop()
                if oper.kind is Symbol.OPEN_PAREN:
                    raise UnbalancedParenthesesError("Opening parenthesis is never closed")
                output.push(oper)

        return output

    @staticmethod
    def parse(expr: str, output: TokenStack) -> TokenStack:
        """
        Scan an expression and write its tokens to ``output`` in RPN order.

        :param str expr: Arithmetic expression as a string
        :param TokenStack output: Container receiving the postfix sequence

        :return: The output container
        :rtype: TokenStack
        :raises ParseError: If the expression holds an invalid character or unbalanced parentheses
        """
        return ExpressionParser.to_rpn(ExpressionParser.tokenize(expr), output)
