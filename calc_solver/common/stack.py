"""LIFO container of tokens shared by the parser and the evaluator."""
from typing import Iterator, List

from calc_solver.common.errors import OutOfMemoryError, StackUnderflowError
from calc_solver.common.models import Token


class TokenStack:
    """
    Growable stack of tokens owned by a single parse or evaluate call.

    The backing list grows by amortized doubling. Use it as a context manager
    so its contents are released on every exit path:

        with TokenStack() as opers:
            opers.push(token)
    """

    def __init__(self) -> None:
        self._tokens: List[Token] = []

    def __enter__(self) -> "TokenStack":
        return self

    def __exit__(self, *exc_info) -> None:
        self.clear()

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        """Iterate from the bottom of the stack to the top."""
        return iter(self._tokens)

    def __repr__(self) -> str:
        return f"TokenStack({self._tokens!r})"

    def push(self, token: Token) -> None:
        """
        Push a token on top of the stack.

        :param Token token: Token to push

        :raises OutOfMemoryError: If the stack cannot grow
        """
        try:
            self._tokens.append(token)
        except MemoryError as exc:
            raise OutOfMemoryError(f"Cannot grow token stack past {len(self._tokens)} tokens") from exc

    def pop(self) -> Token:
        """
        Remove and return the top token.

        :return: Token previously on top of the stack
        :rtype: Token
        :raises StackUnderflowError: If the stack is empty
        """
        if not self._tokens:
            raise StackUnderflowError("Cannot pop from an empty stack")
        return self._tokens.pop()

    def peek(self) -> Token:
        """
        Return the top token without removing it.

        :raises StackUnderflowError: If the stack is empty
        """
        if not self._tokens:
            raise StackUnderflowError("Cannot peek into an empty stack")
        return self._tokens[-1]

    def clear(self) -> None:
        self._tokens.clear()
