"""Pydantic models for tokens, solver statuses and evaluation results."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Symbol(str, Enum):
    """Kinds of token produced while scanning an expression."""

    NUMBER = "number"
    PLUS = "plus"
    MINUS = "minus"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    OPEN_PAREN = "open_paren"
    CLOSE_PAREN = "close_paren"


SYMBOL_TEXT = {
    Symbol.PLUS: "+",
    Symbol.MINUS: "-",
    Symbol.MULTIPLY: "*",
    Symbol.DIVIDE: "/",
    Symbol.OPEN_PAREN: "(",
    Symbol.CLOSE_PAREN: ")",
}


class Status(str, Enum):
    """Outcome of a solver call."""

    SUCCESS = "success"
    INVALID_ARGUMENT = "invalid_argument"
    PARSE_ERROR = "parse_error"
    EVALUATION_ERROR = "evaluation_error"
    OUT_OF_MEMORY = "out_of_memory"


class Token(BaseModel):
    """
    Single unit of a scanned expression.

    ``value`` only carries meaning for ``Symbol.NUMBER`` tokens.
    """

    # Tokens are shared between stacks, so they must never change
    model_config = ConfigDict(frozen=True)

    kind: Symbol = Field(..., description="Token kind")
    value: float = Field(default=0.0, description="Numeric value of a NUMBER token")

    @classmethod
    def number(cls, value: float) -> "Token":
        return cls(kind=Symbol.NUMBER, value=value)

    @classmethod
    def operator(cls, kind: Symbol) -> "Token":
        return cls(kind=kind)

    def __str__(self) -> str:
        if self.kind is Symbol.NUMBER:
            return f"{self.value:g}"
        return SYMBOL_TEXT[self.kind]


class SolveResult(BaseModel):
    """Status-carrying result of a solver call."""

    model_config = ConfigDict(frozen=True)

    expression: Optional[str] = Field(default=None, description="Original arithmetic expression")
    status: Status = Field(..., description="Outcome of the evaluation")
    result: Optional[float] = Field(default=None, description="Computed value, set only on success")
    error: Optional[str] = Field(default=None, description="Failure message, set only on failure")

    @property
    def ok(self) -> bool:
        return self.status is Status.SUCCESS
