"""Exceptions raised by the funcinterp expression pipeline.

Lexing never fails. Tree building raises ParseError; evaluation raises one
of the EvaluationError subclasses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from funcinterp.expressions.lexer import Token


class ExpressionError(Exception):
    """Base class for every error the interpreter reports."""
    pass


class ParseError(ExpressionError):
    """Malformed expression structure found while building the tree."""

    def __init__(self, message: str, token: Token | None = None):
        self.token = token
        self.position = token.position if token is not None else None
        if token is not None:
            message = f"{message} at position {token.position}"
        super().__init__(message)


class EvaluationError(ExpressionError):
    """Error during expression evaluation."""
    pass


class UnknownFunctionError(EvaluationError):
    """The called function is not in the registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown function: {name}")


class ArityError(EvaluationError):
    """A function received fewer arguments than it needs."""

    def __init__(self, name: str, expected: int, actual: int):
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{name} expects at least {expected} argument(s), got {actual}"
        )


class TypeMismatchError(EvaluationError):
    """An evaluated value is not an integer where one is required."""
    pass


class DivisionByZeroError(EvaluationError):
    """Integer division with a zero divisor."""
    pass
