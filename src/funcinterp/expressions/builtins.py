"""Built-in functions for the funcinterp expression language.

This module registers the built-in arithmetic functions with a
FunctionRegistry:

- ADD(a, b)
- MINUS(a, b)
- MULTIPLY(a, b)
- DIVIDE(a, b)

Each built-in evaluates its first two arguments, requires both to reduce to
integers, and combines them with fixed-width signed arithmetic: results
wrap around on overflow like a native machine integer. Any arguments past
the second are ignored.
"""

from typing import Callable

from funcinterp.expressions.errors import DivisionByZeroError
from funcinterp.expressions.functions import (
    CallArguments,
    FunctionImpl,
    FunctionParameter,
    FunctionRegistry,
)
from funcinterp.expressions.parser import DEFAULT_INTEGER_BITS, IntegerLiteral

Operator = Callable[[int, int], int]


def wrap_integer(value: int, bits: int = DEFAULT_INTEGER_BITS) -> int:
    """Wrap an unbounded int into a signed integer of the given width."""
    modulus = 1 << bits
    value &= modulus - 1
    if value >= modulus >> 1:
        value -= modulus
    return value


def _add(left: int, right: int) -> int:
    return left + right


def _minus(left: int, right: int) -> int:
    return left - right


def _multiply(left: int, right: int) -> int:
    return left * right


def _divide(left: int, right: int) -> int:
    """Integer division truncating toward zero."""
    if right == 0:
        raise DivisionByZeroError("Division by zero")
    quotient = abs(left) // abs(right)
    if (left < 0) != (right < 0):
        quotient = -quotient
    return quotient


def binary_function(operator: Operator, bits: int = DEFAULT_INTEGER_BITS) -> FunctionImpl:
    """Build an implementation applying `operator` to the first two arguments."""

    def implementation(args: CallArguments) -> IntegerLiteral:
        args.require(2)
        left = args.integer(0)
        right = args.integer(1)
        return IntegerLiteral(wrap_integer(operator(left, right), bits))

    return implementation


def _operands() -> list[FunctionParameter]:
    return [
        FunctionParameter("left", "integer", "Left operand"),
        FunctionParameter("right", "integer", "Right operand"),
    ]


def register_builtins(
    registry: FunctionRegistry, integer_bits: int = DEFAULT_INTEGER_BITS
) -> None:
    """Register all built-in functions with the given registry."""
    registry.register(
        "ADD",
        binary_function(_add, integer_bits),
        description="Returns the sum of two integers",
        parameters=_operands(),
        examples=["ADD(1,2)", "ADD(1,MULTIPLY(2,3))"],
    )

    registry.register(
        "MINUS",
        binary_function(_minus, integer_bits),
        description="Returns the difference of two integers",
        parameters=_operands(),
        examples=["MINUS(5,3)"],
    )

    registry.register(
        "MULTIPLY",
        binary_function(_multiply, integer_bits),
        description="Returns the product of two integers",
        parameters=_operands(),
        examples=["MULTIPLY(2,MINUS(5,3))"],
    )

    registry.register(
        "DIVIDE",
        binary_function(_divide, integer_bits),
        description="Returns the quotient of two integers, truncated toward zero",
        parameters=_operands(),
        examples=["DIVIDE(7,2)"],
    )
