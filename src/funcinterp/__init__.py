"""funcinterp: evaluates function-call expressions to integers.

Usage:
    from funcinterp import Interpreter, interpret

    interpret("ADD(1,MULTIPLY(2,3))")  # 7

    interpreter = Interpreter()
    interpreter.registry.register("NEGATE", negate)
"""

from funcinterp.config import InterpreterConfig
from funcinterp.interpreter import Interpreter, interpret

__all__ = [
    "Interpreter",
    "InterpreterConfig",
    "interpret",
]
