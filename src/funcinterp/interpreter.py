"""Interpreter session tying the expression pipeline together.

A session owns exactly one FunctionRegistry and runs
tokenize -> build -> evaluate for each expression string. Nothing is kept
between calls.
"""

import logging

from funcinterp.config import InterpreterConfig
from funcinterp.expressions.errors import EvaluationError
from funcinterp.expressions.evaluator import Evaluator
from funcinterp.expressions.functions import FunctionRegistry
from funcinterp.expressions.lexer import Token, tokenize
from funcinterp.expressions.parser import ASTNode, TreeBuilder

logger = logging.getLogger(__name__)


class Interpreter:
    """Evaluates function-call expressions such as `ADD(1,MULTIPLY(2,3))`.

    Usage:
        interpreter = Interpreter()
        interpreter.interpret("ADD(1, 2)")  # 3

    Custom functions can be added through `interpreter.registry` before the
    expression that uses them is evaluated.
    """

    def __init__(
        self,
        config: InterpreterConfig | None = None,
        registry: FunctionRegistry | None = None,
    ):
        self.config = config or InterpreterConfig()
        if registry is None:
            registry = FunctionRegistry.with_builtins(self.config.integer_bits)
        self._registry = registry
        self._builder = TreeBuilder(
            integer_bits=self.config.integer_bits,
            max_depth=self.config.max_depth,
            strict=self.config.strict,
        )
        self._evaluator = Evaluator(registry)

    @property
    def registry(self) -> FunctionRegistry:
        """The function registry owned by this session."""
        return self._registry

    def tokenize(self, source: str) -> list[Token]:
        tokens = tokenize(source)
        logger.debug("Tokenized %r into %d token(s)", source, len(tokens))
        return tokens

    def build(self, source: str | list[Token]) -> ASTNode:
        """Build the expression tree for a source string or token list."""
        tokens = self.tokenize(source) if isinstance(source, str) else source
        return self._builder.build(tokens)

    def evaluate(self, node: ASTNode) -> ASTNode:
        """Reduce a tree against this session's registry."""
        try:
            return self._evaluator.evaluate(node)
        except RecursionError as e:
            raise EvaluationError("Expression nested too deeply") from e

    def interpret(self, source: str) -> int:
        """Evaluate an expression string to an integer.

        Raises:
            ParseError: If the expression is malformed
            EvaluationError: If evaluation fails or the result is not an integer
        """
        tree = self.build(source)
        try:
            return self._evaluator.evaluate_integer(tree)
        except RecursionError as e:
            raise EvaluationError("Expression nested too deeply") from e


_default_interpreter: Interpreter | None = None


def interpret(source: str) -> int:
    """Evaluate an expression string with a shared default session.

    Example:
        interpret("MULTIPLY(2, MINUS(5, 3))")  # 4
    """
    global _default_interpreter
    if _default_interpreter is None:
        _default_interpreter = Interpreter()
    return _default_interpreter.interpret(source)
