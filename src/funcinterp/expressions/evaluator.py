"""Evaluator for the funcinterp expression language.

Walks the AST and reduces it to a single node, resolving function calls
through a FunctionRegistry at evaluation time.
"""

from funcinterp.expressions.errors import (
    EvaluationError,
    TypeMismatchError,
    UnknownFunctionError,
)
from funcinterp.expressions.functions import CallArguments, FunctionRegistry
from funcinterp.expressions.parser import ASTNode, FunctionCall, IntegerLiteral


class Evaluator:
    """Evaluates expression AST against a function registry.

    Usage:
        registry = FunctionRegistry.with_builtins()
        evaluator = Evaluator(registry)
        result = evaluator.evaluate(ast)
    """

    def __init__(self, registry: FunctionRegistry):
        self.registry = registry

    def evaluate(self, node: ASTNode) -> ASTNode:
        """Evaluate an AST node and return the reduced node."""
        method_name = f"_eval_{type(node).__name__.lower()}"
        method = getattr(self, method_name, None)

        if method is None:
            raise EvaluationError(f"Unknown node type: {type(node).__name__}")

        return method(node)

    def evaluate_integer(self, node: ASTNode) -> int:
        """Evaluate a node that must reduce to an integer literal."""
        result = self.evaluate(node)
        if not isinstance(result, IntegerLiteral):
            raise TypeMismatchError(
                f"Expression did not reduce to an integer: {result}"
            )
        return result.value

    # -------------------------------------------------------------------------
    # Node type evaluators
    # -------------------------------------------------------------------------

    def _eval_integerliteral(self, node: IntegerLiteral) -> ASTNode:
        return node

    def _eval_functioncall(self, node: FunctionCall) -> ASTNode:
        """Evaluate a function call.

        Arguments are handed over un-evaluated; the implementation decides
        which of them to evaluate.
        """
        func_name = node.name

        if not self.registry.is_registered(func_name):
            raise UnknownFunctionError(func_name)

        func_def = self.registry.get(func_name)
        result = func_def.implementation(CallArguments(func_name, node.arguments, self))

        if not isinstance(result, ASTNode):
            raise EvaluationError(
                f"Function '{func_name}' returned {type(result).__name__}, "
                "expected an expression node"
            )
        return result


# -----------------------------------------------------------------------------
# Convenience functions
# -----------------------------------------------------------------------------


def evaluate(node: ASTNode, registry: FunctionRegistry) -> ASTNode:
    """Evaluate an AST against a registry and return the reduced node."""
    return Evaluator(registry).evaluate(node)
