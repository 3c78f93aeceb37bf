"""Function registry for the funcinterp expression language.

Functions are callable from expressions (e.g., `ADD(1, 2)`). Each function
is registered with metadata for documentation alongside its implementation.

Implementations receive their arguments un-evaluated, wrapped in a
CallArguments sequence, and evaluate only the ones they need. This keeps
the door open for short-circuiting functions such as a conditional that
evaluates a single branch.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable

from funcinterp.expressions.errors import (
    ArityError,
    TypeMismatchError,
    UnknownFunctionError,
)
from funcinterp.expressions.parser import DEFAULT_INTEGER_BITS, ASTNode, IntegerLiteral

if TYPE_CHECKING:
    from funcinterp.expressions.evaluator import Evaluator

logger = logging.getLogger(__name__)


class CallArguments(Sequence[ASTNode]):
    """The un-evaluated arguments of one function call.

    Indexing returns the raw argument subtree; `evaluate()` and `integer()`
    reduce an argument on demand through the evaluator running the call.
    """

    def __init__(self, name: str, nodes: Sequence[ASTNode], evaluator: Evaluator):
        self.name = name
        self._nodes = list(nodes)
        self._evaluator = evaluator

    def __getitem__(self, index):
        return self._nodes[index]

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"CallArguments({self.name!r}, {self._nodes!r})"

    def require(self, count: int) -> None:
        """Raise ArityError unless at least `count` arguments were passed."""
        if len(self._nodes) < count:
            raise ArityError(self.name, count, len(self._nodes))

    def evaluate(self, index: int) -> ASTNode:
        """Evaluate the argument at `index` and return the reduced node."""
        self.require(index + 1)
        return self._evaluator.evaluate(self._nodes[index])

    def integer(self, index: int) -> int:
        """Evaluate the argument at `index`, which must reduce to an integer."""
        result = self.evaluate(index)
        if not isinstance(result, IntegerLiteral):
            raise TypeMismatchError(
                f"{self.name} argument {index + 1} must be an integer, "
                f"got {type(result).__name__}"
            )
        return result.value


# Implementation signature: (CallArguments) -> ASTNode
FunctionImpl = Callable[[CallArguments], ASTNode]


@dataclass
class FunctionParameter:
    """Definition of a function parameter.

    Attributes:
        name: Parameter name
        type: Expected type ("integer" for every built-in)
        description: Human-readable description
    """

    name: str
    type: str
    description: str


@dataclass
class FunctionDefinition:
    """Complete definition of an expression function.

    Attributes:
        name: Function name as used in expressions (case-sensitive)
        implementation: The Python callable invoked with CallArguments
        description: Human-readable description
        parameters: List of parameter definitions
        examples: Example expressions using this function
    """

    name: str
    implementation: FunctionImpl
    description: str = ""
    parameters: list[FunctionParameter] = field(default_factory=list)
    examples: list[str] = field(default_factory=list)

    @property
    def arity(self) -> int:
        return len(self.parameters)

    def to_dict(self) -> dict[str, Any]:
        """Export for the `functions --json` listing."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": [
                {
                    "name": p.name,
                    "type": p.type,
                    "description": p.description,
                }
                for p in self.parameters
            ],
            "examples": self.examples,
        }


class FunctionRegistry:
    """Registry of the functions one interpreter session can call.

    Example:
        registry = FunctionRegistry.with_builtins()
        registry.register(
            "NEGATE",
            lambda args: IntegerLiteral(-args.integer(0)),
            description="Negate an integer",
        )

        func = registry.get("NEGATE")
    """

    def __init__(self) -> None:
        self._functions: dict[str, FunctionDefinition] = {}

    @classmethod
    def with_builtins(cls, integer_bits: int = DEFAULT_INTEGER_BITS) -> FunctionRegistry:
        """Create a registry populated with ADD, MINUS, MULTIPLY and DIVIDE."""
        from funcinterp.expressions.builtins import register_builtins

        registry = cls()
        register_builtins(registry, integer_bits=integer_bits)
        return registry

    def register(
        self,
        name: str,
        implementation: FunctionImpl,
        *,
        description: str = "",
        parameters: list[FunctionParameter] | None = None,
        examples: list[str] | None = None,
        replace: bool = False,
    ) -> FunctionDefinition:
        """Register a function by name.

        Args:
            name: Name used at call sites
            implementation: Callable taking CallArguments, returning an ASTNode
            description: Human-readable description
            parameters: Parameter definitions for documentation
            examples: Example expressions
            replace: Overwrite an existing registration instead of failing

        Returns:
            The stored function definition

        Raises:
            ValueError: If the name is already registered and replace is False
        """
        func_def = FunctionDefinition(
            name=name,
            implementation=implementation,
            description=description,
            parameters=parameters or [],
            examples=examples or [],
        )
        self.register_definition(func_def, replace=replace)
        return func_def

    def register_definition(
        self, func_def: FunctionDefinition, *, replace: bool = False
    ) -> None:
        """Register a complete function definition."""
        if not func_def.name or func_def.name != func_def.name.strip():
            raise ValueError(f"Invalid function name: {func_def.name!r}")
        if func_def.name in self._functions and not replace:
            raise ValueError(f"Function '{func_def.name}' is already registered")
        self._functions[func_def.name] = func_def
        logger.debug("Registered function %s", func_def.name)

    def unregister(self, name: str) -> None:
        """Remove a function.

        Raises:
            UnknownFunctionError: If function is not registered
        """
        if name not in self._functions:
            raise UnknownFunctionError(name)
        del self._functions[name]

    def get(self, name: str) -> FunctionDefinition:
        """Get a function definition by name.

        Raises:
            UnknownFunctionError: If function is not registered
        """
        if name not in self._functions:
            raise UnknownFunctionError(name)
        return self._functions[name]

    def is_registered(self, name: str) -> bool:
        """Check if a function is registered."""
        return name in self._functions

    def __contains__(self, name: object) -> bool:
        return name in self._functions

    def __len__(self) -> int:
        return len(self._functions)

    def names(self) -> list[str]:
        """List registered function names, sorted."""
        return sorted(self._functions)

    def list_all(self) -> list[FunctionDefinition]:
        """List all registered functions in registration order."""
        return list(self._functions.values())

    def copy(self) -> FunctionRegistry:
        """Return an independent registry with the same definitions."""
        clone = FunctionRegistry()
        clone._functions = dict(self._functions)
        return clone

    def export_documentation(self) -> dict[str, Any]:
        """Export the full registry for documentation output."""
        return {
            "functions": {name: f.to_dict() for name, f in self._functions.items()},
        }
