"""Expression pipeline for funcinterp.

This module provides:
- Lexer: Tokenizes expression strings
- TreeBuilder: Produces AST from tokens using two explicit stacks
- FunctionRegistry: Registry for callable functions
- Evaluator: Reduces AST against a registry
"""

from funcinterp.expressions.errors import (
    ArityError,
    DivisionByZeroError,
    EvaluationError,
    ExpressionError,
    ParseError,
    TypeMismatchError,
    UnknownFunctionError,
)
from funcinterp.expressions.evaluator import Evaluator, evaluate
from funcinterp.expressions.functions import (
    CallArguments,
    FunctionDefinition,
    FunctionParameter,
    FunctionRegistry,
)
from funcinterp.expressions.lexer import Lexer, Token, TokenType, tokenize
from funcinterp.expressions.parser import (
    ASTNode,
    FunctionCall,
    IntegerLiteral,
    TreeBuilder,
    build,
    parse,
)

__all__ = [
    # Errors
    "ArityError",
    "DivisionByZeroError",
    "EvaluationError",
    "ExpressionError",
    "ParseError",
    "TypeMismatchError",
    "UnknownFunctionError",
    # Evaluator
    "Evaluator",
    "evaluate",
    # Functions
    "CallArguments",
    "FunctionDefinition",
    "FunctionParameter",
    "FunctionRegistry",
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    # Tree builder
    "ASTNode",
    "FunctionCall",
    "IntegerLiteral",
    "TreeBuilder",
    "build",
    "parse",
]
