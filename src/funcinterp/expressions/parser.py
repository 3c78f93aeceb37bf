"""Tree builder for the funcinterp expression language.

Converts a stream of tokens into an Abstract Syntax Tree (AST).

Instead of recursive descent the builder makes a single left-to-right pass
with two explicit stacks, so bracket nesting depth never consumes Python
call frames:

- the pending-call stack holds FunctionCall nodes whose ')' has not been
  seen yet
- the argument stack holds completed subtrees waiting to be attached to
  the enclosing call

Grammar:
    Expr := Integer | Identifier '(' Expr (',' Expr)* ')'
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable

from funcinterp.expressions.errors import ParseError
from funcinterp.expressions.lexer import Token, TokenType, tokenize

logger = logging.getLogger(__name__)

DEFAULT_INTEGER_BITS = 32
DEFAULT_MAX_DEPTH = 100

_INTEGER_PATTERN = re.compile(r"[0-9]+")


# -----------------------------------------------------------------------------
# AST Node Types
# -----------------------------------------------------------------------------


@dataclass
class ASTNode:
    """Base class for AST nodes."""
    pass


@dataclass
class IntegerLiteral(ASTNode):
    """An integer literal (e.g., 42)."""
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class FunctionCall(ASTNode):
    """Function call (e.g., ADD(1, 2), MULTIPLY(2, MINUS(5, 3)))."""
    name: str
    arguments: list[ASTNode] = field(default_factory=list)

    def __str__(self) -> str:
        args = ",".join(str(arg) for arg in self.arguments)
        return f"{self.name}({args})"


# -----------------------------------------------------------------------------
# Tree builder
# -----------------------------------------------------------------------------


def integer_bounds(bits: int) -> tuple[int, int]:
    """Return the (min, max) values of a signed integer of the given width."""
    return -(1 << (bits - 1)), (1 << (bits - 1)) - 1


class TreeBuilder:
    """Two-stack builder turning tokens into an expression tree.

    Usage:
        builder = TreeBuilder()
        ast = builder.build(tokenize("ADD(1, 2)"))

    Args:
        integer_bits: Width of the signed integers literals must fit in
        max_depth: Maximum number of nested open calls
        strict: Reject value tokens that are neither integer literals nor
            function names instead of dropping them
    """

    def __init__(
        self,
        integer_bits: int = DEFAULT_INTEGER_BITS,
        max_depth: int = DEFAULT_MAX_DEPTH,
        strict: bool = False,
    ):
        self.integer_bits = integer_bits
        self.max_depth = max_depth
        self.strict = strict

    def build(self, tokens: Iterable[Token]) -> ASTNode:
        """Build the AST from a token sequence and return its root."""
        tokens = list(tokens)
        if not tokens:
            raise ParseError("Empty expression")

        calls: list[FunctionCall] = []
        arguments: list[ASTNode] = []

        for index, token in enumerate(tokens):
            if token.type == TokenType.LPAREN:
                calls.append(self._open_call(tokens, index))
                if len(calls) > self.max_depth:
                    raise ParseError(
                        f"Expression nesting exceeds maximum depth of {self.max_depth}",
                        token,
                    )

            elif token.type == TokenType.RPAREN:
                if not calls:
                    raise ParseError("Unmatched ')'", token)
                call = calls.pop()
                call.arguments.append(self._pop_argument(arguments, call, token))
                arguments.append(call)

            elif token.type == TokenType.COMMA:
                if not calls:
                    raise ParseError("Unexpected ',' outside of a function call", token)
                call = calls[-1]
                call.arguments.append(self._pop_argument(arguments, call, token))

            elif self._starts_with_digit(token):
                arguments.append(self._parse_integer(token))

            elif not self._is_function_name(tokens, index):
                if self.strict:
                    raise ParseError(f"Unexpected value '{token.text}'", token)
                logger.warning(
                    "Dropping value %r at position %d: not an integer or a function name",
                    token.text,
                    token.position,
                )

        if calls:
            raise ParseError(f"Missing ')' for function '{calls[-1].name}'", tokens[-1])
        if len(arguments) != 1:
            raise ParseError(
                f"Expected a single expression, found {len(arguments)}",
                tokens[-1],
            )

        root = arguments[0]
        logger.debug("Built expression tree %s", root)
        return root

    # -------------------------------------------------------------------------
    # Helper methods
    # -------------------------------------------------------------------------

    def _open_call(self, tokens: list[Token], index: int) -> FunctionCall:
        """Create a call node named by the value token before '('."""
        token = tokens[index]
        if index == 0 or tokens[index - 1].type != TokenType.VALUE:
            raise ParseError("Expected function name before '('", token)
        return FunctionCall(tokens[index - 1].text)

    def _pop_argument(
        self, arguments: list[ASTNode], call: FunctionCall, token: Token
    ) -> ASTNode:
        if not arguments:
            raise ParseError(
                f"Expected argument for '{call.name}' before '{token.value}'", token
            )
        return arguments.pop()

    def _starts_with_digit(self, token: Token) -> bool:
        text = token.text
        return bool(text) and "0" <= text[0] <= "9"

    def _is_function_name(self, tokens: list[Token], index: int) -> bool:
        return index + 1 < len(tokens) and tokens[index + 1].type == TokenType.LPAREN

    def _parse_integer(self, token: Token) -> IntegerLiteral:
        """Parse a digit-led value token into an integer literal."""
        text = token.text
        if not _INTEGER_PATTERN.fullmatch(text):
            raise ParseError(f"Invalid integer literal '{text}'", token)

        value = int(text)
        _, maximum = integer_bounds(self.integer_bits)
        if value > maximum:
            raise ParseError(
                f"Integer literal {text} does not fit in {self.integer_bits} bits",
                token,
            )
        return IntegerLiteral(value)


def build(tokens: Iterable[Token]) -> ASTNode:
    """Convenience function to build a tree with default settings."""
    return TreeBuilder().build(tokens)


def parse(source: str) -> ASTNode:
    """Convenience function to tokenize and build an expression string.

    Args:
        source: The expression string

    Returns:
        The AST root node
    """
    return TreeBuilder().build(tokenize(source))
