"""Lexer/tokenizer for the funcinterp expression language.

Converts expression strings into a flat list of tokens for the tree builder.

Token types:
- Structure: LPAREN, RPAREN, COMMA
- Values: VALUE (raw text between delimiters, not yet classified as a
  number or a function name)

Lexing never fails: any character sequence is lexically valid and malformed
structure is only detected by the tree builder.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator


class TokenType(Enum):
    """Types of tokens in the expression language."""

    LPAREN = auto()      # (
    RPAREN = auto()      # )
    COMMA = auto()       # ,
    VALUE = auto()       # anything between delimiters


@dataclass(frozen=True)
class Token:
    """A single token from the lexer.

    Attributes:
        type: The token type
        value: Raw source text of the token. For VALUE tokens this is the
            untrimmed text between delimiters; for structural tokens it is
            the delimiter character itself.
        position: Character position of the token's first character
    """

    type: TokenType
    value: str
    position: int

    @property
    def text(self) -> str:
        """The token value with surrounding whitespace removed."""
        return self.value.strip()

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, pos={self.position})"


DELIMITERS = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ",": TokenType.COMMA,
}


class Lexer:
    """Tokenizer for the expression language.

    Usage:
        lexer = Lexer("ADD(1, MULTIPLY(2, 3))")
        for token in lexer:
            print(token)
    """

    def __init__(self, source: str):
        self.source = source

    def __iter__(self) -> Iterator[Token]:
        """Iterate over all tokens in the source."""
        buffer: list[str] = []
        buffer_start = 0

        for position, char in enumerate(self.source):
            token_type = DELIMITERS.get(char)
            if token_type is None:
                if not buffer:
                    buffer_start = position
                buffer.append(char)
                continue

            pending = self._flush(buffer, buffer_start)
            if pending is not None:
                yield pending
            yield Token(token_type, char, position)
            buffer = []

        pending = self._flush(buffer, buffer_start)
        if pending is not None:
            yield pending

    def _flush(self, buffer: list[str], start: int) -> Token | None:
        """Turn the pending buffer into a VALUE token unless it is blank."""
        value = "".join(buffer)
        if not value.strip():
            return None
        return Token(TokenType.VALUE, value, start)

    def tokenize(self) -> list[Token]:
        """Tokenize the entire source and return list of tokens."""
        return list(self)


def tokenize(source: str) -> list[Token]:
    """Convenience function to tokenize an expression string."""
    return Lexer(source).tokenize()
