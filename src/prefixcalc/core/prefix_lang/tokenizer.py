"""
Tokenizer for the prefixcalc expression language.

Converts an expression string into a sequence of typed tokens.
"""

from __future__ import annotations

import logging
from enum import StrEnum, auto

from prefixcalc.core.errors import IntegerLiteralError, UnexpectedCharacterError
from prefixcalc.core.ir.expressions import INT64_MAX

logger = logging.getLogger(__name__)


class TokenKind(StrEnum):
    """Token types for the expression language."""

    SYMBOL = auto()
    NUMBER = auto()
    LPAREN = auto()
    RPAREN = auto()


class Token:
    """A single token from the expression tokenizer."""

    __slots__ = ("kind", "value", "pos")

    def __init__(self, kind: TokenKind, value: str | int, pos: int) -> None:
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "pos", pos)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"Token is immutable, cannot set {name!r}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return (self.kind, self.value, self.pos) == (other.kind, other.value, other.pos)

    def __hash__(self) -> int:
        return hash((self.kind, self.value, self.pos))

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.value!r}, pos={self.pos})"


SYMBOLS = frozenset("+-/*%r")
_DIGITS = frozenset("0123456789")


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression string into a list of tokens.

    Raises:
        UnexpectedCharacterError: On a character that starts no token.
        IntegerLiteralError: On a numeric literal wider than 64 bits.
    """
    tokens: list[Token] = []
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        if c.isspace():
            i += 1
            continue

        if c == "(":
            tokens.append(Token(TokenKind.LPAREN, c, i))
            i += 1
            continue

        if c == ")":
            tokens.append(Token(TokenKind.RPAREN, c, i))
            i += 1
            continue

        # Digit run; a leading '-' is a symbol, never a sign
        if c in _DIGITS:
            start = i
            while i < n and source[i] in _DIGITS:
                i += 1
            tokens.append(_read_number(source[start:i], start))
            continue

        if c in SYMBOLS:
            tokens.append(Token(TokenKind.SYMBOL, c, i))
            i += 1
            continue

        raise UnexpectedCharacterError(c, i, source[i:])

    logger.debug("Tokenized %d chars into %d tokens", n, len(tokens))
    return tokens


def _read_number(digits: str, start: int) -> Token:
    """Build a NUMBER token from a run of ASCII digits."""
    significant = digits.lstrip("0")
    # int() refuses very long digit strings, so reject by width first
    if len(significant) > len(str(INT64_MAX)) or int(significant or "0") > INT64_MAX:
        raise IntegerLiteralError(digits, start)
    return Token(TokenKind.NUMBER, int(significant or "0"), start)
