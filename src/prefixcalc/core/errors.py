"""
Error types for prefixcalc reading, tokenizing, parsing, and evaluation.

Every fault is fatal to a run. The classes below exist so callers can tell
*which* fault occurred; ``kind`` groups them into the four categories
reported by the CLI.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prefixcalc.core.ir.expressions import Operator
    from prefixcalc.core.prefix_lang.tokenizer import Token


class PrefixCalcError(Exception):
    """Base exception for all prefixcalc errors."""

    kind = "internal"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


# =============================================================================
# Input faults
# =============================================================================


class SourceReadError(PrefixCalcError):
    """
    Raised when the source file cannot be read.

    Examples:
    - Missing file
    - Permission denied
    - Invalid UTF-8
    """

    kind = "input"

    def __init__(self, message: str, path: Path):
        self.path = path
        super().__init__(message)


# =============================================================================
# Lexical faults
# =============================================================================


class LexError(PrefixCalcError):
    """Raised when source text cannot be broken into tokens."""

    kind = "lexical"

    def __init__(self, message: str, pos: int):
        self.pos = pos
        super().__init__(message)


class UnexpectedCharacterError(LexError):
    """A character that starts no token."""

    def __init__(self, char: str, pos: int, remainder: str):
        self.char = char
        self.remainder = remainder
        super().__init__(
            f"Invalid token chars found at offset {pos} starting at {remainder!r}",
            pos,
        )


class IntegerLiteralError(LexError):
    """A numeric literal that does not fit a signed 64-bit integer."""

    def __init__(self, literal: str, pos: int):
        self.literal = literal
        super().__init__(
            f"Integer literal {literal} at offset {pos} does not fit in 64 bits",
            pos,
        )


# =============================================================================
# Structural faults
# =============================================================================


class ParseError(PrefixCalcError):
    """
    Raised when the token stream is not a well-formed expression.

    ``remaining`` holds the unparsed token suffix at the point of failure.
    """

    kind = "structural"

    def __init__(self, message: str, remaining: list[Token] | None = None):
        self.remaining = list(remaining or [])
        super().__init__(message)


class UnbalancedParensError(ParseError):
    """Opening and closing parenthesis counts differ."""

    def __init__(self, balance: int, remaining: list[Token] | None = None):
        self.balance = balance
        side = "opening" if balance > 0 else "closing"
        super().__init__(
            f"Unbalanced parentheses: {abs(balance)} unmatched {side} paren(s)",
            remaining,
        )


class MissingOperatorError(ParseError):
    """``(`` not followed by an operator symbol."""


class UnexpectedEndError(ParseError):
    """Tokens ran out while an expression or ``)`` was still expected."""


class UnexpectedTokenError(ParseError):
    """A token that cannot start an expression."""


# =============================================================================
# Arithmetic faults
# =============================================================================


class EvalError(PrefixCalcError):
    """Raised when a well-formed tree cannot be reduced to an integer."""

    kind = "arithmetic"

    def __init__(self, message: str, op: Operator | None = None):
        self.op = op
        super().__init__(message)


class DivisionByZeroError(EvalError):
    """Division or modulo by zero."""


class ArityError(EvalError):
    """An operator applied to an unsupported number of operands."""

    def __init__(self, message: str, op: Operator, count: int):
        self.count = count
        super().__init__(message, op)


class IntegerOverflowError(EvalError):
    """An intermediate value left the signed 64-bit range."""


class DomainError(EvalError):
    """An operand outside the operator's domain (square root of a negative)."""

    def __init__(self, message: str, op: Operator, value: int):
        self.value = value
        super().__init__(message, op)
