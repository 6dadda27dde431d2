"""
Top-down parser for the prefixcalc expression language.

Grammar:
    expr       → NUMBER | operation
    operation  → "(" SYMBOL expr* ")"

Parsing runs in two phases: a cheap pre-pass that only compares the counts
of "(" and ")", then the structural descent, which is what rejects a
count-balanced but misordered stream such as ") (".
"""

from __future__ import annotations

import logging
from typing import cast

from prefixcalc.core.errors import (
    MissingOperatorError,
    UnbalancedParensError,
    UnexpectedEndError,
    UnexpectedTokenError,
)
from prefixcalc.core.ir.expressions import Expr, Literal, Operation, Operator
from prefixcalc.core.prefix_lang.tokenizer import Token, TokenKind, tokenize

logger = logging.getLogger(__name__)


def check_parens(tokens: list[Token]) -> None:
    """Require equal numbers of opening and closing parentheses.

    Nesting order is not checked here.

    Raises:
        UnbalancedParensError: If the counts differ.
    """
    balance = 0
    for tok in tokens:
        if tok.kind == TokenKind.LPAREN:
            balance += 1
        elif tok.kind == TokenKind.RPAREN:
            balance -= 1
    if balance != 0:
        raise UnbalancedParensError(balance, tokens)


def _format_tokens(tokens: list[Token]) -> str:
    return "[" + ", ".join(repr(t) for t in tokens) + "]"


class Parser:
    """Top-down parser over a token list.

    ``pos`` is the shared read position; after :meth:`parse_expr` returns it
    equals the number of tokens that expression consumed.
    """

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.pos = 0

    @property
    def current(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    @property
    def remaining(self) -> list[Token]:
        return self.tokens[self.pos :]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    # -- Grammar rules --

    def parse_expr(self) -> Expr:
        """NUMBER | '(' SYMBOL expr* ')'

        Nesting is tracked on an explicit stack of open operations, so depth
        is bounded by memory rather than the interpreter's recursion limit.
        """
        # Innermost open operation last: (operator, operands parsed so far)
        open_ops: list[tuple[Operator, list[Expr]]] = []

        while True:
            tok = self.current
            node: Expr

            if tok is None:
                if open_ops:
                    op, args = open_ops[-1]
                    raise UnexpectedEndError(
                        f"Unexpected end of input in ({op.symbol} ...): "
                        f"expected an operand or ')' after {len(args)} operand(s)"
                    )
                raise UnexpectedEndError("Unexpected end of input: expected an expression")

            if tok.kind == TokenKind.RPAREN and open_ops:
                self.advance()
                op, args = open_ops.pop()
                node = Operation(op=op, args=tuple(args))
            elif tok.kind == TokenKind.LPAREN:
                open_ops.append((self._parse_operator(), []))
                continue
            elif tok.kind == TokenKind.NUMBER:
                self.advance()
                node = Literal(value=cast(int, tok.value))
            else:
                raise UnexpectedTokenError(
                    f"Unexpected token {tok!r} cannot start an expression; "
                    f"remaining tokens: {_format_tokens(self.remaining)}",
                    self.remaining,
                )

            if not open_ops:
                return node
            open_ops[-1][1].append(node)

    def _parse_operator(self) -> Operator:
        """'(' SYMBOL"""
        self.advance()  # (
        sym = self.current
        if sym is None or sym.kind != TokenKind.SYMBOL:
            raise MissingOperatorError(
                f"Expected operator after '(': {_format_tokens(self.remaining)}",
                self.remaining,
            )
        self.advance()
        return Operator.from_symbol(cast(str, sym.value))


def parse_tokens(tokens: list[Token]) -> tuple[Expr, int]:
    """Parse one expression and report how many tokens it consumed.

    Tokens after the first complete expression are ignored.

    Raises:
        ParseError: If the token stream is not a well-formed expression.
    """
    check_parens(tokens)
    parser = Parser(tokens)
    expr = parser.parse_expr()

    if parser.current is not None:
        logger.debug(
            "Ignoring %d trailing token(s): %s",
            len(parser.remaining),
            _format_tokens(parser.remaining),
        )
    logger.debug("Parsed %d of %d tokens", parser.pos, len(tokens))
    return expr, parser.pos


def parse(tokens: list[Token]) -> Expr:
    """Parse one expression from a token list, ignoring trailing tokens."""
    expr, _ = parse_tokens(tokens)
    return expr


def parse_expr(source: str) -> Expr:
    """Parse an expression string into an AST.

    Args:
        source: Expression string (e.g., "(+ 1 (* 2 3))")

    Returns:
        Parsed expression AST.

    Raises:
        LexError: If tokenization fails.
        ParseError: If the expression is invalid.
    """
    return parse(tokenize(source))
