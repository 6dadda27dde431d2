"""
prefixcalc expression language.

Tokenizer, parser, and evaluator for prefix-notation integer arithmetic.

Usage:
    from prefixcalc.core.prefix_lang import parse_expr, evaluate

    expr = parse_expr("(* 2 (+ 1 1))")
    result = evaluate(expr)
    # result == 4
"""

from prefixcalc.core.prefix_lang.evaluator import evaluate
from prefixcalc.core.prefix_lang.parser import check_parens, parse, parse_expr, parse_tokens
from prefixcalc.core.prefix_lang.tokenizer import Token, TokenKind, tokenize

__all__ = [
    "Token",
    "TokenKind",
    "check_parens",
    "evaluate",
    "parse",
    "parse_expr",
    "parse_tokens",
    "tokenize",
]
