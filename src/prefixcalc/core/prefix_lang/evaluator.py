"""
Expression evaluator for the prefixcalc expression language.

Reduces an expression AST to a signed 64-bit integer. Arithmetic operators
fold their operands left to right; square root is unary.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass

from prefixcalc.core.errors import (
    ArityError,
    DivisionByZeroError,
    DomainError,
    EvalError,
    IntegerOverflowError,
)
from prefixcalc.core.ir.expressions import INT64_MAX, INT64_MIN, Expr, Literal, Operation, Operator
from prefixcalc.core.options import EvalOptions, OverflowPolicy

logger = logging.getLogger(__name__)


def _trunc_div(left: int, right: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def _trunc_mod(left: int, right: int) -> int:
    """Remainder with the sign of the dividend."""
    return left - right * _trunc_div(left, right)


_FOLD_OPS: dict[Operator, Callable[[int, int], int]] = {
    Operator.ADD: lambda a, b: a + b,
    Operator.SUB: lambda a, b: a - b,
    Operator.MUL: lambda a, b: a * b,
    Operator.DIV: _trunc_div,
    Operator.MOD: _trunc_mod,
}


def evaluate(expr: Expr, options: EvalOptions | None = None) -> int:
    """Evaluate an expression AST.

    Args:
        expr: Parsed expression AST.
        options: Overflow and square root arity policy. Defaults apply when
            omitted.

    Returns:
        The computed integer.

    Raises:
        EvalError: If evaluation fails.
    """
    result = _interpret(expr, options or EvalOptions())
    logger.debug("Evaluated %s = %d", expr, result)
    return result


@dataclass
class _Frame:
    """An operation whose operands are being folded."""

    node: Operation
    index: int = 0
    acc: int = 0


def _interpret(expr: Expr, opts: EvalOptions) -> int:
    """Walk the tree depth-first, left to right, on an explicit frame stack.

    Each operand is folded into its parent as soon as it is known, so faults
    surface in source order and nesting depth is not bounded by recursion.
    """
    frames: list[_Frame] = []
    node = expr

    while True:
        if isinstance(node, Operation):
            _check_arity(node, opts)
            frames.append(_Frame(node))
            node = node.args[0]
            continue

        if not isinstance(node, Literal):
            raise EvalError(f"Unknown expression type: {type(node).__name__}")
        value = node.value

        # Hand the finished value up until some frame still has operands left
        while frames:
            frame = frames[-1]
            if frame.node.op == Operator.SQRT:
                frames.pop()
                value = _sqrt(value, frame.node.op, opts)
                continue

            if frame.index == 0:
                frame.acc = value
            else:
                frame.acc = _fold_step(frame.node, frame.acc, value, opts)
            frame.index += 1

            if frame.index < len(frame.node.args):
                node = frame.node.args[frame.index]
                break
            frames.pop()
            value = frame.acc
        else:
            return value


def _check_arity(expr: Operation, opts: EvalOptions) -> None:
    """Reject operand counts the operator cannot take."""
    count = len(expr.args)
    if expr.op == Operator.SQRT:
        if count == 0 or (opts.strict_sqrt and count > 1):
            raise ArityError(
                f"({expr.op.symbol} ...) takes exactly 1 operand, got {count}",
                expr.op,
                count,
            )
        if count > 1:
            logger.debug("Ignoring %d extra operand(s) to %s", count - 1, expr)
    elif count == 0:
        raise ArityError(
            f"({expr.op.symbol}) requires at least 1 operand",
            expr.op,
            0,
        )


def _sqrt(value: int, op: Operator, opts: EvalOptions) -> int:
    """Principal square root, truncated toward zero."""
    if value < 0:
        raise DomainError(f"({op.symbol} ...) of negative value {value}", op, value)
    return _check_range(int(math.sqrt(value)), op, opts)


def _fold_step(expr: Operation, acc: int, right: int, opts: EvalOptions) -> int:
    """Fold one operand into the accumulator with the operator's binary function."""
    if right == 0 and expr.op in (Operator.DIV, Operator.MOD):
        label = "Division" if expr.op == Operator.DIV else "Modulo"
        raise DivisionByZeroError(f"{label} by zero in {expr}", expr.op)
    return _check_range(_FOLD_OPS[expr.op](acc, right), expr.op, opts)


def _check_range(value: int, op: Operator, opts: EvalOptions) -> int:
    """Apply the overflow policy to a freshly computed value."""
    if INT64_MIN <= value <= INT64_MAX:
        return value
    if opts.overflow == OverflowPolicy.WRAP:
        return (value - INT64_MIN) % 2**64 + INT64_MIN
    raise IntegerOverflowError(
        f"Integer overflow in ({op.symbol} ...): {value} does not fit in 64 bits",
        op,
    )
