"""
Expression types for prefixcalc IR.

Prefix-notation arithmetic over signed 64-bit integers:

- Literals: 42
- Operations: (op arg1 arg2 ...) where op is one of + - / * % r
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# Signed 64-bit range shared by literals and evaluation results.
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class Operator(StrEnum):
    """Operators, each bound to its source symbol."""

    ADD = "+"
    SUB = "-"
    DIV = "/"
    MUL = "*"
    MOD = "%"
    SQRT = "r"

    @property
    def symbol(self) -> str:
        return self.value

    @classmethod
    def from_symbol(cls, symbol: str) -> Operator:
        """Map a source symbol to its operator. Raises ValueError if unknown."""
        return cls(symbol)


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Literal(BaseModel):
    """A constant integer."""

    value: int = Field(description="The literal value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.value)


class Operation(BaseModel):
    """
    An operator applied to an ordered list of operands.

    Arity is not checked here; the evaluator rejects unsupported operand
    counts.

    Examples:
        - Operation(op=Operator.ADD, args=(Literal(value=1), Literal(value=2))) → (+ 1 2)
        - Operation(op=Operator.SQRT, args=(Literal(value=9),)) → (r 9)
    """

    op: Operator
    args: tuple[Expr, ...] = Field(default=(), description="Operands")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        # Explicit stack so deeply nested trees render without recursion
        parts: list[str] = []
        pending: list[Expr | str] = [self]
        while pending:
            item = pending.pop()
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, Literal):
                parts.append(str(item.value))
            else:
                parts.append(f"({item.op.symbol}")
                pending.append(")")
                for arg in reversed(item.args):
                    pending.append(arg)
                    pending.append(" ")
        return "".join(parts)


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Literal | Operation

# Rebuild models for recursive forward references
Operation.model_rebuild()
