"""
Intermediate representation for prefixcalc.

The parser produces these nodes and the evaluator consumes them.
"""

from .expressions import Expr, Literal, Operation, Operator

__all__ = ["Expr", "Literal", "Operation", "Operator"]
