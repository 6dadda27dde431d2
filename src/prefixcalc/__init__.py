"""
prefixcalc - prefix-notation integer calculator.

Reads an expression such as ``(* 2 (+ 1 1))``, tokenizes it, parses it into
a syntax tree, and reduces the tree to a signed 64-bit integer.
"""

from __future__ import annotations

import re
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

from .core.errors import (
    ArityError,
    DivisionByZeroError,
    DomainError,
    EvalError,
    IntegerLiteralError,
    IntegerOverflowError,
    LexError,
    MissingOperatorError,
    ParseError,
    PrefixCalcError,
    SourceReadError,
    UnbalancedParensError,
    UnexpectedCharacterError,
    UnexpectedEndError,
    UnexpectedTokenError,
)
from .core.options import EvalOptions, OverflowPolicy
from .core.pipeline import PipelineResult, calculate, run_pipeline
from .core.prefix_lang import evaluate, parse, parse_expr, tokenize


def _get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    # In editable mode, read directly from pyproject.toml for live updates
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text()
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    try:
        return _metadata_version("prefixcalc")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "tokenize",
    "parse",
    "parse_expr",
    "evaluate",
    "calculate",
    "run_pipeline",
    "PipelineResult",
    "EvalOptions",
    "OverflowPolicy",
    "PrefixCalcError",
    "SourceReadError",
    "LexError",
    "UnexpectedCharacterError",
    "IntegerLiteralError",
    "ParseError",
    "UnbalancedParensError",
    "MissingOperatorError",
    "UnexpectedEndError",
    "UnexpectedTokenError",
    "EvalError",
    "DivisionByZeroError",
    "ArityError",
    "IntegerOverflowError",
    "DomainError",
]
