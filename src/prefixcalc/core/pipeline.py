"""
End-to-end pipeline: read source, tokenize, parse, evaluate.

``run_pipeline`` keeps every intermediate stage so the CLI can dump them.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from prefixcalc.core.errors import SourceReadError
from prefixcalc.core.ir.expressions import Expr
from prefixcalc.core.options import EvalOptions
from prefixcalc.core.prefix_lang.evaluator import evaluate
from prefixcalc.core.prefix_lang.parser import parse_tokens
from prefixcalc.core.prefix_lang.tokenizer import Token, tokenize

logger = logging.getLogger(__name__)


class PipelineResult(BaseModel):
    """Every stage of one evaluation."""

    source: str
    tokens: list[Token] = Field(description="Full token sequence")
    expr: Expr
    consumed: int = Field(description="Tokens consumed by the top-level parse")
    value: int

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


def read_source(path: Path) -> str:
    """Read a source file fully as UTF-8 text.

    Raises:
        SourceReadError: If the file is missing, unreadable, or not UTF-8.
    """
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise SourceReadError(f"Could not read file \"{path}\": file not found", path) from e
    except UnicodeDecodeError as e:
        raise SourceReadError(f"Could not read file \"{path}\": not valid UTF-8 ({e.reason})", path) from e
    except OSError as e:
        raise SourceReadError(f"Could not read file \"{path}\": {e.strerror or e}", path) from e


def run_pipeline(source: str, options: EvalOptions | None = None) -> PipelineResult:
    """Run tokenizer, parser and evaluator over ``source``."""
    tokens = tokenize(source)
    expr, consumed = parse_tokens(tokens)
    value = evaluate(expr, options)
    return PipelineResult(
        source=source,
        tokens=tokens,
        expr=expr,
        consumed=consumed,
        value=value,
    )


def calculate(source: str, options: EvalOptions | None = None) -> int:
    """Evaluate a prefix expression string to an integer."""
    return run_pipeline(source, options).value


def calculate_file(path: Path, options: EvalOptions | None = None) -> PipelineResult:
    """Read ``path`` and run the full pipeline over its contents."""
    logger.debug("Reading source from %s", path)
    return run_pipeline(read_source(path), options)
