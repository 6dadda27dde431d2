"""
prefixcalc CLI - Entry point.

Evaluates the prefix expression in SOURCE_FILE and prints each stage of the
pipeline followed by the result.
"""

from __future__ import annotations

import logging
import platform
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.pretty import Pretty

from prefixcalc import __version__
from prefixcalc.core.errors import PrefixCalcError
from prefixcalc.core.options import EvalOptions, OverflowPolicy
from prefixcalc.core.pipeline import PipelineResult, calculate_file

logger = logging.getLogger(__name__)

console = Console(highlight=False)

# Nesting shown in the AST dump; the full tree is still printed in prefix form
AST_DUMP_DEPTH = 16

app = typer.Typer(
    help="prefixcalc – evaluate a prefix-notation integer expression from a file",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"prefixcalc {__version__}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def _print_stages(result: PipelineResult) -> None:
    """Dump source, tokens and AST in human-readable debug form."""
    typer.echo("src -")
    typer.echo(result.source)
    typer.echo("tokens -")
    console.print(Pretty(result.tokens, expand_all=True))
    typer.echo("ast -")
    console.print(Pretty(result.expr, max_depth=AST_DUMP_DEPTH, expand_all=True))
    typer.echo(f"prefix: {result.expr}")
    if result.consumed < len(result.tokens):
        typer.echo(f"note: ignored {len(result.tokens) - result.consumed} trailing token(s)")


@app.command()
def run(
    source_file: Path = typer.Argument(..., help="Path to the expression source file"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Print only the result"),
    overflow: OverflowPolicy = typer.Option(
        OverflowPolicy.FATAL, "--overflow", help="Overflow handling: 'fatal' or 'wrap'"
    ),
    strict_sqrt: bool = typer.Option(
        True,
        "--strict-sqrt/--lenient-sqrt",
        help="Reject (r ...) with more than one operand, or ignore the extras",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version information",
    ),
) -> None:
    """
    Evaluate the expression in SOURCE_FILE.

    Faults of any kind (unreadable file, bad character, malformed
    expression, division by zero, overflow) abort with exit code 1.
    """
    _configure_logging(verbose)
    options = EvalOptions(overflow=overflow, strict_sqrt=strict_sqrt)

    try:
        result = calculate_file(source_file, options)
    except PrefixCalcError as e:
        logger.debug("Run failed", exc_info=True)
        typer.echo(f"{e.kind.capitalize()} error: {e.message}", err=True)
        raise typer.Exit(code=1)

    if quiet:
        typer.echo(str(result.value))
        return

    _print_stages(result)
    typer.echo(f"result: {result.value}")


def main(argv: list[str] | None = None) -> None:
    app(args=argv, prog_name="prefixcalc")


if __name__ == "__main__":
    main(sys.argv[1:])
