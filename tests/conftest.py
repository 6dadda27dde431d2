"""Shared pytest fixtures for prefixcalc tests."""

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def expr_file(tmp_path: Path) -> Callable[[str], Path]:
    """Return a factory that writes an expression source file."""

    def _write(source: str, name: str = "input.expr") -> Path:
        path = tmp_path / name
        path.write_text(source, encoding="utf-8")
        return path

    return _write
