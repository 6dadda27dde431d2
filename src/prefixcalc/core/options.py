"""
Run options for prefixcalc evaluation.

There is no configuration file and no environment lookup; the CLI builds
an ``EvalOptions`` from its flags and library callers pass one directly.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class OverflowPolicy(StrEnum):
    """What to do when a value leaves the signed 64-bit range."""

    FATAL = "fatal"
    WRAP = "wrap"


class EvalOptions(BaseModel):
    """Options applied consistently across one evaluation."""

    overflow: OverflowPolicy = Field(
        default=OverflowPolicy.FATAL,
        description="Overflow handling for every fold step and square root result",
    )
    strict_sqrt: bool = Field(
        default=True,
        description="Reject square root with more than one operand instead of ignoring extras",
    )

    model_config = ConfigDict(frozen=True)
