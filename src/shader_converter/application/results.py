"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ConversionResult:
    """Structured conversion outcome.

    Exactly one of ``output``/``error`` is meaningful: ``output`` is empty on
    failure and ``error`` is empty on success.
    """

    success: bool
    output: str = ""
    error: str = ""

    @classmethod
    def ok(cls, output: str) -> ConversionResult:
        """Build a successful result."""
        return cls(success=True, output=output, error="")

    @classmethod
    def failure(cls, error: str) -> ConversionResult:
        """Build a failed result."""
        return cls(success=False, output="", error=error)
