"""Shared conversion-daemon core utilities."""

from __future__ import annotations

from dataclasses import dataclass
from hashlib import sha256

from shader_converter.api import convert
from shader_converter.application.ports import ShaderIRLibrary
from shader_converter.application.results import ConversionResult


@dataclass(frozen=True)
class ConversionOutcome:
    """Conversion result with the digest of the submitted source."""

    result: ConversionResult
    input_sha256: str


def digest_text(text: str) -> str:
    """Compute SHA-256 digest of UTF-8 encoded text."""
    return sha256(text.encode("utf-8")).hexdigest()


def run_conversion(
    code: str,
    source_dialect: str,
    target_dialect: str,
    stage: str,
    *,
    library: ShaderIRLibrary | None = None,
) -> ConversionOutcome:
    """Convert transport-supplied source and attach its digest."""
    result = convert(code, source_dialect, target_dialect, stage, library=library)
    return ConversionOutcome(result=result, input_sha256=digest_text(code))
