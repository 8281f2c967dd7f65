"""Application-layer use-cases and option objects."""

from __future__ import annotations

from shader_converter.application.options import (
    ConversionRequest,
    GlslOptions,
    HlslOptions,
    MslOptions,
    PipelineOptions,
    WgslOptions,
)
from shader_converter.application.ports import ShaderIRLibrary
from shader_converter.application.results import ConversionResult


def convert_shader(
    request: ConversionRequest,
    *,
    library: ShaderIRLibrary | None = None,
) -> ConversionResult:
    """Convert one shader via lazy use-case import."""
    from shader_converter.application.use_cases import convert_shader as _impl

    return _impl(request, library=library)


__all__ = [
    "ConversionRequest",
    "ConversionResult",
    "GlslOptions",
    "HlslOptions",
    "MslOptions",
    "PipelineOptions",
    "WgslOptions",
    "convert_shader",
]
