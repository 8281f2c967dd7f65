"""Public conversion API (delegates to application use-cases)."""

from __future__ import annotations

import warnings

from shader_converter.application.options import ConversionRequest
from shader_converter.application.ports import ShaderIRLibrary
from shader_converter.application.results import ConversionResult
from shader_converter.application.use_cases import convert_shader
from shader_converter.types import DEFAULT_STAGE


def convert(
    code: str,
    source_dialect: str,
    target_dialect: str,
    stage: str = DEFAULT_STAGE,
    *,
    library: ShaderIRLibrary | None = None,
) -> ConversionResult:
    """Convert shader source from one dialect to another.

    Parameters
    ----------
    code : str
        Shader source text.
    source_dialect : str
        ``"glsl"`` or ``"wgsl"``; unknown values are treated as ``"glsl"``.
    target_dialect : str
        ``"hlsl"``, ``"wgsl"``, ``"msl"`` or ``"glsl"``.
    stage : str, default="fragment"
        ``"vertex"``, ``"fragment"`` or ``"compute"``.
    library : ShaderIRLibrary, optional
        IR library binding; defaults to the ``naga`` CLI.

    Returns
    -------
    ConversionResult
        Generated text on success, otherwise the stage diagnostic.
    """
    request = ConversionRequest(
        code=code,
        source_dialect=source_dialect,
        target_dialect=target_dialect,
        stage=stage,
    )
    return convert_shader(request, library=library)


def convert_legacy(
    code: str,
    target_dialect: str,
    stage: str = DEFAULT_STAGE,
    *,
    library: ShaderIRLibrary | None = None,
) -> ConversionResult:
    """Convert permissive GLSL source (deprecated; use ``convert``)."""
    warnings.warn(
        "convert_legacy() is deprecated; use convert(code, 'glsl', ...)",
        DeprecationWarning,
        stacklevel=2,
    )
    return convert(code, "glsl", target_dialect, stage, library=library)
