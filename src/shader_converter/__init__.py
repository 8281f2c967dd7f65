"""Top-level API for shader dialect conversion."""

from __future__ import annotations

from shader_converter.application.ports import ShaderIRLibrary
from shader_converter.application.results import ConversionResult
from shader_converter.diagnostics import install_diagnostic_hook
from shader_converter.types import DEFAULT_STAGE

__version__ = "0.1.0"


def convert(
    code: str,
    source_dialect: str,
    target_dialect: str,
    stage: str = DEFAULT_STAGE,
    *,
    library: ShaderIRLibrary | None = None,
) -> ConversionResult:
    """Convert shader source between dialects.

    Parameters
    ----------
    code : str
        Shader source text.
    source_dialect : str
        ``"glsl"`` (permissive, WebGL flavoured) or ``"wgsl"``.
    target_dialect : str
        ``"hlsl"``, ``"wgsl"``, ``"msl"`` or ``"glsl"``.
    stage : str, default="fragment"
        Pipeline stage.
    library : ShaderIRLibrary, optional
        IR library binding override.

    Returns
    -------
    ConversionResult
        ``success``/``output``/``error`` triple.
    """
    from .api import convert as _impl

    return _impl(code, source_dialect, target_dialect, stage, library=library)


def convert_legacy(
    code: str,
    target_dialect: str,
    stage: str = DEFAULT_STAGE,
    *,
    library: ShaderIRLibrary | None = None,
) -> ConversionResult:
    """Convert permissive GLSL source (deprecated alias of ``convert``)."""
    from .api import convert_legacy as _impl

    return _impl(code, target_dialect, stage, library=library)


__all__ = [
    "ConversionResult",
    "convert",
    "convert_legacy",
    "install_diagnostic_hook",
]
