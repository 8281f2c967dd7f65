"""Application use-cases orchestrating shader conversion."""

from __future__ import annotations

import logging

from shader_converter.adapters.backends import ShaderBackend
from shader_converter.adapters.frontends import ShaderFrontend
from shader_converter.adapters.validators import ShaderValidator
from shader_converter.application.options import ConversionRequest
from shader_converter.application.ports import ShaderIRLibrary
from shader_converter.application.results import ConversionResult
from shader_converter.errors import ConversionError, IRLibraryUnavailable
from shader_converter.infrastructure.naga_cli import NagaCli
from shader_converter.normalize import normalize_source
from shader_converter.types import resolve_source_dialect, resolve_stage

logger = logging.getLogger(__name__)


def prepare_source(request: ConversionRequest) -> str:
    """Return the text handed to the frontend for ``request``.

    Only the permissive GLSL dialect (including unknown selectors that fall
    back to it) is normalized; WGSL passes through verbatim.
    """
    if resolve_source_dialect(request.source_dialect) == "wgsl":
        return request.code
    return normalize_source(request.code, resolve_stage(request.stage))


def convert_shader(
    request: ConversionRequest,
    *,
    library: ShaderIRLibrary | None = None,
) -> ConversionResult:
    """Use-case: normalize, parse, validate and generate one shader.

    Any stage failure short-circuits into ``ConversionResult.failure`` with
    that stage's message; no exception escapes for conversion failures.
    """
    stage = resolve_stage(request.stage)
    normalized = prepare_source(request)
    logger.debug(
        "normalized %s source for %s stage", request.source_dialect, stage
    )
    try:
        if library is None:
            library = NagaCli.from_env()
        frontend = ShaderFrontend(library)
        validator = ShaderValidator(library)
        backend = ShaderBackend(library)
        module = frontend.parse(normalized, request.source_dialect, stage)
        logger.debug("parsed module")
        info = validator.validate(module)
        logger.debug("validated module")
        output = backend.generate(module, info, request.target_dialect, stage)
    except IRLibraryUnavailable as exc:
        logger.info("IR library unavailable: %s", exc)
        return ConversionResult.failure(f"IR library unavailable: {exc}")
    except ConversionError as exc:
        logger.info("conversion failed: %s", type(exc).__name__)
        return ConversionResult.failure(str(exc))
    logger.debug("generated %s output", request.target_dialect)
    return ConversionResult.ok(output)
