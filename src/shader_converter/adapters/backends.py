"""Backend dispatcher over the closed set of target generators."""

from __future__ import annotations

from shader_converter.application.options import (
    GlslOptions,
    HlslOptions,
    MslOptions,
    PipelineOptions,
    TargetOptions,
    WgslOptions,
)
from shader_converter.application.ports import (
    IRModule,
    ShaderIRLibrary,
    ValidationInfo,
)
from shader_converter.errors import (
    GenerationFailure,
    IRLibraryError,
    IRLibraryUnavailable,
    UnsupportedTargetDialect,
)
from shader_converter.types import ShaderStage

GLSL_ENTRY_POINT = "main"


def target_configuration(
    target_dialect: str,
    stage: ShaderStage,
) -> tuple[TargetOptions, PipelineOptions]:
    """Return generator options for ``target_dialect``.

    Raises
    ------
    UnsupportedTargetDialect
        If the selector names no known generator. There is no fallback.
    """
    match target_dialect:
        case "hlsl":
            return HlslOptions(), PipelineOptions(stage=stage)
        case "wgsl":
            return WgslOptions(), PipelineOptions(stage=stage)
        case "msl":
            return MslOptions(), PipelineOptions(stage=stage)
        case "glsl":
            return (
                GlslOptions(profile="core", version=450),
                PipelineOptions(
                    stage=stage,
                    entry_point=GLSL_ENTRY_POINT,
                    multiview=None,
                ),
            )
    raise UnsupportedTargetDialect(target_dialect)


class ShaderBackend:
    """Generate target-dialect text from a validated module."""

    def __init__(self, library: ShaderIRLibrary) -> None:
        self.library = library

    def generate(
        self,
        module: IRModule,
        info: ValidationInfo,
        target_dialect: str,
        stage: ShaderStage,
    ) -> str:
        """Run the generator selected by ``target_dialect``.

        Raises
        ------
        UnsupportedTargetDialect
            If the selector is unknown.
        GenerationFailure
            If the generator rejects the module.
        """
        target_options, pipeline_options = target_configuration(target_dialect, stage)
        try:
            return self.library.generate(module, info, target_options, pipeline_options)
        except IRLibraryUnavailable:
            raise
        except IRLibraryError as exc:
            raise GenerationFailure(
                f"{target_options.dialect.upper()} Generation Error: {exc.diagnostic}"
            ) from exc
