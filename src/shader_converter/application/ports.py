"""Application ports for the external IR library boundary."""

from __future__ import annotations

from typing import Protocol

from shader_converter.application.options import PipelineOptions, TargetOptions
from shader_converter.types import Defines, ShaderStage, SourceDialect


class IRModule(Protocol):
    """Opaque, immutable parsed shader program."""


class ValidationInfo(Protocol):
    """Opaque validator output paired with exactly one module."""

    @property
    def module(self) -> IRModule:
        """Module the info was produced for."""


class ShaderIRLibrary(Protocol):
    """Parse, validate and generate through the external IR library.

    Every method raises ``IRLibraryError`` carrying human-readable
    diagnostic text on failure.
    """

    def parse(
        self,
        source_text: str,
        dialect: SourceDialect,
        stage: ShaderStage,
        defines: Defines,
    ) -> IRModule:
        """Parse source text of one dialect into a module."""

    def validate(self, module: IRModule) -> ValidationInfo:
        """Validate a module with all flags and capabilities enabled."""

    def generate(
        self,
        module: IRModule,
        info: ValidationInfo,
        target_options: TargetOptions,
        pipeline_options: PipelineOptions,
    ) -> str:
        """Generate target-dialect text from a validated module."""
