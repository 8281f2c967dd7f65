"""Typed request and generator option objects shared across use-cases."""

from __future__ import annotations

from dataclasses import dataclass

from shader_converter.types import DEFAULT_STAGE, ShaderStage, TargetDialect


@dataclass(frozen=True)
class ConversionRequest:
    """Single conversion call input.

    Parameters
    ----------
    code : str
        Shader source text.
    source_dialect : str
        Source selector; anything but ``"wgsl"`` is parsed as GLSL.
    target_dialect : str
        Target selector; must be one of the known generators.
    stage : str, default="fragment"
        Pipeline stage; unknown values resolve to ``"fragment"``.
    """

    code: str
    source_dialect: str
    target_dialect: str
    stage: str = DEFAULT_STAGE


@dataclass(frozen=True)
class HlslOptions:
    """HLSL generator options (library defaults)."""

    dialect: TargetDialect = "hlsl"


@dataclass(frozen=True)
class WgslOptions:
    """WGSL generator options; no writer flags."""

    dialect: TargetDialect = "wgsl"


@dataclass(frozen=True)
class MslOptions:
    """MSL generator options (library defaults)."""

    dialect: TargetDialect = "msl"


@dataclass(frozen=True)
class GlslOptions:
    """Desktop GLSL generator options."""

    dialect: TargetDialect = "glsl"
    profile: str = "core"
    version: int = 450
    zero_initialize_workgroup_memory: bool = True


type TargetOptions = HlslOptions | WgslOptions | MslOptions | GlslOptions


@dataclass(frozen=True)
class PipelineOptions:
    """Per-pipeline generator options.

    ``stage`` and ``entry_point`` are only consumed by generators that need
    them (GLSL); the others use library defaults.
    """

    stage: ShaderStage = DEFAULT_STAGE
    entry_point: str | None = None
    multiview: int | None = None
