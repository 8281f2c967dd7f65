"""Shared type aliases for dialect and stage selectors."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Literal

type SourceDialect = Literal["glsl", "wgsl"]
type TargetDialect = Literal["hlsl", "wgsl", "msl", "glsl"]
type ShaderStage = Literal["vertex", "fragment", "compute"]

type Defines = Mapping[str, str]

SOURCE_DIALECTS: tuple[SourceDialect, ...] = ("glsl", "wgsl")
TARGET_DIALECTS: tuple[TargetDialect, ...] = ("hlsl", "wgsl", "msl", "glsl")
SHADER_STAGES: tuple[ShaderStage, ...] = ("vertex", "fragment", "compute")

DEFAULT_STAGE: ShaderStage = "fragment"


def resolve_stage(value: str) -> ShaderStage:
    """Map a stage selector to a known stage, defaulting to ``fragment``."""
    if value == "vertex":
        return "vertex"
    if value == "compute":
        return "compute"
    return DEFAULT_STAGE


def resolve_source_dialect(value: str) -> SourceDialect:
    """Map a source selector to a frontend; anything but ``wgsl`` is GLSL."""
    if value == "wgsl":
        return "wgsl"
    return "glsl"
