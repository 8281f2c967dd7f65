"""Pydantic schemas for runtime validation of transport payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shader_converter.types import DEFAULT_STAGE


def _normalize_selector(value: str) -> str:
    return value.strip().lower()


class ConvertRequestBody(BaseModel):
    """Validated body of a conversion request."""

    model_config = ConfigDict(extra="forbid")

    code: str = Field(min_length=1)
    source_dialect: str = "glsl"
    target_dialect: str
    stage: str = DEFAULT_STAGE

    @field_validator("source_dialect", "target_dialect", "stage")
    @classmethod
    def _normalize_selectors(cls, value: str) -> str:
        return _normalize_selector(value)


class LegacyConvertRequestBody(BaseModel):
    """Validated body of a legacy (GLSL-only) conversion request."""

    model_config = ConfigDict(extra="forbid")

    code: str = Field(min_length=1)
    target_dialect: str
    stage: str = DEFAULT_STAGE

    @field_validator("target_dialect", "stage")
    @classmethod
    def _normalize_selectors(cls, value: str) -> str:
        return _normalize_selector(value)


class ConvertResponseBody(BaseModel):
    """Conversion result plus input integrity metadata."""

    model_config = ConfigDict(extra="forbid")

    success: bool
    output: str
    error: str
    input_sha256: str
