"""HTTP server exposing the shader conversion service."""

from __future__ import annotations

import argparse
import logging
import os

import uvicorn
from fastapi import FastAPI, HTTPException, status
from pydantic import BaseModel, ConfigDict

from shader_converter import __version__
from shader_converter.application.ports import ShaderIRLibrary
from shader_converter.converter.core import ConversionOutcome, run_conversion
from shader_converter.diagnostics import install_diagnostic_hook
from shader_converter.schemas import (
    ConvertRequestBody,
    ConvertResponseBody,
    LegacyConvertRequestBody,
)

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health response payload."""

    model_config = ConfigDict(extra="forbid")

    status: str


class ReadyResponse(BaseModel):
    """Readiness response payload."""

    model_config = ConfigDict(extra="forbid")

    status: str


def _response(outcome: ConversionOutcome) -> ConvertResponseBody:
    return ConvertResponseBody(
        success=outcome.result.success,
        output=outcome.result.output,
        error=outcome.result.error,
        input_sha256=outcome.input_sha256,
    )


def _convert_or_500(
    code: str,
    source_dialect: str,
    target_dialect: str,
    stage: str,
    library: ShaderIRLibrary | None,
) -> ConvertResponseBody:
    try:
        outcome = run_conversion(
            code, source_dialect, target_dialect, stage, library=library
        )
    except Exception as exc:
        logger.exception("unexpected error during HTTP shader conversion")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="internal server error",
        ) from exc
    return _response(outcome)


def create_app(library: ShaderIRLibrary | None = None) -> FastAPI:
    """Create shader converter HTTP application.

    Parameters
    ----------
    library : ShaderIRLibrary, optional
        IR library binding shared by all requests; defaults to the ``naga``
        CLI configured from the environment on every call.
    """
    install_diagnostic_hook()
    app = FastAPI(
        title="Shader Dialect Converter",
        version=__version__,
        description=(
            "Convert GLSL/WGSL shader source to HLSL, WGSL, MSL or desktop GLSL."
        ),
    )

    @app.get("/healthz", response_model=HealthResponse)
    async def healthz() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/readyz", response_model=ReadyResponse)
    async def readyz() -> ReadyResponse:
        return ReadyResponse(status="ready")

    @app.post("/v1/convert", response_model=ConvertResponseBody)
    def convert_endpoint(body: ConvertRequestBody) -> ConvertResponseBody:
        """Convert shader source; failures come back with ``success=false``."""
        return _convert_or_500(
            body.code, body.source_dialect, body.target_dialect, body.stage, library
        )

    @app.post(
        "/v1/convert/legacy",
        response_model=ConvertResponseBody,
        deprecated=True,
    )
    def convert_legacy_endpoint(body: LegacyConvertRequestBody) -> ConvertResponseBody:
        """Convert permissive GLSL source (use ``/v1/convert``)."""
        return _convert_or_500(
            body.code, "glsl", body.target_dialect, body.stage, library
        )

    return app


app = create_app()


def main() -> None:
    """Run shader converter HTTP entrypoint."""
    parser = argparse.ArgumentParser(description="Shader converter HTTP server.")
    parser.add_argument(
        "--host",
        default=os.getenv("SHADER_CONVERTER_HTTP_HOST", "0.0.0.0"),
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("SHADER_CONVERTER_HTTP_PORT", "8090")),
    )
    args = parser.parse_args()
    uvicorn.run(
        "shader_converter.converter.http_server:app",
        host=args.host,
        port=args.port,
        reload=False,
    )


if __name__ == "__main__":
    main()
