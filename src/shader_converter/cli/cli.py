#!/usr/bin/env python3
"""
shader_converter.cli.cli

Typer-based CLI for converting shaders between dialects.

The IR work is done by the ``naga`` translator, which is installed
separately from the Python package:

    cargo install naga-cli

Examples
--------
Convert a three.js style fragment shader to HLSL:

    shader-convert convert shader.frag --to hlsl

Inspect what the strict GLSL frontend actually receives:

    shader-convert normalize shader.frag --stage fragment
"""

from __future__ import annotations

import logging
import shutil
import sys
import traceback
from dataclasses import dataclass
from pathlib import Path

import typer

from shader_converter.diagnostics import install_diagnostic_hook
from shader_converter.errors import (
    ConversionError,
    IRLibraryError,
    IRLibraryUnavailable,
)
from shader_converter.infrastructure.naga_cli import NagaCli
from shader_converter.types import (
    DEFAULT_STAGE,
    SHADER_STAGES,
    SOURCE_DIALECTS,
    TARGET_DIALECTS,
    resolve_stage,
)

app = typer.Typer(
    name="shader-convert",
    help="Convert shaders between GLSL, WGSL, HLSL and MSL.",
    no_args_is_help=True,
)

STAGE_HELP = "Pipeline stage: vertex, fragment or compute."
TARGET_HELP = "Target dialect: hlsl, wgsl, msl or glsl."
NAGA_HELP = "naga executable to use (default: $SHADER_CONVERTER_NAGA or 'naga')."


# -----------------------------
# Tool checks / utilities
# -----------------------------
@dataclass(frozen=True)
class MissingTool:
    """Represent a missing external executable."""

    executable: str
    install_hint: str
    purpose: str


def _is_executable(name: str) -> bool:
    """Check whether ``name`` resolves to an executable on ``PATH``."""
    return shutil.which(name) is not None


def _require_tools(required: list[MissingTool]) -> None:
    """Raise a Typer error if any required executables are missing."""
    not_found = [tool for tool in required if not _is_executable(tool.executable)]
    if not not_found:
        return
    details = "\n".join(
        f"- Missing '{tool.executable}' ({tool.purpose}). Install: {tool.install_hint}"
        for tool in not_found
    )
    raise typer.BadParameter(f"Missing required tools for this command.\n\n{details}")


def _naga_tool(executable: str) -> MissingTool:
    return MissingTool(executable, "cargo install naga-cli", "shader IR translation")


def _print_conversion_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly error and return the process exit code."""
    typer.echo(f"✗ {type(exc).__name__}: {exc}", err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo(
            "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            err=True,
        )
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _build_library(naga: str | None) -> NagaCli:
    library = NagaCli.from_env()
    if naga:
        library.executable = naga
    return library


def _run_convert(
    ctx: typer.Context,
    source_file: Path,
    source_dialect: str,
    target_dialect: str,
    stage: str,
    output_path: Path | None,
    naga: str | None,
) -> None:
    debug: bool = bool(ctx.obj.get("debug", False))
    try:
        library = _build_library(naga)
    except ConversionError as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))
    _require_tools([_naga_tool(library.executable)])

    try:
        from shader_converter.api import convert

        result = convert(
            source_file.read_text(encoding="utf-8"),
            source_dialect,
            target_dialect,
            stage,
            library=library,
        )
    except Exception as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))

    if not result.success:
        typer.echo(f"✗ Conversion failed:\n{result.error}", err=True)
        raise typer.Exit(code=1)
    if output_path is None:
        typer.echo(result.output, nl=False)
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(result.output, encoding="utf-8")
    typer.echo(f"✓ Saved: {output_path}", err=True)


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False, "--debug", help="Show debug logs and full tracebacks on error."
    ),
) -> None:
    """Initialize shared CLI state."""
    install_diagnostic_hook()
    if debug:
        logging.basicConfig(level=logging.DEBUG)
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("convert")
def convert_cmd(
    ctx: typer.Context,
    source_file: Path = typer.Argument(
        ..., exists=True, readable=True, dir_okay=False, help="Shader source file."
    ),
    target_dialect: str = typer.Option(..., "--to", "-t", help=TARGET_HELP),
    source_dialect: str = typer.Option(
        "glsl", "--from", "-f", help="Source dialect: glsl or wgsl."
    ),
    stage: str = typer.Option(DEFAULT_STAGE, "--stage", "-s", help=STAGE_HELP),
    output_path: Path | None = typer.Option(
        None, "--output", "-o", help="Write output here instead of stdout."
    ),
    naga: str | None = typer.Option(None, "--naga", help=NAGA_HELP),
) -> None:
    """Convert a shader file to another dialect."""
    _run_convert(
        ctx, source_file, source_dialect, target_dialect, stage, output_path, naga
    )


@app.command("legacy", deprecated=True)
def legacy_cmd(
    ctx: typer.Context,
    source_file: Path = typer.Argument(
        ..., exists=True, readable=True, dir_okay=False, help="GLSL source file."
    ),
    target_dialect: str = typer.Option(..., "--to", "-t", help=TARGET_HELP),
    stage: str = typer.Option(DEFAULT_STAGE, "--stage", "-s", help=STAGE_HELP),
    output_path: Path | None = typer.Option(
        None, "--output", "-o", help="Write output here instead of stdout."
    ),
    naga: str | None = typer.Option(None, "--naga", help=NAGA_HELP),
) -> None:
    """Convert a permissive GLSL file (use 'convert --from glsl')."""
    _run_convert(ctx, source_file, "glsl", target_dialect, stage, output_path, naga)


@app.command("normalize")
def normalize_cmd(
    source_file: Path = typer.Argument(
        ..., exists=True, readable=True, dir_okay=False, help="GLSL source file."
    ),
    stage: str = typer.Option(DEFAULT_STAGE, "--stage", "-s", help=STAGE_HELP),
) -> None:
    """Print the GLSL handed to the strict frontend after normalization."""
    from shader_converter.normalize import normalize_source

    text = source_file.read_text(encoding="utf-8")
    typer.echo(normalize_source(text, resolve_stage(stage)))


@app.command("dialects")
def dialects_cmd() -> None:
    """List supported source dialects, target dialects and stages."""
    typer.echo(f"source: {', '.join(SOURCE_DIALECTS)}")
    typer.echo(f"target: {', '.join(TARGET_DIALECTS)}")
    typer.echo(f"stage: {', '.join(SHADER_STAGES)}")


@app.command("doctor")
def doctor_cmd(
    naga: str | None = typer.Option(None, "--naga", help=NAGA_HELP),
) -> None:
    """Print installed toolchain versions."""
    import importlib.metadata as metadata

    typer.echo(f"Python: {sys.version.split()[0]}")
    for module in ["pydantic", "typer", "fastapi", "uvicorn"]:
        try:
            version = metadata.version(module)
            typer.echo(f"{module}: {version}")
        except metadata.PackageNotFoundError:
            typer.echo(f"{module}: <not installed>")

    try:
        typer.echo(f"naga: {_build_library(naga).version()}")
    except IRLibraryUnavailable as exc:
        typer.echo(f"naga: <not installed> ({exc})")
    except IRLibraryError as exc:
        typer.echo(f"naga: <error> ({exc})")


if __name__ == "__main__":
    app()
