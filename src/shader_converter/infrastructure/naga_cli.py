"""IR library binding backed by the ``naga`` command-line translator.

Each call writes the source into its own temporary directory and runs one
``naga`` process, so nothing is shared between conversions. The parse step
runs with validation disabled, the validation step with naga's default (all)
validation flags and capabilities, and the generation step writes an output
file whose extension selects the backend.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from tempfile import TemporaryDirectory

from shader_converter.application.options import (
    GlslOptions,
    HlslOptions,
    MslOptions,
    PipelineOptions,
    TargetOptions,
    WgslOptions,
)
from shader_converter.errors import IRLibraryError, IRLibraryUnavailable
from shader_converter.types import Defines, ShaderStage, SourceDialect

logger = logging.getLogger(__name__)

DEFAULT_EXECUTABLE = "naga"
DEFAULT_TIMEOUT_SECONDS = 30.0

_STAGE_SUFFIX: dict[ShaderStage, str] = {
    "vertex": "vert",
    "fragment": "frag",
    "compute": "comp",
}


@dataclass(frozen=True, slots=True)
class NagaModule:
    """Parsed shader program as accepted by the naga frontend."""

    source_text: str
    dialect: SourceDialect
    stage: ShaderStage
    defines: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True, slots=True)
class NagaModuleInfo:
    """Proof that ``module`` passed full validation."""

    module: NagaModule
    report: str = ""


def _input_filename(module: NagaModule) -> str:
    if module.dialect == "wgsl":
        return "shader.wgsl"
    return f"shader.{_STAGE_SUFFIX[module.stage]}"


def _output_filename(options: TargetOptions, pipeline: PipelineOptions) -> str:
    match options:
        case HlslOptions():
            return "out.hlsl"
        case WgslOptions():
            return "out.wgsl"
        case MslOptions():
            return "out.metal"
        case GlslOptions():
            return f"out.{_STAGE_SUFFIX[pipeline.stage]}"
    raise ValueError(f"unsupported target options: {options!r}")


def _target_arguments(options: TargetOptions, pipeline: PipelineOptions) -> list[str]:
    """Return naga flags for the selected backend."""
    if not isinstance(options, GlslOptions):
        return []
    if pipeline.multiview is not None:
        raise IRLibraryError("naga CLI does not support multiview GLSL output")
    if not options.zero_initialize_workgroup_memory:
        raise IRLibraryError(
            "naga CLI always zero-initializes workgroup memory in GLSL output"
        )
    args = ["--profile", f"{options.profile}{options.version}"]
    if pipeline.entry_point:
        args.extend(["--entry-point", pipeline.entry_point])
    return args


def _diagnostic(result: subprocess.CompletedProcess[str]) -> str:
    text = (result.stderr or "").strip() or (result.stdout or "").strip()
    return text or f"naga exited with status {result.returncode}"


def _timeout_from_env() -> float:
    raw = os.getenv("SHADER_CONVERTER_NAGA_TIMEOUT")
    if raw is None:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        timeout = float(raw)
    except ValueError:
        timeout = float("nan")
    if not timeout > 0:
        raise IRLibraryUnavailable(
            "SHADER_CONVERTER_NAGA_TIMEOUT must be a positive number of seconds, "
            f"got {raw!r}"
        )
    return timeout


class NagaCli:
    """Drive the ``naga`` executable as the external IR library."""

    def __init__(
        self,
        executable: str = DEFAULT_EXECUTABLE,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.executable = executable
        self.timeout = timeout

    @classmethod
    def from_env(cls) -> NagaCli:
        """Build a binding configured from ``SHADER_CONVERTER_NAGA*`` variables.

        Raises
        ------
        IRLibraryUnavailable
            If ``SHADER_CONVERTER_NAGA_TIMEOUT`` is not a positive number.
        """
        return cls(
            executable=os.getenv("SHADER_CONVERTER_NAGA", DEFAULT_EXECUTABLE),
            timeout=_timeout_from_env(),
        )

    def _run(self, args: Sequence[str]) -> subprocess.CompletedProcess[str]:
        cmd = [self.executable, *args]
        logger.debug("running %s", " ".join(cmd))
        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except OSError as exc:
            raise IRLibraryUnavailable(
                f"cannot run '{self.executable}': {exc}. "
                "Install it with: cargo install naga-cli"
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise IRLibraryError(
                f"naga timed out after {self.timeout:g}s"
            ) from exc

    def _translate(
        self,
        module: NagaModule,
        extra_args: Sequence[str],
        output_name: str | None = None,
    ) -> tuple[subprocess.CompletedProcess[str], str | None]:
        """Run naga on ``module`` and return the process plus any output text."""
        with TemporaryDirectory(prefix="naga-") as tmp:
            tmp_dir = Path(tmp)
            input_path = tmp_dir / _input_filename(module)
            try:
                input_path.write_text(module.source_text, encoding="utf-8")
            except UnicodeError as exc:
                raise IRLibraryError(f"source is not encodable as UTF-8: {exc}") from exc
            args = [
                "--input-kind",
                "wgsl" if module.dialect == "wgsl" else "glsl",
            ]
            if module.dialect != "wgsl":
                args.extend(["--shader-stage", _STAGE_SUFFIX[module.stage]])
            for name, value in module.defines:
                args.extend(["--defines", f"{name}={value}"])
            args.extend(extra_args)
            args.append(str(input_path))
            output_path = tmp_dir / output_name if output_name else None
            if output_path is not None:
                args.append(str(output_path))
            result = self._run(args)
            if result.returncode != 0 or output_path is None:
                return result, None
            if not output_path.exists():
                raise IRLibraryError(
                    f"naga reported success but wrote no {output_path.suffix} output"
                )
            return result, output_path.read_text(encoding="utf-8")

    def version(self) -> str:
        """Return the ``naga --version`` string."""
        result = self._run(["--version"])
        if result.returncode != 0:
            raise IRLibraryError(_diagnostic(result))
        return result.stdout.strip()

    def parse(
        self,
        source_text: str,
        dialect: SourceDialect,
        stage: ShaderStage,
        defines: Defines,
    ) -> NagaModule:
        """Parse ``source_text`` without semantic validation."""
        module = NagaModule(
            source_text=source_text,
            dialect=dialect,
            stage=stage,
            defines=tuple(sorted(defines.items())),
        )
        result, _ = self._translate(module, ["--validate", "0"])
        if result.returncode != 0:
            raise IRLibraryError(_diagnostic(result))
        return module

    def validate(self, module: NagaModule) -> NagaModuleInfo:
        """Validate ``module`` with every validation flag and capability."""
        result, _ = self._translate(module, [])
        if result.returncode != 0:
            raise IRLibraryError(_diagnostic(result))
        return NagaModuleInfo(module=module, report=result.stdout.strip())

    def generate(
        self,
        module: NagaModule,
        info: NagaModuleInfo,
        target_options: TargetOptions,
        pipeline_options: PipelineOptions,
    ) -> str:
        """Write ``module`` in the dialect selected by ``target_options``."""
        if info.module is not module:
            raise ValueError("validation info does not describe this module")
        result, output = self._translate(
            module,
            _target_arguments(target_options, pipeline_options),
            output_name=_output_filename(target_options, pipeline_options),
        )
        if result.returncode != 0 or output is None:
            raise IRLibraryError(_diagnostic(result))
        return output
