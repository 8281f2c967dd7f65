"""Unit tests for the naga command-line binding."""

from __future__ import annotations

import errno
import subprocess
from pathlib import Path

import pytest

from shader_converter.application.options import (
    GlslOptions,
    HlslOptions,
    MslOptions,
    PipelineOptions,
    WgslOptions,
)
from shader_converter.errors import IRLibraryError, IRLibraryUnavailable
from shader_converter.infrastructure import naga_cli
from shader_converter.infrastructure.naga_cli import NagaCli, NagaModule, NagaModuleInfo


class _FakeRun:
    """Record naga invocations and emulate its exit status and outputs."""

    def __init__(
        self,
        *,
        returncode: int = 0,
        stderr: str = "",
        stdout: str = "",
        output_text: str | None = "generated",
    ) -> None:
        self.returncode = returncode
        self.stderr = stderr
        self.stdout = stdout
        self.output_text = output_text
        self.commands: list[list[str]] = []
        self.inputs: dict[str, str] = {}

    def __call__(
        self,
        cmd: list[str],
        *,
        capture_output: bool,
        text: bool,
        errors: str,
        timeout: float,
        check: bool,
    ) -> subprocess.CompletedProcess[str]:
        assert capture_output and text and not check
        assert errors == "replace"
        self.commands.append(cmd)
        paths = [Path(arg) for arg in cmd[1:] if arg.startswith("/")]
        if paths:
            self.inputs[paths[0].name] = paths[0].read_text(encoding="utf-8")
        if len(paths) > 1 and self.returncode == 0 and self.output_text is not None:
            paths[1].write_text(self.output_text, encoding="utf-8")
        return subprocess.CompletedProcess(
            cmd, self.returncode, stdout=self.stdout, stderr=self.stderr
        )


@pytest.fixture
def fake_run(monkeypatch: pytest.MonkeyPatch) -> _FakeRun:
    runner = _FakeRun()
    monkeypatch.setattr(naga_cli.subprocess, "run", runner)
    return runner


def test_parse_glsl_disables_validation(fake_run: _FakeRun) -> None:
    """Parse with ``--validate 0`` and the GLSL stage flag."""
    module = NagaCli().parse("#version 450\nvoid main() {}", "glsl", "fragment", {})

    assert module == NagaModule(
        source_text="#version 450\nvoid main() {}", dialect="glsl", stage="fragment"
    )
    (cmd,) = fake_run.commands
    assert cmd[:7] == [
        "naga",
        "--input-kind",
        "glsl",
        "--shader-stage",
        "frag",
        "--validate",
        "0",
    ]
    assert cmd[-1].endswith("shader.frag")
    assert fake_run.inputs == {"shader.frag": "#version 450\nvoid main() {}"}


def test_parse_wgsl_has_no_stage_flag(fake_run: _FakeRun) -> None:
    """Let WGSL entry points carry their own stage."""
    NagaCli(executable="/opt/naga").parse("fn f() {}", "wgsl", "vertex", {})
    (cmd,) = fake_run.commands
    assert cmd[:5] == ["/opt/naga", "--input-kind", "wgsl", "--validate", "0"]
    assert cmd[-1].endswith("shader.wgsl")


def test_parse_passes_defines(fake_run: _FakeRun) -> None:
    """Forward preprocessor defines in a stable order."""
    module = NagaCli().parse("void main() {}", "glsl", "vertex", {"B": "2", "A": "1"})
    assert module.defines == (("A", "1"), ("B", "2"))
    (cmd,) = fake_run.commands
    assert cmd[5:9] == ["--defines", "A=1", "--defines", "B=2"]


def test_parse_error_carries_stderr(fake_run: _FakeRun) -> None:
    """Surface naga's diagnostic text."""
    fake_run.returncode = 1
    fake_run.stderr = "error: expected ';'\n"
    with pytest.raises(IRLibraryError) as exc_info:
        NagaCli().parse("void main() {", "glsl", "fragment", {})
    assert exc_info.value.diagnostic == "error: expected ';'"


def test_error_without_output_reports_status(fake_run: _FakeRun) -> None:
    """Fall back to the exit status when naga prints nothing."""
    fake_run.returncode = 101
    with pytest.raises(IRLibraryError, match="naga exited with status 101"):
        NagaCli().parse("void main() {", "glsl", "fragment", {})


def test_validate_uses_default_flags(fake_run: _FakeRun) -> None:
    """Validate with every flag enabled, i.e. without ``--validate``."""
    fake_run.stdout = "Validation successful\n"
    module = NagaModule("void main() {}", "glsl", "compute")
    info = NagaCli().validate(module)

    assert info == NagaModuleInfo(module=module, report="Validation successful")
    (cmd,) = fake_run.commands
    assert "--validate" not in cmd
    assert cmd[:5] == ["naga", "--input-kind", "glsl", "--shader-stage", "comp"]


@pytest.mark.parametrize(
    ("options", "suffix", "extra"),
    [
        (HlslOptions(), "out.hlsl", []),
        (WgslOptions(), "out.wgsl", []),
        (MslOptions(), "out.metal", []),
    ],
)
def test_generate_selects_backend_by_extension(
    fake_run: _FakeRun, options: object, suffix: str, extra: list[str]
) -> None:
    """Pick the writer through the output file extension."""
    module = NagaModule("void main() {}", "glsl", "fragment")
    output = NagaCli().generate(
        module, NagaModuleInfo(module), options, PipelineOptions(stage="fragment")
    )

    assert output == "generated"
    (cmd,) = fake_run.commands
    assert cmd[-1].endswith(suffix)
    assert cmd[5:-2] == extra


def test_generate_glsl_uses_profile_and_entry_point(fake_run: _FakeRun) -> None:
    """Write desktop GLSL for the requested stage and entry point."""
    module = NagaModule("@vertex fn main() {}", "wgsl", "vertex")
    NagaCli().generate(
        module,
        NagaModuleInfo(module),
        GlslOptions(),
        PipelineOptions(stage="vertex", entry_point="main"),
    )
    (cmd,) = fake_run.commands
    assert cmd[3:7] == ["--profile", "core450", "--entry-point", "main"]
    assert cmd[-1].endswith("out.vert")


def test_generate_rejects_multiview(fake_run: _FakeRun) -> None:
    """Refuse options the command line cannot express."""
    module = NagaModule("void main() {}", "glsl", "vertex")
    with pytest.raises(IRLibraryError, match="multiview"):
        NagaCli().generate(
            module,
            NagaModuleInfo(module),
            GlslOptions(),
            PipelineOptions(stage="vertex", multiview=2),
        )
    assert fake_run.commands == []


def test_generate_requires_matching_info(fake_run: _FakeRun) -> None:
    """Only generate from the module the info was produced for."""
    module = NagaModule("void main() {}", "glsl", "fragment")
    other = NagaModule("void main() {}", "glsl", "fragment")
    with pytest.raises(ValueError, match="does not describe this module"):
        NagaCli().generate(module, NagaModuleInfo(other), WgslOptions(), PipelineOptions())


def test_generate_without_output_file_is_an_error(fake_run: _FakeRun) -> None:
    """Treat a silent success with no output as a failure."""
    fake_run.output_text = None
    module = NagaModule("void main() {}", "glsl", "fragment")
    with pytest.raises(IRLibraryError, match="wrote no .wgsl output"):
        NagaCli().generate(module, NagaModuleInfo(module), WgslOptions(), PipelineOptions())


def test_generate_failure_carries_stderr(fake_run: _FakeRun) -> None:
    """Surface writer errors."""
    fake_run.returncode = 1
    fake_run.stderr = "Error: entry point not found"
    module = NagaModule("void main() {}", "glsl", "fragment")
    with pytest.raises(IRLibraryError, match="entry point not found"):
        NagaCli().generate(module, NagaModuleInfo(module), MslOptions(), PipelineOptions())


def test_missing_executable_is_unavailable(monkeypatch: pytest.MonkeyPatch) -> None:
    """Map a missing binary to ``IRLibraryUnavailable`` with an install hint."""

    def raise_missing(cmd: list[str], **kwargs: object) -> None:
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    monkeypatch.setattr(naga_cli.subprocess, "run", raise_missing)
    with pytest.raises(IRLibraryUnavailable, match="cargo install naga-cli"):
        NagaCli(executable="naga-missing").parse("", "glsl", "fragment", {})


def test_timeout_is_an_ir_error(monkeypatch: pytest.MonkeyPatch) -> None:
    """Report a hung translator as a library error."""

    def raise_timeout(cmd: list[str], **kwargs: object) -> None:
        raise subprocess.TimeoutExpired(cmd, 0.5)

    monkeypatch.setattr(naga_cli.subprocess, "run", raise_timeout)
    with pytest.raises(IRLibraryError, match="timed out after 0.5s"):
        NagaCli(timeout=0.5).validate(NagaModule("", "wgsl", "fragment"))


def test_version_returns_stdout(fake_run: _FakeRun) -> None:
    """Strip the version banner."""
    fake_run.stdout = "naga 24.0.0\n"
    assert NagaCli().version() == "naga 24.0.0"
    assert fake_run.commands == [["naga", "--version"]]


def test_from_env_reads_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    """Configure executable and timeout from the environment."""
    monkeypatch.setenv("SHADER_CONVERTER_NAGA", "/usr/local/bin/naga")
    monkeypatch.setenv("SHADER_CONVERTER_NAGA_TIMEOUT", "5")
    library = NagaCli.from_env()
    assert library.executable == "/usr/local/bin/naga"
    assert library.timeout == 5.0


def test_from_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Fall back to ``naga`` on PATH and a 30 second timeout."""
    monkeypatch.delenv("SHADER_CONVERTER_NAGA", raising=False)
    monkeypatch.delenv("SHADER_CONVERTER_NAGA_TIMEOUT", raising=False)
    library = NagaCli.from_env()
    assert (library.executable, library.timeout) == ("naga", 30.0)


def test_unexecutable_binary_is_unavailable(monkeypatch: pytest.MonkeyPatch) -> None:
    """Treat any launch failure, such as a bad executable format, as unavailable."""

    def raise_exec_format(cmd: list[str], **kwargs: object) -> None:
        raise OSError(errno.ENOEXEC, "Exec format error", cmd[0])

    monkeypatch.setattr(naga_cli.subprocess, "run", raise_exec_format)
    with pytest.raises(IRLibraryUnavailable, match="Exec format error"):
        NagaCli(executable="/tmp/not-a-binary").validate(
            NagaModule("", "wgsl", "fragment")
        )


def test_unencodable_source_is_an_ir_error(fake_run: _FakeRun) -> None:
    """Reject text with lone surrogates before spawning naga."""
    with pytest.raises(IRLibraryError, match="not encodable as UTF-8") as exc_info:
        NagaCli().parse("void main() {}\ud800", "glsl", "fragment", {})
    assert not isinstance(exc_info.value, IRLibraryUnavailable)
    assert fake_run.commands == []


def test_generate_rejects_disabled_workgroup_zero_init(fake_run: _FakeRun) -> None:
    """Refuse a workgroup memory policy the command line cannot express."""
    module = NagaModule("void main() {}", "glsl", "compute")
    with pytest.raises(IRLibraryError, match="zero-initializes workgroup memory"):
        NagaCli().generate(
            module,
            NagaModuleInfo(module),
            GlslOptions(zero_initialize_workgroup_memory=False),
            PipelineOptions(stage="compute", entry_point="main"),
        )
    assert fake_run.commands == []


@pytest.mark.parametrize("raw", ["30s", "", "0", "-1", "nan"])
def test_from_env_rejects_malformed_timeout(
    monkeypatch: pytest.MonkeyPatch, raw: str
) -> None:
    """Name the offending variable instead of leaking a ValueError."""
    monkeypatch.setenv("SHADER_CONVERTER_NAGA_TIMEOUT", raw)
    with pytest.raises(IRLibraryUnavailable, match="SHADER_CONVERTER_NAGA_TIMEOUT"):
        NagaCli.from_env()
