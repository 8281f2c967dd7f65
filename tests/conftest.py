"""Shared pytest configuration, marker assignment and IR library fakes."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from shader_converter.application.options import PipelineOptions, TargetOptions
from shader_converter.errors import IRLibraryError

HOST_GLOBALS = ("float uTime", "vec2 uResolution")


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        path = Path(str(item.fspath))
        parts = set(path.parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


@dataclass(frozen=True)
class FakeModule:
    source_text: str
    dialect: str
    stage: str


@dataclass(frozen=True)
class FakeInfo:
    module: FakeModule


def _declaration_count(source: str, declaration: str) -> int:
    count = 0
    for line in source.split("\n"):
        stripped = line.strip()
        if stripped.startswith("//"):
            continue
        if declaration + ";" in stripped:
            count += 1
    return count


@dataclass
class FakeIRLibrary:
    """In-memory stand-in for the naga binding.

    Validation rejects sources that declare a host global more than once, the
    way the real validator reports a redefinition.
    """

    parse_error: str | None = None
    validate_error: str | None = None
    generate_error: str | None = None
    calls: list[str] = field(default_factory=list)
    parsed_sources: list[str] = field(default_factory=list)
    generated: list[tuple[TargetOptions, PipelineOptions]] = field(
        default_factory=list
    )

    def parse(
        self,
        source_text: str,
        dialect: str,
        stage: str,
        defines: Mapping[str, str],
    ) -> FakeModule:
        del defines
        self.calls.append(f"parse:{dialect}")
        self.parsed_sources.append(source_text)
        if self.parse_error is not None:
            raise IRLibraryError(self.parse_error)
        return FakeModule(source_text=source_text, dialect=dialect, stage=stage)

    def validate(self, module: FakeModule) -> FakeInfo:
        self.calls.append("validate")
        if self.validate_error is not None:
            raise IRLibraryError(self.validate_error)
        for declaration in HOST_GLOBALS:
            if _declaration_count(module.source_text, declaration) > 1:
                name = declaration.split()[-1]
                raise IRLibraryError(f"Redefinition of global '{name}'")
        return FakeInfo(module=module)

    def generate(
        self,
        module: FakeModule,
        info: FakeInfo,
        target_options: TargetOptions,
        pipeline_options: PipelineOptions,
    ) -> str:
        self.calls.append(f"generate:{target_options.dialect}")
        assert info.module is module
        self.generated.append((target_options, pipeline_options))
        if self.generate_error is not None:
            raise IRLibraryError(self.generate_error)
        marker = "@fragment" if pipeline_options.stage == "fragment" else "@vertex"
        return f"// {target_options.dialect} from {module.dialect}\n{marker}\n"


@pytest.fixture
def fake_library() -> FakeIRLibrary:
    """Return a fake IR library that accepts everything."""
    return FakeIRLibrary()
