#!/usr/bin/env python3
"""Architecture boundary checks."""

from __future__ import annotations

from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PACKAGE = ROOT / "src/shader_converter"


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _assert_no_imports(path: Path, banned: list[str]) -> None:
    text = _read(path)
    for token in banned:
        if token in text:
            raise SystemExit(f"Architecture violation in {path}: found '{token}'")


def main() -> None:
    """Run repository architecture boundary checks."""
    transports = ["import typer", "from typer", "import fastapi", "from fastapi"]

    # Only the IR binding may spawn processes.
    for path in [
        PACKAGE / "normalize.py",
        *(PACKAGE / "application").glob("*.py"),
        *(PACKAGE / "adapters").glob("*.py"),
    ]:
        _assert_no_imports(path, [*transports, "import subprocess"])

    _assert_no_imports(PACKAGE / "cli/cli.py", ["import fastapi", "from fastapi"])

    print("Architecture checks passed.")


if __name__ == "__main__":
    main()
