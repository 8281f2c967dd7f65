#!/usr/bin/env python3
"""Keep requirements.txt in step with the pyproject.toml runtime extras.

Without arguments the file is rewritten; with ``--check`` the script only
reports drift and exits non-zero, which is what CI runs.
"""

from __future__ import annotations

import argparse
import tomllib
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
REQUIREMENTS = ROOT / "requirements.txt"
RUNTIME_EXTRAS = ("cli", "server")


def declared_requirements() -> list[str]:
    """Return base dependencies plus the runtime extras, sorted."""
    project = tomllib.loads((ROOT / "pyproject.toml").read_text(encoding="utf-8"))[
        "project"
    ]
    declared = set(project.get("dependencies", []))
    extras = project.get("optional-dependencies", {})
    for name in RUNTIME_EXTRAS:
        declared.update(extras.get(name, []))
    return sorted(req.strip() for req in declared if req.strip())


def pinned_requirements() -> list[str]:
    lines = REQUIREMENTS.read_text(encoding="utf-8").splitlines()
    return sorted(
        req for req in (line.split("#", 1)[0].strip() for line in lines) if req
    )


def render(requirements: list[str]) -> str:
    header = [
        f"# Generated from pyproject.toml (base + extras: {','.join(RUNTIME_EXTRAS)})",
        "# Do not edit manually; run: python scripts/sync_requirements.py",
        "",
    ]
    return "\n".join([*header, *requirements]) + "\n"


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--check", action="store_true", help="Only report drift.")
    args = parser.parse_args()

    expected = declared_requirements()
    if not args.check:
        REQUIREMENTS.write_text(render(expected), encoding="utf-8")
        print(f"Wrote {len(expected)} requirements to {REQUIREMENTS.name}")
        return

    actual = pinned_requirements() if REQUIREMENTS.exists() else []
    missing = sorted(set(expected) - set(actual))
    unexpected = sorted(set(actual) - set(expected))
    if not missing and not unexpected:
        print("requirements.txt is in sync.")
        return
    report = ["requirements.txt is out of sync with pyproject.toml."]
    report.extend(f"- missing: {req}" for req in missing)
    report.extend(f"- unexpected: {req}" for req in unexpected)
    report.append("Run: python scripts/sync_requirements.py")
    raise SystemExit("\n".join(report))


if __name__ == "__main__":
    main()
