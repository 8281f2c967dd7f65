"""Rewrite permissive (WebGL / three.js flavoured) GLSL for the strict frontend.

Host environments such as three.js prepend their own ``#version`` and
precision lines, and supply ``uTime``/``uResolution`` and the interpolated
``vUv``/``vNormal``/``vViewPosition`` varyings without explicit layout. The
strict frontend wants one authoritative version line, uniforms inside a bound
block and explicit interface locations, so this module rewrites those exact
declarations line by line and injects a canonical header.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from shader_converter.types import ShaderStage

GLSL_VERSION = 450

GLOBALS_BLOCK_NAME = "ShaderGlobals"
GLOBALS_SET = 0
GLOBALS_BINDING = 0

# Field order of the globals block is part of the output contract.
HOST_UNIFORMS: tuple[tuple[str, str], ...] = (
    ("float", "uTime"),
    ("vec2", "uResolution"),
)

# (type, name, location) for interpolated host varyings.
HOST_VARYINGS: tuple[tuple[str, str, int], ...] = (
    ("vec2", "vUv", 0),
    ("vec3", "vNormal", 1),
    ("vec3", "vViewPosition", 2),
)

# three.js fragment shaders declare their color output without a location.
HOST_FRAGMENT_OUTPUTS: tuple[tuple[str, str, int], ...] = (("vec4", "fragColor", 0),)

# WebGL 1 shaders write the removed gl_FragColor builtin instead.
LEGACY_FRAGMENT_OUTPUT: tuple[str, str, int] = ("vec4", "legacyFragColor", 0)

_LEGACY_FRAG_COLOR = re.compile(r"\bgl_FragColor\b")

_DIRECTIVE_PREFIXES = ("#version", "precision ")


def canonical_header() -> str:
    """Return the version line and host-uniform block prepended to every body."""
    fields = "\n".join(f"    {type_name} {name};" for type_name, name in HOST_UNIFORMS)
    return (
        f"#version {GLSL_VERSION}\n"
        f"layout(set = {GLOBALS_SET}, binding = {GLOBALS_BINDING}) "
        f"uniform {GLOBALS_BLOCK_NAME} {{\n"
        f"{fields}\n"
        "};"
    )


def _indent(line: str) -> str:
    return line[: len(line) - len(line.lstrip())]


def _varying_qualifier(stage: ShaderStage) -> str:
    return "out" if stage == "vertex" else "in"


def _located_declarations(stage: ShaderStage) -> dict[str, str]:
    """Map exact bare declarations to their located replacements."""
    rewrites: dict[str, str] = {}
    for type_name, name, location in HOST_VARYINGS:
        for qualifier in ("in", "out", "varying"):
            resolved = (
                _varying_qualifier(stage) if qualifier == "varying" else qualifier
            )
            rewrites[f"{qualifier} {type_name} {name};"] = (
                f"layout(location = {location}) {resolved} {type_name} {name};"
            )
    for type_name, name, location in HOST_FRAGMENT_OUTPUTS:
        rewrites[f"out {type_name} {name};"] = (
            f"layout(location = {location}) out {type_name} {name};"
        )
    return rewrites


def strip_directives(lines: Iterable[str]) -> list[str]:
    """Drop version and precision directive lines."""
    return [
        line for line in lines if not line.strip().startswith(_DIRECTIVE_PREFIXES)
    ]


def neutralize_host_uniforms(lines: Iterable[str]) -> list[str]:
    """Comment out user declarations of the uniforms the header provides."""
    declarations = {f"uniform {type_name} {name};" for type_name, name in HOST_UNIFORMS}
    return [
        f"{_indent(line)}// {line.strip()}" if line.strip() in declarations else line
        for line in lines
    ]


def locate_host_varyings(lines: Iterable[str], stage: ShaderStage) -> list[str]:
    """Give the well-known interface variables fixed explicit locations."""
    rewrites = _located_declarations(stage)
    result: list[str] = []
    for line in lines:
        replacement = rewrites.get(line.strip())
        result.append(line if replacement is None else _indent(line) + replacement)
    return result


def replace_legacy_fragment_output(
    lines: Iterable[str], stage: ShaderStage
) -> list[str]:
    """Redirect ``gl_FragColor`` writes to a declared, located output.

    Only fragment shaders that mention the builtin are touched; the output
    declaration becomes the first body line.
    """
    lines = list(lines)
    if stage != "fragment" or not any(_LEGACY_FRAG_COLOR.search(line) for line in lines):
        return lines
    type_name, name, location = LEGACY_FRAGMENT_OUTPUT
    declaration = f"layout(location = {location}) out {type_name} {name};"
    return [declaration, *(_LEGACY_FRAG_COLOR.sub(name, line) for line in lines)]


def normalize_source(source_text: str, stage: ShaderStage) -> str:
    """Normalize permissive GLSL into source the strict frontend accepts.

    Parameters
    ----------
    source_text : str
        Raw user-authored GLSL.
    stage : {"vertex", "fragment", "compute"}
        Pipeline stage; decides the direction of legacy ``varying`` lines
        and whether ``gl_FragColor`` is redirected.

    Returns
    -------
    str
        Canonical header, a newline, then the rewritten body. Never raises;
        unrecognized declarations pass through unchanged.
    """
    lines = source_text.split("\n")
    lines = strip_directives(lines)
    lines = neutralize_host_uniforms(lines)
    lines = locate_host_varyings(lines, stage)
    lines = replace_legacy_fragment_output(lines, stage)
    return canonical_header() + "\n" + "\n".join(lines)
