#!/usr/bin/env python3
"""Convert a three.js style library shader to every target dialect."""

from __future__ import annotations

from pathlib import Path

from shader_converter import convert
from shader_converter.types import TARGET_DIALECTS

LIBRARY_FRAGMENT = """#version 300 es
precision highp float;
in vec2 vUv;
in vec3 vNormal;
in vec3 vViewPosition;
uniform float uTime;
uniform vec2 uResolution;
out vec4 fragColor;

void main() {
    vec2 uv = gl_FragCoord.xy / uResolution;
    float wave = 0.5 + 0.5 * sin(uTime + uv.x * 10.0);
    fragColor = vec4(vUv * wave, normalize(vNormal).z, 1.0);
}
"""

SUFFIXES = {"hlsl": "hlsl", "wgsl": "wgsl", "msl": "metal", "glsl": "frag"}


def main() -> None:
    """Write one converted file per target with strict pass/fail criteria."""
    output_dir = Path("converted_shaders")
    output_dir.mkdir(exist_ok=True)

    for target in TARGET_DIALECTS:
        result = convert(LIBRARY_FRAGMENT, "glsl", target, "fragment")
        if not result.success:
            raise SystemExit(f"FAIL: {target} conversion failed:\n{result.error}")
        output_path = output_dir / f"wave.{SUFFIXES[target]}"
        output_path.write_text(result.output, encoding="utf-8")
        print(f"PASS: {output_path}")

    print("PASS: library shader converted to every target.")


if __name__ == "__main__":
    main()
