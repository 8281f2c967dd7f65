from __future__ import annotations

import json
import os
import time
import urllib.request


def _wait_http_ok(url: str, timeout_seconds: float = 40.0) -> bytes:
    deadline = time.time() + timeout_seconds
    last_error: Exception | None = None
    while time.time() < deadline:
        try:
            with urllib.request.urlopen(url, timeout=3.0) as response:  # noqa: S310
                if response.status == 200:
                    return response.read()
        except Exception as exc:  # noqa: BLE001
            last_error = exc
        time.sleep(0.5)
    raise RuntimeError(f"timed out waiting for HTTP 200 at {url}: {last_error}")


def _post_json(url: str, payload: dict[str, str]) -> dict[str, object]:
    request = urllib.request.Request(
        url,
        data=json.dumps(payload).encode("utf-8"),
        headers={"Content-Type": "application/json"},
        method="POST",
    )
    with urllib.request.urlopen(request, timeout=30.0) as response:  # noqa: S310
        return json.loads(response.read().decode("utf-8"))


def _assert_probes(api_base: str) -> None:
    health_payload = json.loads(_wait_http_ok(f"{api_base}/healthz").decode("utf-8"))
    ready_payload = json.loads(_wait_http_ok(f"{api_base}/readyz").decode("utf-8"))
    assert health_payload.get("status") == "ok", health_payload
    assert ready_payload.get("status") == "ready", ready_payload


def _assert_conversion(api_base: str) -> None:
    converted = _post_json(
        f"{api_base}/v1/convert",
        {
            "code": "@fragment\nfn main() -> @location(0) vec4<f32> {\n"
            "    return vec4<f32>(1.0);\n}\n",
            "source_dialect": "wgsl",
            "target_dialect": "hlsl",
        },
    )
    assert converted["success"] is True, converted
    assert converted["output"], converted

    failed = _post_json(
        f"{api_base}/v1/convert",
        {"code": "void main() {", "target_dialect": "wgsl"},
    )
    assert failed["success"] is False, failed
    assert str(failed["error"]).startswith("GLSL Parse Error: "), failed


def main() -> None:
    api_base = os.getenv("SHADER_CONVERTER_API_BASE", "http://localhost:8090")

    _assert_probes(api_base)
    _assert_conversion(api_base)

    print("shader converter HTTP smoke checks passed")


if __name__ == "__main__":
    main()
