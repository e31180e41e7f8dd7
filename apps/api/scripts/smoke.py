from __future__ import annotations

import json
import os
import zipfile
from io import BytesIO

import httpx


def _smoke_document() -> dict:
    return {
        "children": [
            {
                "id": "1:0",
                "type": "FRAME",
                "name": "Smoke",
                "absoluteBoundingBox": {"x": 0, "y": 0, "width": 375, "height": 667},
                "fills": [{"type": "SOLID", "color": {"r": 1, "g": 1, "b": 1, "a": 1}}],
                "children": [
                    {
                        "id": "1:1",
                        "type": "TEXT",
                        "characters": "Figma Export Smoke Test",
                        "absoluteBoundingBox": {"x": 20, "y": 40, "width": 240, "height": 24},
                        "style": {"fontFamily": "Inter", "fontSize": 18, "fontWeight": 600},
                    },
                    {
                        "id": "1:2",
                        "type": "RECTANGLE",
                        "characters": "Continue",
                        "absoluteBoundingBox": {"x": 20, "y": 100, "width": 160, "height": 40},
                        "fills": [{"type": "SOLID", "color": {"r": 0, "g": 0.48, "b": 1, "a": 1}}],
                        "cornerRadius": 8,
                    },
                ],
            }
        ]
    }


def main() -> int:
    base_url = os.getenv("FIGMA_EXPORT_SMOKE_API_BASE_URL", "http://localhost:8000").rstrip("/")
    client = httpx.Client(base_url=base_url, timeout=30)
    document = _smoke_document()

    health = client.get("/health")
    health.raise_for_status()

    analysis = client.post("/v1/analyze", json={"document": document})
    analysis.raise_for_status()
    if analysis.json()["screen_count"] != 1:
        raise RuntimeError("Analyze did not report a single screen")

    formats = client.get("/v1/formats")
    formats.raise_for_status()
    sizes: dict[str, int] = {}
    for format_name in formats.json()["formats"]:
        export = client.post(f"/v1/convert/{format_name}", json={"document": document})
        export.raise_for_status()
        with zipfile.ZipFile(BytesIO(export.content)) as archive:
            if "package.json" not in archive.namelist():
                raise RuntimeError(f"Archive for {format_name} is missing package.json")
        sizes[format_name] = len(export.content)

    print(json.dumps({"status": "ok", "archives": sizes}))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
