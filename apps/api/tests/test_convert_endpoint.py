from __future__ import annotations

import json
import zipfile
from io import BytesIO

from fastapi.testclient import TestClient

from tests.design_factory import login_document, low_yield_document, multi_screen_document


def test_convert_html_archive(client: TestClient) -> None:
    response = client.post("/v1/convert/html", json={"document": login_document()})
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/zip"
    assert response.headers["content-disposition"] == 'attachment; filename="FigmaPrototype-html.zip"'
    assert response.headers["x-figma-export-screens"] == "1"
    with zipfile.ZipFile(BytesIO(response.content)) as archive:
        assert archive.namelist() == ["index.html", "styles.css", "package.json", "README.md"]
        html = archive.read("index.html").decode("utf-8")
    assert "left:10px; top:10px" in html


def test_convert_with_options(client: TestClient) -> None:
    response = client.post(
        "/v1/convert/react",
        json={
            "document": multi_screen_document(2),
            "options": {"includeStyles": False, "componentName": "Onboarding"},
        },
    )
    assert response.status_code == 200
    with zipfile.ZipFile(BytesIO(response.content)) as archive:
        names = archive.namelist()
    assert "src/components/Onboarding.jsx" in names
    assert "src/index.css" not in names


def test_convert_reports_diagnostics_header(client: TestClient) -> None:
    response = client.post("/v1/convert/vue", json={"document": low_yield_document()})
    assert response.status_code == 200
    assert response.headers["x-figma-export-diagnostics"] == "1"


def test_convert_unsupported_format(client: TestClient) -> None:
    response = client.post("/v1/convert/angular", json={"document": login_document()})
    assert response.status_code == 400
    payload = response.json()
    assert payload["error"] == "unsupported_format"
    assert payload["details"]["supported"] == ["html", "react", "vue", "moneyview"]
    assert payload["request_id"]


def test_convert_input_shape_error(client: TestClient) -> None:
    response = client.post("/v1/convert/html", json={"document": {"pages": []}}, headers={"x-request-id": "req-1"})
    assert response.status_code == 400
    payload = response.json()
    assert payload["error"] == "input_shape"
    assert payload["request_id"] == "req-1"


def test_convert_empty_design(client: TestClient) -> None:
    response = client.post("/v1/convert/html", json={"document": {"children": []}})
    assert response.status_code == 422
    assert response.json()["error"] == "empty_design"


def test_convert_validation_error(client: TestClient) -> None:
    response = client.post("/v1/convert/html", json={"options": {}})
    assert response.status_code == 422
    assert response.json()["error"] == "validation_error"


def test_convert_rejects_oversized_body(client: TestClient, monkeypatch) -> None:
    from figma_export_api.settings import get_settings

    monkeypatch.setenv("FIGMA_EXPORT_MAX_DOCUMENT_MB", "1")
    get_settings.cache_clear()
    padding = "x" * (1024 * 1024 + 10)
    body = json.dumps({"document": {"children": [], "padding": padding}})
    response = client.post("/v1/convert/html", content=body, headers={"content-type": "application/json"})
    assert response.status_code == 413
    assert response.json()["error"] == "document_too_large"
    monkeypatch.delenv("FIGMA_EXPORT_MAX_DOCUMENT_MB")
    get_settings.cache_clear()


def test_convert_figma_url_requires_token(client: TestClient) -> None:
    response = client.post(
        "/v1/convert/html/figma",
        json={"figmaUrl": "https://www.figma.com/design/AbC123/Demo?node-id=1-2"},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "figma_not_configured"


def test_convert_figma_url_checks_format_first(client: TestClient) -> None:
    response = client.post("/v1/convert/svg/figma", json={"figmaUrl": "https://www.figma.com/file/AbC123/Demo"})
    assert response.status_code == 400
    assert response.json()["error"] == "unsupported_format"
