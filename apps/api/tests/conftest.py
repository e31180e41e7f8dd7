from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient

from figma_export_api.main import app
from figma_export_api.settings import get_settings


@pytest.fixture()
def client() -> TestClient:
    os.environ.pop("FIGMA_ACCESS_TOKEN", None)
    get_settings.cache_clear()
    return TestClient(app)
