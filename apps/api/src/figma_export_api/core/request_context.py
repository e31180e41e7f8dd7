from __future__ import annotations

from uuid import uuid4

from fastapi import Request

from figma_export_api.core.errors import APIError
from figma_export_api.settings import get_settings

REQUEST_ID_HEADERS = ("x-request-id", "x-correlation-id")


def get_request_id(request: Request | None) -> str:
    if request is not None:
        for header in REQUEST_ID_HEADERS:
            value = request.headers.get(header)
            if value:
                return value
    return str(uuid4())


def enforce_document_limit(request: Request) -> None:
    max_bytes = get_settings().FIGMA_EXPORT_MAX_DOCUMENT_MB * 1024 * 1024
    length = request.headers.get("content-length")
    if length and length.isdigit() and int(length) > max_bytes:
        raise APIError(
            status_code=413,
            code="document_too_large",
            message="Design document exceeds size limit",
            details={"max_bytes": max_bytes},
        )
