from __future__ import annotations

import logging
from io import BytesIO
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import Response, StreamingResponse

from figma_export_api.core.ast.config import PipelineConfig
from figma_export_api.core.emit.options import ExportOptions, normalize_format
from figma_export_api.core.request_context import enforce_document_limit
from figma_export_api.schemas.api import ConvertRequest, FigmaConvertRequest
from figma_export_api.services.conversion import ConversionResult, convert
from figma_export_api.services.figma_client import FigmaClient
from figma_export_api.settings import get_settings

router = APIRouter(prefix="/v1", tags=["convert"], dependencies=[Depends(enforce_document_limit)])
logger = logging.getLogger("figma_export_api.api")


def _archive_response(result: ConversionResult, options: ExportOptions) -> Response:
    filename = f"{options.component_name}-{result.format}.zip"
    headers = {
        "Content-Disposition": f'attachment; filename="{filename}"',
        "X-Figma-Export-Format": result.format,
        "X-Figma-Export-Screens": str(result.ast.screen_count),
        "X-Figma-Export-Diagnostics": str(len(result.diagnostics)),
    }
    return StreamingResponse(BytesIO(result.archive), media_type="application/zip", headers=headers)


def _run(document: Any, format_name: str, options: ExportOptions) -> Response:
    config = PipelineConfig.from_settings(get_settings())
    result = convert(document, format_name, options, config)
    for diagnostic in result.diagnostics:
        logger.info("conversion diagnostic format=%s code=%s", result.format, diagnostic.code)
    return _archive_response(result, options)


@router.post("/convert/{format_name}")
def convert_document(format_name: str, payload: ConvertRequest) -> Response:
    return _run(payload.document, format_name, payload.options.to_options())


@router.post("/convert/{format_name}/figma")
def convert_figma_url(format_name: str, payload: FigmaConvertRequest) -> Response:
    # Reject unknown formats before any network call.
    normalize_format(format_name)
    document = FigmaClient().fetch_document(payload.figma_url)
    return _run(document, format_name, payload.options.to_options())
