from __future__ import annotations

from fastapi import APIRouter, Depends

from figma_export_api.core.ast.config import PipelineConfig
from figma_export_api.core.request_context import enforce_document_limit
from figma_export_api.schemas.api import AnalyzeRequest, AnalyzeResponse
from figma_export_api.services.ast_codec import diagnostic_model, node_to_model
from figma_export_api.services.conversion import analyze
from figma_export_api.settings import get_settings

router = APIRouter(prefix="/v1", tags=["analyze"], dependencies=[Depends(enforce_document_limit)])


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze_document(payload: AnalyzeRequest) -> AnalyzeResponse:
    config = PipelineConfig.from_settings(get_settings())
    result = analyze(payload.document, config)
    return AnalyzeResponse(
        screen_count=result.screen_count,
        element_count=result.element_count,
        texts=result.texts,
        categories=result.categories,
        has_text=result.has_text,
        has_shapes=result.has_shapes,
        has_icons=result.has_icons,
        diagnostics=[diagnostic_model(diagnostic) for diagnostic in result.ast.diagnostics],
        screens=[node_to_model(screen) for screen in result.ast.screens],
    )
