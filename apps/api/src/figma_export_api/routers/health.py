from __future__ import annotations

from fastapi import APIRouter

from figma_export_api.core.emit.options import FORMATS
from figma_export_api.schemas.api import FormatsResponse
from figma_export_api.settings import get_settings

router = APIRouter()


@router.get("/health")
def health() -> dict[str, str | bool | int]:
    settings = get_settings()
    return {
        "status": "ok",
        "build_version": settings.FIGMA_EXPORT_BUILD_VERSION or "dev",
        "max_depth": settings.FIGMA_EXPORT_MAX_DEPTH,
        "low_yield_threshold": settings.FIGMA_EXPORT_LOW_YIELD_THRESHOLD,
        "figma_configured": bool(settings.FIGMA_ACCESS_TOKEN),
    }


@router.get("/v1/formats", response_model=FormatsResponse)
def formats() -> FormatsResponse:
    return FormatsResponse(formats=list(FORMATS))
