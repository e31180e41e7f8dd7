from __future__ import annotations

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from figma_export_api.core.errors import APIError
from figma_export_api.core.request_context import get_request_id
from figma_export_api.routers.analyze import router as analyze_router
from figma_export_api.routers.convert import router as convert_router
from figma_export_api.routers.health import router as health_router
from figma_export_api.settings import get_settings


# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
logging.basicConfig(level=get_settings().LOG_LEVEL.upper())
logger = logging.getLogger("figma_export_api")


# -----------------------------------------------------------------------------
# CORS
# -----------------------------------------------------------------------------
def _cors_origins() -> list[str]:
    settings = get_settings()
    if settings.WEB_ORIGIN:
        return [origin.strip() for origin in settings.WEB_ORIGIN.split(",") if origin.strip()]
    if settings.FIGMA_EXPORT_ENV.lower() == "production":
        return []
    return [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]


# -----------------------------------------------------------------------------
# App
# -----------------------------------------------------------------------------
app = FastAPI(title="Figma Export API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", "X-Figma-Export-Diagnostics", "X-Figma-Export-Screens"],
)


# -----------------------------------------------------------------------------
# Exception handlers
# -----------------------------------------------------------------------------
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    request_id = get_request_id(request)
    logger.error(
        "Unhandled exception on %s %s request_id=%s\n%s",
        request.method,
        request.url.path,
        request_id,
        traceback.format_exc(),
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_error",
            "path": request.url.path,
            "request_id": request_id,
        },
    )


@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError):
    request_id = get_request_id(request)
    logger.warning(
        "Handled API error on %s %s request_id=%s code=%s",
        request.method,
        request.url.path,
        request_id,
        exc.code,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.code,
            "message": exc.message,
            "details": exc.details,
            "request_id": request_id,
        },
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    request_id = get_request_id(request)
    logger.info(
        "Validation error on %s %s request_id=%s",
        request.method,
        request.url.path,
        request_id,
    )
    return JSONResponse(
        status_code=422,
        content={
            "error": "validation_error",
            "message": "Invalid request payload",
            "details": jsonable_errors(exc),
            "request_id": request_id,
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]


# -----------------------------------------------------------------------------
# Startup logging
# -----------------------------------------------------------------------------
@app.on_event("startup")
async def startup_event():
    settings = get_settings()
    logger.info("Figma Export API starting")
    logger.info("FIGMA_EXPORT_ENV=%s", settings.FIGMA_EXPORT_ENV)
    logger.info("FIGMA_EXPORT_MAX_DEPTH=%s", settings.FIGMA_EXPORT_MAX_DEPTH)
    logger.info("FIGMA_EXPORT_LOW_YIELD_THRESHOLD=%s", settings.FIGMA_EXPORT_LOW_YIELD_THRESHOLD)
    logger.info("FIGMA_ACCESS_TOKEN configured=%s", bool(settings.FIGMA_ACCESS_TOKEN))


# -----------------------------------------------------------------------------
# Routers
# -----------------------------------------------------------------------------
app.include_router(health_router)
app.include_router(analyze_router)
app.include_router(convert_router)
