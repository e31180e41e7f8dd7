from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    FIGMA_EXPORT_ENV: str = "development"
    FIGMA_EXPORT_BUILD_VERSION: Optional[str] = None
    FIGMA_EXPORT_MAX_DEPTH: int = 10
    FIGMA_EXPORT_LOW_YIELD_THRESHOLD: int = 5
    FIGMA_EXPORT_MIN_VISUAL_SIZE: float = 10.0
    FIGMA_EXPORT_FALLBACK_MIN_AREA: float = 16.0
    FIGMA_EXPORT_FALLBACK_FONT: str = "Inter"
    FIGMA_EXPORT_DEFAULT_FONT_SIZE: float = 14.0
    FIGMA_EXPORT_DEFAULT_FONT_WEIGHT: int = 400
    FIGMA_EXPORT_MAX_DOCUMENT_MB: int = 25
    FIGMA_ACCESS_TOKEN: Optional[str] = None
    FIGMA_API_BASE: str = "https://api.figma.com"
    FIGMA_HTTP_TIMEOUT: float = 60.0
    WEB_ORIGIN: Optional[str] = None
    LOG_LEVEL: str = "INFO"

    @model_validator(mode="after")
    def _validate_thresholds(self) -> "Settings":
        invalid = [
            name
            for name, value in {
                "FIGMA_EXPORT_MAX_DEPTH": self.FIGMA_EXPORT_MAX_DEPTH,
                "FIGMA_EXPORT_LOW_YIELD_THRESHOLD": self.FIGMA_EXPORT_LOW_YIELD_THRESHOLD,
                "FIGMA_EXPORT_DEFAULT_FONT_SIZE": self.FIGMA_EXPORT_DEFAULT_FONT_SIZE,
                "FIGMA_EXPORT_MAX_DOCUMENT_MB": self.FIGMA_EXPORT_MAX_DOCUMENT_MB,
            }.items()
            if value <= 0
        ]
        if invalid:
            raise ValueError(f"Settings must be positive: {', '.join(invalid)}")
        if self.FIGMA_EXPORT_MIN_VISUAL_SIZE < 0 or self.FIGMA_EXPORT_FALLBACK_MIN_AREA < 0:
            raise ValueError("Size thresholds must be non-negative")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
