from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from figma_export_api.settings import Settings


@dataclass(frozen=True)
class PipelineConfig:
    max_depth: int = 10
    low_yield_threshold: int = 5
    min_visual_size: float = 10.0
    fallback_min_area: float = 16.0
    fallback_font: str = "Inter"
    default_font_size: float = 14.0
    default_font_weight: int = 400

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        if self.low_yield_threshold < 0:
            raise ValueError("low_yield_threshold must be non-negative")

    @classmethod
    def from_settings(cls, settings: "Settings") -> "PipelineConfig":
        return cls(
            max_depth=settings.FIGMA_EXPORT_MAX_DEPTH,
            low_yield_threshold=settings.FIGMA_EXPORT_LOW_YIELD_THRESHOLD,
            min_visual_size=settings.FIGMA_EXPORT_MIN_VISUAL_SIZE,
            fallback_min_area=settings.FIGMA_EXPORT_FALLBACK_MIN_AREA,
            fallback_font=settings.FIGMA_EXPORT_FALLBACK_FONT,
            default_font_size=settings.FIGMA_EXPORT_DEFAULT_FONT_SIZE,
            default_font_weight=settings.FIGMA_EXPORT_DEFAULT_FONT_WEIGHT,
        )


DEFAULT_CONFIG = PipelineConfig()
