from __future__ import annotations

import re
from dataclasses import dataclass

from figma_export_api.core.errors import UnsupportedFormatError

FORMATS: tuple[str, ...] = ("html", "react", "vue", "moneyview")
DEFAULT_COMPONENT_NAME = "FigmaPrototype"


def sanitize_component_name(raw: str | None) -> str:
    cleaned = re.sub(r"[^0-9A-Za-z]", "", raw or "")
    if not cleaned:
        return DEFAULT_COMPONENT_NAME
    if cleaned[0].isdigit():
        cleaned = f"Screen{cleaned}"
    return cleaned[0].upper() + cleaned[1:]


def normalize_format(value: str) -> str:
    name = (value or "").strip().lower()
    if name not in FORMATS:
        raise UnsupportedFormatError(value, FORMATS)
    return name


@dataclass(frozen=True)
class ExportOptions:
    include_styles: bool = True
    minify: bool = False
    include_images: bool = True
    component_name: str = DEFAULT_COMPONENT_NAME

    def __post_init__(self) -> None:
        object.__setattr__(self, "component_name", sanitize_component_name(self.component_name))
