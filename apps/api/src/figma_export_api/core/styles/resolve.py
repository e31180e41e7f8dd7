from __future__ import annotations

import math
from typing import Any

from figma_export_api.core.ast.config import DEFAULT_CONFIG, PipelineConfig
from figma_export_api.core.ast.model import NodeStyles, Paint, TextStyle

# Resolution never raises: malformed values fall back to the documented defaults.

ALPHA_PRECISION = 3
TEXT_ALIGNMENTS = {"left", "center", "right", "justify"}


def coerce_float(value: Any, default: float = 0.0) -> float:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        result = float(value)
    else:
        try:
            result = float(value)
        except (TypeError, ValueError):
            return default
    if math.isnan(result) or math.isinf(result):
        return default
    return result


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _channel(value: Any) -> int:
    # Half-up rounding so 0.5 / 255 steps match browser color math.
    scaled = _clamp(coerce_float(value), 0.0, 1.0) * 255
    return int(math.floor(scaled + 0.5))


def format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    text = f"{value:.{ALPHA_PRECISION}f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def rgba_channels(color: Any, opacity: Any = 1.0) -> tuple[int, int, int, float]:
    if not isinstance(color, dict):
        color = {}
    alpha = _clamp(coerce_float(color.get("a"), 1.0), 0.0, 1.0)
    alpha *= _clamp(coerce_float(opacity, 1.0), 0.0, 1.0)
    return (
        _channel(color.get("r")),
        _channel(color.get("g")),
        _channel(color.get("b")),
        round(alpha, ALPHA_PRECISION),
    )


def format_rgba(r: int, g: int, b: int, alpha: float) -> str:
    return f"rgba({r}, {g}, {b}, {format_number(alpha)})"


def resolve_fill(color: Any, opacity: Any = 1.0) -> str:
    """Convert a fractional ``{r, g, b, a}`` color into an ``rgba()`` string."""
    return format_rgba(*rgba_channels(color, opacity))


def resolve_paint(paint: Any, weight: float = 0.0) -> Paint | None:
    if not isinstance(paint, dict):
        return None
    if paint.get("visible") is False:
        return None
    if str(paint.get("type") or "").upper() != "SOLID":
        return None
    color = paint.get("color")
    if not isinstance(color, dict):
        return None
    r, g, b, alpha = rgba_channels(color, paint.get("opacity", 1.0))
    return Paint(r=r, g=g, b=b, alpha=alpha, css=format_rgba(r, g, b, alpha), weight=weight)


def resolve_paints(paints: Any, weight: float = 0.0) -> tuple[Paint, ...]:
    if not isinstance(paints, (list, tuple)):
        return ()
    resolved = (resolve_paint(paint, weight) for paint in paints)
    return tuple(paint for paint in resolved if paint is not None)


def first_solid_paint(paints: Any) -> Paint | None:
    """Only the first solid paint counts; stacked paints beyond it are ignored."""
    resolved = resolve_paints(paints)
    return resolved[0] if resolved else None


def has_image_fill(paints: Any) -> bool:
    if not isinstance(paints, (list, tuple)):
        return False
    return any(isinstance(paint, dict) and str(paint.get("type") or "").upper() == "IMAGE" for paint in paints)


def resolve_stroke_weight(raw: dict[str, Any]) -> float:
    weight = coerce_float(raw.get("strokeWeight"), 1.0)
    return weight if weight > 0 else 1.0


def resolve_corner_radius(raw: dict[str, Any]) -> float:
    radius = coerce_float(raw.get("cornerRadius"), 0.0)
    return radius if radius > 0 else 0.0


def resolve_text_style(raw: dict[str, Any], config: PipelineConfig = DEFAULT_CONFIG) -> TextStyle:
    style = raw.get("style")
    if not isinstance(style, dict):
        style = {}

    family = style.get("fontFamily")
    if not isinstance(family, str) or not family.strip():
        family = config.fallback_font

    size = coerce_float(style.get("fontSize"), config.default_font_size)
    if size <= 0:
        size = config.default_font_size

    weight = int(coerce_float(style.get("fontWeight"), config.default_font_weight))
    if weight <= 0:
        weight = config.default_font_weight

    align = str(style.get("textAlignHorizontal") or "left").lower()
    if align == "justified":
        align = "justify"
    if align not in TEXT_ALIGNMENTS:
        align = "left"

    return TextStyle(
        font_family=family.strip(),
        font_size=size,
        font_weight=weight,
        text_align=align,
        letter_spacing=coerce_float(style.get("letterSpacing"), 0.0),
    )


def resolve_styles(raw: dict[str, Any], is_text: bool, config: PipelineConfig = DEFAULT_CONFIG) -> NodeStyles:
    return NodeStyles(
        fills=resolve_paints(raw.get("fills")),
        strokes=resolve_paints(raw.get("strokes"), resolve_stroke_weight(raw)),
        corner_radius=resolve_corner_radius(raw),
        text_style=resolve_text_style(raw, config) if is_text else None,
    )
