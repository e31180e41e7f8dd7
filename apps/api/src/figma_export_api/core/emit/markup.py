from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from figma_export_api.core.ast.model import ASTNode, Classification, NodeType
from figma_export_api.core.classify.rules import classify
from figma_export_api.core.styles.resolve import format_number

Declaration = tuple[str, str]

IMAGE_PLACEHOLDER_CLASS = "image-placeholder"


@dataclass
class Element:
    tag: str
    node_id: str
    classes: list[str]
    style: list[Declaration]
    text: str | None = None
    props: dict[str, Any] = field(default_factory=dict)
    children: list["Element"] = field(default_factory=list)


def css_class_for(node_id: str) -> str:
    return "node-" + (re.sub(r"[^0-9A-Za-z_-]+", "-", node_id).strip("-") or "x")


def node_classification(node: ASTNode) -> Classification:
    # Unannotated trees are classified on the fly; the tree itself is never touched.
    return node.classification or classify(node)


def _px(value: float) -> str:
    return f"{format_number(value)}px"


def _font_family(family: str) -> str:
    cleaned = re.sub(r"[;'\"{}<>\\]", "", family).strip()
    return f"'{cleaned}'" if cleaned else "sans-serif"


def style_declarations(node: ASTNode, origin: tuple[float, float] = (0.0, 0.0)) -> list[Declaration]:
    """Inline style for one node, positioned absolutely from ``origin``."""
    layout = node.layout
    declarations: list[Declaration] = [
        ("position", "absolute"),
        ("left", _px(layout.x - origin[0])),
        ("top", _px(layout.y - origin[1])),
        ("width", _px(layout.width)),
        ("height", _px(layout.height)),
    ]
    if layout.rotation != 0:
        declarations.append(("transform", f"rotate({format_number(layout.rotation)}deg)"))
    if layout.opacity != 1:
        declarations.append(("opacity", format_number(layout.opacity)))

    styles = node.styles
    if styles.fill is not None:
        prop = "color" if node.type is NodeType.TEXT else "background-color"
        declarations.append((prop, styles.fill.css))
    if styles.stroke is not None:
        declarations.append(("border", f"{_px(styles.stroke.weight)} solid {styles.stroke.css}"))
    if styles.corner_radius > 0:
        declarations.append(("border-radius", _px(styles.corner_radius)))

    text_style = styles.text_style
    if text_style is not None:
        declarations.extend(
            [
                ("font-family", _font_family(text_style.font_family)),
                ("font-size", _px(text_style.font_size)),
                ("font-weight", str(text_style.font_weight)),
                ("text-align", text_style.text_align),
            ]
        )
        if text_style.letter_spacing:
            declarations.append(("letter-spacing", _px(text_style.letter_spacing)))
        declarations.append(("white-space", "pre-wrap"))
    return declarations


def screen_declarations(screen: ASTNode) -> list[Declaration]:
    declarations: list[Declaration] = [
        ("position", "relative"),
        ("width", _px(screen.layout.width)),
        ("height", _px(screen.layout.height)),
    ]
    if screen.type is not NodeType.TEXT and screen.styles.fill is not None:
        declarations.append(("background-color", screen.styles.fill.css))
    return declarations


def css_to_string(declarations: list[Declaration]) -> str:
    return "; ".join(f"{prop}:{value}" for prop, value in declarations)


def camel_case(prop: str) -> str:
    head, *rest = prop.split("-")
    return head + "".join(part.capitalize() for part in rest)
