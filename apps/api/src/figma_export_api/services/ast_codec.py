from __future__ import annotations

import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from figma_export_api.core.ast.config import DEFAULT_CONFIG, PipelineConfig
from figma_export_api.core.ast.model import (
    NODE_CLASSES,
    ASTNode,
    Classification,
    DesignAST,
    Layout,
    NodeMetadata,
    NodeStyles,
    NodeType,
    Paint,
    TextStyle,
)
from figma_export_api.core.errors import DepthExceededWarning, Diagnostic, InputShapeError
from figma_export_api.core.styles.resolve import format_rgba
from figma_export_api.schemas.ast import (
    ASTNodeModel,
    ASTPageModel,
    ClassificationModel,
    DiagnosticModel,
    LayoutModel,
    MetadataModel,
    PaintModel,
    StylesModel,
    TextStyleModel,
)

logger = logging.getLogger("figma_export_api.ast_codec")

_PAGES = TypeAdapter(list[ASTPageModel])


def is_ast_payload(value: Any) -> bool:
    """True for serialized AST pages: ``{"screens": [...]}`` or a list of them."""
    if isinstance(value, dict):
        return isinstance(value.get("screens"), list)
    if isinstance(value, list):
        return bool(value) and all(isinstance(page, dict) and isinstance(page.get("screens"), list) for page in value)
    return False


# -----------------------------------------------------------------------------
# Dataclass -> schema
# -----------------------------------------------------------------------------
def _paint_model(paint: Paint) -> PaintModel:
    return PaintModel(r=paint.r, g=paint.g, b=paint.b, alpha=paint.alpha, css=paint.css, weight=paint.weight)


def node_to_model(node: ASTNode) -> ASTNodeModel:
    text_style = node.styles.text_style
    classification = node.classification
    return ASTNodeModel(
        id=node.id,
        type=node.type,
        name=node.name,
        visible=node.visible,
        layout=LayoutModel(
            x=node.layout.x,
            y=node.layout.y,
            width=node.layout.width,
            height=node.layout.height,
            rotation=node.layout.rotation,
            opacity=node.layout.opacity,
        ),
        styles=StylesModel(
            fills=[_paint_model(paint) for paint in node.styles.fills],
            strokes=[_paint_model(paint) for paint in node.styles.strokes],
            corner_radius=node.styles.corner_radius,
            text_style=(
                TextStyleModel(
                    font_family=text_style.font_family,
                    font_size=text_style.font_size,
                    font_weight=text_style.font_weight,
                    text_align=text_style.text_align,
                    letter_spacing=text_style.letter_spacing,
                )
                if text_style is not None
                else None
            ),
        ),
        metadata=MetadataModel(
            text_content=node.metadata.text_content,
            has_image=node.metadata.has_image,
            is_component=node.metadata.is_component,
        ),
        children=[node_to_model(child) for child in node.children],
        classification=(
            ClassificationModel(
                category=classification.category,
                props=dict(classification.props),
                import_slug=classification.import_slug,
                rule=classification.rule,
            )
            if classification is not None
            else None
        ),
    )


def diagnostic_model(diagnostic: Diagnostic) -> DiagnosticModel:
    payload = diagnostic.to_dict()
    code = payload.pop("code")
    message = payload.pop("message")
    return DiagnosticModel(code=code, message=message, details=payload)


# -----------------------------------------------------------------------------
# Schema -> dataclass
# -----------------------------------------------------------------------------
def _paint(model: PaintModel) -> Paint:
    css = model.css or format_rgba(model.r, model.g, model.b, model.alpha)
    return Paint(r=model.r, g=model.g, b=model.b, alpha=model.alpha, css=css, weight=model.weight)


def _text_style(model: TextStyleModel | None, needed: bool, config: PipelineConfig) -> TextStyle | None:
    if model is None and not needed:
        return None
    model = model or TextStyleModel()
    return TextStyle(
        font_family=model.font_family or config.fallback_font,
        font_size=model.font_size or config.default_font_size,
        font_weight=model.font_weight or config.default_font_weight,
        text_align=model.text_align,
        letter_spacing=model.letter_spacing,
    )


def node_from_model(
    model: ASTNodeModel,
    config: PipelineConfig = DEFAULT_CONFIG,
    depth: int = 0,
    diagnostics: list[Diagnostic] | None = None,
) -> ASTNode:
    """Rebuild one node, truncating children that would pass ``config.max_depth``."""
    node_cls = NODE_CLASSES[model.type]
    is_text = model.type is NodeType.TEXT
    classification = model.classification
    children: list[ASTNode] = []
    if model.children and not is_text:
        if depth + 1 >= config.max_depth:
            warning = DepthExceededWarning(
                node_id=model.id,
                depth=depth + 1,
                max_depth=config.max_depth,
                truncated_children=len(model.children),
            )
            if diagnostics is not None:
                diagnostics.append(warning)
            logger.warning(warning.message)
        else:
            children = [node_from_model(child, config, depth + 1, diagnostics) for child in model.children]
    return node_cls(
        id=model.id,
        name=model.name,
        layout=Layout(
            x=model.layout.x,
            y=model.layout.y,
            width=model.layout.width,
            height=model.layout.height,
            rotation=model.layout.rotation,
            opacity=model.layout.opacity,
        ),
        styles=NodeStyles(
            fills=tuple(_paint(paint) for paint in model.styles.fills),
            strokes=tuple(_paint(paint) for paint in model.styles.strokes),
            corner_radius=model.styles.corner_radius,
            text_style=_text_style(model.styles.text_style, is_text, config),
        ),
        metadata=NodeMetadata(
            text_content=model.metadata.text_content,
            has_image=model.metadata.has_image,
            is_component=model.metadata.is_component or model.type in (NodeType.COMPONENT, NodeType.INSTANCE),
        ),
        visible=model.visible,
        children=children,
        classification=(
            Classification(
                category=classification.category,
                props=dict(classification.props),
                import_slug=classification.import_slug,
                rule=classification.rule,
            )
            if classification is not None
            else None
        ),
    )


def ast_from_pages(payload: Any, config: PipelineConfig = DEFAULT_CONFIG) -> DesignAST:
    pages = payload if isinstance(payload, list) else [payload]
    try:
        models = _PAGES.validate_python(pages)
    except ValidationError as exc:
        raise InputShapeError(
            "Invalid AST payload",
            details={"errors": exc.errors(include_url=False, include_context=False)},
        ) from exc
    diagnostics: list[Diagnostic] = []
    screens = [node_from_model(screen, config, 0, diagnostics) for page in models for screen in page.screens]
    return DesignAST(screens=screens, diagnostics=diagnostics)
