from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterator

from figma_export_api.core.ast.config import DEFAULT_CONFIG, PipelineConfig
from figma_export_api.core.ast.model import (
    NODE_CLASSES,
    ASTNode,
    DesignAST,
    Layout,
    NodeMetadata,
    NodeType,
)
from figma_export_api.core.errors import (
    DepthExceededWarning,
    Diagnostic,
    EmptyDesignError,
    InputShapeError,
    LowYieldWarning,
)
from figma_export_api.core.styles.resolve import coerce_float, has_image_fill, resolve_styles

logger = logging.getLogger("figma_export_api.normalize")

RawNode = dict[str, Any]

VECTOR_LIKE_TYPES = {"LINE", "STAR", "REGULAR_POLYGON", "POLYGON", "BOOLEAN_OPERATION", "ARROW"}
TRANSPARENT_TYPES = {"DOCUMENT", "CANVAS", "SECTION"}
SKIPPED_TYPES = {"SLICE", "STICKY", "CONNECTOR", "SHAPE_WITH_TEXT", "STAMP", "WIDGET"}


# -----------------------------------------------------------------------------
# Input shapes
# -----------------------------------------------------------------------------
def _document_entries(mapping: dict[str, Any]) -> list[RawNode] | None:
    entries = [value for value in mapping.values() if value is not None]
    if not entries or not all(isinstance(value, dict) for value in entries):
        return None
    if not all(isinstance(value.get("document"), dict) for value in entries):
        return None
    return [value["document"] for value in entries]


def extract_roots(raw: Any) -> list[RawNode]:
    """Return the top-level raw nodes of any accepted document shape.

    Accepted: ``{"document": {"children": [...]}}``, ``{"children": [...]}``,
    the node-id map returned when nodes are queried by id (bare or wrapped
    in ``{"nodes": {...}}``).
    """
    if not isinstance(raw, dict):
        raise InputShapeError(details={"received": type(raw).__name__})

    document = raw.get("document")
    if isinstance(document, dict):
        children = document.get("children")
        if isinstance(children, list):
            return [child for child in children if isinstance(child, dict)]
        raise InputShapeError("Design document has no children list", details={"field": "document.children"})

    children = raw.get("children")
    if isinstance(children, list):
        return [child for child in children if isinstance(child, dict)]

    nodes = raw.get("nodes")
    if isinstance(nodes, dict):
        roots = _document_entries(nodes)
        if roots is not None:
            return roots
        if not any(value is not None for value in nodes.values()):
            return []

    roots = _document_entries(raw) if raw else None
    if roots is not None:
        return roots

    raise InputShapeError(details={"keys": sorted(str(key) for key in raw)[:20]})


# -----------------------------------------------------------------------------
# Node construction
# -----------------------------------------------------------------------------
def map_node_type(raw_type: Any) -> NodeType | str:
    """Fold a provider node type into the closed AST enum.

    Returns ``"transparent"`` for containers walked in place and ``"skip"`` for
    non-visual nodes.
    """
    value = str(raw_type or "").upper()
    if value in TRANSPARENT_TYPES:
        return "transparent"
    if value in SKIPPED_TYPES:
        return "skip"
    if value in VECTOR_LIKE_TYPES:
        return NodeType.VECTOR
    if value == "COMPONENT_SET":
        return NodeType.COMPONENT
    try:
        return NodeType(value)
    except ValueError:
        return NodeType.GROUP


def _bounding_box(raw: RawNode) -> dict[str, Any]:
    for key in ("absoluteBoundingBox", "boundingBox"):
        box = raw.get(key)
        if isinstance(box, dict):
            return box
    return {}


def _layout(raw: RawNode) -> Layout:
    box = _bounding_box(raw)
    opacity = coerce_float(raw.get("opacity"), 1.0)
    return Layout(
        x=coerce_float(box.get("x")),
        y=coerce_float(box.get("y")),
        width=max(0.0, coerce_float(box.get("width"))),
        height=max(0.0, coerce_float(box.get("height"))),
        rotation=coerce_float(raw.get("rotation")),
        opacity=max(0.0, min(1.0, opacity)),
    )


def _raw_children(raw: RawNode) -> list[RawNode]:
    children = raw.get("children")
    if not isinstance(children, list):
        return []
    return [child for child in children if isinstance(child, dict)]


def _text_content(raw: RawNode) -> str:
    characters = raw.get("characters")
    if isinstance(characters, str):
        return characters
    if isinstance(characters, (int, float)) and not isinstance(characters, bool):
        return str(characters)
    return ""


def build_node(raw: RawNode, node_type: NodeType, node_id: str, config: PipelineConfig) -> ASTNode:
    text = _text_content(raw)
    node_cls = NODE_CLASSES[node_type]
    name = raw.get("name")
    return node_cls(
        id=node_id,
        name=name if isinstance(name, str) else "",
        layout=_layout(raw),
        styles=resolve_styles(raw, node_type is NodeType.TEXT or bool(text), config),
        metadata=NodeMetadata(
            text_content=text,
            has_image=has_image_fill(raw.get("fills")),
            is_component=node_type in (NodeType.COMPONENT, NodeType.INSTANCE),
        ),
        visible=raw.get("visible") is not False,
    )


def passes_visual_filter(node: ASTNode, config: PipelineConfig = DEFAULT_CONFIG) -> bool:
    if node.metadata.has_text:
        return True
    if node.styles.has_color:
        return True
    return node.layout.width > config.min_visual_size and node.layout.height > config.min_visual_size


def _node_id(raw: RawNode, path: str) -> str:
    value = raw.get("id")
    if isinstance(value, (str, int)) and not isinstance(value, bool) and str(value):
        return str(value)
    return f"auto-{path}"


# -----------------------------------------------------------------------------
# Primary pass
# -----------------------------------------------------------------------------
@dataclass
class _Walk:
    config: PipelineConfig
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def nodes(self, raw: RawNode, path: str, depth: int) -> list[ASTNode]:
        """Normalize one raw node, hoisting surviving children when it is dropped."""
        kind = map_node_type(raw.get("type"))
        if kind == "skip" or raw.get("visible") is False:
            return []
        if kind == "transparent":
            return self.children(raw, path, depth)

        node_id = _node_id(raw, path)
        node = build_node(raw, kind, node_id, self.config)
        raw_children = _raw_children(raw)
        children: list[ASTNode] = []
        if raw_children and node.type is not NodeType.TEXT:
            if depth + 1 >= self.config.max_depth:
                warning = DepthExceededWarning(
                    node_id=node_id,
                    depth=depth + 1,
                    max_depth=self.config.max_depth,
                    truncated_children=len(raw_children),
                )
                self.diagnostics.append(warning)
                logger.warning(warning.message)
            else:
                children = self.children(raw, path, depth + 1)

        if passes_visual_filter(node, self.config):
            node.children = children
            return [node]
        return children

    def children(self, raw: RawNode, path: str, depth: int) -> list[ASTNode]:
        result: list[ASTNode] = []
        for index, child in enumerate(_raw_children(raw)):
            result.extend(self.nodes(child, f"{path}.{index}", depth))
        return result


def normalize_node(raw: RawNode, config: PipelineConfig = DEFAULT_CONFIG, path: str = "0") -> ASTNode | None:
    """Normalize a single raw node; ``None`` when it fails the visual filter."""
    kind = map_node_type(raw.get("type"))
    if kind in ("skip", "transparent") or raw.get("visible") is False:
        return None
    walk = _Walk(config)
    nodes = walk.nodes(raw, path, 0)
    if len(nodes) == 1 and nodes[0].id == _node_id(raw, path):
        return nodes[0]
    return None


# -----------------------------------------------------------------------------
# Fallback ("aggressive extraction") pass
# -----------------------------------------------------------------------------
def _iter_raw(raw: RawNode, path: str, depth: int, max_depth: int) -> Iterator[tuple[RawNode, str]]:
    kind = map_node_type(raw.get("type"))
    if kind == "skip" or raw.get("visible") is False:
        return
    if kind == "transparent":
        for index, child in enumerate(_raw_children(raw)):
            yield from _iter_raw(child, f"{path}.{index}", depth, max_depth)
        return
    yield raw, path
    if depth + 1 >= max_depth or kind is NodeType.TEXT:
        return
    for index, child in enumerate(_raw_children(raw)):
        yield from _iter_raw(child, f"{path}.{index}", depth + 1, max_depth)


def _fallback_nodes(roots: list[RawNode], known_ids: set[str], config: PipelineConfig) -> list[ASTNode]:
    found: list[ASTNode] = []
    for index, root in enumerate(roots):
        for raw, path in _iter_raw(root, str(index), 0, config.max_depth):
            node_id = _node_id(raw, path)
            if node_id in known_ids:
                continue
            kind = map_node_type(raw.get("type"))
            node = build_node(raw, kind, node_id, config)
            if node.layout.area <= config.fallback_min_area:
                continue
            known_ids.add(node_id)
            found.append(node)
    # Reading order: the permissive pass cannot vouch for document order.
    found.sort(key=lambda node: (node.layout.y, node.layout.x))
    return found


def _merge_fallback(screens: list[ASTNode], extra: list[ASTNode], config: PipelineConfig) -> list[ASTNode]:
    merged = list(screens)
    for node in extra:
        host = None
        if config.max_depth > 1:
            host = next(
                (
                    screen
                    for screen in screens
                    if screen.type is not NodeType.TEXT and screen.layout.contains_point(node.layout.x, node.layout.y)
                ),
                None,
            )
        if host is None:
            merged.append(node)
        else:
            host.children.append(node)
    return merged


# -----------------------------------------------------------------------------
# Entry point
# -----------------------------------------------------------------------------
def normalize_document(raw: Any, config: PipelineConfig = DEFAULT_CONFIG) -> DesignAST:
    roots = extract_roots(raw)
    walk = _Walk(config)
    screens: list[ASTNode] = []
    for index, root in enumerate(roots):
        screens.extend(walk.nodes(root, str(index), 0))

    ast = DesignAST(screens=screens, diagnostics=walk.diagnostics)
    primary_count = ast.element_count
    if primary_count < config.low_yield_threshold:
        known_ids = {node.id for node in ast.iter_nodes()}
        extra = _fallback_nodes(roots, known_ids, config)
        warning = LowYieldWarning(
            primary_count=primary_count,
            threshold=config.low_yield_threshold,
            fallback_count=len(extra),
            fallback_ids=tuple(node.id for node in extra),
        )
        ast.diagnostics.append(warning)
        logger.warning(warning.message)
        ast.screens = _merge_fallback(screens, extra, config)

    if not ast.screens:
        raise EmptyDesignError(details={"roots": len(roots)})

    logger.info(
        "normalized design screens=%s elements=%s diagnostics=%s",
        ast.screen_count,
        ast.element_count,
        len(ast.diagnostics),
    )
    return ast
