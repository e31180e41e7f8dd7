from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Callable

from figma_export_api.core.ast.model import ASTNode, Classification, DesignAST, NodeType

logger = logging.getLogger("figma_export_api.classify")

DEFAULT_CATEGORY = "Container"


@dataclass(frozen=True)
class NodeFeatures:
    """The only inputs a classification may depend on."""

    node_type: NodeType
    width: float
    height: float
    has_text: bool
    has_background: bool
    text: str = ""
    name: str = ""

    @classmethod
    def from_node(cls, node: ASTNode) -> "NodeFeatures":
        return cls(
            node_type=node.type,
            width=node.layout.width,
            height=node.layout.height,
            has_text=node.metadata.has_text,
            has_background=node.styles.fill is not None,
            text=node.metadata.text_content if node.metadata.has_text else "",
            name=node.name,
        )


@dataclass(frozen=True)
class Rule:
    name: str
    category: str
    import_slug: str | None
    matches: Callable[[NodeFeatures], bool]
    props: Callable[[NodeFeatures], dict[str, Any]]


def _is(node_type: NodeType) -> Callable[[NodeFeatures], bool]:
    return lambda f: f.node_type is node_type


_rect = _is(NodeType.RECTANGLE)
_frame = _is(NodeType.FRAME)
_ellipse = _is(NodeType.ELLIPSE)


# Order is the contract: the first matching rule wins. Several geometric ranges
# overlap (button / chip / tab on text-bearing rectangles) and are kept as-is.
RULES: tuple[Rule, ...] = (
    Rule(
        "button",
        "Button",
        "button",
        lambda f: _rect(f) and f.has_text and f.width > 80 and f.height > 30,
        lambda f: {
            "children": f.text or "Button",
            "variant": "primary",
            "size": "large" if f.height > 50 else "medium",
        },
    ),
    Rule(
        "card",
        "Card",
        "card",
        lambda f: _frame(f) and f.has_background and f.width > 200,
        lambda f: {"children": f.text or "Card Content", "variant": "elevated"},
    ),
    Rule(
        "typography",
        "Typography",
        "typography",
        lambda f: f.node_type is NodeType.TEXT or f.has_text,
        lambda f: {"children": f.text or f.name, "variant": "body1"},
    ),
    Rule(
        "text_field",
        "TextField",
        "text-field",
        lambda f: _rect(f) and f.width > 150 and f.height < 50 and not f.has_text,
        lambda f: {"placeholder": "Enter text...", "variant": "outlined"},
    ),
    Rule(
        "icon",
        "Icon",
        "icon",
        lambda f: f.node_type is NodeType.VECTOR or (f.width < 50 and f.height < 50),
        lambda f: {"name": "default-icon"},
    ),
    Rule(
        "checkbox",
        "Checkbox",
        "checkbox",
        lambda f: _rect(f) and f.width < 30 and f.height < 30,
        lambda f: {"checked": False},
    ),
    Rule(
        "chip",
        "Chip",
        "chip",
        lambda f: _rect(f) and f.has_text and f.width < 100 and f.height < 40,
        lambda f: {"children": f.text or "Chip", "variant": "filled"},
    ),
    Rule(
        "dialog",
        "Dialog",
        "dialog",
        lambda f: _frame(f) and f.width > 300 and f.height > 200,
        lambda f: {"open": True, "children": f.text or "Dialog Content"},
    ),
    Rule(
        "list",
        "List",
        "list",
        lambda f: _frame(f) and f.height > 100,
        lambda f: {"children": "List Item"},
    ),
    Rule(
        "radio_button",
        "RadioButton",
        "radio-button",
        lambda f: _ellipse(f) and f.width < 30 and f.height < 30,
        lambda f: {"checked": False},
    ),
    Rule(
        "slider",
        "Slider",
        "slider",
        lambda f: _rect(f) and f.width > 100 and f.height < 20,
        lambda f: {"value": 50, "min": 0, "max": 100},
    ),
    Rule(
        "tab",
        "Tab",
        "tab",
        lambda f: _rect(f) and f.has_text and f.width < 150 and f.height < 50,
        lambda f: {"children": f.text or "Tab", "active": False},
    ),
    Rule(
        "toggle",
        "Toggle",
        "toggle",
        lambda f: _rect(f) and f.width < 60 and f.height < 30,
        lambda f: {"checked": False},
    ),
)


def classify_features(features: NodeFeatures) -> Classification:
    for rule in RULES:
        if rule.matches(features):
            return Classification(
                category=rule.category,
                props=rule.props(features),
                import_slug=rule.import_slug,
                rule=rule.name,
            )
    return Classification(
        category=DEFAULT_CATEGORY,
        props={"children": features.text or features.name or "Element"},
    )


def classify(node: ASTNode) -> Classification:
    """Classify one node from its type, geometry, text and background only."""
    return classify_features(NodeFeatures.from_node(node))


def classify_tree(ast: DesignAST) -> DesignAST:
    counts: Counter[str] = Counter()
    for node in ast.iter_nodes():
        node.classification = classify(node)
        counts[node.classification.category] += 1
    logger.info("classified elements=%s categories=%s", sum(counts.values()), dict(sorted(counts.items())))
    return ast


def category_counts(ast: DesignAST) -> dict[str, int]:
    counts = Counter(
        node.classification.category if node.classification else classify(node).category
        for node in ast.iter_nodes()
    )
    return dict(sorted(counts.items()))
