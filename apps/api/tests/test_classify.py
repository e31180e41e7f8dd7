from __future__ import annotations

import pytest

from figma_export_api.core.ast.model import NodeType
from figma_export_api.core.ast.normalize import normalize_document
from figma_export_api.core.classify.rules import RULES, NodeFeatures, classify, classify_features, classify_tree
from tests.design_factory import multi_screen_document


def features(
    node_type: NodeType,
    width: float,
    height: float,
    has_text: bool = False,
    has_background: bool = False,
    text: str = "",
    name: str = "",
) -> NodeFeatures:
    return NodeFeatures(
        node_type=node_type,
        width=width,
        height=height,
        has_text=has_text,
        has_background=has_background,
        text=text if has_text else "",
        name=name,
    )


def test_rule_order_is_fixed() -> None:
    assert [rule.category for rule in RULES] == [
        "Button",
        "Card",
        "Typography",
        "TextField",
        "Icon",
        "Checkbox",
        "Chip",
        "Dialog",
        "List",
        "RadioButton",
        "Slider",
        "Tab",
        "Toggle",
    ]


def test_text_rectangle_prefers_button_over_later_rules() -> None:
    result = classify_features(features(NodeType.RECTANGLE, 160, 35, has_text=True, text="Submit"))
    assert result.category == "Button"
    assert result.props == {"children": "Submit", "variant": "primary", "size": "medium"}
    assert result.import_slug == "button"


@pytest.mark.parametrize(
    ("node_features", "category"),
    [
        (features(NodeType.RECTANGLE, 120, 60, has_text=True, text="Go"), "Button"),
        (features(NodeType.FRAME, 320, 80, has_background=True), "Card"),
        (features(NodeType.TEXT, 200, 20, has_text=True, text="Hello"), "Typography"),
        (features(NodeType.TEXT, 200, 20), "Typography"),
        (features(NodeType.FRAME, 150, 20, has_text=True, text="Label"), "Typography"),
        (features(NodeType.RECTANGLE, 200, 40), "TextField"),
        (features(NodeType.VECTOR, 300, 300), "Icon"),
        (features(NodeType.GROUP, 24, 24), "Icon"),
        (features(NodeType.FRAME, 400, 300), "Dialog"),
        (features(NodeType.FRAME, 250, 150), "List"),
        (features(NodeType.RECTANGLE, 120, 10), "Slider"),
        (features(NodeType.RECTANGLE, 55, 60), "Container"),
        (features(NodeType.ELLIPSE, 80, 80), "Container"),
        (features(NodeType.GROUP, 200, 80), "Container"),
    ],
)
def test_rule_matches(node_features: NodeFeatures, category: str) -> None:
    assert classify_features(node_features).category == category


def test_small_rules_are_shadowed_by_icon_rule() -> None:
    # Every node under 50x50 is an Icon before the checkbox/radio/toggle rules run.
    assert classify_features(features(NodeType.RECTANGLE, 20, 20)).category == "Icon"
    assert classify_features(features(NodeType.ELLIPSE, 20, 20)).category == "Icon"
    assert classify_features(features(NodeType.RECTANGLE, 55, 25)).category == "Toggle"


def test_text_rectangle_rules_are_shadowed_by_typography() -> None:
    assert classify_features(features(NodeType.RECTANGLE, 90, 35, has_text=True, text="A")).category == "Button"
    assert classify_features(features(NodeType.RECTANGLE, 70, 35, has_text=True, text="A")).category == "Typography"
    assert classify_features(features(NodeType.RECTANGLE, 140, 45, has_text=True, text="A")).category == "Button"
    assert classify_features(features(NodeType.RECTANGLE, 140, 25, has_text=True, text="A")).category == "Typography"


def test_default_props() -> None:
    assert classify_features(features(NodeType.RECTANGLE, 100, 60, has_text=True, text="Pay")).props["size"] == "large"
    assert classify_features(features(NodeType.FRAME, 320, 80, has_background=True)).props == {
        "children": "Card Content",
        "variant": "elevated",
    }
    assert classify_features(features(NodeType.TEXT, 100, 20, name="Caption")).props == {
        "children": "Caption",
        "variant": "body1",
    }
    assert classify_features(features(NodeType.RECTANGLE, 200, 40)).props == {
        "placeholder": "Enter text...",
        "variant": "outlined",
    }
    assert classify_features(features(NodeType.VECTOR, 10, 10)).props == {"name": "default-icon"}
    assert classify_features(features(NodeType.FRAME, 400, 300)).props == {"open": True, "children": "Dialog Content"}
    assert classify_features(features(NodeType.FRAME, 250, 150)).props == {"children": "List Item"}
    assert classify_features(features(NodeType.RECTANGLE, 120, 10)).props == {"value": 50, "min": 0, "max": 100}
    assert classify_features(features(NodeType.RECTANGLE, 55, 25)).props == {"checked": False}


def test_default_container_has_no_binding() -> None:
    result = classify_features(features(NodeType.GROUP, 200, 80, name="Hero"))
    assert result.category == "Container"
    assert result.import_slug is None
    assert not result.is_design_system
    assert result.props == {"children": "Hero"}
    assert classify_features(features(NodeType.GROUP, 200, 80)).props == {"children": "Element"}


def test_classification_is_pure_and_order_independent() -> None:
    ast = normalize_document(multi_screen_document(2))
    nodes = list(ast.iter_nodes())
    forward = [classify(node) for node in nodes]
    backward = [classify(node) for node in reversed(nodes)][::-1]
    assert forward == backward
    assert all(node.classification is None for node in nodes)


def test_classify_tree_annotates_without_touching_geometry() -> None:
    ast = normalize_document(multi_screen_document(1))
    layouts = [node.layout for node in ast.iter_nodes()]
    classify_tree(ast)
    assert [node.layout for node in ast.iter_nodes()] == layouts
    categories = [node.classification.category for node in ast.iter_nodes()]
    assert categories == ["Card", "Typography", "Button"]
