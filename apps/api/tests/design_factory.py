from __future__ import annotations

from typing import Any


def solid(r: float, g: float, b: float, a: float = 1.0, opacity: float | None = None) -> dict[str, Any]:
    paint: dict[str, Any] = {"type": "SOLID", "color": {"r": r, "g": g, "b": b, "a": a}}
    if opacity is not None:
        paint["opacity"] = opacity
    return paint


def box(x: float, y: float, width: float, height: float) -> dict[str, float]:
    return {"x": x, "y": y, "width": width, "height": height}


def node(node_type: str | None, node_id: str, x: float, y: float, width: float, height: float, **fields: Any) -> dict[str, Any]:
    raw: dict[str, Any] = {"id": node_id, "name": fields.pop("name", node_id), "boundingBox": box(x, y, width, height)}
    if node_type is not None:
        raw["type"] = node_type
    raw.update(fields)
    return raw


def frame(node_id: str, x: float, y: float, width: float, height: float, children: list[dict[str, Any]] | None = None, **fields: Any) -> dict[str, Any]:
    return node("FRAME", node_id, x, y, width, height, children=children or [], **fields)


def text(node_id: str, characters: str, x: float, y: float, width: float = 100, height: float = 20, **fields: Any) -> dict[str, Any]:
    return node("TEXT", node_id, x, y, width, height, characters=characters, **fields)


def rect(node_id: str, x: float, y: float, width: float, height: float, **fields: Any) -> dict[str, Any]:
    return node("RECTANGLE", node_id, x, y, width, height, **fields)


def login_document() -> dict[str, Any]:
    return {
        "children": [
            {
                "type": "FRAME",
                "boundingBox": {"x": 0, "y": 0, "width": 375, "height": 667},
                "children": [
                    {
                        "type": "TEXT",
                        "characters": "Login",
                        "boundingBox": {"x": 10, "y": 10, "width": 100, "height": 20},
                    }
                ],
            }
        ]
    }


def multi_screen_document(count: int = 3) -> dict[str, Any]:
    screens = [
        frame(
            f"{index + 1}:0",
            index * 400,
            0,
            375,
            667,
            children=[
                text(f"{index + 1}:1", f"Screen {index + 1} title", index * 400 + 20, 40, 200, 30),
                rect(f"{index + 1}:2", index * 400 + 20, 100, 160, 35, characters="Continue", fills=[solid(0, 0.478, 1)]),
            ],
            fills=[solid(1, 1, 1)],
        )
        for index in range(count)
    ]
    return {"document": {"id": "0:0", "type": "DOCUMENT", "children": [{"id": "0:1", "type": "CANVAS", "children": screens}]}}


def low_yield_document() -> dict[str, Any]:
    """Three primary survivors plus four small unfilled groups in scrambled order."""
    return {
        "children": [
            frame(
                "1:0",
                0,
                0,
                375,
                667,
                children=[
                    text("1:1", "Welcome", 20, 20),
                    rect("1:2", 20, 60, 300, 40, fills=[solid(0.9, 0.9, 0.9)]),
                    node("GROUP", "g:3", 200, 300, 8, 8),
                    node("GROUP", "g:1", 50, 100, 8, 8),
                    node("GROUP", "g:4", 10, 300, 8, 8),
                    node("GROUP", "g:2", 300, 100, 8, 8),
                ],
            )
        ]
    }


def nested_document(levels: int) -> dict[str, Any]:
    current: dict[str, Any] = text(f"t:{levels}", "Deep", 0, 0)
    for level in range(levels - 1, 0, -1):
        current = frame(f"f:{level}", 0, 0, 300, 300, children=[current])
    return {"children": [current]}


def ast_pages_payload() -> list[dict[str, Any]]:
    return [
        {
            "screens": [
                {
                    "id": "s:1",
                    "type": "FRAME",
                    "name": "Home",
                    "layout": {"x": 0, "y": 0, "width": 320, "height": 480},
                    "children": [
                        {
                            "id": "s:2",
                            "type": "TEXT",
                            "layout": {"x": 16, "y": 24, "width": 120, "height": 20},
                            "metadata": {"textContent": "Hello"},
                        }
                    ],
                }
            ]
        }
    ]


def deep_ast_payload(levels: int) -> dict[str, Any]:
    """A single serialized screen nesting ``levels`` frames."""
    current: dict[str, Any] = {"id": f"d:{levels}", "type": "FRAME", "layout": {"width": 50, "height": 50}}
    for level in range(levels - 1, 0, -1):
        current = {"id": f"d:{level}", "type": "FRAME", "layout": {"width": 300, "height": 300}, "children": [current]}
    return {"screens": [current]}
