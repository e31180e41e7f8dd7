from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Iterator

from figma_export_api.core.errors import Diagnostic


class NodeType(str, Enum):
    FRAME = "FRAME"
    TEXT = "TEXT"
    RECTANGLE = "RECTANGLE"
    ELLIPSE = "ELLIPSE"
    VECTOR = "VECTOR"
    GROUP = "GROUP"
    COMPONENT = "COMPONENT"
    INSTANCE = "INSTANCE"


@dataclass(frozen=True)
class Layout:
    x: float
    y: float
    width: float
    height: float
    rotation: float = 0.0
    opacity: float = 1.0

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("Layout dimensions must be non-negative")

    @property
    def area(self) -> float:
        return self.width * self.height

    def contains_point(self, x: float, y: float) -> bool:
        return self.x <= x <= self.x + self.width and self.y <= y <= self.y + self.height


@dataclass(frozen=True)
class Paint:
    r: int
    g: int
    b: int
    alpha: float
    css: str
    weight: float = 0.0


@dataclass(frozen=True)
class TextStyle:
    font_family: str
    font_size: float
    font_weight: int
    text_align: str = "left"
    letter_spacing: float = 0.0


@dataclass(frozen=True)
class NodeStyles:
    fills: tuple[Paint, ...] = ()
    strokes: tuple[Paint, ...] = ()
    corner_radius: float = 0.0
    text_style: TextStyle | None = None

    @property
    def fill(self) -> Paint | None:
        return self.fills[0] if self.fills else None

    @property
    def stroke(self) -> Paint | None:
        return self.strokes[0] if self.strokes else None

    @property
    def has_color(self) -> bool:
        return bool(self.fills or self.strokes)


@dataclass(frozen=True)
class NodeMetadata:
    text_content: str = ""
    has_image: bool = False
    is_component: bool = False

    @property
    def has_text(self) -> bool:
        return bool(self.text_content.strip())


@dataclass(frozen=True)
class Classification:
    category: str
    props: dict[str, Any]
    import_slug: str | None = None
    rule: str = "default"

    @property
    def is_design_system(self) -> bool:
        return self.import_slug is not None


@dataclass
class BaseNode:
    type: ClassVar[NodeType]

    id: str
    name: str
    layout: Layout
    styles: NodeStyles = field(default_factory=NodeStyles)
    metadata: NodeMetadata = field(default_factory=NodeMetadata)
    visible: bool = True
    children: list["ASTNode"] = field(default_factory=list)
    classification: Classification | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError(f"{self.type.value} node requires an id")

    def walk(self) -> Iterator["ASTNode"]:
        yield self  # type: ignore[misc]
        for child in self.children:
            yield from child.walk()

    def depth(self) -> int:
        if not self.children:
            return 1
        return 1 + max(child.depth() for child in self.children)


@dataclass
class FrameNode(BaseNode):
    type: ClassVar[NodeType] = NodeType.FRAME


@dataclass
class TextNode(BaseNode):
    type: ClassVar[NodeType] = NodeType.TEXT

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.styles.text_style is None:
            raise ValueError(f"TEXT node {self.id} requires a text style")
        if self.children:
            raise ValueError(f"TEXT node {self.id} cannot have children")


@dataclass
class RectangleNode(BaseNode):
    type: ClassVar[NodeType] = NodeType.RECTANGLE


@dataclass
class EllipseNode(BaseNode):
    type: ClassVar[NodeType] = NodeType.ELLIPSE


@dataclass
class VectorNode(BaseNode):
    type: ClassVar[NodeType] = NodeType.VECTOR


@dataclass
class GroupNode(BaseNode):
    type: ClassVar[NodeType] = NodeType.GROUP


@dataclass
class ComponentNode(BaseNode):
    type: ClassVar[NodeType] = NodeType.COMPONENT

    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.metadata.is_component:
            raise ValueError(f"COMPONENT node {self.id} must be marked as a component")


@dataclass
class InstanceNode(BaseNode):
    type: ClassVar[NodeType] = NodeType.INSTANCE

    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.metadata.is_component:
            raise ValueError(f"INSTANCE node {self.id} must be marked as a component")


ASTNode = (
    FrameNode
    | TextNode
    | RectangleNode
    | EllipseNode
    | VectorNode
    | GroupNode
    | ComponentNode
    | InstanceNode
)

NODE_CLASSES: dict[NodeType, type[BaseNode]] = {
    NodeType.FRAME: FrameNode,
    NodeType.TEXT: TextNode,
    NodeType.RECTANGLE: RectangleNode,
    NodeType.ELLIPSE: EllipseNode,
    NodeType.VECTOR: VectorNode,
    NodeType.GROUP: GroupNode,
    NodeType.COMPONENT: ComponentNode,
    NodeType.INSTANCE: InstanceNode,
}


@dataclass
class DesignAST:
    screens: list[ASTNode]
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def iter_nodes(self) -> Iterator[ASTNode]:
        for screen in self.screens:
            yield from screen.walk()

    @property
    def element_count(self) -> int:
        return sum(1 for _ in self.iter_nodes())

    @property
    def screen_count(self) -> int:
        return len(self.screens)

    def depth(self) -> int:
        return max((screen.depth() for screen in self.screens), default=0)
