from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from figma_export_api.core.ast.model import NodeType


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LayoutModel(CamelModel):
    x: float = 0.0
    y: float = 0.0
    width: float = Field(default=0.0, ge=0)
    height: float = Field(default=0.0, ge=0)
    rotation: float = 0.0
    opacity: float = Field(default=1.0, ge=0, le=1)


class PaintModel(CamelModel):
    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)
    alpha: float = Field(default=1.0, ge=0, le=1)
    css: str | None = None
    weight: float = Field(default=0.0, ge=0)


class TextStyleModel(CamelModel):
    font_family: str | None = None
    font_size: float | None = Field(default=None, gt=0)
    font_weight: int | None = Field(default=None, gt=0)
    text_align: str = "left"
    letter_spacing: float = 0.0


class StylesModel(CamelModel):
    fills: list[PaintModel] = Field(default_factory=list)
    strokes: list[PaintModel] = Field(default_factory=list)
    corner_radius: float = Field(default=0.0, ge=0)
    text_style: TextStyleModel | None = None


class MetadataModel(CamelModel):
    text_content: str = ""
    has_image: bool = False
    is_component: bool = False


class ClassificationModel(CamelModel):
    category: str
    props: dict[str, Any] = Field(default_factory=dict)
    import_slug: str | None = None
    rule: str = "default"


class ASTNodeModel(CamelModel):
    id: str = Field(min_length=1)
    type: NodeType
    name: str = ""
    visible: bool = True
    layout: LayoutModel = Field(default_factory=LayoutModel)
    styles: StylesModel = Field(default_factory=StylesModel)
    metadata: MetadataModel = Field(default_factory=MetadataModel)
    children: list["ASTNodeModel"] = Field(default_factory=list)
    classification: ClassificationModel | None = None


class ASTPageModel(CamelModel):
    screens: list[ASTNodeModel]


class DiagnosticModel(BaseModel):
    code: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
