from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from figma_export_api.core.emit.options import DEFAULT_COMPONENT_NAME, FORMATS, ExportOptions
from figma_export_api.schemas.ast import ASTNodeModel, DiagnosticModel


class ExportOptionsModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    include_styles: bool = Field(default=True, alias="includeStyles")
    minify: bool = False
    include_images: bool = Field(default=True, alias="includeImages")
    component_name: str = Field(default=DEFAULT_COMPONENT_NAME, alias="componentName", max_length=128)

    def to_options(self) -> ExportOptions:
        return ExportOptions(
            include_styles=self.include_styles,
            minify=self.minify,
            include_images=self.include_images,
            component_name=self.component_name,
        )


class ConvertRequest(BaseModel):
    document: dict[str, Any] | list[dict[str, Any]]
    options: ExportOptionsModel = Field(default_factory=ExportOptionsModel)


class FigmaConvertRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    figma_url: str = Field(alias="figmaUrl", min_length=1)
    options: ExportOptionsModel = Field(default_factory=ExportOptionsModel)

    @field_validator("figma_url")
    @classmethod
    def strip_url(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("figmaUrl must not be blank")
        return value


class AnalyzeRequest(BaseModel):
    document: dict[str, Any] | list[dict[str, Any]]


class AnalyzeResponse(BaseModel):
    screen_count: int
    element_count: int
    texts: list[str]
    categories: dict[str, int]
    has_text: bool
    has_shapes: bool
    has_icons: bool
    diagnostics: list[DiagnosticModel] = Field(default_factory=list)
    screens: list[ASTNodeModel] = Field(default_factory=list)


class FormatsResponse(BaseModel):
    formats: list[str] = Field(default_factory=lambda: list(FORMATS))
