from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Mapping

from figma_export_api.core.ast.config import DEFAULT_CONFIG, PipelineConfig
from figma_export_api.core.ast.model import DesignAST, NodeType
from figma_export_api.core.ast.normalize import normalize_document
from figma_export_api.core.classify.rules import category_counts, classify_tree
from figma_export_api.core.emit.emitters import emit_files
from figma_export_api.core.emit.options import ExportOptions, normalize_format
from figma_export_api.core.errors import Diagnostic
from figma_export_api.core.package.archive import build_archive
from figma_export_api.schemas.api import ExportOptionsModel
from figma_export_api.services.ast_codec import ast_from_pages, is_ast_payload

logger = logging.getLogger("figma_export_api.conversion")

SHAPE_TYPES = {NodeType.RECTANGLE, NodeType.ELLIPSE, NodeType.VECTOR}

Source = DesignAST | Mapping[str, Any] | list[Any]


@dataclass(frozen=True)
class ConversionResult:
    format: str
    archive: bytes
    files: dict[str, str]
    ast: DesignAST

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return list(self.ast.diagnostics)


@dataclass(frozen=True)
class Analysis:
    ast: DesignAST
    screen_count: int
    element_count: int
    texts: list[str]
    categories: dict[str, int]
    has_text: bool
    has_shapes: bool
    has_icons: bool


def coerce_options(options: ExportOptions | Mapping[str, Any] | None) -> ExportOptions:
    if options is None:
        return ExportOptions()
    if isinstance(options, ExportOptions):
        return options
    return ExportOptionsModel.model_validate(dict(options)).to_options()


def build_ast(source: Source, config: PipelineConfig = DEFAULT_CONFIG) -> DesignAST:
    """Resolve any accepted input into a fresh DesignAST owned by the caller."""
    if isinstance(source, DesignAST):
        return copy.deepcopy(source)
    if is_ast_payload(source):
        return ast_from_pages(source, config)
    return normalize_document(source, config)


def convert(
    source: Source,
    format_name: str,
    options: ExportOptions | Mapping[str, Any] | None = None,
    config: PipelineConfig = DEFAULT_CONFIG,
) -> ConversionResult:
    target = normalize_format(format_name)
    export_options = coerce_options(options)
    ast = classify_tree(build_ast(source, config))
    files = emit_files(ast, target, export_options)
    archive = build_archive(files)
    logger.info(
        "conversion complete format=%s screens=%s elements=%s files=%s bytes=%s diagnostics=%s",
        target,
        ast.screen_count,
        ast.element_count,
        len(files),
        len(archive),
        len(ast.diagnostics),
    )
    return ConversionResult(format=target, archive=archive, files=files, ast=ast)


def generate(
    source: Source,
    format_name: str,
    options: ExportOptions | Mapping[str, Any] | None = None,
    config: PipelineConfig = DEFAULT_CONFIG,
) -> bytes:
    return convert(source, format_name, options, config).archive


def get_screen_count(source: Source, config: PipelineConfig = DEFAULT_CONFIG) -> int:
    if isinstance(source, DesignAST):
        return source.screen_count
    return build_ast(source, config).screen_count


def extract_all_text(source: Source, config: PipelineConfig = DEFAULT_CONFIG) -> list[str]:
    ast = source if isinstance(source, DesignAST) else build_ast(source, config)
    return [node.metadata.text_content for node in ast.iter_nodes() if node.metadata.has_text]


def analyze(source: Source, config: PipelineConfig = DEFAULT_CONFIG) -> Analysis:
    ast = classify_tree(build_ast(source, config))
    categories = category_counts(ast)
    texts = extract_all_text(ast)
    return Analysis(
        ast=ast,
        screen_count=ast.screen_count,
        element_count=ast.element_count,
        texts=texts,
        categories=categories,
        has_text=bool(texts),
        has_shapes=any(node.type in SHAPE_TYPES for node in ast.iter_nodes()),
        has_icons=categories.get("Icon", 0) > 0,
    )
