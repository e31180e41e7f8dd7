from __future__ import annotations

import logging

from figma_export_api.core.ast.model import DesignAST
from figma_export_api.core.emit.engine import TargetDescriptor, render_screens
from figma_export_api.core.emit.html import HTML_TARGET
from figma_export_api.core.emit.moneyview import MONEYVIEW_TARGET
from figma_export_api.core.emit.options import ExportOptions, normalize_format
from figma_export_api.core.emit.react import REACT_TARGET
from figma_export_api.core.emit.vue import VUE_TARGET
from figma_export_api.core.errors import EmptyDesignError

logger = logging.getLogger("figma_export_api.emit")

TARGETS: dict[str, TargetDescriptor] = {
    target.name: target for target in (HTML_TARGET, REACT_TARGET, VUE_TARGET, MONEYVIEW_TARGET)
}


def get_target(format_name: str) -> TargetDescriptor:
    return TARGETS[normalize_format(format_name)]


def emit_files(ast: DesignAST, format_name: str, options: ExportOptions | None = None) -> dict[str, str]:
    """Render an annotated design tree into the file map of one target format."""
    target = get_target(format_name)
    if not ast.screens:
        raise EmptyDesignError("Nothing to emit: design has no screens")
    context = render_screens(ast, target, options or ExportOptions())
    files = target.build_files(context)
    logger.info("emitted format=%s screens=%s files=%s", target.name, len(context.screens), len(files))
    return files
