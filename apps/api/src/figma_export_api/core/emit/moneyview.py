from __future__ import annotations

from figma_export_api.core.ast.model import ASTNode, Classification, NodeType
from figma_export_api.core.emit.engine import (
    EmitContext,
    TargetDescriptor,
    jsx_attribute,
    jsx_style_attribute,
    jsx_text,
    package_json,
    readme,
)
from figma_export_api.core.emit.react import (
    REACT_DEPENDENCIES,
    REACT_DEV_DEPENDENCIES,
    jsx_component,
    main_jsx,
    vite_index_html,
)
from figma_export_api.core.emit.templates import (
    DESIGN_SYSTEM_PACKAGE,
    POSTCSS_CONFIG,
    REACT_VITE_CONFIG,
    TAILWIND_CONFIG,
    TAILWIND_CSS,
    TAILWIND_IMAGE_CSS,
    stylesheet,
)

# Children of these components are positioned from the component's own origin.
REBASE_CATEGORIES = frozenset({"Card", "Dialog"})


def design_system_tag(node: ASTNode, classification: Classification) -> str:
    if classification.import_slug is not None:
        return classification.category
    return "p" if node.type is NodeType.TEXT else "div"


def import_lines(context: EmitContext) -> list[str]:
    return [
        f"import {{ {component} }} from '{DESIGN_SYSTEM_PACKAGE}/{slug}';"
        for component, slug in context.imports.items()
    ]


def build_files(context: EmitContext) -> dict[str, str]:
    options = context.options
    name = context.component_name
    files = {
        "index.html": vite_index_html(context, "root", "/src/main.jsx"),
        "src/main.jsx": main_jsx(context, "./index.css" if options.include_styles else None),
        f"src/components/{name}.jsx": jsx_component(context, import_lines(context), "prototype-container"),
    }
    if options.include_styles:
        files["src/index.css"] = stylesheet(TAILWIND_CSS, TAILWIND_IMAGE_CSS, options.include_images, options.minify)
    files["vite.config.js"] = REACT_VITE_CONFIG
    files["tailwind.config.js"] = TAILWIND_CONFIG
    files["postcss.config.js"] = POSTCSS_CONFIG
    files["package.json"] = package_json(context)
    files["README.md"] = readme(context, list(files))
    return files


MONEYVIEW_TARGET = TargetDescriptor(
    name="moneyview",
    label="Moneyview Design System",
    class_attribute="className",
    format_attribute=jsx_attribute,
    format_style=jsx_style_attribute,
    format_text=jsx_text,
    build_files=build_files,
    tag_for=design_system_tag,
    binds_components=True,
    rebase_categories=REBASE_CATEGORIES,
    dependencies={
        **REACT_DEPENDENCIES,
        DESIGN_SYSTEM_PACKAGE: "^1.0.0",
        "tailwindcss": "^3.3.0",
    },
    dev_dependencies={
        **REACT_DEV_DEPENDENCIES,
        "autoprefixer": "^10.4.0",
        "postcss": "^8.4.0",
    },
)
