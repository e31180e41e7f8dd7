from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from html import escape
from typing import Any, Callable

from figma_export_api.core.ast.model import ASTNode, Classification, DesignAST, NodeType
from figma_export_api.core.emit.markup import (
    IMAGE_PLACEHOLDER_CLASS,
    Declaration,
    Element,
    camel_case,
    css_class_for,
    css_to_string,
    node_classification,
    screen_declarations,
    style_declarations,
)
from figma_export_api.core.emit.options import ExportOptions
from figma_export_api.core.emit.templates import VITE_VERSION

_JSX_SAFE = re.compile(r"^[\w .:/-]*$")


# -----------------------------------------------------------------------------
# Formatters
# -----------------------------------------------------------------------------
def escape_attribute(value: str) -> str:
    return escape(value, quote=False).replace('"', "&quot;")


def html_attribute(name: str, value: Any) -> str:
    if value is True:
        return name
    return f'{name}="{escape_attribute(str(value))}"'


def html_text(text: str) -> str:
    return escape(text, quote=False)


def css_style_attribute(declarations: list[Declaration]) -> str:
    return html_attribute("style", css_to_string(declarations))


def jsx_attribute(name: str, value: Any) -> str:
    if isinstance(value, str) and _JSX_SAFE.match(value):
        return f'{name}="{value}"'
    return f"{name}={{{json.dumps(value)}}}"


def jsx_text(text: str) -> str:
    # A string-literal expression is never parsed as markup.
    return "{" + json.dumps(text) + "}"


def jsx_style_object(declarations: list[Declaration]) -> str:
    return "{ " + ", ".join(f"{camel_case(prop)}: {json.dumps(value)}" for prop, value in declarations) + " }"


def jsx_style_attribute(declarations: list[Declaration]) -> str:
    return "style={" + jsx_style_object(declarations) + "}"


def default_tag(node: ASTNode, classification: Classification) -> str:
    return "p" if node.type is NodeType.TEXT else "div"


# -----------------------------------------------------------------------------
# Target descriptor
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class TargetDescriptor:
    name: str
    label: str
    class_attribute: str
    format_attribute: Callable[[str, Any], str]
    format_style: Callable[[list[Declaration]], str]
    format_text: Callable[[str], str]
    build_files: Callable[["EmitContext"], dict[str, str]]
    tag_for: Callable[[ASTNode, Classification], str] = default_tag
    text_marker: str | None = None
    binds_components: bool = False
    rebase_categories: frozenset[str] = frozenset()
    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=lambda: {"vite": VITE_VERSION})


@dataclass
class RenderedScreen:
    index: int
    screen: ASTNode
    style: list[Declaration]
    lines: list[str]

    @property
    def name(self) -> str:
        return self.screen.name or f"Screen {self.index + 1}"


@dataclass
class EmitContext:
    target: TargetDescriptor
    options: ExportOptions
    screens: list[RenderedScreen]
    imports: dict[str, str] = field(default_factory=dict)

    @property
    def component_name(self) -> str:
        return self.options.component_name

    def markup(self, screen: RenderedScreen, depth: int) -> str:
        pad = "  " * depth
        return "\n".join(pad + line for line in screen.lines)


# -----------------------------------------------------------------------------
# Tree rendering
# -----------------------------------------------------------------------------
def build_element(
    node: ASTNode,
    target: TargetDescriptor,
    options: ExportOptions,
    origin: tuple[float, float],
    imports: dict[str, str],
) -> Element:
    classification = node_classification(node)
    bound = target.binds_components and classification.import_slug is not None
    if bound:
        imports.setdefault(classification.category, classification.import_slug)

    classes = ["node", css_class_for(node.id)]
    if options.include_images and node.metadata.has_image:
        classes.append(IMAGE_PLACEHOLDER_CLASS)

    child_origin = origin
    if classification.category in target.rebase_categories:
        child_origin = (node.layout.x, node.layout.y)
    children = [build_element(child, target, options, child_origin, imports) for child in node.children if child.visible]

    text = node.metadata.text_content if node.metadata.has_text else None
    props: dict[str, Any] = {}
    if bound:
        props = {key: value for key, value in classification.props.items() if key != "children"}
        if text is None and not children and "children" in classification.props:
            text = str(classification.props["children"])

    return Element(
        tag=target.tag_for(node, classification),
        node_id=node.id,
        classes=classes,
        style=style_declarations(node, origin),
        text=text,
        props=props,
        children=children,
    )


def render_element(element: Element, target: TargetDescriptor, depth: int = 0) -> list[str]:
    pad = "  " * depth
    attributes = [
        target.format_attribute(target.class_attribute, " ".join(element.classes)),
        target.format_attribute("data-node-id", element.node_id),
        target.format_style(element.style),
    ]
    attributes.extend(target.format_attribute(name, value) for name, value in element.props.items())
    if element.text is not None and target.text_marker:
        attributes.append(target.text_marker)

    opening = f"<{element.tag} {' '.join(attributes)}>"
    closing = f"</{element.tag}>"
    if not element.children:
        body = target.format_text(element.text) if element.text is not None else ""
        return [f"{pad}{opening}{body}{closing}"]

    lines = [f"{pad}{opening}"]
    if element.text is not None:
        lines.append(f"{pad}  {target.format_text(element.text)}")
    for child in element.children:
        lines.extend(render_element(child, target, depth + 1))
    lines.append(f"{pad}{closing}")
    return lines


def render_screens(ast: DesignAST, target: TargetDescriptor, options: ExportOptions) -> EmitContext:
    context = EmitContext(target=target, options=options, screens=[])
    for index, screen in enumerate(ast.screens):
        # A leaf screen renders itself inside its own container.
        nodes = [child for child in screen.children if child.visible] or [screen]
        origin = (0.0, 0.0)
        if screen.children and node_classification(screen).category in target.rebase_categories:
            origin = (screen.layout.x, screen.layout.y)
        lines: list[str] = []
        for node in nodes:
            element = build_element(node, target, options, origin, context.imports)
            lines.extend(render_element(element, target))
        context.screens.append(
            RenderedScreen(index=index, screen=screen, style=screen_declarations(screen), lines=lines)
        )
    return context


# -----------------------------------------------------------------------------
# Shared build descriptors
# -----------------------------------------------------------------------------
def package_json(context: EmitContext) -> str:
    target = context.target
    manifest: dict[str, Any] = {
        "name": f"figma-prototype-{target.name}",
        "private": True,
        "version": "1.0.0",
        "type": "module",
        "description": f"{context.component_name} exported as {target.label}",
        "scripts": {
            "dev": "vite",
            "build": "vite build",
            "preview": "vite preview",
        },
    }
    if target.dependencies:
        manifest["dependencies"] = dict(target.dependencies)
    manifest["devDependencies"] = dict(target.dev_dependencies)
    return json.dumps(manifest, indent=2) + "\n"


def readme(context: EmitContext, files: list[str]) -> str:
    listing = "\n".join(f"- `{path}`" for path in [*files, "README.md"])
    return f"""# {context.component_name} ({context.target.label})

Prototype with {len(context.screens)} screen(s) exported as {context.target.label} code.

## Getting started

1. Install dependencies:
   ```bash
   npm install
   ```
2. Start the development server:
   ```bash
   npm run dev
   ```
3. Open the URL shown in the terminal.

## Navigation

Use the Previous / Next controls to move between screens. Navigation wraps
around: Next on the last screen returns to the first one.

## Files

{listing}
"""
