from __future__ import annotations

import json

import pytest

from figma_export_api.core.ast.config import PipelineConfig
from figma_export_api.core.ast.normalize import normalize_document
from figma_export_api.core.classify.rules import classify_tree
from figma_export_api.core.emit.emitters import TARGETS, emit_files
from figma_export_api.core.emit.navigation import next_index, previous_index
from figma_export_api.core.emit.options import ExportOptions, sanitize_component_name
from figma_export_api.core.errors import UnsupportedFormatError
from tests.design_factory import frame, login_document, multi_screen_document, rect, solid, text


def _ast(document: dict, threshold: int = 5):
    return classify_tree(normalize_document(document, PipelineConfig(low_yield_threshold=threshold)))


def _script_document(payload: str) -> dict:
    return {"children": [frame("1:0", 0, 0, 375, 667, children=[text("1:1", payload, 10, 10)])]}


def test_html_login_scenario() -> None:
    files = emit_files(_ast(login_document()), "html")
    assert list(files) == ["index.html", "styles.css", "package.json", "README.md"]
    html = files["index.html"]
    assert "Login" in html
    assert "left:10px; top:10px" in html
    login_line = next(line for line in html.splitlines() if "Login" in line)
    assert "left:10px; top:10px" in login_line
    assert "width:375px; height:667px" in html


@pytest.mark.parametrize(
    ("format_name", "expected"),
    [
        ("react", ["index.html", "src/main.jsx", "src/components/FigmaPrototype.jsx", "src/index.css", "vite.config.js", "package.json", "README.md"]),
        ("vue", ["index.html", "src/main.js", "src/App.vue", "src/components/FigmaPrototype.vue", "src/style.css", "vite.config.js", "package.json", "README.md"]),
        (
            "moneyview",
            [
                "index.html",
                "src/main.jsx",
                "src/components/FigmaPrototype.jsx",
                "src/index.css",
                "vite.config.js",
                "tailwind.config.js",
                "postcss.config.js",
                "package.json",
                "README.md",
            ],
        ),
    ],
)
def test_file_sets(format_name: str, expected: list[str]) -> None:
    assert list(emit_files(_ast(login_document()), format_name)) == expected


def test_unsupported_format() -> None:
    with pytest.raises(UnsupportedFormatError) as excinfo:
        emit_files(_ast(login_document()), "svelte")
    assert excinfo.value.code == "unsupported_format"
    assert excinfo.value.details == {"format": "svelte", "supported": ["html", "react", "vue", "moneyview"]}


def test_format_selector_is_case_insensitive() -> None:
    assert "index.html" in emit_files(_ast(login_document()), " HTML ")


def test_html_escapes_text() -> None:
    html = emit_files(_ast(_script_document("<script>alert('x')</script> & more")), "html")["index.html"]
    assert "<script>alert" not in html
    assert "&lt;script&gt;alert('x')&lt;/script&gt; &amp; more" in html


def test_react_text_is_string_expression() -> None:
    component = emit_files(_ast(_script_document('<b>{bold}</b> "q"')), "react")["src/components/FigmaPrototype.jsx"]
    assert '{"<b>{bold}</b> \\"q\\""}' in component
    assert "<b>{bold}</b> \"q\"<" not in component


def test_vue_text_is_escaped_and_inert() -> None:
    component = emit_files(_ast(_script_document("{{ secret }} <i>x</i>")), "vue")["src/components/FigmaPrototype.vue"]
    line = next(line for line in component.splitlines() if "secret" in line)
    assert "v-pre" in line
    assert "&lt;i&gt;x&lt;/i&gt;" in line


def test_text_nodes_use_fill_as_color() -> None:
    doc = {"children": [frame("1:0", 0, 0, 375, 667, children=[text("1:1", "Red", 10, 10, fills=[solid(1, 0, 0)]), rect("1:2", 0, 50, 100, 100, fills=[solid(0, 0, 1)])])]}
    html = emit_files(_ast(doc), "html")["index.html"]
    assert "color:rgba(255, 0, 0, 1)" in html
    assert "background-color:rgba(0, 0, 255, 1)" in html
    assert "font-family:'Inter'; font-size:14px; font-weight:400" in html


def test_nested_children_keep_document_coordinates() -> None:
    doc = {"children": [frame("1:0", 0, 0, 375, 667, children=[frame("1:1", 100, 100, 200, 200, children=[text("1:2", "Nested", 110, 120)])])]}
    ast = _ast(doc)
    for format_name in ("html", "vue"):
        markup = next(iter(v for k, v in emit_files(ast, format_name).items() if k.endswith((".html", ".vue")) and "Nested" in v))
        assert "left:110px; top:120px" in markup
    component = emit_files(ast, "react")["src/components/FigmaPrototype.jsx"]
    assert 'left: "110px", top: "120px"' in component


def test_moneyview_rebases_inside_card() -> None:
    card = frame("1:1", 100, 100, 250, 150, fills=[solid(1, 1, 1)], children=[text("1:2", "Inside", 110, 120)])
    doc = {"children": [frame("1:0", 0, 0, 375, 667, children=[card])]}
    component = emit_files(_ast(doc), "moneyview")["src/components/FigmaPrototype.jsx"]
    assert "import { Card } from '@moneyview/design-system/card';" in component
    assert "import { Typography } from '@moneyview/design-system/typography';" in component
    line = next(line for line in component.splitlines() if "Inside" in line)
    assert line.strip().startswith("<Typography ")
    assert 'left: "10px", top: "20px"' in line
    assert 'variant="body1"' in line


def test_moneyview_binds_components_with_props() -> None:
    doc = {"children": [frame("1:0", 0, 0, 375, 667, children=[rect("1:1", 20, 100, 160, 35, characters="Pay now", fills=[solid(0, 0, 1)]), rect("1:2", 20, 200, 200, 40)])]}
    component = emit_files(_ast(doc, threshold=0), "moneyview")["src/components/FigmaPrototype.jsx"]
    assert 'variant="primary"' in component
    assert 'size="medium"' in component
    assert '{"Pay now"}</Button>' in component
    assert 'placeholder="Enter text..."' in component
    assert "import { TextField } from '@moneyview/design-system/text-field';" in component


def test_navigation_arithmetic_cycles() -> None:
    for count in range(1, 8):
        index = 0
        for _ in range(count):
            index = next_index(index, count)
        assert index == 0
        assert previous_index(0, count) == count - 1
        assert all(previous_index(next_index(i, count), count) == i for i in range(count))
    with pytest.raises(ValueError):
        next_index(0, 0)


@pytest.mark.parametrize("format_name", list(TARGETS))
def test_every_format_has_navigation(format_name: str) -> None:
    files = emit_files(_ast(multi_screen_document(3)), format_name)
    joined = "\n".join(files.values())
    assert "Previous" in joined
    assert "Next" in joined
    assert "+ 1) %" in joined
    assert "- 1 +" in joined


def test_html_starts_on_first_screen() -> None:
    html = emit_files(_ast(multi_screen_document(3)), "html")["index.html"]
    assert 'id="screen-0" data-screen-index="0" style="display:block"' in html
    assert 'id="screen-1" data-screen-index="1" style="display:none"' in html
    assert "const screenCount = 3;" in html
    assert "1 of 3" in html


def test_manifests_name_runtime_dependencies() -> None:
    ast = _ast(login_document())
    html = json.loads(emit_files(ast, "html")["package.json"])
    react = json.loads(emit_files(ast, "react")["package.json"])
    vue = json.loads(emit_files(ast, "vue")["package.json"])
    moneyview = json.loads(emit_files(ast, "moneyview")["package.json"])
    assert html["devDependencies"] == {"vite": "^4.4.0"}
    assert react["dependencies"] == {"react": "^18.2.0", "react-dom": "^18.2.0"}
    assert react["devDependencies"]["@vitejs/plugin-react"] == "^4.0.0"
    assert vue["dependencies"] == {"vue": "^3.3.0"}
    assert vue["devDependencies"]["@vitejs/plugin-vue"] == "^4.0.0"
    assert moneyview["dependencies"]["@moneyview/design-system"] == "^1.0.0"
    assert moneyview["dependencies"]["tailwindcss"] == "^3.3.0"
    assert set(moneyview["devDependencies"]) == {"@vitejs/plugin-react", "vite", "autoprefixer", "postcss"}


def test_readme_lists_files() -> None:
    files = emit_files(_ast(login_document()), "vue")
    readme = files["README.md"]
    for path in files:
        assert f"`{path}`" in readme


def test_include_styles_false_drops_stylesheets() -> None:
    options = ExportOptions(include_styles=False)
    ast = _ast(login_document())
    html_files = emit_files(ast, "html", options)
    assert "styles.css" not in html_files
    assert "styles.css" not in html_files["index.html"]
    assert "left:10px; top:10px" in html_files["index.html"]
    react_files = emit_files(ast, "react", options)
    assert "src/index.css" not in react_files
    assert "index.css" not in react_files["src/main.jsx"]
    vue_files = emit_files(ast, "vue", options)
    assert "src/style.css" not in vue_files
    assert "style.css" not in vue_files["src/main.js"]


def test_minify_collapses_stylesheet() -> None:
    css = emit_files(_ast(login_document()), "html", ExportOptions(minify=True))["styles.css"]
    assert "\n" not in css
    assert ".nav-btn{" in css


def test_image_placeholder_follows_option() -> None:
    doc = {"children": [frame("1:0", 0, 0, 375, 667, children=[rect("1:1", 0, 0, 200, 200, fills=[{"type": "IMAGE", "imageRef": "ref"}])])]}
    ast = _ast(doc, threshold=0)
    with_images = emit_files(ast, "html")
    assert 'class="node node-1-1 image-placeholder"' in with_images["index.html"]
    assert ".image-placeholder" in with_images["styles.css"]
    without = emit_files(ast, "html", ExportOptions(include_images=False))
    assert "image-placeholder" not in without["index.html"]
    assert ".image-placeholder" not in without["styles.css"]


def test_component_name_option() -> None:
    files = emit_files(_ast(login_document()), "react", ExportOptions(component_name="Checkout Flow!"))
    assert "src/components/CheckoutFlow.jsx" in files
    assert "export default function CheckoutFlow()" in files["src/components/CheckoutFlow.jsx"]
    assert "import CheckoutFlow from './components/CheckoutFlow.jsx';" in files["src/main.jsx"]


@pytest.mark.parametrize(
    ("component_name", "exported"),
    [("0", "Screen0Prototype"), ("React", "ReactPrototype"), ("ReactDOM", "ReactDOMPrototype"), ("CurrentScreen", "CurrentScreenPrototype")],
)
@pytest.mark.parametrize("format_name", ["react", "moneyview"])
def test_component_name_avoids_generated_identifiers(format_name: str, component_name: str, exported: str) -> None:
    files = emit_files(_ast(login_document()), format_name, ExportOptions(component_name=component_name))
    path = sanitize_component_name(component_name)
    component = files[f"src/components/{path}.jsx"]
    assert f"export default function {exported}()" in component
    assert component.count(f"function {path}()") == (1 if path == "Screen0" else 0)
    assert f"import {exported} from './components/{path}.jsx';" in files["src/main.jsx"]
    assert f"<{exported} />" in files["src/main.jsx"]


def test_sanitize_component_name() -> None:
    assert sanitize_component_name("my-widget") == "Mywidget"
    assert sanitize_component_name("3d view") == "Screen3dview"
    assert sanitize_component_name("***") == "FigmaPrototype"
    assert sanitize_component_name(None) == "FigmaPrototype"


def test_emission_is_deterministic_and_pure() -> None:
    ast = _ast(multi_screen_document(2))
    snapshot = [(node.id, node.layout, node.classification) for node in ast.iter_nodes()]
    for format_name in TARGETS:
        assert emit_files(ast, format_name) == emit_files(ast, format_name)
    assert [(node.id, node.layout, node.classification) for node in ast.iter_nodes()] == snapshot
