from __future__ import annotations

from html import escape

from figma_export_api.core.emit.engine import (
    EmitContext,
    TargetDescriptor,
    jsx_attribute,
    jsx_style_attribute,
    jsx_text,
    package_json,
    readme,
)
from figma_export_api.core.emit.navigation import next_expression, previous_expression
from figma_export_api.core.emit.templates import (
    BASE_CSS,
    IMAGE_CSS,
    REACT_VERSION,
    REACT_VITE_CONFIG,
    VITE_VERSION,
    stylesheet,
)

REACT_DEPENDENCIES = {"react": REACT_VERSION, "react-dom": REACT_VERSION}
REACT_DEV_DEPENDENCIES = {"@vitejs/plugin-react": "^4.0.0", "vite": VITE_VERSION}

# Identifiers declared by the generated component and entry module.
RESERVED_NAMES = frozenset({"React", "ReactDOM", "useEffect", "useState", "screens", "CurrentScreen"})


def export_name(context: EmitContext) -> str:
    taken = RESERVED_NAMES | set(context.imports) | {f"Screen{rendered.index}" for rendered in context.screens}
    name = context.component_name
    while name in taken:
        name = f"{name}Prototype"
    return name


def _screen_functions(context: EmitContext) -> str:
    functions = []
    for rendered in context.screens:
        functions.append(
            f"function Screen{rendered.index}() {{\n"
            f"  return (\n"
            f'    <div className="screen-content" {jsx_style_attribute(rendered.style)}>\n'
            f"{context.markup(rendered, 3)}\n"
            f"    </div>\n"
            f"  );\n"
            f"}}"
        )
    return "\n\n".join(functions)


def jsx_component(context: EmitContext, header: list[str], container_class: str) -> str:
    screen_list = ", ".join(f"Screen{rendered.index}" for rendered in context.screens)
    imports = "\n".join(["import React, { useEffect, useState } from 'react';", *header])
    return f"""{imports}

{_screen_functions(context)}

const screens = [{screen_list}];

export default function {export_name(context)}() {{
  const [currentScreen, setCurrentScreen] = useState(0);
  const screenCount = screens.length;

  const nextScreen = () => setCurrentScreen((index) => {next_expression('index', 'screenCount')});
  const prevScreen = () => setCurrentScreen((index) => {previous_expression('index', 'screenCount')});

  useEffect(() => {{
    const onKeyDown = (event) => {{
      if (event.key === 'ArrowRight') nextScreen();
      if (event.key === 'ArrowLeft') prevScreen();
    }};
    window.addEventListener('keydown', onKeyDown);
    return () => window.removeEventListener('keydown', onKeyDown);
  }}, []);

  const CurrentScreen = screens[currentScreen];

  return (
    <div className="{container_class}">
      <div className="screen" data-screen-index={{currentScreen}}>
        <CurrentScreen />
      </div>
      <div className="nav-controls">
        <button type="button" className="nav-btn" onClick={{prevScreen}}>Previous</button>
        <span className="nav-info">{{currentScreen + 1}} of {{screenCount}}</span>
        <button type="button" className="nav-btn" onClick={{nextScreen}}>Next</button>
      </div>
    </div>
  );
}}
"""


def main_jsx(context: EmitContext, stylesheet_path: str | None) -> str:
    name = export_name(context)
    path = context.component_name
    style_import = f"\nimport '{stylesheet_path}';" if stylesheet_path else ""
    return f"""import React from 'react';
import ReactDOM from 'react-dom/client';
import {name} from './components/{path}.jsx';{style_import}

ReactDOM.createRoot(document.getElementById('root')).render(
  <React.StrictMode>
    <{name} />
  </React.StrictMode>
);
"""


def vite_index_html(context: EmitContext, mount_id: str, entry: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape(context.component_name)}</title>
</head>
<body>
  <div id="{mount_id}"></div>
  <script type="module" src="{entry}"></script>
</body>
</html>
"""


def build_files(context: EmitContext) -> dict[str, str]:
    options = context.options
    name = context.component_name
    files = {
        "index.html": vite_index_html(context, "root", "/src/main.jsx"),
        "src/main.jsx": main_jsx(context, "./index.css" if options.include_styles else None),
        f"src/components/{name}.jsx": jsx_component(context, [], "prototype-container"),
    }
    if options.include_styles:
        files["src/index.css"] = stylesheet(BASE_CSS, IMAGE_CSS, options.include_images, options.minify)
    files["vite.config.js"] = REACT_VITE_CONFIG
    files["package.json"] = package_json(context)
    files["README.md"] = readme(context, list(files))
    return files


REACT_TARGET = TargetDescriptor(
    name="react",
    label="React",
    class_attribute="className",
    format_attribute=jsx_attribute,
    format_style=jsx_style_attribute,
    format_text=jsx_text,
    build_files=build_files,
    dependencies=REACT_DEPENDENCIES,
    dev_dependencies=REACT_DEV_DEPENDENCIES,
)
