from __future__ import annotations

from html import escape

from figma_export_api.core.emit.engine import (
    EmitContext,
    TargetDescriptor,
    css_style_attribute,
    html_attribute,
    html_text,
    package_json,
    readme,
)
from figma_export_api.core.emit.navigation import next_expression, previous_expression
from figma_export_api.core.emit.templates import BASE_CSS, IMAGE_CSS, stylesheet


def _screen_block(context: EmitContext) -> str:
    blocks = []
    for rendered in context.screens:
        display = "block" if rendered.index == 0 else "none"
        blocks.append(
            f'    <div class="screen" id="screen-{rendered.index}" data-screen-index="{rendered.index}" '
            f'style="display:{display}">\n'
            f"      <div {html_attribute('class', 'screen-content')} {css_style_attribute(rendered.style)}>\n"
            f"{context.markup(rendered, 4)}\n"
            f"      </div>\n"
            f"    </div>"
        )
    return "\n".join(blocks)


def _navigation_script(count: int) -> str:
    return f"""  <script>
    const screens = document.querySelectorAll('.screen');
    const screenCount = {count};
    const indicator = document.getElementById('screen-indicator');
    let currentScreen = 0;

    function showScreen(index) {{
      screens.forEach((screen, i) => {{
        screen.style.display = i === index ? 'block' : 'none';
      }});
      indicator.textContent = (index + 1) + ' of ' + screenCount;
    }}

    function nextScreen() {{
      currentScreen = {next_expression('currentScreen', 'screenCount')};
      showScreen(currentScreen);
    }}

    function prevScreen() {{
      currentScreen = {previous_expression('currentScreen', 'screenCount')};
      showScreen(currentScreen);
    }}

    document.getElementById('next-screen').addEventListener('click', nextScreen);
    document.getElementById('prev-screen').addEventListener('click', prevScreen);
    document.addEventListener('keydown', (event) => {{
      if (event.key === 'ArrowRight') nextScreen();
      if (event.key === 'ArrowLeft') prevScreen();
    }});

    showScreen(0);
  </script>"""


def index_html(context: EmitContext) -> str:
    count = len(context.screens)
    stylesheet_link = '\n  <link rel="stylesheet" href="styles.css">' if context.options.include_styles else ""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape(context.component_name)}</title>{stylesheet_link}
</head>
<body>
  <div class="prototype-container">
{_screen_block(context)}
    <div class="nav-controls">
      <button type="button" class="nav-btn" id="prev-screen">Previous</button>
      <span class="nav-info" id="screen-indicator">1 of {count}</span>
      <button type="button" class="nav-btn" id="next-screen">Next</button>
    </div>
  </div>
{_navigation_script(count)}
</body>
</html>
"""


def build_files(context: EmitContext) -> dict[str, str]:
    options = context.options
    files = {"index.html": index_html(context)}
    if options.include_styles:
        files["styles.css"] = stylesheet(BASE_CSS, IMAGE_CSS, options.include_images, options.minify)
    files["package.json"] = package_json(context)
    files["README.md"] = readme(context, list(files))
    return files


HTML_TARGET = TargetDescriptor(
    name="html",
    label="HTML",
    class_attribute="class",
    format_attribute=html_attribute,
    format_style=css_style_attribute,
    format_text=html_text,
    build_files=build_files,
)
