from __future__ import annotations

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
from figma_export_api.core.emit.react import vite_index_html
from figma_export_api.core.emit.templates import BASE_CSS, IMAGE_CSS, VITE_VERSION, VUE_VERSION, VUE_VITE_CONFIG, stylesheet

# Text is HTML-escaped and marked v-pre so template delimiters stay literal.
TEXT_MARKER = "v-pre"


def _screen_block(context: EmitContext) -> str:
    blocks = []
    for rendered in context.screens:
        blocks.append(
            f'    <div class="screen" v-show="currentScreen === {rendered.index}" data-screen-index="{rendered.index}">\n'
            f"      <div {html_attribute('class', 'screen-content')} {css_style_attribute(rendered.style)}>\n"
            f"{context.markup(rendered, 4)}\n"
            f"      </div>\n"
            f"    </div>"
        )
    return "\n".join(blocks)


def vue_component(context: EmitContext) -> str:
    return f"""<template>
  <div class="prototype-container">
{_screen_block(context)}
    <div class="nav-controls">
      <button type="button" class="nav-btn" @click="prevScreen">Previous</button>
      <span class="nav-info">{{{{ currentScreen + 1 }}}} of {{{{ screenCount }}}}</span>
      <button type="button" class="nav-btn" @click="nextScreen">Next</button>
    </div>
  </div>
</template>

<script>
export default {{
  name: '{context.component_name}',
  data() {{
    return {{
      currentScreen: 0,
      screenCount: {len(context.screens)},
    }};
  }},
  mounted() {{
    window.addEventListener('keydown', this.onKeyDown);
  }},
  beforeUnmount() {{
    window.removeEventListener('keydown', this.onKeyDown);
  }},
  methods: {{
    nextScreen() {{
      this.currentScreen = {next_expression('this.currentScreen', 'this.screenCount')};
    }},
    prevScreen() {{
      this.currentScreen = {previous_expression('this.currentScreen', 'this.screenCount')};
    }},
    onKeyDown(event) {{
      if (event.key === 'ArrowRight') this.nextScreen();
      if (event.key === 'ArrowLeft') this.prevScreen();
    }},
  }},
}};
</script>
"""


def app_vue(context: EmitContext) -> str:
    name = context.component_name
    return f"""<template>
  <{name} />
</template>

<script>
import {name} from './components/{name}.vue';

export default {{
  name: 'App',
  components: {{ {name} }},
}};
</script>
"""


def main_js(stylesheet_path: str | None) -> str:
    style_import = f"import '{stylesheet_path}';\n" if stylesheet_path else ""
    return f"""import {{ createApp }} from 'vue';
import App from './App.vue';
{style_import}
createApp(App).mount('#app');
"""


def build_files(context: EmitContext) -> dict[str, str]:
    options = context.options
    files = {
        "index.html": vite_index_html(context, "app", "/src/main.js"),
        "src/main.js": main_js("./style.css" if options.include_styles else None),
        "src/App.vue": app_vue(context),
        f"src/components/{context.component_name}.vue": vue_component(context),
    }
    if options.include_styles:
        files["src/style.css"] = stylesheet(BASE_CSS, IMAGE_CSS, options.include_images, options.minify)
    files["vite.config.js"] = VUE_VITE_CONFIG
    files["package.json"] = package_json(context)
    files["README.md"] = readme(context, list(files))
    return files


VUE_TARGET = TargetDescriptor(
    name="vue",
    label="Vue",
    class_attribute="class",
    format_attribute=html_attribute,
    format_style=css_style_attribute,
    format_text=html_text,
    build_files=build_files,
    text_marker=TEXT_MARKER,
    dependencies={"vue": VUE_VERSION},
    dev_dependencies={"@vitejs/plugin-vue": "^4.0.0", "vite": VITE_VERSION},
)
