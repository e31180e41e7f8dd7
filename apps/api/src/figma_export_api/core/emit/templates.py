from __future__ import annotations

import re

from figma_export_api.core.emit.markup import IMAGE_PLACEHOLDER_CLASS

VITE_VERSION = "^4.4.0"
REACT_VERSION = "^18.2.0"
VUE_VERSION = "^3.3.0"
DESIGN_SYSTEM_PACKAGE = "@moneyview/design-system"

BASE_CSS = """/* Exported prototype styles */
* {
  margin: 0;
  padding: 0;
  box-sizing: border-box;
}

body {
  font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
  background-color: #f5f5f5;
  overflow: hidden;
}

.prototype-container {
  width: 100vw;
  height: 100vh;
  display: flex;
  flex-direction: column;
  align-items: center;
  justify-content: center;
}

.screen {
  overflow: auto;
}

.screen-content {
  background-color: white;
  box-shadow: 0 4px 20px rgba(0, 0, 0, 0.1);
  overflow: hidden;
}

.nav-controls {
  position: fixed;
  bottom: 20px;
  left: 50%;
  transform: translateX(-50%);
  display: flex;
  align-items: center;
  gap: 10px;
  z-index: 1000;
}

.nav-btn {
  padding: 10px 20px;
  background-color: #007aff;
  color: white;
  border: none;
  border-radius: 6px;
  cursor: pointer;
  font-size: 14px;
}

.nav-btn:hover {
  background-color: #0056cc;
}

.nav-info {
  font-size: 14px;
  color: #555;
}
"""

IMAGE_CSS = f"""
.{IMAGE_PLACEHOLDER_CLASS} {{
  background-image: linear-gradient(135deg, #e0e0e0 25%, #f5f5f5 25%, #f5f5f5 50%, #e0e0e0 50%, #e0e0e0 75%, #f5f5f5 75%);
  background-size: 16px 16px;
}}
"""

TAILWIND_CSS = """@tailwind base;
@tailwind components;
@tailwind utilities;

.prototype-container {
  @apply min-h-screen bg-gray-50 flex flex-col items-center justify-center;
}

.screen-content {
  @apply relative bg-white rounded-lg shadow-lg overflow-hidden;
}

.nav-controls {
  @apply fixed bottom-6 left-1/2 -translate-x-1/2 flex items-center gap-3 z-50;
}

.nav-btn {
  @apply px-4 py-2 bg-blue-600 text-white rounded-lg hover:bg-blue-700 transition-colors;
}

.nav-info {
  @apply px-4 py-2 text-sm text-gray-600 bg-white rounded-lg shadow-sm;
}
"""

TAILWIND_IMAGE_CSS = f"""
.{IMAGE_PLACEHOLDER_CLASS} {{
  @apply bg-gray-200;
}}
"""

REACT_VITE_CONFIG = """import { defineConfig } from 'vite'
import react from '@vitejs/plugin-react'

export default defineConfig({
  plugins: [react()],
  server: {
    port: 3000,
    open: true
  }
})
"""

VUE_VITE_CONFIG = """import { defineConfig } from 'vite'
import vue from '@vitejs/plugin-vue'

export default defineConfig({
  plugins: [vue()],
  server: {
    port: 3000,
    open: true
  }
})
"""

TAILWIND_CONFIG = """/** @type {import('tailwindcss').Config} */
export default {
  content: [
    './index.html',
    './src/**/*.{js,ts,jsx,tsx}',
  ],
  theme: {
    extend: {},
  },
  plugins: [],
}
"""

POSTCSS_CONFIG = """export default {
  plugins: {
    tailwindcss: {},
    autoprefixer: {},
  },
}
"""


def minify_css(css: str) -> str:
    collapsed = re.sub(r"\s+", " ", css).strip()
    return re.sub(r"\s*([{};:,])\s*", r"\1", collapsed)


def stylesheet(base: str, image_rules: str, include_images: bool, minify: bool) -> str:
    css = base + (image_rules if include_images else "")
    return minify_css(css) if minify else css
