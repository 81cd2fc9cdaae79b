"""Render Style - palette and typography presets shared by both renderers.

Invariants:
    - One style per request, passed to the raster and vector renderer alike
    - Colours are CSS hex strings; Pillow and SVG both accept them as-is
"""

from dataclasses import dataclass

TITLE_FONT_FAMILY = (
    "-apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif"
)


@dataclass(frozen=True)
class RenderStyle:
    background_top: str
    background_bottom: str
    title_color: str
    title_font_size: int
    title_offset: int           # baseline, measured from outer_padding
    border_color: str
    placeholder_fill: str
    placeholder_text: str
    border_width: int = 2
    shadow_opacity: float = 0.1
    shadow_blur: int = 8
    shadow_offset_y: int = 2


# JSON endpoint (web panel preview)
PANEL_STYLE = RenderStyle(
    background_top="#ffffff",
    background_bottom="#f8fafc",
    title_color="#1f2937",
    title_font_size=24,
    title_offset=30,
    border_color="#e5e7eb",
    placeholder_fill="#f3f4f6",
    placeholder_text="#9ca3af",
)

# Direct image endpoint (README badge)
BADGE_STYLE = RenderStyle(
    background_top="#f8fafc",
    background_bottom="#f1f5f9",
    title_color="#1e293b",
    title_font_size=18,
    title_offset=25,
    border_color="#e2e8f0",
    placeholder_fill="#f1f5f9",
    placeholder_text="#94a3b8",
)
