"""Vector Renderer - contributor grid as a self-contained SVG document.

Invariants:
    - Never performs network IO: avatars are referenced by URL, resolved by the viewer
    - Geometry comes from compute_layout, same as the raster renderer
    - Canvas size lives in the viewBox; the root scales to its container
    - Exactly one <a> link per contributor, tooltip "{login} - {n} contributions"
    - Every interpolated value is XML-escaped

Design Decisions:
    - No avatar-failure branch: a broken avatar link shows as a broken image in
      the viewer, which is accepted behavior
    - Markup assembled from small string builders (one per element kind)
"""

from collections.abc import Sequence
from xml.sax.saxutils import escape, quoteattr

from contributors_image.core.domain_types import Contributor
from contributors_image.core.layout import LayoutGeometry, compute_layout
from contributors_image.core.render_style import RenderStyle, TITLE_FONT_FAMILY


def render_vector(
    contributors: Sequence[Contributor], title: str, style: RenderStyle,
) -> str:
    """Render the contributor grid as SVG markup. Pure, no IO."""
    layout = compute_layout(len(contributors))
    parts = [
        _open_document(layout),
        _definitions(style),
        f'<rect width="{layout.canvas_width}" '
        f'height="{layout.canvas_height}" fill="url(#bg)"/>',
        _title(layout, title, style),
    ]
    for index, contributor in enumerate(contributors):
        parts.append(_contributor_group(layout, index, contributor, style))
    parts.append("</svg>")
    return "".join(parts)


def _open_document(layout: LayoutGeometry) -> str:
    w, h = layout.canvas_width, layout.canvas_height
    return (
        f'<svg width="100%" height="100%" viewBox="0 0 {w} {h}" '
        'preserveAspectRatio="xMidYMid meet" xmlns="http://www.w3.org/2000/svg">'
    )


def _definitions(style: RenderStyle) -> str:
    return (
        "<defs>"
        '<linearGradient id="bg" x1="0%" y1="0%" x2="0%" y2="100%">'
        f'<stop offset="0%" style="stop-color:{style.background_top};stop-opacity:1"/>'
        f'<stop offset="100%" style="stop-color:{style.background_bottom};stop-opacity:1"/>'
        "</linearGradient>"
        '<filter id="shadow" x="-50%" y="-50%" width="200%" height="200%">'
        f'<feDropShadow dx="0" dy="{style.shadow_offset_y}" '
        f'stdDeviation="{style.shadow_blur / 2:g}" '
        f'flood-color="rgba(0,0,0,{style.shadow_opacity:g})"/>'
        "</filter>"
        "</defs>"
    )


def _title(layout: LayoutGeometry, title: str, style: RenderStyle) -> str:
    x = layout.canvas_width / 2
    y = layout.outer_padding + style.title_offset
    return (
        f'<text x="{x:g}" y="{y}" font-family={quoteattr(TITLE_FONT_FAMILY)} '
        f'font-size="{style.title_font_size}" font-weight="bold" '
        f'text-anchor="middle" fill="{style.title_color}">{escape(title)}</text>'
    )


def _contributor_group(
    layout: LayoutGeometry, index: int, contributor: Contributor,
    style: RenderStyle,
) -> str:
    x, y = layout.cell_origin(index)
    cx, cy = layout.cell_center(index)
    d, r = layout.avatar_diameter, layout.radius
    circle = f'cx="{cx:g}" cy="{cy:g}" r="{r:g}"'
    return (
        f'<defs><clipPath id="clip{index}"><circle {circle}/></clipPath></defs>'
        '<g filter="url(#shadow)">'
        f'<image x="{x}" y="{y}" width="{d}" height="{d}" '
        f'href={quoteattr(contributor.avatar_url)} clip-path="url(#clip{index})"/>'
        f'<circle {circle} fill="none" stroke="{style.border_color}" '
        f'stroke-width="{style.border_width}"/>'
        "</g>"
        f'<a href={quoteattr(contributor.html_url)} target="_blank">'
        f'<circle {circle} fill="transparent" cursor="pointer"/>'
        f"<title>{escape(contributor.tooltip)}</title>"
        "</a>"
    )
