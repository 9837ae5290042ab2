"""Graphics module for VAULTFALL rendering."""

from vaultfall.graphics.primitives import (
    draw_rect,
    draw_circle,
    draw_ellipse,
    draw_line,
    draw_polygon,
    draw_text,
    draw_text_centered,
    fill,
)

__all__ = [
    "draw_rect",
    "draw_circle",
    "draw_ellipse",
    "draw_line",
    "draw_polygon",
    "draw_text",
    "draw_text_centered",
    "fill",
]
