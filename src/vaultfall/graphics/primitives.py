"""Basic drawing primitives for VAULTFALL frame buffers.

All functions draw into a numpy array of shape (height, width, 3), accept
float coordinates, clip to the buffer and support a global alpha.
"""

from typing import Iterable, List, Optional, Sequence, Tuple
import math

import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Point = Tuple[float, float]
Buffer = NDArray[np.uint8]


def fill(buffer: Buffer, color: Color, alpha: float = 1.0) -> None:
    """Fill entire buffer with color, optionally blended."""
    if alpha >= 1.0:
        buffer[:, :] = color
        return
    if alpha <= 0.0:
        return
    blended = buffer.astype(np.float32) * (1.0 - alpha) + np.array(color, dtype=np.float32) * alpha
    buffer[:, :] = blended.astype(np.uint8)


def _clip_box(
    buffer: Buffer, x0: float, y0: float, x1: float, y1: float
) -> Optional[Tuple[int, int, int, int]]:
    """Clip a float box to integer buffer bounds. None if empty."""
    h, w = buffer.shape[:2]
    ix0 = max(0, int(math.floor(x0)))
    iy0 = max(0, int(math.floor(y0)))
    ix1 = min(w, int(math.ceil(x1)))
    iy1 = min(h, int(math.ceil(y1)))
    if ix1 <= ix0 or iy1 <= iy0:
        return None
    return ix0, iy0, ix1, iy1


def _paint(
    buffer: Buffer,
    box: Tuple[int, int, int, int],
    mask: Optional[NDArray[np.bool_]],
    color: Color,
    alpha: float,
) -> None:
    """Write color into a box, restricted to mask, with alpha blending."""
    if alpha <= 0.0:
        return
    x0, y0, x1, y1 = box
    region = buffer[y0:y1, x0:x1]
    if mask is None:
        mask = np.ones(region.shape[:2], dtype=bool)
    if alpha >= 1.0:
        region[mask] = color
    else:
        src = region[mask].astype(np.float32)
        region[mask] = (src * (1.0 - alpha) + np.array(color, dtype=np.float32) * alpha).astype(np.uint8)


def draw_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
    filled: bool = True,
    thickness: int = 1,
    alpha: float = 1.0,
) -> None:
    """Draw an axis-aligned rectangle.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
        filled: If True, fill rectangle; if False, draw outline only
        thickness: Line thickness for outline (when filled=False)
        alpha: Opacity (0.0 to 1.0)
    """
    if filled:
        box = _clip_box(buffer, x, y, x + width, y + height)
        if box:
            _paint(buffer, box, None, color, alpha)
        return

    t = thickness
    draw_rect(buffer, x, y, width, t, color, alpha=alpha)
    draw_rect(buffer, x, y + height - t, width, t, color, alpha=alpha)
    draw_rect(buffer, x, y + t, t, height - 2 * t, color, alpha=alpha)
    draw_rect(buffer, x + width - t, y + t, t, height - 2 * t, color, alpha=alpha)


def draw_circle(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    color: Color,
    filled: bool = True,
    thickness: float = 1.0,
    alpha: float = 1.0,
) -> None:
    """Draw a circle using a distance mask over its bounding box."""
    box = _clip_box(buffer, cx - radius - 1, cy - radius - 1, cx + radius + 1, cy + radius + 1)
    if box is None:
        return
    x0, y0, x1, y1 = box
    ys, xs = np.ogrid[y0:y1, x0:x1]
    dist = np.sqrt((xs + 0.5 - cx) ** 2 + (ys + 0.5 - cy) ** 2)
    if filled:
        mask = dist <= radius
    else:
        mask = (dist <= radius) & (dist > radius - thickness)
    _paint(buffer, box, mask, color, alpha)


def _polygon_mask(points: Sequence[Point], box: Tuple[int, int, int, int]) -> NDArray[np.bool_]:
    """Even-odd point-in-polygon test for pixel centres inside a box."""
    x0, y0, x1, y1 = box
    ys, xs = np.mgrid[y0:y1, x0:x1]
    px = xs + 0.5
    py = ys + 0.5
    inside = np.zeros(px.shape, dtype=bool)

    n = len(points)
    for i in range(n):
        ax, ay = points[i]
        bx, by = points[(i + 1) % n]
        if ay == by:
            continue
        crosses = (ay > py) != (by > py)
        x_cross = (bx - ax) * (py - ay) / (by - ay) + ax
        inside ^= crosses & (px < x_cross)
    return inside


def draw_polygon(
    buffer: Buffer,
    points: Sequence[Point],
    color: Color,
    filled: bool = True,
    thickness: int = 1,
    alpha: float = 1.0,
) -> None:
    """Draw a closed polygon."""
    if len(points) < 3:
        return

    if not filled:
        n = len(points)
        for i in range(n):
            ax, ay = points[i]
            bx, by = points[(i + 1) % n]
            draw_line(buffer, ax, ay, bx, by, color, thickness=thickness, alpha=alpha)
        return

    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    box = _clip_box(buffer, min(xs), min(ys), max(xs) + 1, max(ys) + 1)
    if box is None:
        return
    _paint(buffer, box, _polygon_mask(points, box), color, alpha)


def transform_points(
    points: Iterable[Point],
    dx: float = 0.0,
    dy: float = 0.0,
    rotation: float = 0.0,
    scale: float = 1.0,
) -> List[Point]:
    """Scale, then rotate (radians, clockwise on screen), then translate."""
    cos_r = math.cos(rotation)
    sin_r = math.sin(rotation)
    result = []
    for px, py in points:
        sx, sy = px * scale, py * scale
        result.append((sx * cos_r - sy * sin_r + dx, sx * sin_r + sy * cos_r + dy))
    return result


def ellipse_points(
    cx: float,
    cy: float,
    rx: float,
    ry: float,
    start: float = 0.0,
    end: float = 2 * math.pi,
    segments: int = 32,
) -> List[Point]:
    """Points along an (unrotated) elliptical arc."""
    step = (end - start) / segments
    return [
        (cx + rx * math.cos(start + i * step), cy + ry * math.sin(start + i * step))
        for i in range(segments + 1)
    ]


def draw_ellipse(
    buffer: Buffer,
    cx: float,
    cy: float,
    rx: float,
    ry: float,
    color: Color,
    rotation: float = 0.0,
    filled: bool = True,
    alpha: float = 1.0,
) -> None:
    """Draw an ellipse, optionally rotated about its centre."""
    local = ellipse_points(0.0, 0.0, rx, ry)
    draw_polygon(buffer, transform_points(local, cx, cy, rotation), color, filled=filled, alpha=alpha)


def draw_line(
    buffer: Buffer,
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    color: Color,
    thickness: int = 1,
    alpha: float = 1.0,
) -> None:
    """Draw a line using Bresenham's algorithm.

    Args:
        buffer: Target numpy array (height, width, 3)
        x1, y1: Start point
        x2, y2: End point
        color: RGB color tuple
        thickness: Line thickness in pixels
        alpha: Opacity (0.0 to 1.0)
    """
    h, w = buffer.shape[:2]
    x, y = int(round(x1)), int(round(y1))
    ex, ey = int(round(x2)), int(round(y2))

    dx = abs(ex - x)
    dy = abs(ey - y)
    sx = 1 if x < ex else -1
    sy = 1 if y < ey else -1
    err = dx - dy

    # Collect first so thick or overlapping pixels are blended once
    pixels = set()
    while True:
        for tx in range(-(thickness // 2), (thickness + 1) // 2):
            for ty in range(-(thickness // 2), (thickness + 1) // 2):
                px, py = x + tx, y + ty
                if 0 <= px < w and 0 <= py < h:
                    pixels.add((py, px))

        if x == ex and y == ey:
            break

        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy

    if not pixels or alpha <= 0.0:
        return
    rows, cols = zip(*pixels)
    rows = np.array(rows)
    cols = np.array(cols)
    if alpha >= 1.0:
        buffer[rows, cols] = color
    else:
        src = buffer[rows, cols].astype(np.float32)
        buffer[rows, cols] = (src * (1.0 - alpha) + np.array(color, dtype=np.float32) * alpha).astype(np.uint8)


# =============================================================================
# Bitmap text
# =============================================================================

GLYPH_WIDTH = 3
GLYPH_HEIGHT = 5

# Each character is a list of rows, each row is a list of 0/1 pixels
_FONT = {
    'A': [[0,1,0], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
    'B': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,1,0]],
    'C': [[0,1,1], [1,0,0], [1,0,0], [1,0,0], [0,1,1]],
    'D': [[1,1,0], [1,0,1], [1,0,1], [1,0,1], [1,1,0]],
    'E': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,1,1]],
    'F': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,0,0]],
    'G': [[0,1,1], [1,0,0], [1,0,1], [1,0,1], [0,1,1]],
    'H': [[1,0,1], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
    'I': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [1,1,1]],
    'J': [[0,0,1], [0,0,1], [0,0,1], [1,0,1], [0,1,0]],
    'K': [[1,0,1], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
    'L': [[1,0,0], [1,0,0], [1,0,0], [1,0,0], [1,1,1]],
    'M': [[1,0,1], [1,1,1], [1,0,1], [1,0,1], [1,0,1]],
    'N': [[1,0,1], [1,1,1], [1,1,1], [1,0,1], [1,0,1]],
    'O': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    'P': [[1,1,0], [1,0,1], [1,1,0], [1,0,0], [1,0,0]],
    'Q': [[0,1,0], [1,0,1], [1,0,1], [1,1,1], [0,1,1]],
    'R': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
    'S': [[0,1,1], [1,0,0], [0,1,0], [0,0,1], [1,1,0]],
    'T': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [0,1,0]],
    'U': [[1,0,1], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    'V': [[1,0,1], [1,0,1], [1,0,1], [0,1,0], [0,1,0]],
    'W': [[1,0,1], [1,0,1], [1,0,1], [1,1,1], [1,0,1]],
    'X': [[1,0,1], [1,0,1], [0,1,0], [1,0,1], [1,0,1]],
    'Y': [[1,0,1], [1,0,1], [0,1,0], [0,1,0], [0,1,0]],
    'Z': [[1,1,1], [0,0,1], [0,1,0], [1,0,0], [1,1,1]],
    '0': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    '1': [[0,1,0], [1,1,0], [0,1,0], [0,1,0], [1,1,1]],
    '2': [[0,1,0], [1,0,1], [0,0,1], [0,1,0], [1,1,1]],
    '3': [[1,1,0], [0,0,1], [0,1,0], [0,0,1], [1,1,0]],
    '4': [[1,0,1], [1,0,1], [1,1,1], [0,0,1], [0,0,1]],
    '5': [[1,1,1], [1,0,0], [1,1,0], [0,0,1], [1,1,0]],
    '6': [[0,1,1], [1,0,0], [1,1,0], [1,0,1], [0,1,0]],
    '7': [[1,1,1], [0,0,1], [0,1,0], [0,1,0], [0,1,0]],
    '8': [[0,1,0], [1,0,1], [0,1,0], [1,0,1], [0,1,0]],
    '9': [[0,1,0], [1,0,1], [0,1,1], [0,0,1], [1,1,0]],
    '$': [[0,1,1], [1,1,0], [0,1,0], [0,1,1], [1,1,0]],
    '?': [[0,1,0], [1,0,1], [0,0,1], [0,0,0], [0,1,0]],
    '!': [[0,1,0], [0,1,0], [0,1,0], [0,0,0], [0,1,0]],
    '.': [[0,0,0], [0,0,0], [0,0,0], [0,0,0], [0,1,0]],
    ',': [[0,0,0], [0,0,0], [0,0,0], [0,1,0], [1,0,0]],
    ':': [[0,0,0], [0,1,0], [0,0,0], [0,1,0], [0,0,0]],
    '-': [[0,0,0], [0,0,0], [1,1,1], [0,0,0], [0,0,0]],
    '+': [[0,0,0], [0,1,0], [1,1,1], [0,1,0], [0,0,0]],
}


def measure_text(text: str, scale: int = 1) -> Tuple[int, int]:
    """Width and height in pixels of text drawn with draw_text."""
    width = len(text) * (GLYPH_WIDTH + 1) * scale
    return max(0, width - scale), GLYPH_HEIGHT * scale


def draw_text(
    buffer: Buffer,
    text: str,
    x: float,
    y: float,
    color: Color,
    scale: int = 1,
    alpha: float = 1.0,
) -> Tuple[int, int]:
    """Draw text using the built-in 3x5 bitmap font.

    Lowercase letters are drawn as uppercase; unknown characters render
    as '?'.

    Returns:
        Tuple of (width, height) of rendered text in pixels
    """
    cursor_x = int(round(x))
    top = int(round(y))

    for char in text:
        if char != ' ':
            glyph = _FONT.get(char.upper(), _FONT['?'])
            for row_idx, row in enumerate(glyph):
                for col_idx, pixel in enumerate(row):
                    if pixel:
                        draw_rect(
                            buffer,
                            cursor_x + col_idx * scale,
                            top + row_idx * scale,
                            scale,
                            scale,
                            color,
                            alpha=alpha,
                        )
        cursor_x += (GLYPH_WIDTH + 1) * scale

    return measure_text(text, scale)


def draw_text_centered(
    buffer: Buffer,
    text: str,
    cx: float,
    cy: float,
    color: Color,
    scale: int = 1,
    alpha: float = 1.0,
    shadow: bool = False,
) -> None:
    """Draw text centred on a point, with an optional drop shadow."""
    tw, th = measure_text(text, scale)
    x = cx - tw / 2
    y = cy - th / 2
    if shadow:
        draw_text(buffer, text, x + scale, y + scale, (0, 0, 0), scale=scale, alpha=alpha)
    draw_text(buffer, text, x, y, color, scale=scale, alpha=alpha)
