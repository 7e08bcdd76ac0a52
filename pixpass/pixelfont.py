"""Glyph rasterizer: renders strings from the glyph table into tight RGBA runs.

Glyphs are packed by their visible ink instead of their nominal cell width.
Each glyph contributes its tight width (first to last lit column) and a
one-pixel spacer separates consecutive glyphs, which gives proportional
spacing from fixed-cell masks. Pixels are either fully transparent or the
requested color at full opacity.
"""

from dataclasses import dataclass

import numpy as np
from PIL import Image

from pixpass.codec import to_rgba
from pixpass.config import GLYPH_HEIGHT, GLYPH_SPACING, MISSING_GLYPH_WIDTH
from pixpass.glyphs import GLYPHS
from pixpass.logging import get_logger, trace

log = get_logger("pixelfont")


def _lit_columns(mask) -> list[int]:
    return sorted({c for row in mask for c, bit in enumerate(row) if bit == "1"})


def glyph_width(mask) -> int:
    """Tight width of *mask*: rightmost lit column - leftmost lit column + 1, or 0 if blank."""
    if not mask:
        return 0
    cols = _lit_columns(mask)
    if not cols:
        return 0
    return cols[-1] - cols[0] + 1


def glyph_offset(mask) -> int:
    """Column of the first lit pixel (0 for blank masks)."""
    if not mask:
        return 0
    cols = _lit_columns(mask)
    return cols[0] if cols else 0


@dataclass(frozen=True)
class PlacedGlyph:
    char: str
    mask: tuple[str, ...] | None
    width: int
    offset: int


def layout_text(text: str) -> list[PlacedGlyph]:
    """Resolve every character of *text* to its mask and metrics.

    Characters missing from the table become blank glyphs of
    ``MISSING_GLYPH_WIDTH`` pixels.
    """
    placed = []
    for ch in text:
        mask = GLYPHS.get(ch)
        if mask is None:
            placed.append(PlacedGlyph(ch, None, MISSING_GLYPH_WIDTH, 0))
        else:
            placed.append(PlacedGlyph(ch, mask, glyph_width(mask), glyph_offset(mask)))
    return placed


def _run_width(glyphs: list[PlacedGlyph]) -> int:
    if not glyphs:
        return 0
    return sum(g.width for g in glyphs) + GLYPH_SPACING * (len(glyphs) - 1)


def measure_text(text: str) -> int:
    """Width in pixels of the raster ``render_text`` would produce (never below 1)."""
    return max(_run_width(layout_text(text)), 1)


@trace
def render_text(text: str, color) -> Image.Image:
    """Render *text* as a transparent RGBA image ``measure_text(text)`` x 8 pixels.

    Args:
        text: String to draw; unknown characters render as blank space.
        color: ``#rrggbb`` or an RGB/RGBA tuple. The ink is always drawn opaque.
    """
    r, g, b, _ = to_rgba(color)
    glyphs = layout_text(text)
    width = max(_run_width(glyphs), 1)

    canvas = np.zeros((GLYPH_HEIGHT, width, 4), dtype=np.uint8)
    ink = np.array([r, g, b, 255], dtype=np.uint8)

    cursor = 0
    for i, glyph in enumerate(glyphs):
        if glyph.mask is not None:
            for y, row in enumerate(glyph.mask[:GLYPH_HEIGHT]):
                for x, bit in enumerate(row):
                    if bit == "1":
                        canvas[y, cursor + x - glyph.offset] = ink
        cursor += glyph.width
        if i < len(glyphs) - 1:
            cursor += GLYPH_SPACING

    return Image.fromarray(canvas)
