"""Pixel-exact raster operations shared by template synthesis and compositing.

All resampling here is nearest-neighbor; nothing is ever smoothed.
"""

import math

from PIL import Image


def round_px(value) -> int:
    """Round half up to a whole pixel."""
    return int(math.floor(value + 0.5))


def paste_layer(base: Image.Image, layer: Image.Image, x, y) -> Image.Image:
    """Alpha-composite *layer* onto *base* in place with its top-left at (x, y).

    Coordinates are rounded to whole pixels and any part of *layer* falling
    outside *base* is clipped. Returns *base*.
    """
    x, y = round_px(x), round_px(y)
    if layer.mode != "RGBA":
        layer = layer.convert("RGBA")

    left, top = max(0, -x), max(0, -y)
    right = min(layer.width, base.width - x)
    bottom = min(layer.height, base.height - y)
    if right <= left or bottom <= top:
        return base

    if (left, top, right, bottom) != (0, 0, layer.width, layer.height):
        layer = layer.crop((left, top, right, bottom))
    base.alpha_composite(layer, dest=(x + left, y + top))
    return base


def resize_nearest(img: Image.Image, size: tuple[int, int]) -> Image.Image:
    if img.size == size:
        return img
    return img.resize(size, Image.NEAREST)


def upscale(img: Image.Image, factor: int) -> Image.Image:
    """Enlarge *img* by an integer *factor* on both axes, keeping hard pixel edges."""
    if factor < 1 or int(factor) != factor:
        raise ValueError(f"Scale factor must be a positive integer, got {factor!r}")
    return resize_nearest(img, (img.width * factor, img.height * factor))
