"""Raster codec helpers: colors, decoding, PNG encoding and data URLs."""

import base64
import binascii
import io
import re

from PIL import Image, UnidentifiedImageError

from pixpass.config import PNG_COMPRESS_LEVEL
from pixpass.exceptions import ImageDecodeError, ImageEncodeError

RGB = tuple[int, int, int]
RGBA = tuple[int, int, int, int]

_HEX_RE = re.compile(r"^#[0-9a-fA-F]{6}$")
_DATA_URL_RE = re.compile(r"^data:image/[\w.+-]+;base64,")


def hex_to_rgb(value: str) -> RGB:
    """Parse ``#rrggbb`` into an RGB tuple."""
    if not isinstance(value, str) or not _HEX_RE.match(value):
        raise ValueError(f"Invalid hex format: {value!r}")
    return tuple(int(value[i:i + 2], 16) for i in (1, 3, 5))


def to_rgba(color) -> RGBA:
    """Accept ``#rrggbb``, an RGB tuple or an RGBA tuple; alpha defaults to opaque."""
    if isinstance(color, str):
        return (*hex_to_rgb(color), 255)
    color = tuple(int(c) for c in color)
    if len(color) == 3:
        return (*color, 255)
    if len(color) == 4:
        return color
    raise ValueError(f"Color must have 3 or 4 channels, got {len(color)}")


def decode_image(data: bytes) -> Image.Image:
    """Fully decode *data* into a PIL image, keeping its original mode and format."""
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as e:
        raise ImageDecodeError(str(e)) from e
    return img


def encode_png(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    try:
        image.save(buf, format="PNG", compress_level=PNG_COMPRESS_LEVEL)
    except (OSError, ValueError) as e:
        raise ImageEncodeError(str(e)) from e
    return buf.getvalue()


def to_data_url(png: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")


def decode_data_url(value: str) -> bytes:
    """Decode a base64 image payload, with or without its ``data:image/...`` prefix."""
    payload = _DATA_URL_RE.sub("", value.strip(), count=1)
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageDecodeError(f"invalid base64 payload: {e}") from e
