"""Palette pixelizer: turns a photo into the fixed-size two-tone portrait.

The source is cover-fitted (center crop to aspect, then scaled) to
``PHOTO_SIZE`` and every pixel is classified by luminance into the light or
dark palette color. Source alpha is kept verbatim; opaque sources come out
fully opaque.

Thresholds are clamped to [0, 1]. Non-finite values are rejected.
"""

import math

import numpy as np
from PIL import Image, ImageOps

from pixpass.codec import decode_image, encode_png, hex_to_rgb
from pixpass.config import (
    ALLOWED_FORMATS,
    DEFAULT_THRESHOLD,
    FORMAT_ALIASES,
    HIGH_BIT_MODES,
    MAX_UPLOAD_MB,
    NON_PNG_MODES,
    PALETTE,
    PHOTO_SIZE,
)
from pixpass.exceptions import (
    EmptyImageError,
    ImageFormatError,
    ImageTooLargeError,
    PhotoDimensionError,
    ThresholdError,
)
from pixpass.logging import audit, get_logger, trace

log = get_logger("pixelizer")

# ITU-R BT.601 luma weights
LUMA_WEIGHTS = (0.299, 0.587, 0.114)


@trace
def validate_image(data: bytes) -> Image.Image:
    """Check an uploaded source image and return it decoded.

    Raises:
        EmptyImageError: *data* is empty.
        ImageTooLargeError: *data* exceeds ``MAX_UPLOAD_MB``.
        ImageDecodeError: *data* is not a readable image.
        ImageFormatError: the format is not one of ``ALLOWED_FORMATS``.
    """
    if not data:
        raise EmptyImageError()
    if len(data) > MAX_UPLOAD_MB * 1024 * 1024:
        raise ImageTooLargeError(len(data), MAX_UPLOAD_MB)

    img = decode_image(data)
    fmt = FORMAT_ALIASES.get(img.format, img.format)
    if fmt not in ALLOWED_FORMATS:
        raise ImageFormatError(img.format, ALLOWED_FORMATS)
    return img


def clamp_threshold(value) -> float:
    """Resolve a caller threshold: ``None`` -> default, out of range -> clamped."""
    if value is None:
        return DEFAULT_THRESHOLD
    try:
        t = float(value)
    except (TypeError, ValueError):
        raise ThresholdError(value) from None
    if not math.isfinite(t):
        raise ThresholdError(value)
    if t < 0.0 or t > 1.0:
        clamped = min(max(t, 0.0), 1.0)
        log.warning("Threshold %s outside [0, 1], clamped to %s", t, clamped)
        return clamped
    return t


def _has_alpha(img: Image.Image) -> bool:
    return img.mode in ("RGBA", "LA", "PA") or "transparency" in img.info


def _to_8bit(img: Image.Image) -> Image.Image:
    """Rescale 16-bit (and 32-bit int/float) greyscale to 8-bit L; other modes pass through."""
    if img.mode not in HIGH_BIT_MODES:
        return img
    levels = np.asarray(img, dtype=np.float64) / 257
    return Image.fromarray(np.clip(np.rint(levels), 0, 255).astype(np.uint8))


def cover_fit(img: Image.Image, size: tuple[int, int] = PHOTO_SIZE) -> Image.Image:
    """Scale *img* to exactly *size*, cropping the excess around the center."""
    img = _to_8bit(img)
    working = img.convert("RGBA" if _has_alpha(img) else "RGB")
    return ImageOps.fit(working, size, method=Image.LANCZOS, centering=(0.5, 0.5))


def luminance(pixels: np.ndarray) -> np.ndarray:
    """Relative luminance in [0, 1] of an HxWx(3|4) uint8 array."""
    rgb = pixels[..., :3].astype(np.float64)
    wr, wg, wb = LUMA_WEIGHTS
    return (wr * rgb[..., 0] + wg * rgb[..., 1] + wb * rgb[..., 2]) / 255


def apply_palette(pixels: np.ndarray, threshold: float) -> np.ndarray:
    """Classify each pixel as light (L > threshold) or dark; returns HxWx4 uint8."""
    h, w, channels = pixels.shape
    light = np.array(hex_to_rgb(PALETTE.light), dtype=np.uint8)
    dark = np.array(hex_to_rgb(PALETTE.dark), dtype=np.uint8)

    out = np.empty((h, w, 4), dtype=np.uint8)
    out[..., :3] = np.where((luminance(pixels) > threshold)[..., None], light, dark)
    out[..., 3] = pixels[..., 3] if channels == 4 else 255
    return out


@trace
def stylize_image(img: Image.Image, threshold=DEFAULT_THRESHOLD) -> Image.Image:
    """Cover-fit *img* to the portrait size and map it onto the two-tone palette."""
    t = clamp_threshold(threshold)
    fitted = cover_fit(img, PHOTO_SIZE)
    result = Image.fromarray(apply_palette(np.asarray(fitted), t))
    audit("pixelizer.stylized", logger=log,
          source=f"{img.size[0]}x{img.size[1]}", mode=img.mode, threshold=t)
    return result


@trace
def stylize(data: bytes, threshold=DEFAULT_THRESHOLD) -> bytes:
    """Validate a source photo, stylize it and return PNG bytes."""
    img = validate_image(data)
    return encode_png(stylize_image(img, threshold))


def check_photo_size(img: Image.Image) -> Image.Image:
    if img.size != PHOTO_SIZE:
        raise PhotoDimensionError(img.size[0], img.size[1], PHOTO_SIZE)
    return img


@trace
def validate_preprocessed(data: bytes) -> bytes:
    """Accept an already pixelized portrait of exactly ``PHOTO_SIZE`` and re-encode it as PNG.

    Pixel values are left untouched; there is no resizing.
    """
    img = check_photo_size(validate_image(data))
    png = encode_png(img.convert("RGB") if img.mode in NON_PNG_MODES else img)
    audit("pixelizer.preprocessed_accepted", logger=log, format=img.format, mode=img.mode)
    return png


def image_info(data: bytes) -> dict:
    """Describe an image buffer (format, size, mode, channels, byte count)."""
    img = decode_image(data)
    return {
        "format": img.format,
        "width": img.size[0],
        "height": img.size[1],
        "mode": img.mode,
        "channels": len(img.getbands()),
        "bytes": len(data),
    }
