"""Shared fixtures: in-memory images and encoders."""

import io

import numpy as np
import pytest
from PIL import Image

from pixpass.config import PHOTO_SIZE


def encode(img: Image.Image, fmt: str = "PNG") -> bytes:
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


def gradient(size=PHOTO_SIZE, mode="RGB") -> Image.Image:
    """Deterministic image covering a wide range of luminance values."""
    w, h = size
    xs = np.linspace(0, 255, w, dtype=np.float64)
    ys = np.linspace(0, 255, h, dtype=np.float64)
    r = np.add.outer(ys, xs) / 2
    g = np.tile(xs, (h, 1))
    b = np.tile(ys[:, None], (1, w))
    arr = np.stack([r, g, b], axis=-1).astype(np.uint8)
    img = Image.fromarray(arr)
    return img.convert(mode) if mode != "RGB" else img


@pytest.fixture
def encode_image():
    return encode


@pytest.fixture
def gradient_image():
    return gradient


@pytest.fixture
def photo_color():
    return (200, 30, 40, 255)


@pytest.fixture
def photo_image(photo_color):
    return Image.new("RGBA", PHOTO_SIZE, photo_color)


@pytest.fixture
def photo_png(photo_image):
    return encode(photo_image)
