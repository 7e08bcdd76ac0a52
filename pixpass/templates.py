"""Document templates: file lookup, a single-flight cache and synthetic fallbacks.

A template that is missing or cannot be decoded is never an error. The
compositor falls back to ``synthesize_template``, which draws a generic
document deterministically from the country profile.
"""

import threading
from pathlib import Path
from typing import Callable

import numpy as np
from PIL import Image

from pixpass.codec import decode_image, hex_to_rgb
from pixpass.config import (
    BASELINE_OFFSET,
    BORDER_WIDTH,
    LABEL_X,
    PAPER_COLOR,
    RULE_INSET,
    RULE_Y,
    SEAL_INSET,
    SEAL_SIZE,
    TEMPLATE_EXTENSION,
    TEMPLATE_PREFIX,
    TEMPLATE_SIZE,
    TITLE_Y,
)
from pixpass.exceptions import ImageDecodeError
from pixpass.logging import audit, get_logger, trace
from pixpass.pixelfont import render_text
from pixpass.profiles import CountryProfile
from pixpass.raster import paste_layer, resize_nearest

log = get_logger("templates")

TemplateLoader = Callable[[str], "Image.Image | None"]


def template_filename(code: str) -> str:
    return f"{TEMPLATE_PREFIX}{code}{TEMPLATE_EXTENSION}"


class FileTemplateSource:
    """Loads ``passport_<code>.png`` style templates from a directory."""

    def __init__(self, directory):
        self.directory = Path(directory)

    def path_for(self, code: str) -> Path:
        return self.directory / template_filename(code)

    def __call__(self, code: str) -> Image.Image | None:
        return self.load(code)

    def load(self, code: str) -> Image.Image | None:
        """Decode the template for *code*, or return None if it is absent or unreadable."""
        path = self.path_for(code)
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            log.info("No template file for %s at %s", code, path)
            return None
        except OSError as e:
            log.warning("Cannot read template %s: %s", path, e)
            return None

        try:
            img = decode_image(data)
        except ImageDecodeError as e:
            log.warning("Template %s is corrupt: %s", path, e.reason)
            audit("template.corrupt", logger=log, country=code, path=str(path))
            return None
        return img.convert("RGBA")

    def available(self) -> list[str]:
        """Country codes with a template file present, sorted."""
        if not self.directory.is_dir():
            return []
        return sorted(
            p.name[len(TEMPLATE_PREFIX):-len(TEMPLATE_EXTENSION)]
            for p in self.directory.iterdir()
            if p.is_file()
            and p.name.startswith(TEMPLATE_PREFIX)
            and p.name.endswith(TEMPLATE_EXTENSION)
        )


class TemplateCache:
    """Decoded templates keyed by country code.

    Each key is loaded at most once even under concurrent first access;
    later callers get the very same image object, which must be treated as
    read-only (the compositor works on a copy). Misses are cached too.
    """

    def __init__(self, loader: TemplateLoader):
        self._loader = loader
        self._lock = threading.Lock()
        self._key_locks: dict[str, threading.Lock] = {}
        self._entries: dict[str, Image.Image | None] = {}
        self.loads = 0

    def get(self, code: str) -> Image.Image | None:
        with self._lock:
            if code in self._entries:
                return self._entries[code]
            key_lock = self._key_locks.setdefault(code, threading.Lock())

        with key_lock:
            with self._lock:
                if code in self._entries:
                    return self._entries[code]
            img = self._loader(code)
            with self._lock:
                self.loads += 1
                self._entries[code] = img
                self._key_locks.pop(code, None)
            audit("template.cached", logger=log, country=code, hit=img is not None)
            return img

    def __contains__(self, code: str) -> bool:
        with self._lock:
            return code in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self):
        with self._lock:
            self._entries.clear()
            self._key_locks.clear()


@trace
def synthesize_template(profile: CountryProfile) -> Image.Image:
    """Draw a generic base-size template for *profile*.

    Paper background, a 2 px border and one horizontal rule in the accent
    color, the centered country title, the field labels and a square seal
    block near the bottom-right corner.
    """
    width, height = TEMPLATE_SIZE
    accent = (*hex_to_rgb(profile.color), 255)

    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[...] = (*hex_to_rgb(PAPER_COLOR), 255)

    b = BORDER_WIDTH
    canvas[:b, :] = accent
    canvas[height - b:, :] = accent
    canvas[:, :b] = accent
    canvas[:, width - b:] = accent

    canvas[RULE_Y, RULE_INSET:width - RULE_INSET] = accent

    seal_x, seal_y = width - SEAL_INSET, height - SEAL_INSET
    canvas[max(seal_y, 0):seal_y + SEAL_SIZE, max(seal_x, 0):seal_x + SEAL_SIZE] = accent

    image = Image.fromarray(canvas)

    title = render_text(profile.name, profile.color)
    paste_layer(image, title, (width - title.width) // 2, TITLE_Y)

    label_color = profile.label_color(profile.text_color)
    for spec in profile.fields.values():
        if spec.label:
            paste_layer(image, render_text(spec.label, label_color),
                        LABEL_X, spec.y - BASELINE_OFFSET)

    audit("template.synthesized", logger=log, country=profile.code)
    return image


def acquire_template(profile: CountryProfile, templates=None) -> Image.Image:
    """Return a private, base-size RGBA copy of *profile*'s template.

    *templates* is anything with ``get(code)`` (usually a ``TemplateCache``)
    or a plain loader callable; without it the template is synthesized.
    """
    found = None
    if templates is not None:
        getter = getattr(templates, "get", templates)
        found = getter(profile.code)

    if found is None:
        base = synthesize_template(profile)
    else:
        base = found.convert("RGBA") if found.mode != "RGBA" else found.copy()

    if base.size != TEMPLATE_SIZE:
        log.info("Resizing %s template from %dx%d", profile.code, *base.size)
        base = resize_nearest(base, TEMPLATE_SIZE)
    return base
