"""Document compositor.

Builds the final document as a fixed sequence of pastes onto one base
buffer at template resolution: template, portrait, then one text run per
field. The finished base image is enlarged by ``EXPORT_SCALE`` with
nearest-neighbor sampling and encoded as PNG.
"""

from dataclasses import asdict, dataclass, fields as dataclass_fields
from typing import Mapping

from PIL import Image

from pixpass.codec import decode_data_url, decode_image, encode_png
from pixpass.config import BASELINE_OFFSET, EXPORT_SCALE
from pixpass.logging import audit, get_logger, trace
from pixpass.normalize import normalize_field
from pixpass.pixelfont import render_text
from pixpass.pixelizer import check_photo_size
from pixpass.profiles import CountryProfile, get_profile
from pixpass.raster import paste_layer, upscale
from pixpass.templates import acquire_template

log = get_logger("compositor")


@dataclass(frozen=True)
class FieldValues:
    """Raw, un-normalized field input for one document."""
    name: str = ""
    dob: str = ""
    sex: str = ""
    city: str = ""
    number: str = ""
    expiry: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping) -> "FieldValues":
        known = {f.name for f in dataclass_fields(cls)}
        return cls(**{k: str(v) for k, v in data.items() if k in known and v is not None})

    def get(self, name: str) -> str:
        return getattr(self, name, "") or ""

    def to_dict(self) -> dict:
        return asdict(self)


def load_photo(photo) -> Image.Image:
    """Decode a stylized portrait given as an image, PNG bytes or a base64 data URL.

    The portrait must already have the exact photo dimensions.
    """
    if isinstance(photo, Image.Image):
        img = photo
    elif isinstance(photo, str):
        img = decode_image(decode_data_url(photo))
    else:
        img = decode_image(bytes(photo))
    check_photo_size(img)
    return img.convert("RGBA")


def field_position(spec, run_width: int) -> tuple[int, int]:
    """Top-left of a text run: right-aligned runs end exactly at ``spec.x``."""
    x = spec.x - run_width if spec.right_aligned else spec.x
    return x, spec.y - BASELINE_OFFSET


def draw_fields(image: Image.Image, profile: CountryProfile, values) -> Image.Image:
    """Render every supplied field value of *profile* onto *image* in place."""
    if isinstance(values, Mapping):
        values = FieldValues.from_mapping(values)

    for name, spec in profile.fields.items():
        raw = values.get(name)
        if not raw:
            continue
        text = normalize_field(name, raw, spec)
        run = render_text(text, profile.field_color(name))
        x, y = field_position(spec, run.width)
        log.debug("field %s=%r at (%d, %d)", name, text, x, y)
        paste_layer(image, run, x, y)
    return image


def compose_document(profile: CountryProfile, photo: Image.Image, values, templates=None) -> Image.Image:
    """Assemble the document at base (template) resolution."""
    image = acquire_template(profile, templates)
    ax, ay = profile.photo_anchor
    paste_layer(image, photo, ax, ay)
    return draw_fields(image, profile, values)


@trace
def generate_document_image(country: str, photo, values, templates=None,
                            scale: int = EXPORT_SCALE) -> Image.Image:
    """Compose and upscale a document; see ``generate_document``."""
    profile = get_profile(country)
    portrait = load_photo(photo)
    base = compose_document(profile, portrait, values, templates)
    final = upscale(base, scale)
    audit("document.generated", logger=log, country=profile.code,
          size=f"{final.width}x{final.height}")
    return final


def generate_document(country: str, photo, values, templates=None) -> bytes:
    """Produce the finished document as PNG bytes.

    Args:
        country: Profile key, e.g. ``"arstotzka"``.
        photo: Stylized portrait (PIL image, PNG bytes or data URL) of exactly
            ``PHOTO_SIZE``.
        values: ``FieldValues`` or a mapping with any of name, dob, sex, city,
            number, expiry.
        templates: Optional template cache or loader; when it has nothing
            for *country* a generic template is synthesized.

    Raises:
        UnknownCountryError: *country* has no profile.
        PhotoDimensionError, ImageDecodeError: the portrait is unusable.
    """
    return encode_png(generate_document_image(country, photo, values, templates))
