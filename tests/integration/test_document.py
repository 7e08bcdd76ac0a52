"""End-to-end tests: photo in, finished document out."""

import io

import numpy as np
import pytest
from PIL import Image

from pixpass.codec import hex_to_rgb
from pixpass.compositor import FieldValues, generate_document, generate_document_image
from pixpass.config import EXPORT_SCALE, PALETTE, PHOTO_SIZE, TEMPLATE_SIZE
from pixpass.exceptions import PhotoDimensionError, UnknownCountryError
from pixpass.pixelizer import stylize
from pixpass.profiles import PROFILES
from pixpass.templates import FileTemplateSource, TemplateCache

FIELDS = FieldValues(
    name="Jorji Costava",
    dob="5/3/1987",
    sex="m",
    city="Orvech Vonor",
    number="ab12-cd34ef56",
    expiry="12.11.1983",
)


class TestGeometry:
    """Final size and photo placement."""

    def test_final_size(self, photo_png):
        img = generate_document_image("arstotzka", photo_png, FIELDS)
        assert img.size == (TEMPLATE_SIZE[0] * EXPORT_SCALE, TEMPLATE_SIZE[1] * EXPORT_SCALE)
        assert img.size == (780, 972)

    def test_photo_lands_at_scaled_anchor(self, photo_png, photo_color):
        arr = np.asarray(generate_document_image("arstotzka", photo_png, FIELDS))
        w, h = PHOTO_SIZE[0] * EXPORT_SCALE, PHOTO_SIZE[1] * EXPORT_SCALE
        block = arr[588:588 + h, 48:48 + w]
        assert (block == photo_color).all()
        assert tuple(arr[588, 47]) != photo_color
        assert tuple(arr[587, 48]) != photo_color
        assert tuple(arr[588 + h, 48]) != photo_color

    def test_hard_pixel_edges(self, photo_png):
        arr = np.asarray(generate_document_image("kolechia", photo_png, FIELDS))
        blocks = arr.reshape(TEMPLATE_SIZE[1], EXPORT_SCALE, TEMPLATE_SIZE[0], EXPORT_SCALE, 4)
        assert (blocks == blocks[:, :1, :, :1, :]).all()

    def test_text_drawn_in_ink(self, photo_png):
        arr = np.asarray(generate_document_image("arstotzka", photo_png, FIELDS, scale=1))
        name = PROFILES["arstotzka"].fields["name"]
        row_band = arr[name.y - 8:name.y, name.x:name.x + 60, :3].reshape(-1, 3)
        assert (row_band == hex_to_rgb(PALETTE.dark)).all(axis=1).any()


class TestDeterminism:
    """Identical inputs produce identical bytes."""

    @pytest.mark.parametrize("country", sorted(PROFILES))
    def test_byte_identical(self, country, photo_png):
        assert generate_document(country, photo_png, FIELDS) == generate_document(country, photo_png, FIELDS)

    def test_full_pipeline_from_source_photo(self, encode_image, gradient_image):
        portrait = stylize(encode_image(gradient_image((320, 240)), "JPEG"), 0.45)
        png = generate_document("impor", portrait, FIELDS.to_dict())
        img = Image.open(io.BytesIO(png))
        assert img.format == "PNG"
        assert img.size == (780, 972)


class TestTemplates:
    """Template assets versus synthesized fallbacks."""

    def test_uses_template_file(self, tmp_path, photo_png):
        Image.new("RGB", TEMPLATE_SIZE, (0, 200, 0)).save(tmp_path / "passport_impor.png")
        cache = TemplateCache(FileTemplateSource(tmp_path))
        arr = np.asarray(generate_document_image("impor", photo_png, {}, cache))
        assert tuple(arr[0, 0]) == (0, 200, 0, 255)

    def test_corrupt_template_falls_back(self, tmp_path, photo_png):
        (tmp_path / "passport_impor.png").write_bytes(b"garbage")
        cache = TemplateCache(FileTemplateSource(tmp_path))
        with_cache = generate_document("impor", photo_png, FIELDS, cache)
        assert with_cache == generate_document("impor", photo_png, FIELDS)

    def test_cached_template_not_mutated(self, photo_png):
        template = Image.new("RGBA", TEMPLATE_SIZE, (0, 200, 0, 255))
        before = template.tobytes()
        cache = TemplateCache(lambda code: template)
        generate_document("arstotzka", photo_png, FIELDS, cache)
        assert template.tobytes() == before


class TestFailures:
    """Input errors surface to the caller."""

    def test_unknown_country_before_template_load(self, photo_png):
        calls = []
        cache = TemplateCache(lambda code: calls.append(code))
        with pytest.raises(UnknownCountryError):
            generate_document("atlantis", photo_png, FIELDS, cache)
        assert calls == []

    def test_wrong_photo_size(self, encode_image):
        with pytest.raises(PhotoDimensionError):
            generate_document("arstotzka", encode_image(Image.new("RGB", (50, 50))), FIELDS)
