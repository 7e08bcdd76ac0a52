"""Unit tests for field placement and compositing primitives."""

import numpy as np
import pytest
from PIL import Image

from pixpass.codec import hex_to_rgb, to_data_url
from pixpass.compositor import FieldValues, draw_fields, field_position, load_photo
from pixpass.config import PALETTE, PHOTO_SIZE, TEMPLATE_SIZE
from pixpass.exceptions import ImageDecodeError, PhotoDimensionError
from pixpass.pixelfont import measure_text
from pixpass.profiles import PROFILES, FieldSpec
from pixpass.raster import paste_layer, round_px, upscale


def _blank():
    return Image.new("RGBA", TEMPLATE_SIZE, (0, 0, 0, 0))


def _ink_bbox(img):
    alpha = np.asarray(img)[..., 3]
    ys, xs = np.nonzero(alpha)
    return xs.min(), ys.min(), xs.max(), ys.max()


class TestPasteLayer:
    """Tests for paste_layer."""

    def test_places_at_offset(self):
        base = Image.new("RGBA", (10, 10), (0, 0, 0, 255))
        paste_layer(base, Image.new("RGBA", (2, 3), (255, 0, 0, 255)), 4, 5)
        arr = np.asarray(base)
        assert (arr[5:8, 4:6, 0] == 255).all()
        assert arr[..., 0].sum() == 255 * 6

    def test_transparent_pixels_keep_base(self):
        base = Image.new("RGBA", (4, 4), (1, 2, 3, 255))
        paste_layer(base, Image.new("RGBA", (4, 4), (0, 0, 0, 0)), 0, 0)
        assert set(base.getdata()) == {(1, 2, 3, 255)}

    def test_clips_outside_bounds(self):
        base = Image.new("RGBA", (4, 4), (0, 0, 0, 255))
        paste_layer(base, Image.new("RGBA", (3, 3), (255, 255, 255, 255)), -2, 3)
        arr = np.asarray(base)[..., 0]
        assert arr[3, 0] == 255
        assert arr.sum() == 255

    def test_fully_outside_is_noop(self):
        base = Image.new("RGBA", (4, 4), (0, 0, 0, 255))
        paste_layer(base, Image.new("RGBA", (3, 3), (255, 255, 255, 255)), 10, 10)
        assert np.asarray(base)[..., 0].sum() == 0

    def test_rounds_half_up(self):
        assert round_px(2.5) == 3
        assert round_px(2.4) == 2
        assert round_px(-0.5) == 0


class TestUpscale:
    """Tests for integer upscaling."""

    def test_each_pixel_becomes_block(self):
        src = Image.new("RGBA", (2, 1), (0, 0, 0, 255))
        src.putpixel((1, 0), (255, 255, 255, 255))
        arr = np.asarray(upscale(src, 3))
        assert arr.shape[:2] == (3, 6)
        assert (arr[:, :3, 0] == 0).all() and (arr[:, 3:, 0] == 255).all()

    @pytest.mark.parametrize("factor", [0, 2.5, -1])
    def test_bad_factor(self, factor):
        with pytest.raises(ValueError):
            upscale(Image.new("RGBA", (1, 1)), factor)


class TestFieldPlacement:
    """Tests for field positions and draw_fields."""

    def test_left_aligned_position(self):
        assert field_position(FieldSpec(66, 105, 10), 40) == (66, 97)

    def test_right_aligned_position(self):
        assert field_position(FieldSpec(121, 155, 10, align="right"), 53) == (68, 147)

    def test_right_aligned_number_ends_at_anchor(self):
        img = draw_fields(_blank(), PROFILES["antegria"], {"number": "ab12-cd34ef56"})
        x0, y0, x1, y1 = _ink_bbox(img)
        assert x1 == 121 - 1
        assert x0 == 121 - measure_text("AB12C-D34EF")
        assert y0 >= 155 - 8 and y1 < 155

    def test_left_aligned_starts_at_anchor(self):
        img = draw_fields(_blank(), PROFILES["arstotzka"], {"city": "Paradizna"})
        x0, y0, _, y1 = _ink_bbox(img)
        assert x0 == 66
        assert 121 - 8 <= y0 and y1 < 121

    def test_empty_values_skipped(self):
        img = draw_fields(_blank(), PROFILES["arstotzka"], FieldValues(name="", sex=""))
        assert not np.asarray(img)[..., 3].any()

    def test_colors_follow_profile_policy(self):
        values = {"name": "John Smith", "dob": "1/2/1980"}
        img = draw_fields(_blank(), PROFILES["obristan"], values)
        arr = np.asarray(img)
        name_y = PROFILES["obristan"].fields["name"].y
        dob_y = PROFILES["obristan"].fields["dob"].y
        name_colors = {tuple(int(v) for v in p[:3]) for p in arr[name_y - 8:name_y].reshape(-1, 4) if p[3]}
        dob_colors = {tuple(int(v) for v in p[:3]) for p in arr[dob_y - 8:dob_y].reshape(-1, 4) if p[3]}
        assert name_colors == {hex_to_rgb(PALETTE.dark)}
        assert dob_colors == {hex_to_rgb("#efe4dd")}

    def test_field_values_from_mapping_ignores_unknown(self):
        values = FieldValues.from_mapping({"name": "A B", "extra": "x", "sex": None})
        assert values.to_dict() == {
            "name": "A B", "dob": "", "sex": "", "city": "", "number": "", "expiry": "",
        }


class TestLoadPhoto:
    """Tests for load_photo."""

    def test_accepts_bytes_data_url_and_image(self, photo_png, photo_image):
        for photo in (photo_png, to_data_url(photo_png), photo_image):
            img = load_photo(photo)
            assert img.size == PHOTO_SIZE and img.mode == "RGBA"

    def test_wrong_size(self):
        with pytest.raises(PhotoDimensionError):
            load_photo(Image.new("RGB", (80, 96)))

    def test_garbage(self):
        with pytest.raises(ImageDecodeError):
            load_photo(b"nope")
