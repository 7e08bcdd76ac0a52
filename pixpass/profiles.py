"""Per-country document layouts: colors, photo anchor, field positions and cities.

Profiles are built once at import and never mutated. Field coordinates are
in base-template pixels; ``y`` is the anchor line the 8-px text run sits
on. Only the document number of Antegria is right-aligned, but alignment
is a per-field attribute and works for any field.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from pixpass.config import PALETTE
from pixpass.exceptions import UnknownCountryError

FIELD_NAMES = ("name", "dob", "sex", "city", "number", "expiry")

DEFAULT_TEXT_COLOR = "#2c2e2a"


@dataclass(frozen=True)
class FieldSpec:
    x: int
    y: int
    max_length: int
    align: str | None = None
    label: str | None = None

    @property
    def right_aligned(self) -> bool:
        return self.align == "right"

    def to_dict(self) -> dict:
        out = {"x": self.x, "y": self.y, "maxLength": self.max_length}
        if self.align:
            out["align"] = self.align
        return out


@dataclass(frozen=True)
class CountryProfile:
    """Layout and colors of one country's document.

    ``ink_color`` colors field values and ``text_color`` the printed labels
    of a synthesized template. When ``label_color_override`` is set it
    replaces both for every field except the holder's name.
    """
    code: str
    name: str
    display_name: str
    color: str
    seal: str
    photo_anchor: tuple[int, int]
    fields: Mapping[str, FieldSpec]
    allowed_cities: tuple[str, ...]
    text_color: str = DEFAULT_TEXT_COLOR
    ink_color: str = PALETTE.dark
    label_color_override: str | None = None

    def label_color(self, normal: str) -> str:
        return self.label_color_override or normal

    def field_color(self, field_name: str) -> str:
        if field_name == "name":
            return self.ink_color
        return self.label_color(self.ink_color)

    def is_allowed_city(self, city: str) -> bool:
        wanted = city.strip().casefold()
        return any(c.casefold() == wanted for c in self.allowed_cities)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "displayName": self.display_name,
            "color": self.color,
            "seal": self.seal,
            "textColor": self.text_color,
            "photoPosition": {"x": self.photo_anchor[0], "y": self.photo_anchor[1]},
            "fields": {k: v.to_dict() for k, v in self.fields.items()},
            "allowedCities": list(self.allowed_cities),
        }


def _fields(name, dob, sex, city, number, expiry, number_align=None) -> Mapping[str, FieldSpec]:
    """Build the standard six-field layout from (x, y) anchors."""
    return MappingProxyType({
        "name": FieldSpec(*name, max_length=20),
        "dob": FieldSpec(*dob, max_length=10, label="DOB:"),
        "sex": FieldSpec(*sex, max_length=1, label="SEX:"),
        "city": FieldSpec(*city, max_length=15, label="ISS:"),
        "number": FieldSpec(*number, max_length=10 if number_align else 9, align=number_align),
        "expiry": FieldSpec(*expiry, max_length=10, label="EXP:"),
    })


_PROFILES = [
    CountryProfile(
        code="antegria", name="ANTEGRIA", display_name="Antegria",
        color="#483d8b", seal="●", photo_anchor=(83, 88),
        fields=_fields((8, 146), (25, 108), (25, 117), (25, 126), (121, 155), (25, 135),
                       number_align="right"),
        allowed_cities=("St. Marmero", "Glorian", "Outer Grouse"),
    ),
    CountryProfile(
        code="arstotzka", name="ARSTOTZKA", display_name="Arstotzka",
        color="#8b2635", seal="★", photo_anchor=(8, 98),
        fields=_fields((8, 95), (66, 105), (66, 113), (66, 121), (8, 155), (66, 129)),
        allowed_cities=("Orvech Vonor", "East Grestin", "Paradizna"),
    ),
    CountryProfile(
        code="impor", name="IMPOR", display_name="Impor",
        color="#8b4513", seal="■", photo_anchor=(9, 96),
        fields=_fields((8, 93), (70, 103), (70, 111), (70, 119), (66, 153), (70, 127)),
        allowed_cities=("Enkyo", "Haihan", "Tsunkeido"),
    ),
    CountryProfile(
        code="kolechia", name="KOLECHIA", display_name="Kolechia",
        color="#2c5aa0", seal="▲", photo_anchor=(8, 106),
        fields=_fields((8, 105), (69, 114), (69, 122), (69, 130), (68, 155), (69, 138)),
        allowed_cities=("Yurko City", "Vedor", "West Grestin"),
    ),
    CountryProfile(
        code="obristan", name="OBRISTAN", display_name="Obristan",
        color="#efe4dd", seal="◆", photo_anchor=(84, 107),
        fields=_fields((8, 106), (27, 118), (27, 126), (27, 134), (10, 155), (27, 142)),
        allowed_cities=("Skal", "Lorndaz", "Mergerous"),
        label_color_override="#efe4dd",
    ),
    CountryProfile(
        code="republia", name="REPUBLIA", display_name="Republia",
        color="#b8860b", seal="▼", photo_anchor=(85, 96),
        fields=_fields((8, 94), (27, 105), (27, 113), (27, 121), (67, 155), (27, 129)),
        allowed_cities=("True Glorian", "Lesrenadi", "Bostan"),
    ),
    CountryProfile(
        code="united_federation", name="UNITED FEDERATION", display_name="United Federation",
        color="#2f4f4f", seal="✦", photo_anchor=(8, 106),
        fields=_fields((8, 105), (69, 113), (69, 121), (69, 129), (68, 155), (69, 137)),
        allowed_cities=("Great Rapid", "Shingleton", "Korista City"),
    ),
]

PROFILES: Mapping[str, CountryProfile] = MappingProxyType({p.code: p for p in _PROFILES})


def get_profile(code: str) -> CountryProfile:
    try:
        return PROFILES[code]
    except (KeyError, TypeError):
        raise UnknownCountryError(str(code)) from None
