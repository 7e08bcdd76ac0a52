"""Field value normalizers applied before text rendering."""

import re

from pixpass.logging import get_logger
from pixpass.profiles import FieldSpec

log = get_logger("normalize")

_DATE_RE = re.compile(r"^[0-9]{2}\.[0-9]{2}\.[0-9]{4}$")
_DATE_SEPARATORS = re.compile(r"[-/.]")
_NON_DIGITS = re.compile(r"[^0-9]")
_NON_ALNUM = re.compile(r"[^A-Z0-9]")

NUMBER_MAX_CHARS = 10
NUMBER_GROUP = 5
NUMBER_MIN_CHARS = 8


def format_name(value: str) -> str:
    """``"John Q Public"`` -> ``"Public, John Q"``.

    Values that already contain a comma and single words are returned as given.
    """
    if "," in value:
        return value
    parts = value.strip().split(" ")
    if len(parts) >= 2:
        return f"{parts[-1]}, {' '.join(parts[:-1])}"
    return value


def format_date(value: str) -> str:
    """Coerce a date to ``DD.MM.YYYY``; unrecognised input passes through."""
    if _DATE_RE.match(value):
        return value

    parts = _DATE_SEPARATORS.split(value)
    if len(parts) == 3:
        day, month, year = parts
        return f"{day.rjust(2, '0')}.{month.rjust(2, '0')}.{year}"

    digits = _NON_DIGITS.sub("", value)
    if len(digits) >= 8:
        return f"{digits[0:2]}.{digits[2:4]}.{digits[4:8]}"

    return value


def format_number(value: str) -> str:
    """Uppercase, keep ``[A-Z0-9]``, cap at 10 characters, hyphenate after the 5th."""
    cleaned = _NON_ALNUM.sub("", value.upper())
    if len(cleaned) < NUMBER_MIN_CHARS:
        log.warning("Document number shorter than %d characters: %r", NUMBER_MIN_CHARS, cleaned)

    truncated = cleaned[:NUMBER_MAX_CHARS]
    if len(truncated) > NUMBER_GROUP:
        return f"{truncated[:NUMBER_GROUP]}-{truncated[NUMBER_GROUP:]}"
    return truncated


_FORMATTERS = {
    "name": format_name,
    "dob": format_date,
    "expiry": format_date,
    "sex": str.upper,
    "number": format_number,
}

# Fields that bound their own length instead of using maxLength
_SELF_LIMITING = frozenset({"number"})


def normalize_field(name: str, value: str, spec: FieldSpec) -> str:
    """Normalize *value* for field *name* and bound it to ``spec.max_length``."""
    formatter = _FORMATTERS.get(name)
    text = formatter(value) if formatter else value
    if name in _SELF_LIMITING:
        return text
    return text[:spec.max_length]
