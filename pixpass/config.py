"""Fixed document geometry, palette and processing limits, plus runtime settings."""

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Palette:
    """The two-tone photo palette. ``dark`` doubles as the default text ink."""
    light: str = "#ac9f9b"
    dark: str = "#625252"


PALETTE = Palette()

# Document geometry (base resolution, before export upscaling)
TEMPLATE_SIZE: tuple[int, int] = (130, 162)
PHOTO_SIZE: tuple[int, int] = (40, 48)
EXPORT_SCALE = 6

# Text layout
GLYPH_HEIGHT = 8
GLYPH_SPACING = 1
MISSING_GLYPH_WIDTH = 3
BASELINE_OFFSET = 8

# Synthetic template drawing
PAPER_COLOR = "#d4c8be"
BORDER_WIDTH = 2
RULE_Y = 20
RULE_INSET = 10
TITLE_Y = 5
LABEL_X = 5
SEAL_SIZE = 15
SEAL_INSET = 25

# Template asset naming: <prefix><country code><extension>
TEMPLATE_PREFIX = "passport_"
TEMPLATE_EXTENSION = ".png"

# Source image limits
PNG_COMPRESS_LEVEL = 9
MAX_UPLOAD_MB = 10
ALLOWED_FORMATS = frozenset({"JPEG", "PNG", "GIF"})
# Pillow names multi-picture JPEGs (phone cameras) MPO
FORMAT_ALIASES = {"MPO": "JPEG"}
# Modes PNG cannot store; written as RGB
NON_PNG_MODES = frozenset({"CMYK", "YCbCr", "LAB"})
# Greyscale modes wider than 8 bits, read on a 16-bit scale
HIGH_BIT_MODES = frozenset({"I;16", "I;16B", "I;16L", "I;16N", "I", "F"})
DEFAULT_THRESHOLD = 0.5

SERVICE_NAME = "pixpass"
VERSION = "2.3.0"


def _env_flag(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Runtime settings for the CLI and HTTP surface."""
    template_dir: Path | None = None
    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "INFO"
    log_file: str | None = None
    json_logs: bool = False

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        env = os.environ if environ is None else environ
        template_dir = env.get("PIXPASS_TEMPLATE_DIR")
        return cls(
            template_dir=Path(template_dir) if template_dir else None,
            host=env.get("PIXPASS_HOST", cls.host),
            port=int(env.get("PORT", cls.port)),
            log_level=env.get("PIXPASS_LOG_LEVEL", cls.log_level),
            log_file=env.get("PIXPASS_LOG_FILE") or None,
            json_logs=_env_flag(env.get("PIXPASS_LOG_JSON")),
        )
