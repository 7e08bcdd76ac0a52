"""pixpass: two-tone pixel-art portraits composited onto pixel-perfect identity documents."""

from pixpass.compositor import FieldValues, generate_document, generate_document_image
from pixpass.pixelfont import render_text
from pixpass.pixelizer import stylize, validate_preprocessed
from pixpass.profiles import PROFILES, CountryProfile, FieldSpec, get_profile
from pixpass.templates import FileTemplateSource, TemplateCache

__version__ = "2.3.0"

__all__ = [
    "CountryProfile",
    "FieldSpec",
    "FieldValues",
    "FileTemplateSource",
    "PROFILES",
    "TemplateCache",
    "generate_document",
    "generate_document_image",
    "get_profile",
    "render_text",
    "stylize",
    "validate_preprocessed",
]
