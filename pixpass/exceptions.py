"""Exception hierarchy for pixpass.

Input validation errors are reported back to the caller as-is; render and
codec errors abort the current request. Missing or corrupt template assets
never surface here: they are recovered by template synthesis.
"""


class PixpassError(Exception):
    """Base exception for all pixpass errors."""

    pass


class InputValidationError(PixpassError):
    """Caller-supplied input was rejected."""

    pass


class EmptyImageError(InputValidationError):
    """The image buffer was empty."""

    def __init__(self) -> None:
        super().__init__("Empty image buffer")


class ImageFormatError(InputValidationError):
    """The image decoded but its format is not accepted."""

    def __init__(self, fmt: str | None, allowed) -> None:
        self.format = fmt
        self.allowed = sorted(allowed)
        super().__init__(
            f"Image format not allowed: {fmt}. Allowed formats: {', '.join(self.allowed)}"
        )


class ImageTooLargeError(InputValidationError):
    """The image buffer exceeds the upload limit."""

    def __init__(self, size_bytes: int, limit_mb: int) -> None:
        self.size_bytes = size_bytes
        self.limit_mb = limit_mb
        super().__init__(
            f"Image exceeds maximum size of {limit_mb}MB "
            f"(current: {size_bytes / (1024 * 1024):.2f}MB)"
        )


class PhotoDimensionError(InputValidationError):
    """A photo does not have the exact portrait dimensions."""

    def __init__(self, width: int, height: int, expected: tuple[int, int]) -> None:
        self.width = width
        self.height = height
        self.expected = expected
        super().__init__(
            f"Image must be exactly {expected[0]}x{expected[1]} pixels. "
            f"Current size: {width}x{height}"
        )


class UnknownCountryError(InputValidationError):
    """No layout profile exists for the country code."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"Country not configured: {code}")


class ThresholdError(InputValidationError):
    """The luminance threshold is not a usable number."""

    def __init__(self, value) -> None:
        self.value = value
        super().__init__(f"Invalid threshold: {value!r}")


class RenderError(PixpassError):
    """Raster processing failed."""

    pass


class ImageDecodeError(RenderError):
    """Bytes could not be decoded into an image."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to decode image: {reason}")


class ImageEncodeError(RenderError):
    """An image could not be encoded."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to encode image: {reason}")
