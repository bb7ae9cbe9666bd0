"""Exception hierarchy for Imprint."""


class ImprintError(Exception):
    """Base exception for all Imprint errors."""

    pass


class ImageError(ImprintError):
    """Errors related to decoding or encoding raster images."""

    pass


class DecodeError(ImageError):
    """Input bytes are not a readable raster image."""

    def __init__(self, reason: str, source: str = "<bytes>") -> None:
        self.reason = reason
        self.source = source
        super().__init__(f"Failed to decode image '{source}': {reason}")


class EncodeError(ImageError):
    """Output image could not be serialized."""

    def __init__(self, reason: str, image_format: str = "PNG") -> None:
        self.reason = reason
        self.image_format = image_format
        super().__init__(f"Failed to encode image as {image_format}: {reason}")


class FontError(ImprintError):
    """Errors related to font loading."""

    pass


class FontLoadError(FontError):
    """Font bytes could not be parsed into a usable font."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to load font '{source}': {reason}")


class OperationError(ImprintError):
    """Errors related to describing pipeline operations."""

    pass


class OperationSpecError(OperationError):
    """An operation description could not be parsed."""

    def __init__(self, spec: str, reason: str) -> None:
        self.spec = spec
        self.reason = reason
        super().__init__(f"Invalid operation '{spec}': {reason}")


class ColorError(OperationError):
    """A color value is malformed or out of range."""

    def __init__(self, value: str, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid color '{value}': {reason}")
