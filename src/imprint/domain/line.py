"""Watermark text lines.

A TextLine binds one run of text to a font, size and color, and carries the
pixel metrics the watermark compositor needs to stack and center lines.
"""

import unicodedata
from dataclasses import dataclass, field, replace

from imprint.domain.color import Color
from imprint.io.font import FontResource
from imprint.utils.numeric import safe_max


def layout_line(
    font: FontResource,
    size: float,
    text: str,
    spacing: float = 0.0,
) -> tuple[float, float]:
    """Measure a single line of text.

    The run is laid out from x = 0 with its baseline at the ascent, pushed
    down by the spacing fraction. Width is the rightmost inked pixel; height
    is the lowest inked pixel plus the descent, expanded by ``1 + 2*spacing``
    so the spacing shows above and below the line.

    Args:
        font: Font resource to measure with
        size: Point size
        text: Normalized text of the line
        spacing: Extra spacing as a fraction of the line height

    Returns:
        Tuple of (width, height) in pixels
    """
    ascent, descent = font.vertical_metrics(size)
    baseline = ascent * (1.0 + spacing)

    width = 0.0
    bottom = 0.0
    for _left, _top, right, glyph_bottom in font.glyph_bounds(text, size, (0.0, baseline)):
        width = safe_max(width, right)
        bottom = safe_max(bottom, glyph_bottom)

    return width, (bottom + descent) * (1.0 + 2.0 * spacing)


@dataclass(frozen=True)
class TextLine:
    """One line of watermark text with precomputed metrics.

    Lines are immutable: metrics are computed once on construction from
    (font, size, text, spacing), and with_spacing() returns a new line.
    Text is stored in Unicode NFC form.

    Attributes:
        font: Shared font resource
        size: Point size in pixels
        color: RGBA text color
        text: Line content (NFC normalized)
        spacing: Extra spacing as a fraction of the line height
        width: Rightmost inked pixel of the line
        height: Line height including descent and spacing
        ascent: Font ascent at this size
        descent: Font descent at this size (non-negative)
    """

    font: FontResource
    size: float
    color: Color
    text: str
    spacing: float = 0.0
    width: float = field(init=False)
    height: float = field(init=False)
    ascent: float = field(init=False, repr=False)
    descent: float = field(init=False, repr=False)

    def __post_init__(self) -> None:
        text = unicodedata.normalize("NFC", self.text)
        ascent, descent = self.font.vertical_metrics(self.size)
        width, height = layout_line(self.font, self.size, text, self.spacing)

        object.__setattr__(self, "text", text)
        object.__setattr__(self, "ascent", ascent)
        object.__setattr__(self, "descent", descent)
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "height", height)

    @classmethod
    def new(
        cls,
        font: FontResource | bytes,
        size: float,
        color: Color,
        text: str,
    ) -> "TextLine":
        """Create a line from a font resource or raw font bytes.

        Raises:
            FontLoadError: If font bytes cannot be parsed
        """
        if not isinstance(font, FontResource):
            font = FontResource.from_bytes(font)
        return cls(font=font, size=size, color=color, text=text)

    def with_spacing(self, spacing: float) -> "TextLine":
        """Return a copy of this line with different spacing and fresh metrics."""
        return replace(self, spacing=spacing)
