"""Shared fixtures: a synthetic font and in-memory test images."""

import string
from io import BytesIO

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from PIL import Image

from imprint.io import FontResource

UPM = 1000
ASCENT = 800
DESCENT = 200
ADVANCE = 600
DESCENDER_CHARS = "gjpqy"
FONT_CHARS = string.ascii_letters + string.digits + ",."


def _box_glyph(x_min: int, y_min: int, x_max: int, y_max: int):
    """Create a rectangular TrueType glyph."""
    pen = TTGlyphPen(None)
    pen.moveTo((x_min, y_min))
    pen.lineTo((x_min, y_max))
    pen.lineTo((x_max, y_max))
    pen.lineTo((x_max, y_min))
    pen.closePath()
    return pen.glyph()


def build_test_font() -> bytes:
    """Build a small TrueType font where every glyph is a box.

    Letters span 50..550 horizontally and 0..700 vertically (descender
    letters reach down to -100), with a 600 unit advance. Characters not in
    the font, such as Thai text, fall back to the .notdef box.
    """
    names = {char: f"uni{ord(char):04X}" for char in FONT_CHARS}
    glyph_order = [".notdef", "space", *names.values()]

    glyphs = {
        ".notdef": _box_glyph(50, 0, 450, 700),
        "space": TTGlyphPen(None).glyph(),
    }
    for char, name in names.items():
        bottom = -100 if char in DESCENDER_CHARS else 0
        glyphs[name] = _box_glyph(50, bottom, 550, 700)

    builder = FontBuilder(UPM, isTTF=True)
    builder.setupGlyphOrder(glyph_order)
    builder.setupCharacterMap({ord(" "): "space", **{ord(c): n for c, n in names.items()}})
    builder.setupGlyf(glyphs)
    builder.setupHorizontalMetrics({name: (ADVANCE, 50) for name in glyph_order})
    builder.setupHorizontalHeader(ascent=ASCENT, descent=-DESCENT)
    builder.setupNameTable({"familyName": "Imprint Test", "styleName": "Regular"})
    builder.setupOS2(
        sTypoAscender=ASCENT,
        sTypoDescender=-DESCENT,
        usWinAscent=ASCENT,
        usWinDescent=DESCENT,
    )
    builder.setupPost()

    buffer = BytesIO()
    builder.save(buffer)
    return buffer.getvalue()


def _make_image(
    size: tuple[int, int],
    color: tuple[int, int, int, int] = (40, 90, 160, 255),
) -> Image.Image:
    """Create a solid RGBA image."""
    return Image.new("RGBA", size, color)


def _make_gradient(size: tuple[int, int]) -> Image.Image:
    """Create an opaque RGBA image whose pixels vary with position."""
    width, height = size
    image = Image.new("RGBA", size)
    image.putdata(
        [
            ((x * 255) // max(1, width - 1), (y * 255) // max(1, height - 1), 128, 255)
            for y in range(height)
            for x in range(width)
        ]
    )
    return image


def _to_bytes(image: Image.Image, image_format: str = "PNG") -> bytes:
    """Encode an image for pipeline input."""
    buffer = BytesIO()
    if image_format == "JPEG":
        image = image.convert("RGB")
    image.save(buffer, format=image_format)
    return buffer.getvalue()


@pytest.fixture(scope="session")
def font_bytes() -> bytes:
    """Raw bytes of the synthetic test font."""
    return build_test_font()


@pytest.fixture(scope="session")
def font(font_bytes: bytes) -> FontResource:
    """Shared font resource for the synthetic test font."""
    return FontResource.from_bytes(font_bytes, source="imprint-test.ttf")


@pytest.fixture
def base_image() -> Image.Image:
    """An 800x600 opaque image."""
    return _make_gradient((800, 600))


@pytest.fixture
def make_image():
    """Factory for solid RGBA images."""
    return _make_image


@pytest.fixture
def make_gradient():
    """Factory for position-dependent opaque images."""
    return _make_gradient


@pytest.fixture
def to_bytes():
    """Encoder for pipeline input bytes."""
    return _to_bytes
