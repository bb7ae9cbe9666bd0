"""Shared, read-only font resources.

This module provides the FontResource class, which validates font bytes with
fonttools and hands them to Pillow's FreeType binding for metrics and glyph
rendering.
"""

import threading
from collections import OrderedDict
from io import BytesIO
from pathlib import Path

import structlog
from fontTools.ttLib import TTFont
from PIL import Image, ImageDraw, ImageFont

from imprint.exceptions import FontLoadError

logger = structlog.get_logger(__name__)

GlyphBox = tuple[float, float, float, float]

MAX_CACHED_FACES = 16


class FontResource:
    """Parsed font data shared by every text line that uses it.

    The resource never changes after construction. FreeType faces are
    created lazily per point size and cached, so a single resource can be
    shared between lines, renderers and threads.

    Example:
        font = FontResource.from_path(Path("Athiti-Bold.ttf"))
        ascent, descent = font.vertical_metrics(64.0)
    """

    def __init__(
        self,
        data: bytes,
        family_name: str,
        units_per_em: int,
        font_format: str,
        source: str = "<bytes>",
    ) -> None:
        """Initialize the resource from already validated font bytes.

        Use from_bytes() or from_path() instead of calling this directly.
        """
        self._data = data
        self._family_name = family_name
        self._units_per_em = units_per_em
        self._format = font_format
        self._source = source
        self._faces: OrderedDict[float, ImageFont.FreeTypeFont] = OrderedDict()
        self._lock = threading.Lock()

    @classmethod
    def from_bytes(cls, data: bytes, source: str = "<bytes>") -> "FontResource":
        """Parse font bytes into a resource.

        Every table is decompiled once so truncated or corrupt files fail
        here rather than halfway through rendering.

        Args:
            data: Raw TTF/OTF bytes
            source: Label used in error messages

        Returns:
            FontResource instance

        Raises:
            FontLoadError: If the bytes are not a usable font
        """
        if not data:
            raise FontLoadError(source, "empty font data")

        try:
            font = TTFont(BytesIO(data))
            try:
                for tag in font.keys():
                    font[tag]
                family_name = font["name"].getBestFamilyName() or "unknown"
                units_per_em = font["head"].unitsPerEm
                font_format = "OpenType" if ("CFF " in font or "CFF2" in font) else "TrueType"
            finally:
                font.close()
        except Exception as e:
            raise FontLoadError(source, str(e)) from e

        resource = cls(
            data=bytes(data),
            family_name=family_name,
            units_per_em=units_per_em,
            font_format=font_format,
            source=source,
        )
        # FreeType must accept the font too
        try:
            resource.face(12.0)
        except OSError as e:
            raise FontLoadError(source, str(e)) from e

        logger.debug(
            "Font loaded",
            source=source,
            family=family_name,
            format=font_format,
            upm=units_per_em,
        )
        return resource

    @classmethod
    def from_path(cls, path: Path) -> "FontResource":
        """Read and parse a font file.

        Raises:
            FontLoadError: If the file is missing, unreadable or not a font
        """
        try:
            data = path.read_bytes()
        except OSError as e:
            raise FontLoadError(str(path), str(e)) from e
        return cls.from_bytes(data, source=str(path))

    @property
    def data(self) -> bytes:
        """Raw font bytes."""
        return self._data

    @property
    def family_name(self) -> str:
        """Best family name from the name table."""
        return self._family_name

    @property
    def units_per_em(self) -> int:
        """Font design units per em."""
        return self._units_per_em

    @property
    def format(self) -> str:
        """'TrueType' or 'OpenType' (CFF outlines)."""
        return self._format

    @property
    def source(self) -> str:
        """Where the font bytes came from."""
        return self._source

    def face(self, size: float) -> ImageFont.FreeTypeFont:
        """Get the FreeType face for a point size, creating it on first use.

        At most MAX_CACHED_FACES sizes are kept; the least recently used
        face is dropped first.
        """
        with self._lock:
            face = self._faces.get(size)
            if face is None:
                face = ImageFont.truetype(BytesIO(self._data), size=size)
                self._faces[size] = face
                if len(self._faces) > MAX_CACHED_FACES:
                    self._faces.popitem(last=False)
            else:
                self._faces.move_to_end(size)
            return face

    def vertical_metrics(self, size: float) -> tuple[float, float]:
        """Ascent and descent in pixels at a point size.

        Returns:
            Tuple of (ascent, descent); descent is a non-negative magnitude
        """
        ascent, descent = self.face(size).getmetrics()
        return float(ascent), float(abs(descent))

    def glyph_bounds(
        self,
        text: str,
        size: float,
        origin: tuple[float, float],
    ) -> list[GlyphBox]:
        """Pixel bounding boxes of each inked glyph in a left-to-right run.

        Glyphs are placed on a baseline at ``origin``; the x offset of each
        glyph is the advance of the text before it. Glyphs without ink, such
        as spaces, are omitted.

        Args:
            text: Text to lay out
            size: Point size
            origin: (x, baseline y) of the run

        Returns:
            List of (left, top, right, bottom) boxes in pixels
        """
        face = self.face(size)
        origin_x, origin_y = origin
        boxes: list[GlyphBox] = []

        for index, char in enumerate(text):
            if char.isspace():
                continue
            left, top, right, bottom = face.getbbox(char, anchor="ls")
            if right <= left or bottom <= top:
                continue
            offset = origin_x + face.getlength(text[:index])
            boxes.append((offset + left, origin_y + top, offset + right, origin_y + bottom))

        return boxes

    def render(
        self,
        canvas: Image.Image,
        color: tuple[int, int, int, int],
        origin: tuple[int, int],
        size: float,
        text: str,
    ) -> None:
        """Draw text into a canvas with the ascender line at ``origin``."""
        draw = ImageDraw.Draw(canvas)
        draw.text(origin, text, fill=color, font=self.face(size))

    def __repr__(self) -> str:
        return f"FontResource(family={self._family_name!r}, source={self._source!r})"
