"""Domain models for imprint.

This module contains the values the pipeline works with. All models are
immutable (frozen dataclasses) so they can be shared between threads that
process different images.

Key classes:
- Color: RGBA tuple, with CLEAR, BLACK and WHITE constants
- TextLine: One line of watermark text with precomputed metrics
- Scale, ScaleExact, Rotate, Crop, CropExact, PaperPaste, Watermark, Stamp:
  the closed set of pipeline operations
- WatermarkParams: Builder-style watermark configuration
"""

from imprint.domain.color import BLACK, CLEAR, WHITE, Color, color_from, parse_color
from imprint.domain.line import TextLine, layout_line
from imprint.domain.operation import (
    Crop,
    CropExact,
    Operation,
    PaperPaste,
    Rotate,
    Scale,
    ScaleExact,
    Stamp,
    Watermark,
    WatermarkParams,
)

__all__: list[str] = [
    # Colors
    "BLACK",
    "CLEAR",
    "WHITE",
    "Color",
    "color_from",
    "parse_color",
    # Text
    "TextLine",
    "layout_line",
    # Operations
    "Crop",
    "CropExact",
    "Operation",
    "PaperPaste",
    "Rotate",
    "Scale",
    "ScaleExact",
    "Stamp",
    "Watermark",
    "WatermarkParams",
]
