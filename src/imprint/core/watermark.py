"""Watermark layout, rendering and compositing.

The watermark is drawn on its own square, transparent canvas so it can be
rotated and scaled without touching the base image:

1. Size a bounding box around all lines plus rotation-safe padding
2. Render each line horizontally centered, stacked top to bottom
3. Rotate the canvas about its center with a transparent fill
4. Scale it to a fraction of the base image's shorter side
5. Composite it, centered, over the base image
"""

from collections.abc import Sequence
from dataclasses import dataclass

import structlog
from PIL import Image

from imprint.config.settings import DEFAULT_ROTATION_PAD, DEFAULT_WATERMARK_ANGLE
from imprint.core.transforms import RESAMPLE, as_rgba, composite_at, rotate
from imprint.domain.color import CLEAR
from imprint.domain.line import TextLine
from imprint.utils.numeric import is_normal, max_normal, safe_max, sum_normal

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class WatermarkLayout:
    """Geometry of the unrotated watermark canvas.

    Attributes:
        padding: Margin around the text block on every side
        box_width: Widest line plus horizontal padding
        box_height: Sum of line heights plus vertical padding
        canvas_size: Side of the square canvas
        origins: Top-left drawing position of each line
    """

    padding: float
    box_width: float
    box_height: float
    canvas_size: int
    origins: tuple[tuple[int, int], ...]


def layout_watermark(
    lines: Sequence[TextLine],
    rotation_pad: float = DEFAULT_ROTATION_PAD,
) -> WatermarkLayout:
    """Compute the watermark canvas geometry for a set of lines.

    Padding is the larger of the first line's ascent and the last line's
    descent, plus rotation_pad. Degenerate metrics (zero-width lines, NaN)
    are skipped when sizing the box. The canvas is square, using the larger
    box dimension, and the text block is centered vertically within it.

    Args:
        lines: Lines in top-to-bottom order
        rotation_pad: Extra padding reserved for the rotation

    Returns:
        WatermarkLayout for rendering
    """
    top_ascent = lines[0].ascent if lines else 0.0
    bottom_descent = lines[-1].descent if lines else 0.0
    padding = safe_max(top_ascent, bottom_descent) + rotation_pad

    widest = max_normal(line.width for line in lines)
    box_width = (widest if widest is not None else 0.0) + 2.0 * padding
    box_height = sum_normal(line.height for line in lines) + 2.0 * padding
    canvas_size = safe_max(box_width, box_height)

    origins: list[tuple[int, int]] = []
    y = (canvas_size - box_height) * 0.5
    for line in lines:
        width = line.width if is_normal(line.width) else 0.0
        x = padding + (box_width - width) * 0.5
        origins.append((round(x), round(y)))
        # Degenerate heights are skipped here as in sum_normal
        if is_normal(line.height):
            y += line.height

    return WatermarkLayout(
        padding=padding,
        box_width=box_width,
        box_height=box_height,
        canvas_size=max(1, int(canvas_size)),
        origins=tuple(origins),
    )


def render_watermark(lines: Sequence[TextLine], layout: WatermarkLayout) -> Image.Image:
    """Draw lines onto a new transparent square canvas."""
    canvas = Image.new("RGBA", (layout.canvas_size, layout.canvas_size), CLEAR)
    for line, origin in zip(lines, layout.origins, strict=True):
        line.font.render(canvas, line.color, origin, line.size, line.text)
    return canvas


def watermark(
    image: Image.Image,
    scale: float,
    lines: Sequence[TextLine],
    angle: float = DEFAULT_WATERMARK_ANGLE,
    rotation_pad: float = DEFAULT_ROTATION_PAD,
) -> Image.Image:
    """Composite multi-line text as a rotated watermark over an image.

    Args:
        image: Base image
        scale: Fraction of the shorter base side covered by the watermark
        lines: Lines in top-to-bottom order
        angle: Rotation of the watermark in radians (clockwise positive)
        rotation_pad: Extra padding reserved for the rotation

    Returns:
        New image with the same size as the base
    """
    base = as_rgba(image)
    base_w, base_h = base.size

    layout = layout_watermark(lines, rotation_pad=rotation_pad)
    mark = render_watermark(lines, layout)
    mark = rotate(mark, angle, fill=CLEAR)

    target = round(min(base_w, base_h) * scale)
    logger.debug(
        "Watermark layout",
        lines=len(lines),
        padding=round(layout.padding, 2),
        canvas_size=layout.canvas_size,
        target_size=target,
    )
    if target < 1:
        return base.copy()

    mark = mark.resize((target, target), RESAMPLE)
    return composite_at(base, mark, (base_w - target) // 2, (base_h - target) // 2)
