"""Geometric transforms on RGBA rasters.

All functions are pure: they take an image and return a new one, never
mutating their input. Degenerate geometry (oversized crops, tiny scale
factors, offsets outside the canvas) is absorbed rather than rejected:

- Resize targets are clamped to at least 1x1 pixel
- Crop windows larger than the source extend past its edges; the area
  outside the source is transparent
- Pastes and composites outside the canvas are clipped
"""

import math

from PIL import Image

from imprint.domain.color import BLACK, CLEAR, Color

# Pillow has no Gaussian resampling kernel; Lanczos is its high-quality filter
RESAMPLE = Image.Resampling.LANCZOS
ROTATE_RESAMPLE = Image.Resampling.BICUBIC


def as_rgba(image: Image.Image) -> Image.Image:
    """Return the image in RGBA mode (converted copy if needed)."""
    if image.mode == "RGBA":
        return image
    return image.convert("RGBA")


def scale(image: Image.Image, factor: float) -> Image.Image:
    """Resize uniformly by a factor, rounding to the nearest pixel."""
    width, height = image.size
    return scale_exact(image, round(width * factor), round(height * factor))


def scale_exact(image: Image.Image, width: int, height: int) -> Image.Image:
    """Resize to exact dimensions without preserving aspect ratio."""
    size = (max(1, width), max(1, height))
    return as_rgba(image).resize(size, RESAMPLE)


def rotate(image: Image.Image, angle: float, fill: Color = BLACK) -> Image.Image:
    """Rotate about the center, keeping the canvas size.

    Args:
        image: Source image
        angle: Rotation in radians, positive is clockwise on screen
        fill: Color for corners exposed by the rotation

    Returns:
        Rotated image of the same size
    """
    # Pillow rotates counter-clockwise in degrees
    return as_rgba(image).rotate(
        -math.degrees(angle),
        resample=ROTATE_RESAMPLE,
        expand=False,
        fillcolor=fill,
    )


def crop(image: Image.Image, fraction_w: float, fraction_h: float) -> Image.Image:
    """Centered crop to a fraction of the current size (truncated to pixels)."""
    width, height = image.size
    return crop_exact(image, int(width * fraction_w), int(height * fraction_h))


def crop_exact(image: Image.Image, width: int, height: int) -> Image.Image:
    """Centered crop to exact dimensions.

    Offsets are floor((source - target) / 2). A target larger than the
    source gives a negative offset and the window overhangs the source.
    """
    width, height = max(0, width), max(0, height)
    src_w, src_h = image.size
    x, y = (src_w - width) // 2, (src_h - height) // 2
    return as_rgba(image).crop((x, y, x + width, y + height))


def paper_paste(image: Image.Image, paper_w: int, paper_h: int, x: int, y: int) -> Image.Image:
    """Paste the image unchanged onto a new transparent paper canvas."""
    paper = Image.new("RGBA", (max(0, paper_w), max(0, paper_h)), CLEAR)
    paper.paste(as_rgba(image), (x, y))
    return paper


def composite_at(base: Image.Image, overlay: Image.Image, x: int, y: int) -> Image.Image:
    """Source-over composite of overlay onto a copy of base at (x, y).

    Parts of the overlay outside the base are clipped.
    """
    result = as_rgba(base).copy()
    overlay = as_rgba(overlay)

    source = (max(0, -x), max(0, -y))
    dest = (max(0, x), max(0, y))
    if source[0] >= overlay.width or source[1] >= overlay.height:
        return result
    if dest[0] >= result.width or dest[1] >= result.height:
        return result

    result.alpha_composite(overlay, dest=dest, source=source)
    return result


def stamp(image: Image.Image, overlay: Image.Image, x: int, y: int) -> Image.Image:
    """Composite another image (e.g. a signature scan) at an offset."""
    return composite_at(image, overlay, x, y)
