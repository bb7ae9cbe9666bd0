"""I/O layer for imprint.

This module handles the boundaries of the pipeline: decoding input images,
encoding output images and loading fonts. Pillow does the raster work and
fonttools validates font files.

Key responsibilities:
- Decode PNG/JPEG/... bytes to RGBA rasters
- Encode rasters as PNG
- Parse and share font resources

Key classes and functions:
- FontResource: Shared font data with metrics and rendering
- decode / encode: Raster codec boundary
"""

from imprint.io.font import FontResource
from imprint.io.image import decode, encode, get_imprinted_path, read_image

__all__ = [
    "FontResource",
    "decode",
    "encode",
    "get_imprinted_path",
    "read_image",
]
