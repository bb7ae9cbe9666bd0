"""Imprint - Watermark, crop, scale and mount raster images.

Imprint applies an ordered pipeline of geometric and compositing operations
to a raster image. Its main use is producing ID-card or certificate scans
with a rotated, multi-line text watermark, optionally mounted on a larger
paper canvas for print layout.

Example:
    $ imprint id_card.jpg --font Athiti-Bold.ttf --line "For KYC only" \\
        --op crop=0.9,0.9 --op watermark=0.9

This will create id_card-imprinted.png with the watermark composited on top.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
