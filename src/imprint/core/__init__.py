"""Core processing for imprint.

This module contains the image pipeline:

- Geometric transforms (scale, crop, rotate, paper paste, stamp)
- Watermark layout, rendering and compositing
- The pipeline driver that decodes, applies operations and encodes

All transforms are:
- Pure (they return new images and never mutate their input)
- Free of shared state (safe to run one image per thread)

Key functions:
- apply: Bytes-in, bytes-out pipeline
- apply_operation: Apply one operation to an image
- layout_watermark: Compute watermark canvas geometry
- watermark: Composite a text watermark over an image

Key classes:
- ImageProcessor: Pipeline runner with logging and statistics
- WatermarkLayout: Watermark canvas geometry
"""

from imprint.core.pipeline import (
    ImageProcessor,
    apply,
    apply_operation,
    apply_operations,
)
from imprint.core.transforms import (
    composite_at,
    crop,
    crop_exact,
    paper_paste,
    rotate,
    scale,
    scale_exact,
    stamp,
)
from imprint.core.watermark import (
    WatermarkLayout,
    layout_watermark,
    render_watermark,
    watermark,
)

__all__ = [
    # Pipeline
    "ImageProcessor",
    "apply",
    "apply_operation",
    "apply_operations",
    # Transforms
    "composite_at",
    "crop",
    "crop_exact",
    "paper_paste",
    "rotate",
    "scale",
    "scale_exact",
    "stamp",
    # Watermark
    "WatermarkLayout",
    "layout_watermark",
    "render_watermark",
    "watermark",
]
