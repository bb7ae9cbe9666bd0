"""Pipeline operations.

Each operation is a small immutable value describing one transform. The set
is closed: the pipeline dispatches on the concrete type in a single table
(see imprint.core.pipeline.apply_operation) rather than through methods on
the operations themselves.

Angles are in radians; positive angles rotate clockwise on screen.
"""

from dataclasses import dataclass, field, replace
from typing import ClassVar

from PIL import Image

from imprint.config.settings import DEFAULT_WATERMARK_ANGLE
from imprint.domain.line import TextLine


@dataclass(frozen=True, slots=True)
class Scale:
    """Uniform resize by a factor."""

    kind: ClassVar[str] = "scale"

    factor: float


@dataclass(frozen=True, slots=True)
class ScaleExact:
    """Resize to exact dimensions, ignoring aspect ratio."""

    kind: ClassVar[str] = "scale-exact"

    width: int
    height: int


@dataclass(frozen=True, slots=True)
class Rotate:
    """Rotate about the image center, filling exposed corners with black."""

    kind: ClassVar[str] = "rotate"

    angle: float


@dataclass(frozen=True, slots=True)
class Crop:
    """Centered crop to a fraction of the current size."""

    kind: ClassVar[str] = "crop"

    fraction_w: float
    fraction_h: float


@dataclass(frozen=True, slots=True)
class CropExact:
    """Centered crop to exact dimensions."""

    kind: ClassVar[str] = "crop-exact"

    width: int
    height: int


@dataclass(frozen=True, slots=True)
class PaperPaste:
    """Mount the image on a transparent paper canvas at an offset."""

    kind: ClassVar[str] = "paper-paste"

    paper_w: int
    paper_h: int
    x: int
    y: int


@dataclass(frozen=True, slots=True)
class Watermark:
    """Composite rotated multi-line text over the center of the image.

    Attributes:
        scale: Fraction of the shorter image side covered by the watermark
        lines: Text lines, top to bottom
        angle: Rotation of the watermark canvas
    """

    kind: ClassVar[str] = "watermark"

    scale: float
    lines: tuple[TextLine, ...] = ()
    angle: float = DEFAULT_WATERMARK_ANGLE

    def __post_init__(self) -> None:
        object.__setattr__(self, "lines", tuple(self.lines))


@dataclass(frozen=True, slots=True)
class Stamp:
    """Alpha-composite another image (e.g. a signature) at an offset."""

    kind: ClassVar[str] = "stamp"

    image: Image.Image = field(compare=False)
    x: int = 0
    y: int = 0


Operation = Scale | ScaleExact | Rotate | Crop | CropExact | PaperPaste | Watermark | Stamp


@dataclass(frozen=True)
class WatermarkParams:
    """Watermark parameters assembled step by step.

    Every builder returns a modified copy, so a partially configured value
    can be shared freely. Zero values mean "skip this step".

    Example:
        params = WatermarkParams.scaled(0.9).and_cropped(0.9, 0.9).with_lines(lines)
        ops = params.to_operations()
    """

    mark_scale: float = 0.0
    mark_angle: float = 0.0
    crop_scale: tuple[float, float] = (0.0, 0.0)
    lines: tuple[TextLine, ...] = ()

    @classmethod
    def scaled(cls, mark_scale: float) -> "WatermarkParams":
        return cls().and_scaled(mark_scale)

    def and_scaled(self, mark_scale: float) -> "WatermarkParams":
        return replace(self, mark_scale=mark_scale)

    @classmethod
    def rotated(cls, mark_angle: float) -> "WatermarkParams":
        return cls().and_rotated(mark_angle)

    def and_rotated(self, mark_angle: float) -> "WatermarkParams":
        return replace(self, mark_angle=mark_angle)

    @classmethod
    def cropped(cls, h_scale: float, v_scale: float) -> "WatermarkParams":
        return cls().and_cropped(h_scale, v_scale)

    def and_cropped(self, h_scale: float, v_scale: float) -> "WatermarkParams":
        return replace(self, crop_scale=(h_scale, v_scale))

    @classmethod
    def from_lines(cls, lines: list[TextLine]) -> "WatermarkParams":
        return cls().with_lines(lines)

    def with_lines(self, lines: list[TextLine]) -> "WatermarkParams":
        return replace(self, lines=tuple(lines))

    def to_operations(self) -> list[Operation]:
        """Expand into pipeline operations, skipping zero-valued steps."""
        operations: list[Operation] = []
        if self.crop_scale != (0.0, 0.0):
            operations.append(Crop(*self.crop_scale))
        if self.mark_scale != 0.0:
            operations.append(Watermark(self.mark_scale, self.lines, self.mark_angle))
        return operations

    def __str__(self) -> str:
        parts = []
        if self.mark_scale != 0.0:
            parts.append(f"scale {self.mark_scale!r}")
        if self.mark_angle != 0.0:
            parts.append(f"rotate {self.mark_angle!r}")
        if self.crop_scale != (0.0, 0.0):
            parts.append(f"crop {self.crop_scale!r}")
        return " ".join(parts)
