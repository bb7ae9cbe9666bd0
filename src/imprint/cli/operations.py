"""Parsing of ``--op`` operation specs.

Specs have the form ``name=arg,arg,...`` and map one-to-one onto the
pipeline operations:

    scale=F                 Scale(F)
    scale-exact=W,H         ScaleExact(W, H)
    rotate=RAD              Rotate(RAD)
    crop=FW,FH              Crop(FW, FH)
    crop-exact=W,H          CropExact(W, H)
    paper-paste=PW,PH,X,Y   PaperPaste(PW, PH, X, Y)
    watermark[=S[,RAD]]     Watermark(S, lines, RAD)
    stamp=PATH,X,Y          Stamp(image at PATH, X, Y)
"""

from collections.abc import Callable, Sequence
from dataclasses import fields
from pathlib import Path

from imprint.config import WatermarkConfig
from imprint.domain import (
    Crop,
    CropExact,
    Operation,
    PaperPaste,
    Rotate,
    Scale,
    ScaleExact,
    Stamp,
    TextLine,
    Watermark,
)
from imprint.exceptions import DecodeError, OperationSpecError
from imprint.io import read_image


def _numbers(spec: str, args: str, count: int, convert: Callable[[str], float]) -> list:
    parts = [part.strip() for part in args.split(",")] if args else []
    if len(parts) != count:
        raise OperationSpecError(spec, f"expected {count} value(s), got {len(parts)}")
    try:
        return [convert(part) for part in parts]
    except ValueError as e:
        raise OperationSpecError(spec, str(e)) from e


def parse_operation(
    spec: str,
    lines: Sequence[TextLine] = (),
    watermark_config: WatermarkConfig | None = None,
) -> Operation:
    """Parse a single operation spec.

    Args:
        spec: Operation spec, e.g. "crop=0.9,0.9"
        lines: Text lines used by a watermark operation
        watermark_config: Defaults for watermark scale and angle

    Returns:
        The described operation

    Raises:
        OperationSpecError: If the spec is malformed or names an unknown operation
    """
    config = watermark_config or WatermarkConfig()
    name, _, args = spec.partition("=")
    name = name.strip().lower()
    args = args.strip()

    if name == "scale":
        (factor,) = _numbers(spec, args, 1, float)
        return Scale(factor)
    if name == "scale-exact":
        width, height = _numbers(spec, args, 2, int)
        return ScaleExact(width, height)
    if name == "rotate":
        (angle,) = _numbers(spec, args, 1, float)
        return Rotate(angle)
    if name == "crop":
        fraction_w, fraction_h = _numbers(spec, args, 2, float)
        return Crop(fraction_w, fraction_h)
    if name == "crop-exact":
        width, height = _numbers(spec, args, 2, int)
        return CropExact(width, height)
    if name == "paper-paste":
        paper_w, paper_h, x, y = _numbers(spec, args, 4, int)
        return PaperPaste(paper_w, paper_h, x, y)
    if name == "watermark":
        if not args:
            return Watermark(config.scale, tuple(lines), config.angle)
        if "," in args:
            scale, angle = _numbers(spec, args, 2, float)
        else:
            (scale,) = _numbers(spec, args, 1, float)
            angle = config.angle
        return Watermark(scale, tuple(lines), angle)
    if name == "stamp":
        path, sep, coords = args.rpartition(",")
        path, sep2, x_arg = path.rpartition(",")
        if not (sep and sep2 and path):
            raise OperationSpecError(spec, "expected PATH,X,Y")
        (x,) = _numbers(spec, x_arg, 1, int)
        (y,) = _numbers(spec, coords, 1, int)
        try:
            image = read_image(Path(path))
        except DecodeError as e:
            raise OperationSpecError(spec, e.reason) from e
        return Stamp(image, x, y)

    raise OperationSpecError(spec, f"unknown operation '{name}'")


def describe_operation(operation: Operation) -> str:
    """Short human-readable description of an operation."""
    if isinstance(operation, Watermark):
        plural = "line" if len(operation.lines) == 1 else "lines"
        return (
            f"{operation.kind} {operation.scale:g} "
            f"({len(operation.lines)} {plural}, {operation.angle:g} rad)"
        )
    if isinstance(operation, Stamp):
        return f"{operation.kind} {operation.image.width}×{operation.image.height} at ({operation.x}, {operation.y})"
    values = [getattr(operation, item.name) for item in fields(operation)]
    return f"{operation.kind} " + ",".join(f"{value:g}" for value in values)
