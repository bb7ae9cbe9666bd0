"""Pipeline driver: decode, apply operations in order, encode.

Key components:
- apply_operation: Single dispatch point over the closed operation set
- apply: Bytes-in, bytes-out pipeline
- ImageProcessor: apply() with settings, structured logging and statistics
"""

import time
from collections.abc import Callable, Iterable
from pathlib import Path

import structlog
from PIL import Image

from imprint.config import ImprintSettings
from imprint.core import transforms
from imprint.core.watermark import watermark
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
)
from imprint.exceptions import DecodeError, EncodeError, ImprintError
from imprint.io.image import decode, encode, get_imprinted_path
from imprint.utils import ProcessingLogger, ProcessingStats, configure_logging

logger = structlog.get_logger(__name__)

_HANDLERS: dict[type, Callable[[Image.Image, Operation], Image.Image]] = {
    Scale: lambda image, op: transforms.scale(image, op.factor),
    ScaleExact: lambda image, op: transforms.scale_exact(image, op.width, op.height),
    Rotate: lambda image, op: transforms.rotate(image, op.angle),
    Crop: lambda image, op: transforms.crop(image, op.fraction_w, op.fraction_h),
    CropExact: lambda image, op: transforms.crop_exact(image, op.width, op.height),
    PaperPaste: lambda image, op: transforms.paper_paste(image, op.paper_w, op.paper_h, op.x, op.y),
    Watermark: lambda image, op: watermark(image, op.scale, op.lines, op.angle),
    Stamp: lambda image, op: transforms.stamp(image, op.image, op.x, op.y),
}


def apply_operation(operation: Operation, image: Image.Image) -> Image.Image:
    """Apply a single operation to an image.

    Args:
        operation: One of the pipeline operation values
        image: Input image (not modified)

    Returns:
        New image produced by the operation

    Raises:
        TypeError: If operation is not a pipeline operation
    """
    handler = _HANDLERS.get(type(operation))
    if handler is None:
        raise TypeError(f"Unsupported operation: {type(operation).__name__}")
    return handler(image, operation)


def apply_operations(image: Image.Image, operations: Iterable[Operation]) -> Image.Image:
    """Fold operations left to right over an image."""
    for operation in operations:
        image = apply_operation(operation, image)
    return image


def apply(data: bytes, operations: Iterable[Operation]) -> bytes:
    """Decode image bytes, apply operations in order and encode as PNG.

    Args:
        data: Encoded input image (PNG, JPEG, ...)
        operations: Operations to apply, in order

    Returns:
        PNG-encoded output image

    Raises:
        DecodeError: If the input is not a readable image
        EncodeError: If the output cannot be encoded
    """
    image = decode(data)
    image = apply_operations(image, operations)
    return encode(image)


class ImageProcessor:
    """Runs pipelines with configured output and structured logging.

    Example:
        settings = ImprintSettings()
        processor = ImageProcessor(settings)
        output = processor.process(data, [Crop(0.9, 0.9), Watermark(0.9, lines)])
        print(processor.stats.applied_count)
    """

    def __init__(self, config: ImprintSettings, quiet: bool = False) -> None:
        """Initialize the processor with configuration.

        Args:
            config: Imprint settings containing output and logging config
            quiet: Suppress console logging except errors
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=quiet,
        )
        self.processing_logger = ProcessingLogger(self.logger)

    @property
    def stats(self) -> ProcessingStats:
        """Statistics accumulated by this processor."""
        return self.processing_logger.stats

    def process(self, data: bytes, operations: Iterable[Operation], source: str = "<bytes>") -> bytes:
        """Decode, transform and encode an image, logging each step.

        Args:
            data: Encoded input image
            operations: Operations to apply, in order
            source: Label for logs and error messages

        Returns:
            Encoded output image

        Raises:
            DecodeError: If the input is not a readable image
            EncodeError: If the output cannot be encoded
        """
        stats = self.stats
        stats.start_time = time.time()

        try:
            image = decode(data, source=source)
        except DecodeError as e:
            self.processing_logger.log_failure("decode", e)
            raise
        self.processing_logger.log_decoded(image.width, image.height, image.mode)

        for index, operation in enumerate(operations):
            self.processing_logger.log_operation_start(index, operation.kind)
            op_start = time.time()
            image = apply_operation(operation, image)
            self.processing_logger.log_operation_complete(
                index,
                operation.kind,
                image.size,
                (time.time() - op_start) * 1000,
            )

        try:
            output = encode(image, compress_level=self.config.output.compress_level)
        except EncodeError as e:
            self.processing_logger.log_failure("encode", e)
            raise
        self.processing_logger.log_encoded(image.size, len(output))

        stats.end_time = time.time()
        return output

    def process_file(
        self,
        input_path: Path,
        operations: Iterable[Operation],
        output_path: Path | None = None,
    ) -> Path:
        """Process an image file and write the result.

        Args:
            input_path: Path to the input image
            operations: Operations to apply, in order
            output_path: Destination (default: {stem}-imprinted.png)

        Returns:
            Path the output was written to

        Raises:
            DecodeError: If the input cannot be read or decoded
            EncodeError: If the output cannot be encoded
            ImprintError: If the output file cannot be written
        """
        try:
            data = input_path.read_bytes()
        except OSError as e:
            raise DecodeError(str(e), str(input_path)) from e

        if output_path is None:
            output_path = get_imprinted_path(input_path)

        output = self.process(data, operations, source=str(input_path))

        try:
            output_path.write_bytes(output)
        except OSError as e:
            self.processing_logger.log_failure("write", e)
            raise ImprintError(f"Failed to write '{output_path}': {e}") from e

        self.logger.info("Output written", output=str(output_path), bytes=len(output))
        return output_path
