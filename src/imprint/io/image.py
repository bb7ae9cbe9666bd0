"""Raster decode and encode.

Input images may be any format Pillow recognizes (PNG and JPEG at least).
Output is always a lossless format with an alpha channel.
"""

from io import BytesIO
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from imprint.exceptions import DecodeError, EncodeError


def decode(data: bytes, source: str = "<bytes>") -> Image.Image:
    """Decode image bytes into an RGBA raster.

    Args:
        data: Encoded image bytes
        source: Label used in error messages

    Returns:
        Fully loaded RGBA image

    Raises:
        DecodeError: If the bytes are not a readable raster image
    """
    if not data:
        raise DecodeError("no data", source)

    try:
        with Image.open(BytesIO(data)) as image:
            image.load()
            return image.convert("RGBA")
    except (
        UnidentifiedImageError,
        OSError,
        SyntaxError,
        ValueError,
        Image.DecompressionBombError,
    ) as e:
        raise DecodeError(str(e), source) from e


def encode(image: Image.Image, compress_level: int = 6) -> bytes:
    """Encode a raster as PNG, the only output format (lossless with alpha).

    Args:
        image: Image to serialize
        compress_level: zlib level, 0-9

    Returns:
        PNG bytes

    Raises:
        EncodeError: If serialization fails
    """
    buffer = BytesIO()
    try:
        image.save(buffer, format="PNG", compress_level=compress_level)
    except (OSError, ValueError) as e:
        raise EncodeError(str(e)) from e
    return buffer.getvalue()


def read_image(path: Path) -> Image.Image:
    """Read and decode an image file.

    Raises:
        DecodeError: If the file cannot be read or decoded
    """
    try:
        data = path.read_bytes()
    except OSError as e:
        raise DecodeError(str(e), str(path)) from e
    return decode(data, source=str(path))


def get_imprinted_path(input_path: Path) -> Path:
    """Generate the default output path for a processed image.

    Converts: id_card.jpg -> id_card-imprinted.png

    Args:
        input_path: Original image path

    Returns:
        Path with -imprinted suffix and a .png extension
    """
    return input_path.parent / f"{input_path.stem}-imprinted.png"
