"""RGBA color values.

Colors are plain 4-tuples of 8-bit channels so they can be handed directly to
Pillow drawing calls.
"""

from collections.abc import Sequence

from imprint.exceptions import ColorError

Color = tuple[int, int, int, int]

CLEAR: Color = (0, 0, 0, 0)
BLACK: Color = (0, 0, 0, 255)
WHITE: Color = (255, 255, 255, 255)


def color_from(values: Sequence[int]) -> Color:
    """Build a color from a sequence of four channel values.

    Args:
        values: R, G, B, A channels in the 0-255 range

    Returns:
        Color tuple

    Raises:
        ColorError: If there are not exactly four channels or one is out of range
    """
    if len(values) != 4:
        raise ColorError(str(list(values)), "expected 4 channels (R, G, B, A)")
    for channel in values:
        if not 0 <= int(channel) <= 255:
            raise ColorError(str(list(values)), f"channel {channel} outside 0-255")
    r, g, b, a = (int(channel) for channel in values)
    return (r, g, b, a)


def parse_color(text: str) -> Color:
    """Parse a hex color string.

    Accepts ``#RRGGBB`` (opaque) and ``#RRGGBBAA``; the leading ``#`` is optional.

    Examples:
        >>> parse_color("#ff0000")
        (255, 0, 0, 255)
        >>> parse_color("00ff0080")
        (0, 255, 0, 128)
    """
    digits = text.strip().removeprefix("#")
    if len(digits) == 6:
        digits += "ff"
    if len(digits) != 8:
        raise ColorError(text, "expected #RRGGBB or #RRGGBBAA")
    try:
        channels = [int(digits[i : i + 2], 16) for i in range(0, 8, 2)]
    except ValueError as e:
        raise ColorError(text, "not a hexadecimal value") from e
    return color_from(channels)
