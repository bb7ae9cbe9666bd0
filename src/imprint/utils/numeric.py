"""NaN-tolerant float helpers for layout arithmetic.

Font metrics occasionally come back as zero, NaN or infinity for degenerate
input (an empty line, a face without vertical metrics). These helpers keep
such values from poisoning the watermark bounding box:

- safe_max / safe_min: pairwise comparison that prefers a finite operand
- max_normal / min_normal / sum_normal: reducers that skip non-normal values

All functions are pure and stateless.
"""

import math
import sys
from collections.abc import Iterable

_MIN_NORMAL = sys.float_info.min


def is_normal(value: float) -> bool:
    """Check whether a float is normal (finite, non-zero and not subnormal).

    Examples:
        >>> is_normal(1.5)
        True
        >>> is_normal(0.0)
        False
        >>> is_normal(float("nan"))
        False
    """
    return math.isfinite(value) and abs(value) >= _MIN_NORMAL


def _pick_finite(left: float, right: float) -> float | None:
    # Infinities are treated like NaN: neither is a usable pixel metric
    if math.isfinite(left):
        return left
    if math.isfinite(right):
        return right
    return None


def _max_opt(left: float, right: float) -> float | None:
    if math.isfinite(left) and math.isfinite(right):
        return left if left > right else right
    return _pick_finite(left, right)


def _min_opt(left: float, right: float) -> float | None:
    if math.isfinite(left) and math.isfinite(right):
        return left if left < right else right
    return _pick_finite(left, right)


def safe_max(left: float, right: float) -> float:
    """Return the larger of two floats without propagating NaN.

    Args:
        left: First operand
        right: Second operand

    Returns:
        The larger operand when both are finite, otherwise whichever is
        finite. Falls back to 0.0 when neither operand is usable.

    Examples:
        >>> safe_max(1.0, 2.0)
        2.0
        >>> safe_max(float("nan"), 3.0)
        3.0
        >>> safe_max(float("nan"), float("nan"))
        0.0
    """
    result = _max_opt(left, right)
    return 0.0 if result is None else result


def safe_min(left: float, right: float) -> float:
    """Return the smaller of two floats without propagating NaN.

    Examples:
        >>> safe_min(1.0, 2.0)
        1.0
        >>> safe_min(4.0, float("nan"))
        4.0
    """
    result = _min_opt(left, right)
    return 0.0 if result is None else result


def max_normal(values: Iterable[float]) -> float | None:
    """Maximum over the normal values of a sequence.

    Returns:
        The maximum, or None when no normal value is present
    """
    result: float | None = None
    for value in values:
        if not is_normal(value):
            continue
        result = value if result is None else _max_opt(result, value)
    return result


def min_normal(values: Iterable[float]) -> float | None:
    """Minimum over the normal values of a sequence.

    Returns:
        The minimum, or None when no normal value is present
    """
    result: float | None = None
    for value in values:
        if not is_normal(value):
            continue
        result = value if result is None else _min_opt(result, value)
    return result


def sum_normal(values: Iterable[float]) -> float:
    """Sum of the normal values of a sequence (0.0 when there are none)."""
    total = 0.0
    for value in values:
        if is_normal(value):
            total += value
    return total
