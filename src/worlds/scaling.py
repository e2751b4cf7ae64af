"""Range remapping and quantization helpers.

The standard usage throughout generation and classification is two-step:
``scale_to_index`` followed by ``clamp_index`` into the target range.
"""

import math


def scale(
    value: float,
    min: float,
    max: float,
    scale_min: float,
    scale_max: float,
) -> float:
    """Affinely remap value from [min, max] to [scale_min, scale_max].

    Values outside the source range extrapolate linearly. Works element-wise
    on numpy arrays as well as on floats.

    Args:
        value: Value to remap.
        min: Source range lower bound.
        max: Source range upper bound.
        scale_min: Target range lower bound.
        scale_max: Target range upper bound.

    Returns:
        Remapped value. If the source range is empty (min == max) the result
        is scale_min.
    """
    if max == min:
        return scale_min + 0 * value
    return ((value - min) / (max - min)) * (scale_max - scale_min) + scale_min


def scale_to_index(
    value: float,
    min: float,
    max: float,
    scale_min: float,
    scale_max: float,
) -> int:
    """Remap value and round it to an integer index.

    Rounds half away from zero. Does not clamp: a malformed range can yield
    a negative or out-of-range index, which the caller must clamp.
    """
    scaled = scale(value, min, max, scale_min, scale_max)
    return int(math.copysign(math.floor(abs(scaled) + 0.5), scaled))


def clamp_index(index: int, low: int, high: int) -> int:
    """Clamp an index into [low, high]."""
    return max(low, min(index, high))
