"""
Residual to colour mapping.

Residuals in the open band (-1, 1) are cut into ``bucket_count`` buckets on
each side of zero. Bucket 0 is black. Positive buckets run from magenta
toward pure red, negative buckets from magenta toward pure blue. Residuals
with ``|r| >= 1`` (or non-finite ones) get no colour and leave the
background showing.

The palette depends only on ``bucket_count``. Build it once with
``heat_colours`` and reuse it for every frame of an animation.
"""

import math
from typing import List, Optional, Tuple

import numpy as np

Colour = Tuple[int, int, int]

BLACK: Colour = (0, 0, 0)
WHITE: Colour = (255, 255, 255)
LINE_COLOUR: Colour = (0x0F, 0x0F, 0x0F)

# Palette slots left after the line, white and black entries of a 256 colour table
MAX_BUCKET_COUNT = 126


def check_bucket_count(bucket_count: int):
    if bucket_count < 1:
        raise ValueError(f"bucket_count must be positive, got {bucket_count}")


def heat_bucket(bucket_count: int, residual: float) -> Optional[int]:
    """Signed bucket index in ``[-(n-1), n-1]``, or None outside the band"""
    check_bucket_count(bucket_count)
    if not math.isfinite(residual) or abs(residual) >= 1:
        return None
    bucket = math.trunc(residual * bucket_count)
    return max(-(bucket_count - 1), min(bucket_count - 1, bucket))


def bucket_colour(bucket_count: int, bucket: int) -> Colour:
    check_bucket_count(bucket_count)
    if bucket == 0:
        return BLACK
    fade = 255 - round(255 * abs(bucket) / (bucket_count - 1))
    if bucket > 0:
        return (255, 0, fade)
    return (fade, 0, 255)


def heat_colour(bucket_count: int, residual: float) -> Optional[Colour]:
    """
    Colour for one residual.

    Args:
        bucket_count: buckets on each side of zero
        residual: signed residual of the equation at a sample

    Returns:
        ``(r, g, b)`` or None when nothing should be drawn
    """
    bucket = heat_bucket(bucket_count, residual)
    if bucket is None:
        return None
    return bucket_colour(bucket_count, bucket)


def heat_colours(bucket_count: int) -> List[Colour]:
    """All ``2 * bucket_count - 1`` colours, most negative bucket first"""
    check_bucket_count(bucket_count)
    return [bucket_colour(bucket_count, bucket)
            for bucket in range(-(bucket_count - 1), bucket_count)]


def heat_palette(bucket_count: int) -> np.ndarray:
    """``heat_colours`` as a ``(2n - 1, 3)`` uint8 array, indexed by bucket + n - 1"""
    return np.array(heat_colours(bucket_count), dtype=np.uint8)
