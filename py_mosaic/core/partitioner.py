"""
Recursive binary partitioning of the board rectangle.

The board is cut in two along a random axis at a random offset, and each
half is cut again until there is one leaf rectangle per requested region.
Split offsets are rounded to whole pixels before the children are built so
both siblings share the exact same coordinate: the leaves tile the input
rectangle with no gaps and no overlaps. A fractional input rectangle is
first snapped inwards to whole pixels, so no vertex falls outside it.
"""

import math
from typing import List, Optional, Tuple

import structlog

from ..exceptions import InvalidRegionCountError
from ..utils.random import resolve_prng
from .alea_prng import AleaPRNG
from .geometry import Polygon, Rect, rect_polygon, snap_rect

logger = structlog.get_logger()

# Split offset range as a fraction of the axis being cut
MIN_SPLIT_RATIO = 0.3
MAX_SPLIT_RATIO = 0.7

# Probability of cutting across the longer side
LONG_AXIS_BIAS = 0.7


def _choose_vertical_cut(rect: Rect, prng: AleaPRNG) -> bool:
    """
    Decide whether to cut the width (a vertical cut line).

    Wide rectangles get their width cut 70% of the time, tall or square
    ones 30% of the time, so regions tend towards squarish shapes without
    becoming uniform.
    """
    if rect.width > rect.height:
        return prng.random() > 1 - LONG_AXIS_BIAS
    return prng.random() > LONG_AXIS_BIAS


def _split_offset(extent: float, prng: AleaPRNG) -> int:
    low = extent * MIN_SPLIT_RATIO
    high = extent * MAX_SPLIT_RATIO
    return round(low + prng.random() * (high - low))


def split_rect(rect: Rect, prng: AleaPRNG) -> Tuple[Rect, Rect]:
    """Cut ``rect`` once, returning (first, second) children."""
    if _choose_vertical_cut(rect, prng):
        offset = _split_offset(rect.width, prng)
        first = Rect(rect.x, rect.y, offset, rect.height)
        second = Rect(rect.x + offset, rect.y, rect.width - offset, rect.height)
    else:
        offset = _split_offset(rect.height, prng)
        first = Rect(rect.x, rect.y, rect.width, offset)
        second = Rect(rect.x, rect.y + offset, rect.width, rect.height - offset)
    return first, second


def _partition_leaves(rect: Rect, count: int, prng: AleaPRNG) -> List[Rect]:
    if count <= 1:
        return [rect]

    first_count = math.ceil(count / 2)
    second_count = count - first_count

    first, second = split_rect(rect, prng)
    return _partition_leaves(first, first_count, prng) + _partition_leaves(
        second, second_count, prng
    )


def partition_leaves(rect: Rect, count: int, prng: Optional[AleaPRNG] = None) -> List[Rect]:
    """
    Split ``rect`` into exactly ``count`` leaf rectangles.

    Args:
        rect: Area to partition
        count: Number of leaves, at least 1
        prng: Random source, the process-wide generator by default

    Returns:
        Leaf rectangles in depth-first order (first child before second),
        tiling the whole-pixel rectangle inside ``rect``

    Raises:
        InvalidRegionCountError: If ``count`` is below 1
    """
    if count < 1:
        raise InvalidRegionCountError(count)
    return _partition_leaves(snap_rect(rect), count, resolve_prng(prng))


def partition(rect: Rect, count: int, prng: Optional[AleaPRNG] = None) -> List[Polygon]:
    """
    Split ``rect`` into ``count`` 4-vertex polygons that tile it exactly.

    Leaf corners are rounded to whole pixels to keep sibling edges seamless.

    Raises:
        InvalidRegionCountError: If ``count`` is below 1
    """
    leaves = partition_leaves(rect, count, prng)
    polygons = [rect_polygon(leaf) for leaf in leaves]
    logger.debug("Board partitioned", regions=len(polygons), width=rect.width, height=rect.height)
    return polygons
