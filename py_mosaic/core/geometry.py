"""
Polygon primitives for the mosaic board.

Polygons are plain sequences of ``Point`` vertices interpreted as a closed
loop. Nothing in here keeps state.
"""

import math
from typing import List, NamedTuple, Sequence, Tuple, Union

import numpy as np


class Point(NamedTuple):
    """A 2D coordinate in board space."""
    x: float
    y: float


class Rect(NamedTuple):
    """Axis-aligned rectangle in board space."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def corners(self) -> List[Point]:
        """Corners clockwise in screen coordinates, starting top-left."""
        return [
            Point(self.x, self.y),
            Point(self.right, self.y),
            Point(self.right, self.bottom),
            Point(self.x, self.bottom),
        ]


Polygon = List[Point]
PointLike = Union[Point, Tuple[float, float], Sequence[float]]

# Float noise tolerated before an edge is pushed to the next pixel
SNAP_EPSILON = 1e-9


def _as_array(polygon: Sequence[PointLike]) -> np.ndarray:
    return np.asarray(polygon, dtype=float).reshape(-1, 2)


def polygon_area(polygon: Sequence[PointLike]) -> float:
    """
    Area of a simple polygon using the shoelace formula.

    Args:
        polygon: Vertices in either winding order

    Returns:
        Absolute area, 0.0 for fewer than 3 vertices
    """
    if len(polygon) < 3:
        return 0.0

    vertices = _as_array(polygon)
    x = vertices[:, 0]
    y = vertices[:, 1]
    cross = x * np.roll(y, -1) - np.roll(x, -1) * y
    return float(abs(cross.sum()) / 2.0)


def polygon_center(polygon: Sequence[PointLike]) -> Point:
    """Arithmetic mean of the vertices; used to place region labels."""
    if len(polygon) == 0:
        raise ValueError("Cannot compute the center of an empty polygon")
    cx, cy = _as_array(polygon).mean(axis=0)
    return Point(float(cx), float(cy))


def point_in_polygon(point: PointLike, polygon: Sequence[PointLike]) -> bool:
    """
    Crossing-number (ray casting) containment test.

    A horizontal ray is cast from ``point`` towards +x and the edges it
    crosses are counted; an odd count means inside. Edges use the half-open
    rule on y so a vertex shared by two edges is counted once.
    """
    px, py = point[0], point[1]
    inside = False
    n = len(polygon)
    j = n - 1
    for i in range(n):
        xi, yi = polygon[i][0], polygon[i][1]
        xj, yj = polygon[j][0], polygon[j][1]
        if (yi > py) != (yj > py):
            x_cross = (xj - xi) * (py - yi) / (yj - yi) + xi
            if px < x_cross:
                inside = not inside
        j = i
    return inside


def snap_rect(rect: Rect) -> Rect:
    """
    Largest whole-pixel rectangle inside ``rect``.

    Left and top edges round up, right and bottom edges round down, so the
    result never reaches past the input.
    """
    left = math.ceil(rect.x - SNAP_EPSILON)
    top = math.ceil(rect.y - SNAP_EPSILON)
    right = math.floor(rect.right + SNAP_EPSILON)
    bottom = math.floor(rect.bottom + SNAP_EPSILON)
    return Rect(left, top, max(0, right - left), max(0, bottom - top))


def rect_polygon(rect: Rect) -> Polygon:
    """Rectangle as a 4-vertex polygon with corners snapped to whole pixels inside it."""
    return [Point(int(p.x), int(p.y)) for p in snap_rect(rect).corners()]


def within_bounds(point: PointLike, rect: Rect, tolerance: float = 0.0) -> bool:
    """Check that ``point`` lies inside ``rect`` (edges included, widened by tolerance)."""
    return (
        rect.x - tolerance <= point[0] <= rect.right + tolerance
        and rect.y - tolerance <= point[1] <= rect.bottom + tolerance
    )


def distance_to_bounds(point: PointLike, rect: Rect) -> float:
    """Distance from an interior point to the nearest edge of ``rect``."""
    return min(
        point[0] - rect.x,
        rect.right - point[0],
        point[1] - rect.y,
        rect.bottom - point[1],
    )


def edge_length(a: PointLike, b: PointLike) -> float:
    return float(np.hypot(b[0] - a[0], b[1] - a[1]))
