"""
Bounded random perturbation of partition polygons.

Interior vertices are nudged by a small random offset so the board does not
look like a perfect grid of rectangles. Vertices on the outer board edge are
pinned, which keeps the silhouette of the board exact. Each polygon is
perturbed on its own: a vertex shared by two neighbouring regions may move
differently in each, so internal seams can open or overlap by a few pixels.
"""

from typing import List, Optional, Sequence

import structlog

from ..utils.random import resolve_prng
from .alea_prng import AleaPRNG
from .geometry import Point, Polygon, PointLike, Rect, distance_to_bounds, edge_length

logger = structlog.get_logger()

# Distance from a bounds edge under which a vertex counts as a boundary vertex
BOUNDARY_TOLERANCE = 0.5

# Hard cap on the displacement budget of a single vertex, in pixels
MAX_DISPLACEMENT = 8.0

# Share of the displacement budget actually used
DISPLACEMENT_SHARE = 0.3

# Keep perturbed vertices this far from the bounds edges
BOUNDARY_MARGIN = 2.0

# Inserted midpoints only on interior edges longer than this
MIDPOINT_MIN_EDGE = 60.0

# random() must exceed this to insert a midpoint (about 20% of edges)
MIDPOINT_THRESHOLD = 0.8


def is_boundary_vertex(vertex: PointLike, bounds: Rect,
                       tolerance: float = BOUNDARY_TOLERANCE) -> bool:
    """True if ``vertex`` lies within ``tolerance`` of any edge of ``bounds``."""
    x, y = vertex[0], vertex[1]
    return (
        abs(x - bounds.x) < tolerance
        or abs(x - bounds.right) < tolerance
        or abs(y - bounds.y) < tolerance
        or abs(y - bounds.bottom) < tolerance
    )


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _displace(vertex: PointLike, next_vertex: PointLike, strength: float,
              bounds: Rect, prng: AleaPRNG) -> Point:
    """Move an interior vertex, never past ``bounds`` minus a 1px inset."""
    budget = min(edge_length(vertex, next_vertex) * strength, MAX_DISPLACEMENT)
    safe = min(budget * DISPLACEMENT_SHARE, distance_to_bounds(vertex, bounds) - BOUNDARY_MARGIN)

    dx = dy = 0.0
    if safe > 1:
        dx = (prng.random() - 0.5) * safe
        dy = (prng.random() - 0.5) * safe

    x = round(_clamp(vertex[0] + dx, bounds.x + 1, bounds.right - 1))
    y = round(_clamp(vertex[1] + dy, bounds.y + 1, bounds.bottom - 1))
    return Point(x, y)


def perturb(polygon: Sequence[PointLike], level: float, bounds: Rect,
            prng: Optional[AleaPRNG] = None,
            device_pixel_ratio: float = 1.0) -> Polygon:
    """
    Perturb the interior vertices of one polygon.

    Args:
        polygon: Input vertices (typically a partition leaf)
        level: Perturbation strength in [0, 1]
        bounds: Outer board rectangle; vertices on it stay put
        prng: Random source, the process-wide generator by default
        device_pixel_ratio: Surface pixel ratio; dense screens get a
            proportionally weaker perturbation

    Returns:
        New polygon with integer coordinates. It has at least as many
        vertices as the input: long interior edges may gain a midpoint.

    Raises:
        ValueError: If ``level`` is outside [0, 1]
    """
    if not 0.0 <= level <= 1.0:
        raise ValueError(f"Perturbation level must be within [0, 1], got {level}")

    if len(polygon) < 4:
        return [Point(p[0], p[1]) for p in polygon]

    prng = resolve_prng(prng)
    strength = level / max(1.0, device_pixel_ratio * 0.5)

    result: Polygon = []
    n = len(polygon)
    for i in range(n):
        vertex = polygon[i]
        next_vertex = polygon[(i + 1) % n]
        on_boundary = is_boundary_vertex(vertex, bounds)

        if on_boundary:
            moved = Point(round(vertex[0]), round(vertex[1]))
        else:
            moved = _displace(vertex, next_vertex, strength, bounds, prng)
        result.append(moved)

        if on_boundary or is_boundary_vertex(next_vertex, bounds):
            continue
        if prng.random() <= MIDPOINT_THRESHOLD:
            continue
        if edge_length(vertex, next_vertex) <= MIDPOINT_MIN_EDGE:
            continue

        mid_x = (moved.x + next_vertex[0]) / 2
        mid_y = (moved.y + next_vertex[1]) / 2
        result.append(Point(
            round(_clamp(mid_x, bounds.x + BOUNDARY_MARGIN, bounds.right - BOUNDARY_MARGIN)),
            round(_clamp(mid_y, bounds.y + BOUNDARY_MARGIN, bounds.bottom - BOUNDARY_MARGIN)),
        ))

    return result


def perturb_all(polygons: Sequence[Sequence[PointLike]], level: float, bounds: Rect,
                prng: Optional[AleaPRNG] = None,
                device_pixel_ratio: float = 1.0) -> List[Polygon]:
    """Perturb every polygon of a partition independently."""
    prng = resolve_prng(prng)
    perturbed = [perturb(p, level, bounds, prng, device_pixel_ratio) for p in polygons]
    added = sum(len(p) for p in perturbed) - sum(len(p) for p in polygons)
    logger.debug("Polygons perturbed", polygons=len(perturbed), midpoints_added=added)
    return perturbed
